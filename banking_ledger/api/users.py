"""
User API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from banking_ledger.api.errors import http_error
from banking_ledger.models.base import get_db
from banking_ledger.services.user_service import UserService
from banking_ledger.services.account_service import AccountService
from banking_ledger.schemas.user import UserRegister, UserLogin, UserResponse
from banking_ledger.schemas.account import AccountResponse

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=UserResponse, status_code=201)
def register_user(
    request: UserRegister,
    db: Session = Depends(get_db),
):
    """Register a new user."""
    service = UserService(db)
    try:
        user = service.register(request)
        db.commit()
        return user
    except ValueError as e:
        db.rollback()
        raise http_error(e)


@router.post("/login", response_model=UserResponse)
def login(
    request: UserLogin,
    db: Session = Depends(get_db),
):
    """Verify credentials and return the user."""
    service = UserService(db)
    try:
        return service.authenticate(request)
    except ValueError as e:
        raise http_error(e)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
):
    """Get user details."""
    service = UserService(db)
    try:
        return service.get_user(user_id)
    except ValueError as e:
        raise http_error(e)


@router.post("/{user_id}/deactivate", response_model=UserResponse)
def deactivate_user(
    user_id: int,
    db: Session = Depends(get_db),
):
    """Deactivate a user."""
    service = UserService(db)
    try:
        user = service.deactivate(user_id)
        db.commit()
        return user
    except ValueError as e:
        db.rollback()
        raise http_error(e)


@router.get("/{user_id}/accounts", response_model=list[AccountResponse])
def get_user_accounts(
    user_id: int,
    db: Session = Depends(get_db),
):
    """List a user's accounts in the order they were opened."""
    service = AccountService(db)
    try:
        return service.get_user_accounts(user_id)
    except ValueError as e:
        raise http_error(e)
