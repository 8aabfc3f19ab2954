"""
Account API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from banking_ledger.api.errors import http_error
from banking_ledger.config import get_settings
from banking_ledger.models.base import get_db
from banking_ledger.services.account_service import AccountService
from banking_ledger.services.loan_service import LoanService
from banking_ledger.services.transaction_service import TransactionService
from banking_ledger.schemas.account import (
    AccountOpen,
    AccountResponse,
    StatementResponse,
)
from banking_ledger.schemas.loan import LoanResponse
from banking_ledger.schemas.transaction import TransactionResponse

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.post("", response_model=AccountResponse, status_code=201)
def open_account(
    request: AccountOpen,
    db: Session = Depends(get_db),
):
    """Open a new account. It starts ACTIVE with a zero balance."""
    service = AccountService(db)
    try:
        account = service.open_account(request)
        db.commit()
        return account
    except ValueError as e:
        db.rollback()
        raise http_error(e)


@router.get("/by-number/{account_number}", response_model=AccountResponse)
def get_account_by_number(
    account_number: str,
    db: Session = Depends(get_db),
):
    """Look an account up by its account number."""
    service = AccountService(db)
    try:
        return service.get_account_by_number(account_number)
    except ValueError as e:
        raise http_error(e)


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    db: Session = Depends(get_db),
):
    """Get account details."""
    service = AccountService(db)
    try:
        return service.get_account(account_id)
    except ValueError as e:
        raise http_error(e)


@router.post("/{account_id}/close", response_model=AccountResponse)
def close_account(
    account_id: int,
    db: Session = Depends(get_db),
):
    """Close an account. The balance must be zero."""
    service = AccountService(db)
    try:
        account = service.close_account(account_id)
        db.commit()
        return account
    except ValueError as e:
        db.rollback()
        raise http_error(e)


@router.get("/{account_id}/statement", response_model=StatementResponse)
def get_statement(
    account_id: int,
    db: Session = Depends(get_db),
):
    """Get the account and its transaction history."""
    service = TransactionService(db)
    try:
        account, transactions = service.get_statement(account_id)
    except ValueError as e:
        raise http_error(e)
    return StatementResponse(
        account=AccountResponse.model_validate(account),
        transactions=[
            TransactionResponse.model_validate(txn) for txn in transactions
        ],
        currency=get_settings().CURRENCY,
    )


@router.get("/{account_id}/loans", response_model=list[LoanResponse])
def get_account_loans(
    account_id: int,
    db: Session = Depends(get_db),
):
    """List loans taken against an account."""
    service = LoanService(db)
    try:
        return service.get_account_loans(account_id)
    except ValueError as e:
        raise http_error(e)
