"""
Transaction API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from banking_ledger.api.errors import http_error
from banking_ledger.models.base import get_db
from banking_ledger.services.transaction_service import TransactionService
from banking_ledger.schemas.transaction import (
    DepositRequest,
    WithdrawalRequest,
    TransferRequest,
    TransactionResponse,
)

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.post("/deposit", response_model=TransactionResponse, status_code=201)
def deposit(
    request: DepositRequest,
    db: Session = Depends(get_db),
):
    """Deposit money into an account."""
    service = TransactionService(db)
    try:
        txn = service.deposit(request)
        db.commit()
        return txn
    except ValueError as e:
        db.rollback()
        raise http_error(e)


@router.post("/withdraw", response_model=TransactionResponse, status_code=201)
def withdraw(
    request: WithdrawalRequest,
    db: Session = Depends(get_db),
):
    """Withdraw money from an account."""
    service = TransactionService(db)
    try:
        txn = service.withdraw(request)
        db.commit()
        return txn
    except ValueError as e:
        db.rollback()
        raise http_error(e)


@router.post("/transfer", response_model=TransactionResponse, status_code=201)
def transfer(
    request: TransferRequest,
    db: Session = Depends(get_db),
):
    """Transfer money between two accounts."""
    service = TransactionService(db)
    try:
        txn = service.transfer(request)
        db.commit()
        return txn
    except ValueError as e:
        db.rollback()
        raise http_error(e)


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
):
    """Get transaction details."""
    service = TransactionService(db)
    try:
        return service.get_transaction(transaction_id)
    except ValueError as e:
        raise http_error(e)
