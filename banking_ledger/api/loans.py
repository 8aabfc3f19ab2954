"""
Loan API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from banking_ledger.api.errors import http_error
from banking_ledger.config import get_settings
from banking_ledger.models.base import get_db
from banking_ledger.services.loan_service import LoanService
from banking_ledger.schemas.loan import (
    LoanApply,
    LoanResponse,
    InstallmentResponse,
)

router = APIRouter(prefix="/loans", tags=["Loans"])


@router.post("", response_model=LoanResponse, status_code=201)
def apply_for_loan(
    request: LoanApply,
    db: Session = Depends(get_db),
):
    """Approve a loan and fix its monthly installment."""
    service = LoanService(db)
    try:
        loan = service.apply_for_loan(request)
        db.commit()
        return loan
    except ValueError as e:
        db.rollback()
        raise http_error(e)


@router.get("/{loan_id}", response_model=LoanResponse)
def get_loan(
    loan_id: int,
    db: Session = Depends(get_db),
):
    """Get loan status."""
    service = LoanService(db)
    try:
        return service.get_loan(loan_id)
    except ValueError as e:
        raise http_error(e)


@router.post("/{loan_id}/pay", response_model=InstallmentResponse)
def pay_installment(
    loan_id: int,
    db: Session = Depends(get_db),
):
    """Pay one monthly installment."""
    service = LoanService(db)
    try:
        result = service.pay_installment(loan_id)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise http_error(e)

    return InstallmentResponse(
        loan_id=loan_id,
        amount_paid=result.amount_paid,
        remaining_balance=result.remaining_balance,
        paid_months=result.paid_months,
        closed=result.closed,
        rejected=result.rejected,
        currency=get_settings().CURRENCY,
    )
