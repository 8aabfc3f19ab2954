"""
Loan service — loan approval and installment payments.

The EMI is fixed at approval. Paying an installment reduces the
remaining balance; installments are tracked on the loan only and
are not debited from the linked account.
"""

import logging

from sqlalchemy.orm import Session

from banking_ledger.exceptions import InvalidAmount
from banking_ledger.models.loan import Loan
from banking_ledger.models.enums import LoanStatus
from banking_ledger.schemas.loan import LoanApply
from banking_ledger.services.amortization import (
    InstallmentResult,
    apply_installment,
    calculate_emi,
)
from banking_ledger.services.directory import Directory

logger = logging.getLogger(__name__)


class LoanService:

    def __init__(self, db: Session):
        self.db = db
        self.directory = Directory(db)

    def apply_for_loan(self, request: LoanApply) -> Loan:
        """
        Approve a loan against an active account.

        Raises AccountNotFound for an unknown account and
        InvalidAmount for an inactive account or bad terms.
        """
        account = self.directory.get_account(request.account_id)
        if not account.is_active:
            raise InvalidAmount(
                f"Account {account.id} is not active "
                f"(status: {account.status.value})"
            )

        emi = calculate_emi(
            request.principal,
            request.annual_interest_rate,
            request.tenure_months,
        )
        loan = Loan(
            account_id=account.id,
            principal=request.principal,
            annual_interest_rate=request.annual_interest_rate,
            tenure_months=request.tenure_months,
            monthly_installment=emi,
            remaining_balance=request.principal,
            status=LoanStatus.ACTIVE,
            paid_months=0,
        )
        self.directory.add(loan)
        logger.info(
            f"Loan approved with EMI {emi}",
            extra={"action": "apply_for_loan", "resource": f"loan:{loan.id}"},
        )
        return loan

    def pay_installment(self, loan_id: int) -> InstallmentResult:
        """
        Pay one EMI on a loan. Closes the loan on the final payment.

        Raises InvalidState for a loan that is not active. A loan
        that has already reached its tenure is closed and a result
        with ``rejected`` set is returned instead.
        """
        loan = self.directory.get_loan(loan_id)
        try:
            result = apply_installment(loan)
        except ValueError as e:
            logger.warning(
                f"Installment rejected: {e}",
                extra={"action": "pay_installment", "resource": f"loan:{loan.id}"},
            )
            raise

        self.db.flush()
        if result.rejected:
            logger.warning(
                "Installment rejected: loan already fully paid, closed",
                extra={"action": "pay_installment", "resource": f"loan:{loan.id}"},
            )
            return result

        logger.info(
            "Loan closed" if result.closed else "Installment paid",
            extra={"action": "pay_installment", "resource": f"loan:{loan.id}"},
        )
        return result

    def get_loan(self, loan_id: int) -> Loan:
        return self.directory.get_loan(loan_id)

    def get_account_loans(self, account_id: int) -> list[Loan]:
        """Get all loans against an account. The account must exist."""
        self.directory.get_account(account_id)
        return self.directory.account_loans(account_id)
