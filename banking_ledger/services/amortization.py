"""
Loan amortization math.

Equated Monthly Installment (EMI) for a fixed-rate loan:

    r   = annual_rate / 12 / 100
    EMI = P * r * (1 + r)^n / ((1 + r)^n - 1)
    EMI = P / n                       when r == 0

All arithmetic is Decimal. The result is rounded half-up to
cents because that is the amount actually charged each month.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

from banking_ledger.exceptions import InvalidAmount, InvalidState
from banking_ledger.models.enums import LoanStatus
from banking_ledger.models.loan import Loan

CENT = Decimal("0.01")
ZERO = Decimal("0")


def monthly_rate(annual_rate: Decimal) -> Decimal:
    """Convert a percent-per-annum rate to a monthly fraction."""
    return Decimal(annual_rate) / 12 / 100


def calculate_emi(
    principal: Decimal, annual_rate: Decimal, tenure_months: int
) -> Decimal:
    """Return the monthly installment, rounded to cents."""
    principal = Decimal(principal)
    if principal <= 0:
        raise InvalidAmount("Principal must be positive")
    if annual_rate < 0:
        raise InvalidAmount("Interest rate cannot be negative")
    if tenure_months < 1:
        raise InvalidAmount("Tenure must be at least one month")

    r = monthly_rate(annual_rate)
    if r == 0:
        emi = principal / tenure_months
    else:
        factor = (1 + r) ** tenure_months
        emi = principal * r * factor / (factor - 1)

    return emi.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class InstallmentResult:
    """Outcome of one installment payment."""
    amount_paid: Decimal
    remaining_balance: Decimal
    paid_months: int
    closed: bool
    # Set when no installment was taken because the loan had already
    # reached its tenure; the loan is closed instead.
    rejected: bool = False


def apply_installment(loan: Loan) -> InstallmentResult:
    """
    Apply one EMI to the loan.

    The remaining balance never increases and never drops below
    zero. When the final installment lands the loan is closed
    and the balance is forced to exactly zero, absorbing any
    rounding residue.

    An active loan that has somehow already reached its tenure
    takes no payment: it is closed and a rejected result is
    returned. Only an inactive loan raises, and it is left as is.
    """
    if not loan.is_active:
        raise InvalidState(
            f"Loan {loan.id} is not active (status: {loan.status.value})"
        )
    if loan.paid_months >= loan.tenure_months:
        _close(loan)
        return InstallmentResult(
            amount_paid=ZERO,
            remaining_balance=loan.remaining_balance,
            paid_months=loan.paid_months,
            closed=True,
            rejected=True,
        )

    paid = loan.monthly_installment
    loan.remaining_balance = max(loan.remaining_balance - paid, ZERO)
    loan.paid_months += 1

    if loan.paid_months >= loan.tenure_months:
        _close(loan)

    return InstallmentResult(
        amount_paid=paid,
        remaining_balance=loan.remaining_balance,
        paid_months=loan.paid_months,
        closed=not loan.is_active,
    )


def _close(loan: Loan) -> None:
    loan.status = LoanStatus.CLOSED
    loan.remaining_balance = ZERO
    loan.closed_at = datetime.utcnow()
