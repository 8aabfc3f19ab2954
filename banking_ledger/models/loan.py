"""
Loan model.

A fixed-rate amortized loan against an account. The monthly
installment (EMI) is computed once at approval and never
recalculated. Only LoanService mutates a loan, one installment
at a time.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    DateTime, Integer, ForeignKey,
    Enum as SAEnum, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from banking_ledger.models.base import Base
from banking_ledger.models.types import Money
from banking_ledger.models.enums import LoanStatus


class Loan(Base):
    __tablename__ = "loans"

    id: Mapped[int] = mapped_column(primary_key=True)
    external_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, unique=True, nullable=False, default=uuid.uuid4
    )
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id"), nullable=False, index=True
    )
    principal: Mapped[Decimal] = mapped_column(
        Money, nullable=False
    )
    # Percent per annum, e.g. 10 for 10%
    annual_interest_rate: Mapped[Decimal] = mapped_column(
        Money, nullable=False
    )
    tenure_months: Mapped[int] = mapped_column(Integer, nullable=False)
    monthly_installment: Mapped[Decimal] = mapped_column(
        Money, nullable=False
    )
    remaining_balance: Mapped[Decimal] = mapped_column(
        Money, nullable=False
    )
    status: Mapped[LoanStatus] = mapped_column(
        SAEnum(LoanStatus, name="loan_status_enum", create_constraint=True),
        nullable=False,
        default=LoanStatus.ACTIVE,
    )
    paid_months: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    closed_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True, default=None
    )

    account: Mapped["Account"] = relationship()

    @property
    def is_active(self) -> bool:
        return self.status == LoanStatus.ACTIVE

    @property
    def remaining_months(self) -> int:
        return max(self.tenure_months - self.paid_months, 0)

    def __repr__(self) -> str:
        return (
            f"<Loan {self.id} EMI={self.monthly_installment} "
            f"remaining={self.remaining_balance} ({self.status.value})>"
        )
