"""
Account model.

Holds a customer's balance directly. The balance is only ever
changed through services.account_operations, which enforces
that it never goes negative.

The account has a state machine governing its lifecycle.
Invalid state transitions are rejected.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, DateTime, ForeignKey,
    Enum as SAEnum, Uuid, CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from banking_ledger.models.base import Base
from banking_ledger.models.types import Money
from banking_ledger.models.enums import AccountType, AccountStatus


# Valid state transitions — the source of truth for the state machine
VALID_TRANSITIONS: dict[AccountStatus, set[AccountStatus]] = {
    AccountStatus.ACTIVE: {AccountStatus.CLOSED},
    AccountStatus.CLOSED: set(),  # Terminal state — no reopening
}


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_accounts_balance_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    external_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, unique=True, nullable=False, default=uuid.uuid4
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, index=True
    )
    account_number: Mapped[str] = mapped_column(
        String(16), unique=True, nullable=False, index=True
    )
    account_type: Mapped[AccountType] = mapped_column(
        SAEnum(AccountType, name="account_type_enum", create_constraint=True),
        nullable=False,
    )
    balance: Mapped[Decimal] = mapped_column(
        Money, nullable=False, default=Decimal("0")
    )
    status: Mapped[AccountStatus] = mapped_column(
        SAEnum(AccountStatus, name="account_status_enum", create_constraint=True),
        nullable=False,
        default=AccountStatus.ACTIVE,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    last_activity_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    closed_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True, default=None
    )

    user: Mapped["User"] = relationship(back_populates="accounts")

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE

    def can_transition_to(self, new_status: AccountStatus) -> bool:
        """Check if a state transition is valid."""
        return new_status in VALID_TRANSITIONS.get(self.status, set())

    def __repr__(self) -> str:
        return (
            f"<Account {self.account_number} "
            f"{self.account_type.value} ({self.status.value})>"
        )
