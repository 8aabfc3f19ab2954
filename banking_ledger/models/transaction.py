"""
Transaction model.

One row per successful deposit, withdrawal or transfer.
The log is append-only: rows are never updated or deleted,
and failed operations leave no row behind.
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
from banking_ledger.models.enums import TransactionType, TransactionStatus


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    external_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, unique=True, nullable=False, default=uuid.uuid4
    )
    transaction_type: Mapped[TransactionType] = mapped_column(
        SAEnum(
            TransactionType,
            name="transaction_type_enum",
            create_constraint=True,
        ),
        nullable=False,
    )
    status: Mapped[TransactionStatus] = mapped_column(
        SAEnum(
            TransactionStatus,
            name="transaction_status_enum",
            create_constraint=True,
        ),
        nullable=False,
        default=TransactionStatus.COMPLETED,
    )
    # Null for deposits
    source_account_id: Mapped[int | None] = mapped_column(
        ForeignKey("accounts.id"), nullable=True, index=True
    )
    # Null for withdrawals
    destination_account_id: Mapped[int | None] = mapped_column(
        ForeignKey("accounts.id"), nullable=True, index=True
    )
    amount: Mapped[Decimal] = mapped_column(
        Money, nullable=False
    )
    description: Mapped[str] = mapped_column(
        String(255), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    source_account: Mapped["Account | None"] = relationship(
        foreign_keys=[source_account_id]
    )
    destination_account: Mapped["Account | None"] = relationship(
        foreign_keys=[destination_account_id]
    )

    def __repr__(self) -> str:
        return (
            f"<Transaction {self.transaction_type.value} "
            f"{self.amount} ({self.status.value})>"
        )
