"""
Pydantic schemas for transaction operations.

Amounts are not range-checked here: a non-positive amount is a
ledger rule, rejected by the service as InvalidAmount.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from banking_ledger.models.enums import TransactionType, TransactionStatus


class DepositRequest(BaseModel):
    account_id: int
    amount: Decimal = Field(max_digits=15, decimal_places=4)
    description: str = Field(default="Cash deposit", max_length=255)


class WithdrawalRequest(BaseModel):
    account_id: int
    amount: Decimal = Field(max_digits=15, decimal_places=4)
    description: str = Field(default="Cash withdrawal", max_length=255)


class TransferRequest(BaseModel):
    source_account_id: int
    destination_account_id: int
    amount: Decimal = Field(max_digits=15, decimal_places=4)
    description: str = Field(default="Transfer", max_length=255)


class TransactionResponse(BaseModel):
    id: int
    external_id: uuid.UUID
    transaction_type: TransactionType
    status: TransactionStatus
    source_account_id: int | None
    destination_account_id: int | None
    amount: Decimal
    description: str
    created_at: datetime

    model_config = {"from_attributes": True}
