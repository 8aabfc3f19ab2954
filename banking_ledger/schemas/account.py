"""
Pydantic schemas for account operations.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from banking_ledger.models.enums import AccountType, AccountStatus
from banking_ledger.schemas.transaction import TransactionResponse


class AccountOpen(BaseModel):
    """Request to open a new account."""
    user_id: int
    account_type: AccountType


class AccountResponse(BaseModel):
    id: int
    external_id: uuid.UUID
    user_id: int
    account_number: str
    account_type: AccountType
    balance: Decimal
    status: AccountStatus
    created_at: datetime
    last_activity_at: datetime
    closed_at: datetime | None

    model_config = {"from_attributes": True}


class StatementResponse(BaseModel):
    """An account together with every transaction that touched it."""
    account: AccountResponse
    transactions: list[TransactionResponse]
    currency: str
