"""
Pydantic schemas for loans and installment payments.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from banking_ledger.models.enums import LoanStatus


class LoanApply(BaseModel):
    account_id: int
    principal: Decimal = Field(max_digits=15, decimal_places=4)
    annual_interest_rate: Decimal = Field(max_digits=9, decimal_places=4)
    tenure_months: int


class LoanResponse(BaseModel):
    id: int
    external_id: uuid.UUID
    account_id: int
    principal: Decimal
    annual_interest_rate: Decimal
    tenure_months: int
    monthly_installment: Decimal
    remaining_balance: Decimal
    status: LoanStatus
    paid_months: int
    created_at: datetime
    closed_at: datetime | None

    model_config = {"from_attributes": True}


class InstallmentResponse(BaseModel):
    loan_id: int
    amount_paid: Decimal
    remaining_balance: Decimal
    paid_months: int
    closed: bool
    rejected: bool
    currency: str
