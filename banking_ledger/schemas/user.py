"""
Pydantic schemas for user registration and login.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from banking_ledger.models.enums import UserRole


class UserRegister(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=128)
    email: str = Field(min_length=3, max_length=255)
    role: UserRole = UserRole.CUSTOMER


class UserLogin(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=128)


class UserResponse(BaseModel):
    id: int
    external_id: uuid.UUID
    username: str
    email: str
    role: UserRole
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}
