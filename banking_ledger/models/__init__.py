"""
Ledger entity models.

All models must be imported here so that they register on
Base.metadata before init_db() creates the tables.
"""

from banking_ledger.models.base import Base
from banking_ledger.models.enums import (
    UserRole,
    AccountType,
    AccountStatus,
    TransactionType,
    TransactionStatus,
    LoanStatus,
)
from banking_ledger.models.user import User
from banking_ledger.models.account import Account
from banking_ledger.models.transaction import Transaction
from banking_ledger.models.loan import Loan

__all__ = [
    "Base",
    "UserRole",
    "AccountType",
    "AccountStatus",
    "TransactionType",
    "TransactionStatus",
    "LoanStatus",
    "User",
    "Account",
    "Transaction",
    "Loan",
]
