"""Business logic services."""

from banking_ledger.services.directory import Directory
from banking_ledger.services.user_service import UserService
from banking_ledger.services.account_service import AccountService
from banking_ledger.services.transaction_service import TransactionService
from banking_ledger.services.loan_service import LoanService

__all__ = [
    "Directory",
    "UserService",
    "AccountService",
    "TransactionService",
    "LoanService",
]
