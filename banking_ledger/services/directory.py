"""
Directory — the in-memory registries of the ledger.

A Directory owns the four collections (users, accounts,
transactions, loans) for one session. Every lookup by
identifier or natural key goes through here so that a miss
always surfaces as the matching NotFound subtype.

The Directory never commits. Like every service, it takes the
session as a constructor argument and leaves the transaction
boundary to the caller.
"""

from sqlalchemy import select, or_
from sqlalchemy.orm import Session

from banking_ledger.exceptions import (
    UserNotFound,
    AccountNotFound,
    TransactionNotFound,
    LoanNotFound,
)
from banking_ledger.models.user import User
from banking_ledger.models.account import Account
from banking_ledger.models.transaction import Transaction
from banking_ledger.models.loan import Loan


class Directory:

    def __init__(self, db: Session):
        self.db = db

    def add(self, entity):
        """Append an entity to its registry and assign its id."""
        self.db.add(entity)
        self.db.flush()
        return entity

    # --- Registries (insertion order) ---

    def users(self) -> list[User]:
        return list(self.db.execute(
            select(User).order_by(User.id)
        ).scalars().all())

    def accounts(self) -> list[Account]:
        return list(self.db.execute(
            select(Account).order_by(Account.id)
        ).scalars().all())

    def transactions(self) -> list[Transaction]:
        return list(self.db.execute(
            select(Transaction).order_by(Transaction.id)
        ).scalars().all())

    def loans(self) -> list[Loan]:
        return list(self.db.execute(
            select(Loan).order_by(Loan.id)
        ).scalars().all())

    # --- Users ---

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if not user:
            raise UserNotFound(f"User {user_id} not found")
        return user

    def find_user_by_username(self, username: str) -> User | None:
        return self.db.execute(
            select(User).where(User.username == username)
        ).scalar_one_or_none()

    def get_user_by_username(self, username: str) -> User:
        user = self.find_user_by_username(username)
        if not user:
            raise UserNotFound(f"User '{username}' not found")
        return user

    def username_taken(self, username: str) -> bool:
        return self.find_user_by_username(username) is not None

    # --- Accounts ---

    def get_account(self, account_id: int) -> Account:
        account = self.db.get(Account, account_id)
        if not account:
            raise AccountNotFound(f"Account {account_id} not found")
        return account

    def get_account_by_number(self, account_number: str) -> Account:
        account = self.db.execute(
            select(Account).where(Account.account_number == account_number)
        ).scalar_one_or_none()
        if not account:
            raise AccountNotFound(f"Account {account_number} not found")
        return account

    def account_number_taken(self, account_number: str) -> bool:
        return self.db.execute(
            select(Account.id).where(Account.account_number == account_number)
        ).first() is not None

    def user_accounts(self, user_id: int) -> list[Account]:
        return list(self.db.execute(
            select(Account)
            .where(Account.user_id == user_id)
            .order_by(Account.id)
        ).scalars().all())

    # --- Transactions ---

    def get_transaction(self, transaction_id: int) -> Transaction:
        txn = self.db.get(Transaction, transaction_id)
        if not txn:
            raise TransactionNotFound(f"Transaction {transaction_id} not found")
        return txn

    def account_transactions(self, account_id: int) -> list[Transaction]:
        """Every transaction touching the account, oldest first."""
        return list(self.db.execute(
            select(Transaction)
            .where(or_(
                Transaction.source_account_id == account_id,
                Transaction.destination_account_id == account_id,
            ))
            .order_by(Transaction.id)
        ).scalars().all())

    # --- Loans ---

    def get_loan(self, loan_id: int) -> Loan:
        loan = self.db.get(Loan, loan_id)
        if not loan:
            raise LoanNotFound(f"Loan {loan_id} not found")
        return loan

    def account_loans(self, account_id: int) -> list[Loan]:
        return list(self.db.execute(
            select(Loan)
            .where(Loan.account_id == account_id)
            .order_by(Loan.id)
        ).scalars().all())
