"""
Account service — opens, closes and looks up accounts.

Balances are stored on the account and only changed by
TransactionService through account_operations.
"""

import logging
import secrets
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from banking_ledger.exceptions import InvalidState
from banking_ledger.models.account import Account
from banking_ledger.models.enums import AccountStatus
from banking_ledger.schemas.account import AccountOpen
from banking_ledger.services.directory import Directory

logger = logging.getLogger(__name__)

ACCOUNT_NUMBER_DIGITS = 16


class AccountService:

    def __init__(self, db: Session):
        self.db = db
        self.directory = Directory(db)

    def _generate_account_number(self) -> str:
        """Random 16-digit number, redrawn until it is unused."""
        while True:
            number = f"{secrets.randbelow(10 ** ACCOUNT_NUMBER_DIGITS):0{ACCOUNT_NUMBER_DIGITS}d}"
            if not self.directory.account_number_taken(number):
                return number

    def open_account(self, request: AccountOpen) -> Account:
        """
        Open a new account for a user.

        The account starts ACTIVE with a zero balance. A user may
        hold any number of accounts.
        """
        user = self.directory.get_user(request.user_id)
        if not user.is_active:
            raise InvalidState(f"User {request.user_id} is not active")

        now = datetime.utcnow()
        account = Account(
            user_id=user.id,
            account_number=self._generate_account_number(),
            account_type=request.account_type,
            balance=Decimal("0"),
            status=AccountStatus.ACTIVE,
            created_at=now,
            last_activity_at=now,
        )
        self.directory.add(account)
        logger.info(
            "Account opened",
            extra={"action": "open_account", "resource": f"account:{account.id}"},
        )
        return account

    def close_account(self, account_id: int) -> Account:
        """
        Close an account.

        Only an ACTIVE account with a zero balance can be closed.
        Closed accounts cannot be reopened.
        """
        account = self.directory.get_account(account_id)

        if not account.can_transition_to(AccountStatus.CLOSED):
            raise InvalidState(
                f"Cannot transition from {account.status.value} "
                f"to {AccountStatus.CLOSED.value}"
            )
        if account.balance != 0:
            raise InvalidState(
                f"Account {account_id} has a balance of {account.balance}; "
                f"withdraw remaining funds before closing"
            )

        account.status = AccountStatus.CLOSED
        account.closed_at = datetime.utcnow()
        self.db.flush()
        logger.info(
            "Account closed",
            extra={"action": "close_account", "resource": f"account:{account.id}"},
        )
        return account

    def get_account(self, account_id: int) -> Account:
        return self.directory.get_account(account_id)

    def get_account_by_number(self, account_number: str) -> Account:
        return self.directory.get_account_by_number(account_number)

    def get_balance(self, account_id: int) -> Decimal:
        return self.directory.get_account(account_id).balance

    def get_user_accounts(self, user_id: int) -> list[Account]:
        """Get all accounts for a user. The user must exist."""
        self.directory.get_user(user_id)
        return self.directory.user_accounts(user_id)
