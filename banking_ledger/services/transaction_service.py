"""
Transaction service — deposits, withdrawals, and transfers.

Each operation:
1. Resolves the accounts through the Directory
2. Applies the balance change through account_operations,
   which validates amount, status and available funds
3. Appends exactly one COMPLETED transaction to the log

Validation happens before anything is written, so a rejected
operation leaves balances and the log untouched. The caller
controls the commit.
"""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from banking_ledger.models.account import Account
from banking_ledger.models.transaction import Transaction
from banking_ledger.models.enums import TransactionType, TransactionStatus
from banking_ledger.schemas.transaction import (
    DepositRequest,
    WithdrawalRequest,
    TransferRequest,
)
from banking_ledger.services import account_operations
from banking_ledger.services.directory import Directory

logger = logging.getLogger(__name__)


class TransactionService:

    def __init__(self, db: Session):
        self.db = db
        self.directory = Directory(db)

    def _record(
        self,
        transaction_type: TransactionType,
        amount: Decimal,
        description: str,
        source: Account | None = None,
        destination: Account | None = None,
    ) -> Transaction:
        txn = Transaction(
            transaction_type=transaction_type,
            status=TransactionStatus.COMPLETED,
            source_account_id=source.id if source else None,
            destination_account_id=destination.id if destination else None,
            amount=amount,
            description=description,
        )
        self.directory.add(txn)
        logger.info(
            f"{transaction_type.value} of {amount} completed",
            extra={
                "action": transaction_type.value.lower(),
                "resource": f"transaction:{txn.id}",
            },
        )
        return txn

    def deposit(self, request: DepositRequest) -> Transaction:
        """Deposit money into an account."""
        account = self.directory.get_account(request.account_id)
        try:
            account_operations.deposit(account, request.amount)
        except ValueError as e:
            logger.warning(
                f"Deposit rejected: {e}",
                extra={"action": "deposit", "resource": f"account:{account.id}"},
            )
            raise

        return self._record(
            TransactionType.DEPOSIT,
            request.amount,
            request.description,
            destination=account,
        )

    def withdraw(self, request: WithdrawalRequest) -> Transaction:
        """Withdraw money from an account. Fails if funds are short."""
        account = self.directory.get_account(request.account_id)
        try:
            account_operations.withdraw(account, request.amount)
        except ValueError as e:
            logger.warning(
                f"Withdrawal rejected: {e}",
                extra={"action": "withdrawal", "resource": f"account:{account.id}"},
            )
            raise

        return self._record(
            TransactionType.WITHDRAWAL,
            request.amount,
            request.description,
            source=account,
        )

    def transfer(self, request: TransferRequest) -> Transaction:
        """
        Transfer money between two accounts.

        Both accounts are resolved before any balance changes. If
        the deposit leg fails, the withdrawal leg is compensated,
        so either both balances move or neither does.
        """
        source = self.directory.get_account(request.source_account_id)
        destination = self.directory.get_account(request.destination_account_id)
        try:
            account_operations.transfer(source, destination, request.amount)
        except ValueError as e:
            logger.warning(
                f"Transfer rejected: {e}",
                extra={"action": "transfer", "resource": f"account:{source.id}"},
            )
            raise

        return self._record(
            TransactionType.TRANSFER,
            request.amount,
            request.description,
            source=source,
            destination=destination,
        )

    def get_transaction(self, transaction_id: int) -> Transaction:
        return self.directory.get_transaction(transaction_id)

    def get_statement(self, account_id: int) -> tuple[Account, list[Transaction]]:
        """Return the account and every transaction touching it, oldest first."""
        account = self.directory.get_account(account_id)
        return account, self.directory.account_transactions(account.id)
