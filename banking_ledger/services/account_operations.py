"""
Balance mutation rules for a single account.

These functions are the only code that changes Account.balance.
They validate, mutate the entity in place, and record nothing;
recording is TransactionService's job.
"""

from datetime import datetime
from decimal import Decimal

from banking_ledger.exceptions import InvalidAmount, InsufficientFunds
from banking_ledger.models.account import Account


def _check_amount(amount: Decimal) -> None:
    if amount <= 0:
        raise InvalidAmount("Amount must be positive")


def _check_active(account: Account) -> None:
    if not account.is_active:
        raise InvalidAmount(
            f"Account {account.account_number} is not active "
            f"(status: {account.status.value})"
        )


def deposit(account: Account, amount: Decimal) -> Decimal:
    """Credit the account. Returns the new balance."""
    _check_amount(amount)
    _check_active(account)

    account.balance = account.balance + amount
    account.last_activity_at = datetime.utcnow()
    return account.balance


def withdraw(account: Account, amount: Decimal) -> Decimal:
    """Debit the account. Returns the new balance."""
    _check_amount(amount)
    # Status before funds: a closed account reports InvalidAmount
    # whatever its balance.
    _check_active(account)
    if amount > account.balance:
        raise InsufficientFunds(
            f"Insufficient balance: available={account.balance}, "
            f"requested={amount}"
        )

    account.balance = account.balance - amount
    account.last_activity_at = datetime.utcnow()
    return account.balance


def transfer(source: Account, destination: Account, amount: Decimal) -> None:
    """
    Move funds from source to destination.

    Withdraws first, then deposits. If the deposit is rejected
    the withdrawal is compensated, leaving both balances as they
    were before the call.
    """
    if source is destination or (
        source.id is not None and source.id == destination.id
    ):
        raise InvalidAmount("Cannot transfer to the same account")

    previous_activity = source.last_activity_at
    withdraw(source, amount)
    try:
        deposit(destination, amount)
    except Exception:
        # Compensate: put the withdrawn funds back
        source.balance = source.balance + amount
        source.last_activity_at = previous_activity
        raise
