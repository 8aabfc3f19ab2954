"""
Comprehensive tests for the TransactionService.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from banking_ledger.exceptions import (
    AccountNotFound,
    InsufficientFunds,
    InvalidAmount,
    TransactionNotFound,
)
from banking_ledger.models.enums import (
    AccountType,
    TransactionStatus,
    TransactionType,
)
from banking_ledger.schemas.account import AccountOpen
from banking_ledger.schemas.transaction import (
    DepositRequest,
    WithdrawalRequest,
    TransferRequest,
)
from banking_ledger.schemas.user import UserRegister
from banking_ledger.services.account_service import AccountService
from banking_ledger.services.directory import Directory
from banking_ledger.services.transaction_service import TransactionService
from banking_ledger.services.user_service import UserService


def setup_account(db_session, username="alice", balance="0"):
    """Helper: register a user and open an account holding ``balance``."""
    user = UserService(db_session).register(UserRegister(
        username=username, password="pw", email=f"{username}@test.com",
    ))
    account = AccountService(db_session).open_account(AccountOpen(
        user_id=user.id, account_type=AccountType.SAVINGS,
    ))
    if Decimal(balance) > 0:
        TransactionService(db_session).deposit(DepositRequest(
            account_id=account.id, amount=Decimal(balance),
        ))
    db_session.commit()
    return account


def log_size(db_session):
    return len(Directory(db_session).transactions())


# --- Deposit Tests ---

class TestDeposit:

    def test_deposit_succeeds(self, db_session):
        account = setup_account(db_session)
        service = TransactionService(db_session)

        txn = service.deposit(DepositRequest(
            account_id=account.id, amount=Decimal("1000.00"),
        ))
        db_session.commit()

        assert txn.status == TransactionStatus.COMPLETED
        assert txn.transaction_type == TransactionType.DEPOSIT
        assert txn.amount == Decimal("1000.00")
        assert txn.source_account_id is None
        assert txn.destination_account_id == account.id

    def test_deposit_updates_balance(self, db_session):
        account = setup_account(db_session)
        service = TransactionService(db_session)

        service.deposit(DepositRequest(account_id=account.id, amount=Decimal("500.00")))
        db_session.commit()

        assert AccountService(db_session).get_balance(account.id) == Decimal("500.00")

    @pytest.mark.parametrize("amount", ["0", "-1", "-100.50"])
    def test_non_positive_amount_rejected(self, db_session, amount):
        account = setup_account(db_session)
        service = TransactionService(db_session)

        with pytest.raises(InvalidAmount, match="must be positive"):
            service.deposit(DepositRequest(account_id=account.id, amount=Decimal(amount)))
        assert account.balance == Decimal("0")
        assert log_size(db_session) == 0

    def test_deposit_to_closed_account_rejected(self, db_session):
        account = setup_account(db_session)
        AccountService(db_session).close_account(account.id)
        db_session.commit()

        service = TransactionService(db_session)
        with pytest.raises(InvalidAmount, match="not active"):
            service.deposit(DepositRequest(account_id=account.id, amount=Decimal("100")))
        assert log_size(db_session) == 0

    def test_deposit_to_missing_account(self, db_session):
        service = TransactionService(db_session)

        with pytest.raises(AccountNotFound):
            service.deposit(DepositRequest(account_id=999, amount=Decimal("1")))

    def test_deposit_touches_last_activity(self, db_session):
        account = setup_account(db_session)
        before = account.last_activity_at
        TransactionService(db_session).deposit(DepositRequest(
            account_id=account.id, amount=Decimal("1"),
        ))

        assert account.last_activity_at >= before


# --- Withdrawal Tests ---

class TestWithdraw:

    def test_withdraw_succeeds(self, db_session):
        account = setup_account(db_session, balance="300")
        service = TransactionService(db_session)

        txn = service.withdraw(WithdrawalRequest(
            account_id=account.id, amount=Decimal("120.50"),
        ))
        db_session.commit()

        assert txn.transaction_type == TransactionType.WITHDRAWAL
        assert txn.source_account_id == account.id
        assert txn.destination_account_id is None
        assert account.balance == Decimal("179.50")

    def test_overdraw_rejected_balance_unchanged(self, db_session):
        account = setup_account(db_session)
        service = TransactionService(db_session)
        service.deposit(DepositRequest(account_id=account.id, amount=Decimal("500")))
        db_session.commit()

        with pytest.raises(InsufficientFunds, match="Insufficient balance"):
            service.withdraw(WithdrawalRequest(account_id=account.id, amount=Decimal("600")))

        assert account.balance == Decimal("500")
        assert log_size(db_session) == 1

    def test_withdraw_entire_balance(self, db_session):
        account = setup_account(db_session, balance="75")
        TransactionService(db_session).withdraw(WithdrawalRequest(
            account_id=account.id, amount=Decimal("75"),
        ))

        assert account.balance == Decimal("0")

    def test_non_positive_amount_rejected(self, db_session):
        account = setup_account(db_session, balance="10")

        with pytest.raises(InvalidAmount):
            TransactionService(db_session).withdraw(WithdrawalRequest(
                account_id=account.id, amount=Decimal("0"),
            ))

    @pytest.mark.parametrize("amount", ["0.01", "1", "99.99", "250"])
    def test_deposit_then_withdraw_restores_balance(self, db_session, amount):
        account = setup_account(db_session, balance="250")
        service = TransactionService(db_session)
        before = account.balance

        service.deposit(DepositRequest(account_id=account.id, amount=Decimal(amount)))
        service.withdraw(WithdrawalRequest(account_id=account.id, amount=Decimal(amount)))

        assert account.balance == before


# --- Transfer Tests ---

class TestTransfer:

    def test_transfer_succeeds(self, db_session):
        source = setup_account(db_session, "alice", balance="1000")
        destination = setup_account(db_session, "bob")
        service = TransactionService(db_session)

        txn = service.transfer(TransferRequest(
            source_account_id=source.id,
            destination_account_id=destination.id,
            amount=Decimal("400"),
        ))
        db_session.commit()

        assert txn.transaction_type == TransactionType.TRANSFER
        assert txn.source_account_id == source.id
        assert txn.destination_account_id == destination.id
        assert source.balance == Decimal("600")
        assert destination.balance == Decimal("400")

    def test_insufficient_funds_no_deposit(self, db_session):
        source = setup_account(db_session, "alice", balance="50")
        destination = setup_account(db_session, "bob", balance="20")
        before = log_size(db_session)

        with pytest.raises(InsufficientFunds):
            TransactionService(db_session).transfer(TransferRequest(
                source_account_id=source.id,
                destination_account_id=destination.id,
                amount=Decimal("100"),
            ))

        assert source.balance == Decimal("50")
        assert destination.balance == Decimal("20")
        assert log_size(db_session) == before

    def test_failed_deposit_leg_is_compensated(self, db_session):
        source = setup_account(db_session, "alice", balance="300")
        destination = setup_account(db_session, "bob")
        AccountService(db_session).close_account(destination.id)
        db_session.commit()
        before = log_size(db_session)

        with pytest.raises(InvalidAmount, match="not active"):
            TransactionService(db_session).transfer(TransferRequest(
                source_account_id=source.id,
                destination_account_id=destination.id,
                amount=Decimal("100"),
            ))

        assert source.balance == Decimal("300")
        assert destination.balance == Decimal("0")
        assert log_size(db_session) == before

    def test_same_account_rejected(self, db_session):
        account = setup_account(db_session, balance="100")

        with pytest.raises(InvalidAmount, match="same account"):
            TransactionService(db_session).transfer(TransferRequest(
                source_account_id=account.id,
                destination_account_id=account.id,
                amount=Decimal("10"),
            ))
        assert account.balance == Decimal("100")

    def test_missing_destination_leaves_source_untouched(self, db_session):
        source = setup_account(db_session, balance="100")

        with pytest.raises(AccountNotFound):
            TransactionService(db_session).transfer(TransferRequest(
                source_account_id=source.id,
                destination_account_id=999,
                amount=Decimal("10"),
            ))
        assert source.balance == Decimal("100")


# --- Transaction Log Tests ---

class TestTransactionLog:

    def test_each_success_appends_one_entry(self, db_session):
        a = setup_account(db_session, "alice")
        b = setup_account(db_session, "bob")
        service = TransactionService(db_session)

        service.deposit(DepositRequest(account_id=a.id, amount=Decimal("100")))
        assert log_size(db_session) == 1
        service.withdraw(WithdrawalRequest(account_id=a.id, amount=Decimal("30")))
        assert log_size(db_session) == 2
        service.transfer(TransferRequest(
            source_account_id=a.id, destination_account_id=b.id, amount=Decimal("20"),
        ))
        assert log_size(db_session) == 3

    def test_failures_append_nothing(self, db_session):
        a = setup_account(db_session, "alice", balance="10")
        b = setup_account(db_session, "bob")
        service = TransactionService(db_session)
        before = log_size(db_session)

        attempts = [
            lambda: service.deposit(DepositRequest(account_id=a.id, amount=Decimal("-5"))),
            lambda: service.withdraw(WithdrawalRequest(account_id=a.id, amount=Decimal("11"))),
            lambda: service.transfer(TransferRequest(
                source_account_id=a.id, destination_account_id=b.id, amount=Decimal("50"),
            )),
        ]
        for attempt in attempts:
            with pytest.raises(ValueError):
                attempt()

        assert log_size(db_session) == before

    def test_get_transaction(self, db_session):
        account = setup_account(db_session)
        service = TransactionService(db_session)
        txn = service.deposit(DepositRequest(account_id=account.id, amount=Decimal("5")))

        assert service.get_transaction(txn.id) is txn

    def test_get_missing_transaction(self, db_session):
        with pytest.raises(TransactionNotFound):
            TransactionService(db_session).get_transaction(999)

    def test_statement_lists_both_directions_in_order(self, db_session):
        a = setup_account(db_session, "alice")
        b = setup_account(db_session, "bob", balance="500")
        service = TransactionService(db_session)

        service.deposit(DepositRequest(account_id=a.id, amount=Decimal("100")))
        service.transfer(TransferRequest(
            source_account_id=b.id, destination_account_id=a.id, amount=Decimal("50"),
        ))
        service.withdraw(WithdrawalRequest(account_id=a.id, amount=Decimal("25")))
        service.withdraw(WithdrawalRequest(account_id=b.id, amount=Decimal("1")))

        account, transactions = service.get_statement(a.id)
        assert account.id == a.id
        assert [t.transaction_type for t in transactions] == [
            TransactionType.DEPOSIT,
            TransactionType.TRANSFER,
            TransactionType.WITHDRAWAL,
        ]
        assert account.balance == Decimal("125")


# --- Precision Tests ---

class TestStoredPrecision:

    def test_large_deposit_survives_reload(self, db_session):
        account = setup_account(db_session)
        amount = Decimal("12345678901.2345")
        TransactionService(db_session).deposit(DepositRequest(
            account_id=account.id, amount=amount,
        ))
        db_session.commit()
        db_session.expire_all()

        assert AccountService(db_session).get_balance(account.id) == amount

    def test_large_round_trip_after_commit(self, db_session):
        account = setup_account(db_session, balance="0.0001")
        service = TransactionService(db_session)
        amount = Decimal("99999999999.9999")

        service.deposit(DepositRequest(account_id=account.id, amount=amount))
        db_session.commit()
        db_session.expire_all()
        service.withdraw(WithdrawalRequest(account_id=account.id, amount=amount))
        db_session.commit()
        db_session.expire_all()

        assert AccountService(db_session).get_balance(account.id) == Decimal("0.0001")

    def test_amount_beyond_max_digits_rejected_by_schema(self):
        with pytest.raises(ValidationError):
            DepositRequest(account_id=1, amount=Decimal("123456789012345.6789"))
