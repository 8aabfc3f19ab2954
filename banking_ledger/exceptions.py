"""
Ledger error taxonomy.

Every failure a caller is expected to handle derives from
LedgerError. LedgerError is a ValueError so code that only
knows "bad input" semantics can still catch it.
"""


class LedgerError(ValueError):
    """Base class for recoverable ledger failures."""


class InvalidAmount(LedgerError):
    """Non-positive amount, or the target account/loan is not active."""


class InsufficientFunds(LedgerError):
    """Withdrawal or transfer exceeds the available balance."""


class InvalidState(LedgerError):
    """Operation not allowed in the entity's current lifecycle state."""


class DuplicateKey(LedgerError):
    """A unique natural key (e.g. username) is already registered."""


class AuthenticationFailed(LedgerError):
    """Unknown user, wrong password, or deactivated user."""


class NotFound(LedgerError):
    """Lookup by identifier or natural key missed."""


class UserNotFound(NotFound):
    pass


class AccountNotFound(NotFound):
    pass


class TransactionNotFound(NotFound):
    pass


class LoanNotFound(NotFound):
    pass
