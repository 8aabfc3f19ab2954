"""
Column types shared by the ledger models.
"""

from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import BigInteger
from sqlalchemy.types import TypeDecorator

# Amounts are kept to 4 decimal places
MONEY_SCALE = 4
QUANTUM = Decimal(1).scaleb(-MONEY_SCALE)


class Money(TypeDecorator):
    """
    Exact Decimal stored as an integer count of 1/10_000 units.

    SQLite keeps NUMERIC values as REAL, which silently drops digits
    beyond float precision. Storing scaled integers keeps every
    amount exact, and comparisons in CHECK constraints still work.
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        scaled = Decimal(value).scaleb(MONEY_SCALE)
        return int(scaled.to_integral_value(rounding=ROUND_HALF_UP))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value).scaleb(-MONEY_SCALE).quantize(QUANTUM)
