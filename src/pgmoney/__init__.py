"""
pgmoney — PostgreSQL ``money`` as a Python value type

A signed 64-bit count of cents with overflow-checked arithmetic, an
en_US.UTF-8 string parser and the PostgreSQL binary wire format.

================================================================================
QUICK START
================================================================================

Basic usage:

    from pgmoney import Money

    price = Money.parse("$1,234.56")        # Money('$1234.56')
    refund = Money.parse("(12.50)")         # Money('-$12.50')

    total = price * 3 + refund
    str(total)                              # "$3691.18"

    Money(87808) / 11                       # Money('$79.82'), truncates
    Money(87808) / 11.0                     # Money('$79.83'), rounds

Overflow never wraps around:

    Money.max() + Money(1)                  # raises MoneyOverflowError
    Money.max().checked_add(Money(1))       # None

Wire format and database column:

    from pgmoney import wire
    wire.decode(wire.encode(price)) == price

    from pgmoney.sql import MoneyType       # requires SQLAlchemy

================================================================================
"""

import logging

from .core import (
    Money,
    Locale,
    MIN_RAW,
    MAX_RAW,
    SCALE,
)

from .errors import (
    MoneyError,
    ParseError,
    InvalidFormatError,
    MalformedNumberError,
    OutOfRangeError,
    MoneyOverflowError,
    WireFormatError,
)

from .parser import parse

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.4.0"
__license__ = "MIT"

__all__ = [
    # Core
    "Money",
    "Locale",
    "MIN_RAW",
    "MAX_RAW",
    "SCALE",
    "parse",
    # Errors
    "MoneyError",
    "ParseError",
    "InvalidFormatError",
    "MalformedNumberError",
    "OutOfRangeError",
    "MoneyOverflowError",
    "WireFormatError",
]
