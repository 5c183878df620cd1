"""
errors.py — Error taxonomy for pgmoney

================================================================================
HIERARCHY
================================================================================

    MoneyError
    ├── ParseError (ValueError)
    │   ├── InvalidFormatError
    │   ├── MalformedNumberError
    │   └── OutOfRangeError
    ├── MoneyOverflowError (OverflowError)
    └── WireFormatError (ValueError)

Parser failures are ValueError subclasses so that code written against
int() / float() style conversion keeps working. Arithmetic overflow is an
OverflowError. Division by zero is left to Python's own ZeroDivisionError.

================================================================================
"""

from __future__ import annotations


class MoneyError(Exception):
    """Root of every error raised by pgmoney."""


class ParseError(MoneyError, ValueError):
    """
    A string could not be converted to Money.

    The offending input is kept on ``text`` for diagnostics.
    """

    def __init__(self, message: str, text: str | None = None):
        super().__init__(message)
        self.text = text


class InvalidFormatError(ParseError):
    """Structural mismatch, or conflicting sign notations such as ``-(1)``."""


class MalformedNumberError(ParseError):
    """A digit run failed numeric conversion for a reason other than range."""


class OutOfRangeError(ParseError):
    """The parsed magnitude does not fit the signed 64-bit range."""


class MoneyOverflowError(MoneyError, OverflowError):
    """An arithmetic result (or a raw value) falls outside the signed 64-bit range."""


class WireFormatError(MoneyError, ValueError):
    """A binary wire buffer is not exactly 8 bytes."""
