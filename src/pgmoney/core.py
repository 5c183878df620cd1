"""
core.py — Domain primitive for the PostgreSQL ``money`` type

================================================================================
DESIGN PRINCIPLES
================================================================================

1. INTERNAL REPRESENTATION
   A single signed 64-bit integer counting hundredths of a unit (cents).
   Never floating point internally. No currency is attached to the value.

2. RANGE
   PostgreSQL stores money as an int8, so every Money lives in
   [MIN_RAW, MAX_RAW]. Python integers are unbounded, so the range is
   enforced by the constructor and every operation goes through it.

3. IMMUTABILITY
   Frozen dataclass. Every operation returns a new instance.

4. OVERFLOW
   The operators raise MoneyOverflowError instead of wrapping around.
   The checked_* methods return None instead of raising.

5. INTEGER vs FLOAT OPERANDS
   Money * int and Money / int stay in exact integer arithmetic;
   division truncates toward zero.
   Money * float and Money / float go through a float and round half
   away from zero:

       Money(87808) / 11   == Money(7982)
       Money(87808) / 11.0 == Money(7983)

================================================================================
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any
import math

from .errors import MoneyOverflowError


# ==============================================================================
# RANGE CONSTANTS
# ==============================================================================

MIN_RAW = -(2 ** 63)
MAX_RAW = 2 ** 63 - 1

# Minor units per major unit (cents per dollar)
SCALE = 100


# ==============================================================================
# LOCALE
# ==============================================================================

class Locale(Enum):
    """
    Monetary locale used for parsing and formatting.

    PostgreSQL formats money according to lc_monetary. Only en_US.UTF-8
    is supported.
    """
    EN_US = ("en_US.UTF-8", "$", ",", ".")

    def __init__(self, tag: str, symbol: str, group_separator: str, decimal_point: str):
        self._tag = tag
        self._symbol = symbol
        self._group_separator = group_separator
        self._decimal_point = decimal_point

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def group_separator(self) -> str:
        return self._group_separator

    @property
    def decimal_point(self) -> str:
        return self._decimal_point


# ==============================================================================
# ROUNDING
# ==============================================================================

def _round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    if not math.isfinite(value):
        raise MoneyOverflowError(f"non-finite result: {value}")

    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return -whole if value < 0 else whole


def _from_float(value: float) -> int:
    """
    Round a float result to cents.

    float(MAX_RAW) is 2**63, so a result that only reaches 2**63 through
    float rounding is clamped back to MAX_RAW.
    """
    rounded = _round_half_away(value)
    if rounded == MAX_RAW + 1:
        return MAX_RAW
    return rounded


def _truncating_div(numerator: int, denominator: int) -> int:
    """Integer division truncating toward zero (Python's // floors)."""
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def _check_scalar(value: Any, op: str) -> None:
    # bool is an int subclass, but True * Money makes no sense
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(
            f"Operation not supported: Money {op} {type(value).__name__}. "
            f"Use int or float."
        )


# ==============================================================================
# MONEY CLASS
# ==============================================================================

@dataclass(frozen=True, slots=True, order=True, repr=False)
class Money:
    """
    Fixed-point amount in cents, equivalent to PostgreSQL ``money``.

    INVARIANTS:
    1. _raw is always an int
    2. MIN_RAW <= _raw <= MAX_RAW
    3. No sub-cent fraction is retained (rounding happens at parse time)

    USAGE:
        price = Money.parse("$1,234.56")
        total = price * 3
        str(total)  # "$3703.68"

    SERIALIZATION:
        int(m) / Money.from_raw() for the bare integer,
        to_dict() / from_dict() for {"raw": int},
        pgmoney.wire for the PostgreSQL binary format.
    """
    _raw: int = 0

    def __post_init__(self) -> None:
        if isinstance(self._raw, bool) or not isinstance(self._raw, int):
            raise TypeError(
                f"Money wraps an int number of cents, not {type(self._raw).__name__}. "
                f"Use Money.parse() for strings."
            )
        if not MIN_RAW <= self._raw <= MAX_RAW:
            raise MoneyOverflowError(
                f"{self._raw} is outside the money range [{MIN_RAW}, {MAX_RAW}]"
            )

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def from_raw(cls, raw: int) -> Money:
        """Wrap a number of cents verbatim."""
        return cls(raw)

    @classmethod
    def zero(cls) -> Money:
        return cls(0)

    @classmethod
    def min(cls) -> Money:
        """Smallest representable amount, -$92233720368547758.08."""
        return cls(MIN_RAW)

    @classmethod
    def max(cls) -> Money:
        """Largest representable amount, $92233720368547758.07."""
        return cls(MAX_RAW)

    @classmethod
    def parse(cls, text: str) -> Money:
        """
        Parse an en_US monetary string such as ``"$1,234.56"`` or ``"(12.00)"``.

        Raises a ParseError subclass on failure. See pgmoney.parser.
        """
        from .parser import parse
        return parse(text)

    # -------------------------------------------------------------------------
    # Arithmetic (raising)
    # -------------------------------------------------------------------------

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            raise TypeError(
                f"Operation not supported: Money + {type(other).__name__}. "
                f"Use Money.from_raw() or Money.parse() to convert."
            )
        return Money(self._raw + other._raw)

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            raise TypeError(
                f"Operation not supported: Money - {type(other).__name__}."
            )
        return Money(self._raw - other._raw)

    def __neg__(self) -> Money:
        return Money(-self._raw)

    def __abs__(self) -> Money:
        return Money(abs(self._raw))

    def __mul__(self, factor: int | float) -> Money:
        """
        Multiply by an int (exact) or a float (rounded half away from zero).

        The float path loses precision for amounts beyond 2**53 cents.
        """
        _check_scalar(factor, "*")
        if isinstance(factor, int):
            return Money(self._raw * factor)
        return Money(_from_float(float(self._raw) * factor))

    def __rmul__(self, factor: int | float) -> Money:
        return self.__mul__(factor)

    def __truediv__(self, divisor: int | float) -> Money:
        """
        Divide by an int (truncating toward zero) or a float (rounded).

        Division by zero raises ZeroDivisionError.
        """
        _check_scalar(divisor, "/")
        if isinstance(divisor, int):
            if divisor == 0:
                raise ZeroDivisionError("Money division by zero")
            return Money(_truncating_div(self._raw, divisor))
        return Money(_from_float(float(self._raw) / divisor))

    def __rtruediv__(self, other: Any) -> Money:
        raise TypeError(f"Operation not supported: {type(other).__name__} / Money.")

    # -------------------------------------------------------------------------
    # Arithmetic (checked)
    # -------------------------------------------------------------------------

    def checked_add(self, other: Money) -> Money | None:
        """self + other, or None on overflow."""
        try:
            return self + other
        except MoneyOverflowError:
            return None

    def checked_sub(self, other: Money) -> Money | None:
        try:
            return self - other
        except MoneyOverflowError:
            return None

    def checked_mul(self, factor: int | float) -> Money | None:
        try:
            return self * factor
        except MoneyOverflowError:
            return None

    def checked_div(self, divisor: int | float) -> Money | None:
        """self / divisor, or None on overflow or division by zero."""
        try:
            return self / divisor
        except (MoneyOverflowError, ZeroDivisionError):
            return None

    def checked_neg(self) -> Money | None:
        try:
            return -self
        except MoneyOverflowError:
            return None

    # -------------------------------------------------------------------------
    # Properties and output
    # -------------------------------------------------------------------------

    @property
    def raw(self) -> int:
        """Value in cents. For persistence and wire encoding."""
        return self._raw

    def __int__(self) -> int:
        return self._raw

    def __bool__(self) -> bool:
        return self._raw != 0

    def is_positive(self) -> bool:
        return self._raw > 0

    def is_negative(self) -> bool:
        return self._raw < 0

    def is_zero(self) -> bool:
        return self._raw == 0

    def __str__(self) -> str:
        locale = Locale.EN_US
        sign = "-" if self._raw < 0 else ""
        whole, cents = divmod(abs(self._raw), SCALE)
        return f"{sign}{locale.symbol}{whole}{locale.decimal_point}{cents:02d}"

    def __repr__(self) -> str:
        return f"Money({str(self)!r})"

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict:
        """
        Serialize for persistence/API.

        Format: {"raw": int}. Never serialize money as a float.
        """
        return {"raw": self._raw}

    @classmethod
    def from_dict(cls, data: dict) -> Money:
        return cls.from_raw(data["raw"])

    @classmethod
    def _coerce(cls, value: Any) -> Money:
        # pydantic turns ValueError into ValidationError, so range and type
        # problems are reported as ValueError here
        if isinstance(value, Money):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, int) and not isinstance(value, bool):
            if not MIN_RAW <= value <= MAX_RAW:
                raise ValueError(f"{value} is outside the money range")
            return cls(value)
        raise ValueError(f"Cannot build Money from {type(value).__name__}")

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> Any:
        """Validate from Money, int cents or a money string; serialize as int cents."""
        from pydantic_core import core_schema

        return core_schema.no_info_plain_validator_function(
            cls._coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.raw,
                info_arg=False,
                return_schema=core_schema.int_schema(),
            ),
        )
