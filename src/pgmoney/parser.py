"""
parser.py — en_US.UTF-8 money string parser

================================================================================
ACCEPTED INPUT
================================================================================

    [-] [$] digits-and-commas [. digits]
    ( [$] digits-and-commas [. digits] )

    "$123.45"        ->  12345
    "$123,456.78"    ->  12345678      commas are dropped, grouping not checked
    "(93.32)"        -> -9332          parentheses mean negative
    "1234567890"     ->  123456789000  no decimal point means whole dollars
    "$123.455"       ->  12346         third decimal rounds half up
    ".5"             ->  5             one decimal digit is read as cents

A leading minus and parentheses cannot be combined. Whitespace is not
accepted anywhere. A body with no digits at all ("", "$", ".") is zero.

================================================================================
STAGES
================================================================================

1. Sign detection (strips "-" or "(...)")
2. Structural match of the unsigned body
3. Whole part -> int
4. Fractional part -> cents, rounded on the third digit
5. Signed, overflow-checked combine: whole * 100 + cents

Both steps of the combine are range checked: "92233720368547758.075" rounds
to .08 and is rejected, "92233720368547758.07" is Money.max().

================================================================================
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import re

from .core import MAX_RAW, MIN_RAW, SCALE, Locale, Money
from .errors import (
    InvalidFormatError,
    MalformedNumberError,
    OutOfRangeError,
    ParseError,
)

logger = logging.getLogger(__name__)


# Only the first three fractional digits take part in rounding
_SIGNIFICANT_FRACTION_DIGITS = 3

# len(str(MAX_RAW)); longer digit runs cannot fit
_MAX_WHOLE_DIGITS = 19

# Inputs are echoed into messages and logs up to this many characters
_PREVIEW_CHARS = 40


def _body_pattern(locale: Locale) -> re.Pattern[str]:
    symbol = re.escape(locale.symbol)
    group = re.escape(locale.group_separator)
    point = re.escape(locale.decimal_point)
    return re.compile(
        rf"{symbol}?(?P<whole>[0-9{group}]*)(?:{point}(?P<fraction>[0-9]*))?"
    )


_BODY_RE = _body_pattern(Locale.EN_US)


class Sign(Enum):
    POSITIVE = 1
    NEGATIVE = -1


@dataclass(frozen=True)
class _ParsedAmount:
    """Intermediate result: sign, cleaned whole digits, raw fraction digits."""
    sign: Sign
    whole: str
    fraction: str


def _preview(text: str) -> str:
    if len(text) <= _PREVIEW_CHARS:
        return repr(text)
    return f"{text[:_PREVIEW_CHARS]!r}... ({len(text)} chars)"


def _reject(error_cls: type[ParseError], message: str, text: str) -> ParseError:
    logger.debug("Rejected money input %s: %s", _preview(text), message)
    return error_cls(f"{message}: {_preview(text)}", text)


# ==============================================================================
# STAGES
# ==============================================================================

def _detect_sign(text: str) -> tuple[Sign, str]:
    has_minus = text.startswith("-")
    body = text[1:] if has_minus else text
    has_parens = len(body) >= 2 and body[0] == "(" and body[-1] == ")"

    if has_minus and has_parens:
        raise _reject(InvalidFormatError, "minus sign and parentheses cannot be combined", text)
    if has_parens:
        body = body[1:-1]
        if body.startswith("-"):
            raise _reject(InvalidFormatError, "minus sign and parentheses cannot be combined", text)
        return Sign.NEGATIVE, body
    if has_minus:
        return Sign.NEGATIVE, body
    return Sign.POSITIVE, body


def _split_amount(text: str) -> _ParsedAmount:
    """Stages 1 and 2: detect the sign and split the body into digit runs."""
    sign, body = _detect_sign(text)

    match = _BODY_RE.fullmatch(body)
    if match is None:
        raise _reject(InvalidFormatError, "not a monetary amount", text)

    whole = match.group("whole").replace(Locale.EN_US.group_separator, "")
    fraction = match.group("fraction") or ""

    return _ParsedAmount(sign=sign, whole=whole, fraction=fraction)


def _to_int(digits: str, text: str) -> int:
    digits = digits.lstrip("0")
    if not digits:
        return 0
    if len(digits) > _MAX_WHOLE_DIGITS:
        raise _reject(OutOfRangeError, "amount exceeds the money range", text)
    try:
        value = int(digits)
    except ValueError as exc:
        raise _reject(MalformedNumberError, f"cannot convert {_preview(digits)}", text) from exc
    if value > MAX_RAW:
        raise _reject(OutOfRangeError, "amount exceeds the money range", text)
    return value


def _rounded_cents(fraction: str, text: str) -> int:
    """
    Convert fractional digits to cents.

    One or two digits are taken literally ("5" is 5 cents, not 50).
    With three or more, the third digit rounds the first two half up and
    everything after it is ignored.
    """
    if len(fraction) < _SIGNIFICANT_FRACTION_DIGITS:
        return _to_int(fraction, text)

    significant = fraction[:_SIGNIFICANT_FRACTION_DIGITS]
    cents = _to_int(significant[:-1], text)
    if _to_int(significant[-1], text) >= 5:
        cents += 1
    return cents


def _combine(amount: _ParsedAmount, text: str) -> int:
    sign = amount.sign.value
    whole = _to_int(amount.whole, text) * sign
    cents = _rounded_cents(amount.fraction, text) * sign

    total = whole * SCALE
    if not MIN_RAW <= total <= MAX_RAW:
        raise _reject(OutOfRangeError, "amount exceeds the money range", text)
    total += cents
    if not MIN_RAW <= total <= MAX_RAW:
        raise _reject(OutOfRangeError, "amount exceeds the money range", text)
    return total


# ==============================================================================
# PUBLIC API
# ==============================================================================

def parse(text: str) -> Money:
    """
    Parse a monetary string into Money.

    Raises:
        InvalidFormatError: the string is not a monetary amount
        MalformedNumberError: a digit run could not be converted
        OutOfRangeError: the amount does not fit in a signed 64-bit integer
        TypeError: text is not a str
    """
    if not isinstance(text, str):
        raise TypeError(f"Money can only be parsed from str, not {type(text).__name__}")

    amount = _split_amount(text)
    return Money.from_raw(_combine(amount, text))
