"""
test_parser.py — Tests for the en_US money string parser

Tests cover:
- Plain, symbol, grouped and parenthesized inputs
- Sub-cent rounding on the third fractional digit
- Rejection of malformed and conflicting-sign inputs
- Range boundaries at MIN_RAW / MAX_RAW
- Round trip through str()
"""

import logging

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pgmoney import (
    Money,
    MIN_RAW,
    MAX_RAW,
    parse,
    ParseError,
    InvalidFormatError,
    OutOfRangeError,
)


# ==============================================================================
# Valid input
# ==============================================================================

class TestValidInput:

    @pytest.mark.parametrize("text, raw", [
        ("$123.45", 12345),
        ("123.45", 12345),
        ("93.32", 9332),
        (".32", 32),
        ("$.32", 32),
        ("12.", 1200),
        ("1234567890", 123456789000),
        ("324023040222", 32402304022200),
        ("12345678901234567", 1234567890123456700),
        ("0", 0),
        ("$0.00", 0),
    ])
    def test_positive(self, text, raw):
        assert parse(text) == Money(raw)

    @pytest.mark.parametrize("text, raw", [
        ("-12345", -1234500),
        ("-1234567890", -123456789000),
        ("-12345678901234567", -1234567890123456700),
        ("-$93.32", -9332),
        ("-.5", -5),
    ])
    def test_minus_sign(self, text, raw):
        assert parse(text) == Money(raw)

    @pytest.mark.parametrize("text, raw", [
        ("(1)", -100),
        ("(93.32)", -9332),
        ("($123,456.78)", -12345678),
        ("(.01)", -1),
    ])
    def test_parentheses(self, text, raw):
        assert parse(text) == Money(raw)

    def test_parenthesized_displays_with_minus(self):
        assert str(parse("(93.32)")) == "-$93.32"

    @pytest.mark.parametrize("text, raw", [
        ("$123,456.78", 12345678),
        ("1,000,000", 100000000),
        ("1,2,3", 12300),
        ("12,34.5", 123405),
        (",5", 500),
    ])
    def test_commas_are_stripped_without_validation(self, text, raw):
        assert parse(text) == Money(raw)

    @pytest.mark.parametrize("text", ["", "$", ".", "-", "()", ",", "$.", "-$"])
    def test_no_digits_is_zero(self, text):
        assert parse(text) == Money.zero()

    def test_money_parse_classmethod(self):
        assert Money.parse("$1,234.56") == Money(123456)


# ==============================================================================
# Fractional digits
# ==============================================================================

class TestFraction:

    @pytest.mark.parametrize("text, raw", [
        ("$123.451", 12345),
        ("$123.454", 12345),
        ("$123.455", 12346),
        ("$123.456", 12346),
        ("$123.459", 12346),
    ])
    def test_third_digit_rounds_half_up(self, text, raw):
        assert parse(text) == Money(raw)

    def test_rounding_carries_into_dollars(self):
        assert parse("1.995") == Money(200)

    def test_negative_rounding_is_away_from_zero(self):
        assert parse("-$123.455") == Money(-12346)
        assert parse("($123.455)") == Money(-12346)

    def test_digits_after_the_third_are_ignored(self):
        assert parse("1.00499999") == Money(100)
        assert parse("1.0049") == Money(100)
        assert parse("1.0051") == Money(101)

    def test_single_digit_is_read_literally(self):
        # "9.8" is 9 dollars and 8 cents, not 80 cents
        assert parse("9.8") == Money(908)
        assert parse(".5") == Money(5)

    def test_two_digits(self):
        assert parse("9.80") == Money(980)


# ==============================================================================
# Invalid input
# ==============================================================================

class TestInvalidInput:

    @pytest.mark.parametrize("text", [
        "-(100)",
        "(-100)",
        "-($1.00)",
    ])
    def test_minus_and_parentheses_conflict(self, text):
        with pytest.raises(InvalidFormatError):
            parse(text)

    @pytest.mark.parametrize("text", [
        "abc",
        "12a",
        "1.2.3",
        "1.2,3",
        "$$1",
        "1$",
        "€1.00",
        "1.00$",
        "--1",
        "+1",
        "1-",
        "12-34",
        "$-5",
        "(1",
        "1)",
        "((1))",
        " 1.00",
        "1.00 ",
        "1 000",
        "1.00\n",
        "١٢",
    ])
    def test_structural_mismatch(self, text):
        with pytest.raises(InvalidFormatError):
            parse(text)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            parse("abc")

    def test_error_keeps_input(self):
        with pytest.raises(ParseError) as excinfo:
            parse("12a")
        assert excinfo.value.text == "12a"

    def test_non_str_raises_type_error(self):
        with pytest.raises(TypeError):
            parse(12345)

    def test_long_input_is_truncated_in_message(self):
        text = "1" * 5000 + "x"
        with pytest.raises(InvalidFormatError) as excinfo:
            parse(text)
        assert len(str(excinfo.value)) < 200
        assert excinfo.value.text == text

    def test_rejection_is_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="pgmoney.parser"):
            with pytest.raises(InvalidFormatError):
                parse("nope")
        assert "nope" in caplog.text


# ==============================================================================
# Range boundaries
# ==============================================================================

class TestRange:

    def test_max(self):
        assert parse("92233720368547758.07") == Money.max()
        assert parse("$92,233,720,368,547,758.07") == Money.max()

    def test_min(self):
        assert parse("-92233720368547758.08") == Money.min()
        assert parse("($92233720368547758.08)") == Money.min()

    def test_one_past_max(self):
        with pytest.raises(OutOfRangeError):
            parse("92233720368547758.08")

    def test_one_past_min(self):
        with pytest.raises(OutOfRangeError):
            parse("-92233720368547758.09")

    def test_rounding_past_max(self):
        with pytest.raises(OutOfRangeError):
            parse("92233720368547758.075")

    def test_rounding_past_min(self):
        with pytest.raises(OutOfRangeError):
            parse("-92233720368547758.085")

    def test_seventeen_digit_whole_part(self):
        assert parse("92233720368547758") == Money(9223372036854775800)

    @pytest.mark.parametrize("text", [
        "123456789012345678",
        "-123456789012345678",
        "92233720368547759",
        "9223372036854775807",
        "-9223372036854775808",
        "99999999999999999999999",
    ])
    def test_too_large(self, text):
        with pytest.raises(OutOfRangeError):
            parse(text)

    def test_leading_zeros(self):
        assert parse("007.05") == Money(705)
        assert parse("0" * 5000 + "5") == Money(500)
        assert parse("-$" + "0" * 5000 + "1.00") == Money(-100)

    def test_very_long_whole_part(self):
        with pytest.raises(OutOfRangeError):
            parse("1" * 5000)

        with pytest.raises(OutOfRangeError):
            parse("-$" + "9" * 5000 + ".00")

    def test_long_out_of_range_message_is_bounded(self):
        with pytest.raises(OutOfRangeError) as excinfo:
            parse("1" * 5000)
        assert len(str(excinfo.value)) < 200

    def test_out_of_range_is_a_parse_error(self):
        with pytest.raises(ParseError):
            parse("123456789012345678")


# ==============================================================================
# Properties
# ==============================================================================

class TestParserProperties:

    @given(raw=st.integers(min_value=MIN_RAW, max_value=MAX_RAW))
    @settings(max_examples=1000)
    def test_display_round_trip(self, raw: int):
        """parse(str(m)) == m for every Money."""
        m = Money(raw)
        assert parse(str(m)) == m

    @given(raw=st.integers(min_value=0, max_value=MAX_RAW))
    @settings(max_examples=500)
    def test_parenthesized_display_is_negative(self, raw: int):
        m = Money(raw)
        assert parse(f"({m})") == -m

    @given(dollars=st.integers(min_value=0, max_value=10**15), cents=st.integers(min_value=0, max_value=99))
    @settings(max_examples=500)
    def test_grouped_matches_ungrouped(self, dollars: int, cents: int):
        grouped = f"${dollars:,}.{cents:02d}"
        plain = f"{dollars}.{cents:02d}"
        assert parse(grouped) == parse(plain) == Money(dollars * 100 + cents)


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
