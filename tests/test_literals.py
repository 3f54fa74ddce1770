"""Tests for the literal parser."""

from fractions import Fraction

import pytest

from polyconst import LiteralKindError, NumericKind, parse_literal
from polyconst.literals import digits_to_int


class TestIntegerLiterals:
    def test_plain(self):
        lit = parse_literal("2047")
        assert lit.kind is NumericKind.INTEGER
        assert lit.value == 2047
        assert not lit.negative

    def test_signed(self):
        assert parse_literal("-2047").value == -2047
        assert parse_literal("+5").value == 5

    def test_digit_separators(self):
        assert parse_literal("1_000_000").value == 1_000_000

    def test_zero(self):
        assert parse_literal("0").is_zero
        assert parse_literal("-0").is_zero

    def test_huge_values_are_exact(self):
        text = "340282366920938463463374607431768211456"
        assert parse_literal(text).value == 2 ** 128


class TestFloatLiterals:
    """A decimal point or an exponent makes a float literal."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("0.1", Fraction(1, 10)),
            ("3.25", Fraction(13, 4)),
            ("1.", Fraction(1)),
            ("1e3", Fraction(1000)),
            ("2.5E-2", Fraction(1, 40)),
            ("1_0.2_5", Fraction(41, 4)),
            ("-0.5", Fraction(-1, 2)),
        ],
    )
    def test_exact_value(self, text, expected):
        lit = parse_literal(text)
        assert lit.kind is NumericKind.FLOAT
        assert lit.value == expected

    def test_value_is_not_rounded(self):
        lit = parse_literal("3.141592653589793238462643383279")
        assert lit.value == Fraction(3141592653589793238462643383279, 10 ** 30)

    def test_negative_zero_keeps_sign(self):
        lit = parse_literal("-0.0")
        assert lit.is_zero
        assert lit.negative


class TestRejectedLiterals:
    @pytest.mark.parametrize("text", ["0u32", "10i8", "1.0f32", "1e10f64", "5usize", "7nz_u8"])
    def test_type_suffix(self, text):
        with pytest.raises(LiteralKindError, match="suffix"):
            parse_literal(text)

    @pytest.mark.parametrize("text", ["0x10", "0b101", "0o17", "-0xff"])
    def test_other_bases(self, text):
        with pytest.raises(LiteralKindError, match="decimal"):
            parse_literal(text)

    @pytest.mark.parametrize("text", ["", "   ", ".5", "abc", "--1", "1.2.3", "_1"])
    def test_not_a_literal(self, text):
        with pytest.raises(LiteralKindError):
            parse_literal(text)

    def test_error_carries_text(self):
        with pytest.raises(LiteralKindError) as exc_info:
            parse_literal("0u32")
        assert exc_info.value.text == "0u32"
        assert exc_info.value.code == "PC001"


class TestLongLiterals:
    def test_digits_beyond_int_conversion_limit(self):
        assert parse_literal("1" * 5000).value == (10 ** 5000 - 1) // 9
        lit = parse_literal("0." + "0" * 4999 + "1")
        assert lit.value == Fraction(1, 10 ** 5000)

    def test_digits_to_int_chunks(self):
        assert digits_to_int("0" * 1500 + "42") == 42
        assert digits_to_int("9" * 2001) == 10 ** 2001 - 1

    @pytest.mark.parametrize(
        "text,order",
        [("1", 0), ("120", 2), ("3.14", 0), ("0.05", -2), ("000.000_7", -4), ("12e3", 4), ("1e-999999999", -999999999)],
    )
    def test_decimal_order(self, text, order):
        assert parse_literal(text).decimal_order == order

    def test_zero_has_no_order(self):
        assert parse_literal("0.000e999999999").decimal_order is None
        assert parse_literal("0.000e999999999").is_zero
