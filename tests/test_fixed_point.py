"""Tests for fixed-point parsing, rounding and arithmetic.

Covers:
- Parsing without float contamination
- Directional rounding for quantize, div and sqrt
- Scaled integer conversion
"""

from decimal import Decimal

import pytest

from lp_engine.core.errors import DivisionByZero, InvalidAmount
from lp_engine.core.fixed_point import (
    MAX_AMOUNT,
    Rounding,
    div,
    from_scaled,
    mul,
    percent,
    quantize,
    sqrt,
    to_decimal,
    to_fixed,
    to_scaled,
)


class TestToDecimal:
    """Test cases for amount parsing."""

    def test_parses_strings_ints_and_decimals(self):
        assert to_decimal("1.5") == Decimal("1.5")
        assert to_decimal(7) == Decimal("7")
        assert to_decimal(Decimal("0.0000001")) == Decimal("0.0000001")

    def test_accepts_exponent_and_surrounding_whitespace(self):
        assert to_decimal("1e3") == Decimal("1000")
        assert to_decimal(" 2.5 ") == Decimal("2.5")

    @pytest.mark.parametrize("value", [1.5, True, None, [1]])
    def test_rejects_non_amount_types(self, value):
        """Floats are rejected so binary rounding never enters the ledger."""
        with pytest.raises(InvalidAmount):
            to_decimal(value)

    @pytest.mark.parametrize("value", ["", "   ", "abc", "1.2.3", "NaN", "Infinity", "0x10"])
    def test_rejects_malformed_strings(self, value):
        with pytest.raises(InvalidAmount):
            to_decimal(value)

    @pytest.mark.parametrize("value", [Decimal("NaN"), Decimal("Infinity"), Decimal("-Infinity")])
    def test_rejects_non_finite_decimals(self, value):
        with pytest.raises(InvalidAmount):
            to_decimal(value)


class TestQuantize:
    """Test cases for directional rounding to a fixed digit count."""

    def test_down_truncates(self):
        assert quantize(Decimal("1.23456789"), 7, Rounding.DOWN) == Decimal("1.2345678")

    def test_up_rounds_away_from_zero(self):
        assert quantize(Decimal("1.23456781"), 7, Rounding.UP) == Decimal("1.2345679")

    def test_nearest_rounds_ties_away_from_zero(self):
        assert quantize(Decimal("0.00000005"), 7, Rounding.NEAREST) == Decimal("0.0000001")
        assert quantize(Decimal("0.00000004"), 7, Rounding.NEAREST) == Decimal("0")

    def test_down_rounds_negative_values_toward_zero(self):
        assert quantize(Decimal("-1.55"), 1, Rounding.DOWN) == Decimal("-1.5")

    def test_to_fixed_pads_to_seven_digits(self):
        assert to_fixed(Decimal("1")) == "1.0000000"
        assert to_fixed(Decimal("0")) == "0.0000000"
        assert to_fixed(Decimal("1.23456789"), rounding=Rounding.UP) == "1.2345679"

    def test_percent(self):
        assert percent(Decimal("0.0933891065"), 2, Rounding.DOWN) == Decimal("9.33")


class TestScaledConversion:
    """Test cases for stroop conversion."""

    def test_from_scaled(self):
        assert from_scaled(10000000) == Decimal("1")
        assert from_scaled(1) == Decimal("0.0000001")

    def test_to_scaled_rounds_in_given_direction(self):
        assert to_scaled(Decimal("1.23456789"), Rounding.DOWN) == 12345678
        assert to_scaled(Decimal("1.23456781"), Rounding.UP) == 12345679

    def test_max_amount_is_max_int64_stroops(self):
        assert to_scaled(MAX_AMOUNT, Rounding.DOWN) == 2**63 - 1

    def test_from_scaled_rejects_non_int(self):
        with pytest.raises(InvalidAmount):
            from_scaled("10")


class TestDivision:
    """Test cases for directional division."""

    def test_rounding_direction(self):
        one, three = Decimal(1), Decimal(3)
        assert quantize(div(one, three, Rounding.DOWN), 7, Rounding.DOWN) == Decimal("0.3333333")
        assert quantize(div(one, three, Rounding.UP), 7, Rounding.UP) == Decimal("0.3333334")

    def test_down_never_exceeds_exact(self):
        """q * b <= a when rounding down."""
        a, b = Decimal("2"), Decimal("3")
        assert mul(div(a, b, Rounding.DOWN), b) <= a

    def test_division_by_zero_edge_case(self):
        with pytest.raises(DivisionByZero) as exc_info:
            div(Decimal(1), Decimal(0), Rounding.DOWN)
        assert isinstance(exc_info.value, ZeroDivisionError)
        assert exc_info.value.code == "division_by_zero"


class TestSqrt:
    """Test cases for directional square root."""

    def test_rounding_direction(self):
        assert sqrt(Decimal(2), Rounding.DOWN, 7) == Decimal("1.4142135")
        assert sqrt(Decimal(2), Rounding.UP, 7) == Decimal("1.4142136")
        assert sqrt(Decimal(2), Rounding.NEAREST, 7) == Decimal("1.4142136")

    def test_perfect_squares_are_exact(self):
        assert sqrt(Decimal(40000), Rounding.DOWN) == Decimal(200)
        assert sqrt(Decimal(4), Rounding.UP, 7) == Decimal(2)
        assert sqrt(Decimal("0.25"), Rounding.DOWN, 2) == Decimal("0.5")
        assert sqrt(Decimal(0), Rounding.UP) == Decimal(0)

    def test_down_squared_never_exceeds_input(self):
        root = sqrt(Decimal("12345.6789"), Rounding.DOWN)
        assert mul(root, root) <= Decimal("12345.6789")

    def test_negative_input_edge_case(self):
        with pytest.raises(InvalidAmount):
            sqrt(Decimal(-1), Rounding.DOWN)
