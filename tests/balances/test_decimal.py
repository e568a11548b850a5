"""Tests for plancks to decimal conversion"""

import pytest
from vestview.balances.decimal import format_human, group_digits, to_decimal


class TestGroupDigits:
    """Test digit grouping"""

    def test_small_values_are_not_grouped(self):
        assert group_digits(0) == "0"
        assert group_digits(999) == "999"

    def test_thousands_grouping(self):
        assert group_digits(1500) == "1,500"
        assert group_digits("1234567") == "1,234,567"

    def test_custom_separator(self):
        assert group_digits(1234567, separator=" ") == "1 234 567"


class TestToDecimal:
    """Test to_decimal conversion"""

    def test_zero_renders_as_zero(self):
        """Zero is the literal "0" whatever the decimals"""
        assert to_decimal(0, 8) == "0"
        assert to_decimal("0", 3) == "0"
        assert to_decimal(0, 0) == "0"

    def test_whole_units(self):
        """Fractional digits are kept, no trailing-zero trimming"""
        assert to_decimal(1500, 3) == "1.500"
        assert to_decimal(100_000_000, 8) == "1.00000000"

    def test_integer_part_is_grouped(self):
        assert to_decimal(1_234_567_890_000, 8) == "12,345.67890000"

    def test_exactly_decimals_digits(self):
        """A value with exactly `decimals` digits has integer part zero"""
        assert to_decimal(123, 3) == "0.123"

    def test_sub_unit_values_are_zero_padded(self):
        """Values below one unit use the 10**decimals divisor"""
        assert to_decimal(5, 3) == "0.005"
        assert to_decimal(1, 8) == "0.00000001"
        assert to_decimal(42, 12) == "0.000000000042"

    def test_zero_decimals(self):
        assert to_decimal(1234, 0) == "1,234"

    def test_no_precision_loss_for_large_values(self):
        """Values far beyond float precision keep every digit"""
        raw = 123_456_789_012_345_678_901_234_567_890
        assert to_decimal(raw, 12) == "123,456,789,012,345,678.901234567890"

    def test_string_input(self):
        assert to_decimal("2500000000", 8) == "25.00000000"

    def test_custom_separators(self):
        assert to_decimal(1_234_500, 3, group_separator=".", decimal_point=",") == "1.234,500"

    @pytest.mark.parametrize("raw,decimals", [
        (1, 3), (999, 3), (1000, 3), (123_456_789, 4), (10**30 + 7, 12), (5, 0),
    ])
    def test_decimal_point_position(self, raw, decimals):
        """Removing separators gives the zero-padded digits back"""
        result = to_decimal(raw, decimals)
        digits = result.replace(",", "").replace(".", "")
        assert digits == str(raw).rjust(decimals + 1, "0")
        if decimals:
            assert len(result.split(".")[1]) == decimals

    def test_negative_amount_rejected(self):
        with pytest.raises(ValueError):
            to_decimal(-1, 3)

    def test_negative_decimals_rejected(self):
        with pytest.raises(ValueError):
            to_decimal(1, -1)


class TestFormatHuman:
    """Test human unit formatting"""

    def test_appends_unit(self):
        assert format_human(1000, 3, "UNIT") == "1.000 UNIT"

    def test_zero_with_unit(self):
        assert format_human(0, 8, "UNIT") == "0 UNIT"

    def test_empty_unit(self):
        assert format_human(1000, 3, "") == "1.000"
