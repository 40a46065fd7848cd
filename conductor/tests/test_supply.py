# Trade Grid - Supply Reading Tests
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for supply level reading parsing.
"""

import pytest

from tradegrid.supply import (
    SupplyError,
    SupplyLevel,
    SupplyReadingError,
    parse_supply_level,
    try_parse_supply_level,
)


class TestSpecialReadings:
    """Test single-character readings"""

    def test_unknown(self):
        """'?' means unknown, represented by two -1s"""
        assert parse_supply_level("?") == (-1, -1)

    def test_zero(self):
        """'-' and '0' both mean zero"""
        assert parse_supply_level("-") == (0, 0)
        assert parse_supply_level("0") == (0, 0)


class TestValues:
    """Test <units><level> readings"""

    def test_zero_units_unknown_level(self):
        assert parse_supply_level("0?") == (0, -1)

    def test_low(self):
        assert parse_supply_level("10l") == (10, 1)
        assert parse_supply_level("1000L") == (1000, 1)

    def test_all_levels(self):
        """Each suffix maps to its level"""
        assert parse_supply_level("424242?") == (424242, -1)
        assert parse_supply_level("424242l") == (424242, 1)
        assert parse_supply_level("424242m") == (424242, 2)
        assert parse_supply_level("424242h") == (424242, 3)

    def test_case_insensitive(self):
        """Upper-case suffixes are accepted"""
        assert parse_supply_level("2134567891L") == (2134567891, 1)
        assert parse_supply_level("2134567891M") == (2134567891, 2)
        assert parse_supply_level("2134567891H") == (2134567891, 3)

    def test_leading_zeros(self):
        assert parse_supply_level("007m") == (7, 2)
        assert parse_supply_level("0" * 5000 + "12l") == (12, 1)

    def test_largest_quantity(self):
        """Quantities up to the unsigned 32-bit maximum are accepted"""
        assert parse_supply_level("4294967295h") == (4294967295, 3)

    def test_levels_match_enum(self):
        """Returned levels are SupplyLevel codes"""
        _, level = parse_supply_level("5m")

        assert level == SupplyLevel.MEDIUM
        assert SupplyLevel(parse_supply_level("?")[1]) is SupplyLevel.UNKNOWN


class TestInvalidReadings:
    """Test rejected readings and their reasons"""

    @pytest.mark.parametrize("reading", [
        "0:?",
        "0123123.m",
        "9999999999999999999m",
        "4294967296l",
        "1" * 5000 + "m",
        "1 m",
        "1_000m",
        "1١m",   # non-ASCII digit
    ])
    def test_invalid_number(self, reading):
        """The digit run must be ASCII digits that fit in 32 bits"""
        with pytest.raises(SupplyReadingError) as exc_info:
            parse_supply_level(reading)

        assert exc_info.value.reason is SupplyError.INVALID_NUMBER
        assert str(exc_info.value) == "invalid number in supply reading"

    def test_missing_level_suffix(self):
        """A trailing digit means the level was left off"""
        with pytest.raises(SupplyReadingError, match="missing level-suffix in supply reading"):
            parse_supply_level("00")
        with pytest.raises(SupplyReadingError, match="missing level-suffix"):
            parse_supply_level("12345")

    @pytest.mark.parametrize("reading", ["?m", "-5l", "m10", " 1m", "١2m"])
    def test_malformed(self, reading):
        """Multi-character readings must start with an ASCII digit"""
        with pytest.raises(SupplyReadingError) as exc_info:
            parse_supply_level(reading)

        assert exc_info.value.reason is SupplyError.MALFORMED
        assert str(exc_info.value) == "malformed supply reading"

    @pytest.mark.parametrize("reading", ["10x", "10-", "5 ", "1é"])
    def test_invalid_unit(self, reading):
        """Unknown suffixes are rejected"""
        with pytest.raises(SupplyReadingError) as exc_info:
            parse_supply_level(reading)

        assert exc_info.value.reason is SupplyError.INVALID_UNIT
        assert str(exc_info.value) == "invalid unit in supply reading"

    @pytest.mark.parametrize("reading", ["!", "a", "1", "L", " ", "é"])
    def test_invalid_single_char(self, reading):
        """Single characters other than '?', '-' and '0' are rejected"""
        with pytest.raises(SupplyReadingError) as exc_info:
            parse_supply_level(reading)

        assert exc_info.value.reason is SupplyError.INVALID_READING
        assert str(exc_info.value) == "invalid supply reading"

    def test_empty(self):
        with pytest.raises(SupplyReadingError) as exc_info:
            parse_supply_level("")

        assert exc_info.value.reason is SupplyError.EMPTY
        assert str(exc_info.value) == "empty supply reading"

    def test_number_checked_before_unit(self):
        """A bad digit run is reported even when the suffix is also bad"""
        with pytest.raises(SupplyReadingError, match="invalid number"):
            parse_supply_level("1.5x")

    def test_error_carries_reading(self):
        with pytest.raises(SupplyReadingError) as exc_info:
            parse_supply_level("10x")

        assert exc_info.value.reading == "10x"

    def test_is_value_error(self):
        """Callers can catch the standard ValueError"""
        with pytest.raises(ValueError):
            parse_supply_level("?m")


class TestTryParse:
    """Test the non-raising variant"""

    def test_success(self):
        assert try_parse_supply_level("424242m") == (424242, 2)
        assert try_parse_supply_level("?") == (-1, -1)

    def test_failure_reason(self):
        assert try_parse_supply_level("") == "empty supply reading"
        assert try_parse_supply_level("00") == "missing level-suffix in supply reading"
        assert try_parse_supply_level("?m") == "malformed supply reading"
