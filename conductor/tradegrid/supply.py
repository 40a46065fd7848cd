# Trade Grid - Supply Level Parsing
# SPDX-License-Identifier: Apache-2.0

"""
Parser for market supply/demand readings.

Expected format is one of:

    ?                 unknown  -> (-1, -1)
    - or 0            zero     -> (0, 0)
    <units><level>
        units := [0-9]+          (fits in an unsigned 32-bit integer)
        level := [Ll] -> 1, [Mm] -> 2, [Hh] -> 3, '?' -> -1

Lengths are counted in characters, not encoded bytes.
"""

from enum import Enum, IntEnum
from typing import Union

# Largest quantity a reading may carry (unsigned 32-bit)
MAX_QUANTITY = 0xFFFFFFFF

_DIGITS = frozenset("0123456789")


class SupplyLevel(IntEnum):
    """Level codes returned by parse_supply_level"""
    UNKNOWN = -1
    ZERO = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class SupplyError(str, Enum):
    """Reasons a supply reading can be rejected"""
    EMPTY = "empty supply reading"
    MALFORMED = "malformed supply reading"
    INVALID_NUMBER = "invalid number in supply reading"
    MISSING_LEVEL = "missing level-suffix in supply reading"
    INVALID_UNIT = "invalid unit in supply reading"
    INVALID_READING = "invalid supply reading"


class SupplyReadingError(ValueError):
    """Raised when a supply reading cannot be parsed"""

    def __init__(self, reason: SupplyError, reading: str):
        super().__init__(reason.value)
        self.reason = reason
        self.reading = reading


_LEVEL_SUFFIXES = {
    "l": SupplyLevel.LOW,
    "m": SupplyLevel.MEDIUM,
    "h": SupplyLevel.HIGH,
    "?": SupplyLevel.UNKNOWN,
}

_SINGLE_CHAR_READINGS = {
    "?": (-1, -1),
    "-": (0, 0),
    "0": (0, 0),
}


def parse_supply_level(reading: str) -> tuple[int, int]:
    """
    Parse a supply reading into a (units, level) pair.

    Examples:
        parse_supply_level("?")        -> (-1, -1)
        parse_supply_level("10l")      -> (10, 1)
        parse_supply_level("1000H")    -> (1000, 3)

    Raises:
        SupplyReadingError: reading is not in the expected format
    """
    if len(reading) > 1:
        if reading[0] not in _DIGITS:
            raise SupplyReadingError(SupplyError.MALFORMED, reading)

        digits, unit_char = reading[:-1], reading[-1]
        if not _DIGITS.issuperset(digits):
            raise SupplyReadingError(SupplyError.INVALID_NUMBER, reading)
        # int() refuses very long digit strings; more than 10 significant digits overflows
        significant = digits.lstrip("0") or "0"
        if len(significant) > 10 or int(significant) > MAX_QUANTITY:
            raise SupplyReadingError(SupplyError.INVALID_NUMBER, reading)

        unit = unit_char.lower()
        if unit in _DIGITS:
            raise SupplyReadingError(SupplyError.MISSING_LEVEL, reading)
        if unit not in _LEVEL_SUFFIXES:
            raise SupplyReadingError(SupplyError.INVALID_UNIT, reading)

        return int(significant), int(_LEVEL_SUFFIXES[unit])

    if reading in _SINGLE_CHAR_READINGS:
        return _SINGLE_CHAR_READINGS[reading]
    if not reading:
        raise SupplyReadingError(SupplyError.EMPTY, reading)
    raise SupplyReadingError(SupplyError.INVALID_READING, reading)


def try_parse_supply_level(reading: str) -> Union[tuple[int, int], str]:
    """
    Parse a supply reading, returning the failure reason instead of raising.
    """
    try:
        return parse_supply_level(reading)
    except SupplyReadingError as e:
        return str(e)
