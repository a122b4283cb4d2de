# hwinventory/utils/byteunit.py
"""
Byte quantity parsing and formatting.

Converts between an exact integer byte count and human readable strings such
as "512 MB" or "2 TB". Every unit is exactly 1024 times the previous one.
"""

import re
from decimal import Decimal, InvalidOperation
from enum import IntEnum
from typing import Union


class Unit(IntEnum):
    """Display units, valued by their power of 1024"""
    BYTE = 0
    KB = 1
    MB = 2
    GB = 3
    TB = 4


UNIT_NAMES = ['byte', 'kB', 'MB', 'GB', 'TB']

# Byte synonyms match exactly
BYTE_TOKENS = {'byte', 'bytes', 'byte(s)'}

# Lower-cased unit token -> power of 1024
UNIT_TOKENS = {
    'kb': Unit.KB,
    'mb': Unit.MB,
    'gb': Unit.GB,
    'tb': Unit.TB,
}

MAX_BYTES = (1 << 63) - 1

SIZE_PATTERN = re.compile(r'^\s*([0-9]+(?:\.[0-9]+)?|\.[0-9]+)\s*([A-Za-z()]+)\s*$')


class ByteUnitParseError(ValueError):
    """Raised when a size string cannot be converted to a byte count"""

    def __init__(self, message: str, text: str):
        super().__init__(f"{message}: {text!r}")
        self.text = text


class Size(int):
    """
    Exact non-negative number of bytes.

    Behaves like an int (arithmetic, comparisons, JSON serialization) but
    prints in the most compact exact unit.
    """

    def __new__(cls, value: int = 0):
        value = int(value)
        if value < 0 or value > MAX_BYTES:
            raise ValueError(f"Byte count out of range: {value}")
        return super().__new__(cls, value)

    def __add__(self, other):
        if isinstance(other, int):
            return Size(int(self) + int(other))
        return NotImplemented

    __radd__ = __add__

    def __str__(self) -> str:
        return format_size(self)

    def __repr__(self) -> str:
        return f"Size({int(self)})"

    def format(self, unit: Unit) -> str:
        """Format using a fixed unit instead of the most compact one"""
        return format_size_at(self, unit)

    @classmethod
    def parse(cls, text: str) -> 'Size':
        return parse_size(text)


def _byte_label(count: Union[int, float]) -> str:
    return 'byte' if count == 1 else 'bytes'


def format_size(quantity: int) -> str:
    """
    Format a byte count using the largest unit that divides it exactly.

    Zero is rendered as "0" and counts no unit divides are rendered in bytes.
    """
    quantity = int(quantity)
    if quantity == 0:
        return "0"

    for unit in reversed(Unit):
        if unit == Unit.BYTE:
            break
        factor = 1 << (10 * unit)
        if quantity % factor == 0:
            return f"{quantity // factor} {UNIT_NAMES[unit]}"

    return f"{quantity} {_byte_label(quantity)}"


def format_size_at(quantity: int, unit: Unit) -> str:
    """Format a byte count in the given unit with up to 4 significant digits"""
    unit = Unit(unit)
    value = int(quantity) / (1 << (10 * unit))
    name = _byte_label(value) if unit == Unit.BYTE else UNIT_NAMES[unit]
    return f"{value:.4g} {name}"


def parse_size(text: str) -> Size:
    """
    Parse a size string like "4096 MB", "1.5tb" or "1 byte(s)".

    Raises:
        ByteUnitParseError: if the string is not a number followed by a known unit
    """
    stripped = text.strip()
    if stripped == "0":
        return Size(0)

    match = SIZE_PATTERN.match(stripped)
    if not match:
        raise ByteUnitParseError("Unable to parse size", text)

    number, token = match.groups()
    unit = Unit.BYTE if token in BYTE_TOKENS else UNIT_TOKENS.get(token.lower())
    if unit is None:
        raise ByteUnitParseError("Invalid byte unit", text)

    try:
        value = Decimal(number)
    except InvalidOperation:
        raise AssertionError(f"unreachable: size pattern accepted non-numeric token {number!r}") from None

    count = int(value * (1 << (10 * unit)))
    if count > MAX_BYTES:
        raise ByteUnitParseError("Size out of range", text)
    return Size(count)
