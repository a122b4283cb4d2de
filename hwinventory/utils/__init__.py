# hwinventory/utils/__init__.py
"""
Utility modules for hardware inventory collection
"""

from .byteunit import ByteUnitParseError, Size, Unit, format_size, format_size_at, parse_size

__all__ = [
    'ByteUnitParseError',
    'Size',
    'Unit',
    'format_size',
    'format_size_at',
    'parse_size'
]
