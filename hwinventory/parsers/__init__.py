# hwinventory/parsers/__init__.py
"""
Text extraction for diagnostic tool output.

Usage:
    from hwinventory.parsers import SentinelMarker, split_records

    for block in split_records(lines, SentinelMarker('Memory Device')):
        size = block.get('Size')
"""

from .extractor import (
    ExtractedLine,
    FieldMarker,
    RecordBlock,
    RecordMarker,
    SentinelMarker,
    extract_fields,
    merge_records,
    normalize_line,
    split_lines,
    split_records
)

__all__ = [
    'ExtractedLine',
    'FieldMarker',
    'RecordBlock',
    'RecordMarker',
    'SentinelMarker',
    'extract_fields',
    'merge_records',
    'normalize_line',
    'split_lines',
    'split_records'
]
