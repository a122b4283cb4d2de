# hwinventory/parsers/extractor.py
"""
Key/value and record extraction for diagnostic tool output.

Tools such as dmidecode, smartctl and /proc/cpuinfo print loosely formatted
"label: value" lines, sometimes grouped into repeated records. This module
turns that text into normalized (key, value) pairs and record blocks without
knowing anything about the records' meaning.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

logger = logging.getLogger('parsers.extractor')

MAX_PAREN_PASSES = 100

PAREN_PATTERN = re.compile(r'\([^()]*\)')
WHITESPACE_PATTERN = re.compile(r'\s+')


class ExtractedLine(NamedTuple):
    """A normalized key/value pair taken from one line of text"""
    key: str
    value: str


EMPTY_LINE = ExtractedLine('', '')


def strip_annotations(text: str) -> str:
    """Remove "(...)" groups and collapse runs of whitespace to single spaces"""
    for _ in range(MAX_PAREN_PASSES):
        text, count = PAREN_PATTERN.subn('', text)
        if count == 0:
            break
    return WHITESPACE_PATTERN.sub(' ', text).strip()


def normalize_line(line: str, separator: str = ':') -> ExtractedLine:
    """
    Split a raw line into a normalized (key, value) pair.

    Parenthetical annotations are removed before splitting on the first
    separator. Lines without the separator yield an empty pair.
    """
    text = strip_annotations(line)
    if separator not in text:
        return EMPTY_LINE
    key, value = text.split(separator, 1)
    return ExtractedLine(key.strip(), value.strip())


def split_lines(text: str) -> List[str]:
    """Split tool output into lines, dropping line terminators"""
    return text.splitlines()


def extract_fields(lines: Iterable[str], separator: str = ':') -> Dict[str, str]:
    """
    Flat pass over all lines, returning the first value seen for each key.

    Lines that are not "key: value" lines are skipped.
    """
    fields: Dict[str, str] = {}
    for line in lines:
        key, value = normalize_line(line, separator)
        if key and key not in fields:
            fields[key] = value
    return fields


class RecordBlock:
    """
    Lines belonging to one logical record.

    Keeps every extracted line in source order and offers a mapping view
    where the first occurrence of a key wins.
    """

    def __init__(self, identifier: Optional[str] = None):
        self.identifier = identifier
        self.lines: List[ExtractedLine] = []

    def append(self, line: ExtractedLine):
        self.lines.append(line)

    def get(self, key: str, default: str = '') -> str:
        for line in self.lines:
            if line.key == key:
                return line.value
        return default

    def get_all(self, key: str) -> List[str]:
        return [line.value for line in self.lines if line.key == key]

    @property
    def fields(self) -> Dict[str, str]:
        fields: Dict[str, str] = {}
        for key, value in self.lines:
            fields.setdefault(key, value)
        return fields

    def __contains__(self, key: str) -> bool:
        return any(line.key == key for line in self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __repr__(self) -> str:
        return f"RecordBlock(identifier={self.identifier!r}, lines={len(self.lines)})"


class RecordMarker(ABC):
    """Recognizes the line that starts a new record"""

    @abstractmethod
    def match(self, raw_line: str, line: ExtractedLine,
              current_id: Optional[str]) -> Tuple[bool, Optional[str]]:
        """
        Check whether a line opens a new record.

        Args:
            raw_line: Line as read from the tool output
            line: Normalized key/value pair for the line
            current_id: Identifier of the currently open record, if any

        Returns:
            (starts_record, identifier of the record the line belongs to)
        """
        pass


class SentinelMarker(RecordMarker):
    """Every line equal to a fixed text (e.g. "Memory Device") opens a record"""

    def __init__(self, sentinel: str):
        self.sentinel = sentinel

    def match(self, raw_line, line, current_id):
        if raw_line.strip() == self.sentinel:
            return True, self.sentinel
        return False, current_id


class FieldMarker(RecordMarker):
    """A field (e.g. "processor") opens a record whenever its value changes"""

    def __init__(self, field_name: str):
        self.field_name = field_name

    def match(self, raw_line, line, current_id):
        if line.key == self.field_name and line.value != current_id:
            return True, line.value
        return False, current_id


def merge_records(blocks: Iterable[RecordBlock], merge_key: str) -> List[RecordBlock]:
    """
    Collapse consecutive blocks that share the same merge_key value.

    Only the first block of each run is kept, so one record per physical
    entity remains (e.g. one per "physical id" out of many logical cores).
    """
    merged: List[RecordBlock] = []
    last_key = None
    for block in blocks:
        key = block.get(merge_key)
        if not merged or key != last_key:
            merged.append(block)
            last_key = key
    return merged


def split_records(lines: Iterable[str], marker: RecordMarker,
                  merge_key: Optional[str] = None, separator: str = ':') -> List[RecordBlock]:
    """
    Rebuild repeated records from a flat sequence of lines.

    Args:
        lines: Raw lines in source order
        marker: Recognizes record boundaries
        merge_key: If given, consecutive records sharing this field's value
            are collapsed into the first one
        separator: Key/value separator

    Returns:
        Record blocks in the order their markers appear
    """
    blocks: List[RecordBlock] = []
    current: Optional[RecordBlock] = None
    current_id: Optional[str] = None

    for raw_line in lines:
        line = normalize_line(raw_line, separator)
        starts_record, current_id = marker.match(raw_line, line, current_id)
        if starts_record:
            if current is not None:
                blocks.append(current)
            current = RecordBlock(current_id)
        if current is not None and line != EMPTY_LINE:
            current.append(line)

    if current is not None:
        blocks.append(current)

    logger.debug(f"Split {len(blocks)} records")

    if merge_key:
        blocks = merge_records(blocks, merge_key)
        logger.debug(f"{len(blocks)} records after merging on '{merge_key}'")

    return blocks
