# hwinventory/connectors/command_result.py
"""
Result of running a diagnostic tool or reading a file, shared by all runners.
"""

import shlex
from dataclasses import dataclass
from typing import List, Sequence

from ..parsers.extractor import split_lines


@dataclass
class CommandResult:
    """Result of command execution"""
    success: bool
    output: str = ""
    error: str = ""
    exit_code: int = 0
    execution_time: float = 0.0
    command: str = ""

    def lines(self) -> List[str]:
        """Output split into lines"""
        return split_lines(self.output)


def format_command(argv: Sequence[str]) -> str:
    """Shell-quoted command line for logging and remote execution"""
    return shlex.join(argv)
