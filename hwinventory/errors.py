# hwinventory/errors.py
"""
Exceptions raised while collecting hardware inventory.
"""

from typing import Optional


class InventoryError(Exception):
    """Base class for inventory collection failures"""
    pass


class CommandError(InventoryError):
    """A diagnostic tool failed or a file could not be read"""

    def __init__(self, command: str, exit_code: int, error: str = "",
                 stdout: str = "", stderr: Optional[str] = None):
        self.command = command
        self.exit_code = exit_code
        self.error = error
        self.stdout = stdout
        self.stderr = stderr if stderr is not None else error
        message = f"'{command}' failed ({exit_code})"
        if error.strip():
            message += f": {error.strip().splitlines()[0]}"
        super().__init__(message)

    @classmethod
    def from_result(cls, result) -> 'CommandError':
        return cls(result.command, result.exit_code, result.error, result.output)


class FieldParseError(InventoryError, ValueError):
    """A field was present in tool output but its value could not be interpreted"""

    def __init__(self, field_name: str, value: str, line: str = ""):
        self.field_name = field_name
        self.value = value
        self.line = line
        message = f"Invalid value for '{field_name}': {value!r}"
        if line:
            message += f" (line: {line!r})"
        super().__init__(message)
