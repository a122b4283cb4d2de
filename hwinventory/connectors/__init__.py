# hwinventory/connectors/__init__.py
"""
Runners that execute diagnostic tools locally or over SSH.
"""

from .command_result import CommandResult
from .local_runner import LocalRunner
from .ssh_connector import SSHConnector

__all__ = [
    'CommandResult',
    'LocalRunner',
    'SSHConnector'
]
