# hwinventory/collectors/sub_collectors/base_sub_collector.py
"""
Base class for all hardware sub-collectors.
Each sub-collector gathers one kind of hardware record (CPU, memory, drives...).
"""

from abc import ABC, abstractmethod
from typing import Any
import logging

from ...connectors.command_result import CommandResult
from ...errors import CommandError


class SubCollector(ABC):
    """
    Abstract base class for all sub-collectors.

    Sub-collectors:
    - Receive an already-connected runner (LocalRunner or SSHConnector)
    - Return typed records, raising exceptions on failure
    - Are orchestrated by InventoryCollector
    """

    def __init__(self, runner, system_name: str):
        """
        Initialize sub-collector

        Args:
            runner: Connected runner providing run() and read_file()
            system_name: Name of the system being collected from
        """
        self.runner = runner
        self.system_name = system_name
        self.logger = logging.getLogger(f"subcollector.{self.__class__.__name__}")

    @abstractmethod
    def collect(self) -> Any:
        """
        Collect this sub-collector's records.

        Raises:
            InventoryError: If a tool fails or its output cannot be interpreted
        """
        pass

    @abstractmethod
    def get_section_name(self) -> str:
        """Name of the section this sub-collector fills in the inventory document"""
        pass

    def require(self, result: CommandResult) -> CommandResult:
        """Return the result if the command succeeded, raise CommandError otherwise"""
        if not result.success:
            raise CommandError.from_result(result)
        return result

    def log_start(self):
        self.logger.info(f"Starting {self.get_section_name()} collection for {self.system_name}")

    def log_end(self, item_count: int = None):
        if item_count is not None:
            self.logger.info(f"Completed {self.get_section_name()} collection: {item_count} items")
        else:
            self.logger.info(f"Completed {self.get_section_name()} collection")

    def log_error(self, error: Exception):
        self.logger.error(f"Failed to collect {self.get_section_name()}: {error}")
