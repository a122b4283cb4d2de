# hwinventory/collectors/inventory_collector.py
"""
Inventory Collector
Connects to a system (locally or over SSH), runs the hardware sub-collectors
and assembles one inventory document per system.
"""

from typing import Any, Dict, List

from .base_collector import BaseCollector, CollectionResult
from .sub_collectors import (
    SubCollector,
    SystemInfoSubCollector,
    CPUSubCollector,
    MemorySubCollector,
    DriveSubCollector,
    NetworkSubCollector
)
from ..connectors import LocalRunner, SSHConnector
from ..errors import InventoryError
from ..utils.byteunit import ByteUnitParseError

SUB_COLLECTORS = {
    'system': SystemInfoSubCollector,
    'cpu': CPUSubCollector,
    'memory': MemorySubCollector,
    'drives': DriveSubCollector,
    'network': NetworkSubCollector,
}


def _serialize(records: Any) -> Any:
    if isinstance(records, list):
        return [record.to_dict() for record in records]
    return records.to_dict()


class InventoryCollector(BaseCollector):
    """
    Runs every enabled sub-collector against one system.

    A failing sub-collector is recorded as an error in its own section and
    does not stop the others.
    """

    def __init__(self, name: str, config: Dict, runner=None):
        super().__init__(name, config)
        self.sections: List[str] = config.get('sections') or list(SUB_COLLECTORS)
        self.runner = runner or self._create_runner()

    def _create_runner(self):
        use_sudo = self.config.get('use_sudo', False)
        if self.host in (None, '', 'localhost', '127.0.0.1'):
            return LocalRunner(timeout=self.timeout, use_sudo=use_sudo)
        return SSHConnector(
            host=self.host,
            port=self.port,
            username=self.username,
            password=self.config.get('password'),
            ssh_key_path=self.config.get('ssh_key_path'),
            timeout=self.timeout,
            use_sudo=use_sudo
        )

    def validate_config(self) -> bool:
        unknown = [section for section in self.sections if section not in SUB_COLLECTORS]
        if unknown:
            self.logger.error(f"Unknown sections: {', '.join(unknown)}")
            return False
        return True

    def collect(self) -> CollectionResult:
        self.log_collection_start()

        if not self.validate_config():
            return CollectionResult(False, error="Invalid configuration", metadata=self.create_metadata())

        if not self.runner.connect():
            result = CollectionResult(
                False,
                error=f"Failed to connect to {self.host}",
                metadata=self.create_metadata()
            )
            self.log_collection_end(result)
            return result

        try:
            sections, failed = self._run_sub_collectors()
        finally:
            self.runner.disconnect()

        result = CollectionResult(
            success=True,
            data=sections,
            metadata=self.create_metadata({
                'sections': list(sections.keys()),
                'failed_sections': failed
            })
        )
        self.log_collection_end(result)
        return result

    def _run_sub_collectors(self):
        sections: Dict[str, Any] = {}
        failed: List[str] = []

        for section in self.sections:
            collector: SubCollector = SUB_COLLECTORS[section](self.runner, self.name)
            try:
                sections[section] = _serialize(collector.collect())
            except (InventoryError, ByteUnitParseError) as e:
                collector.log_error(e)
                sections[section] = {'error': str(e)}
                failed.append(section)

        return sections, failed
