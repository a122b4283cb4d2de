# hwinventory/models.py
"""
Typed hardware records filled in by the sub-collectors.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List

from .utils.byteunit import Size


def _plain(value: Any) -> Any:
    """Convert record values into JSON/YAML friendly types"""
    if isinstance(value, Size):
        return {'bytes': int(value), 'display': str(value)}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    return value


class RecordMixin:
    """Serialization shared by all hardware records"""

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}


@dataclass
class SystemInfo(RecordMixin):
    """Describes the computer itself (dmidecode type 1)"""
    vendor: str = ""
    model: str = ""
    version: str = ""
    serial: str = ""
    is_laptop: bool = False

    def model_version(self) -> str:
        """Model name followed by the version when one is defined"""
        fullname = self.model
        if self.version and self.version != "Not Specified":
            fullname += " - " + self.version
        return fullname


@dataclass
class CPUInfo(RecordMixin):
    """One installed physical CPU"""
    id: int = 0
    model: str = ""
    freq_ghz: float = 0.0
    physical_id: int = 0
    physical_cores: int = 0
    logical_cores: int = 0


@dataclass
class RAMModule(RecordMixin):
    size: Size = field(default_factory=Size)
    slot: str = ""
    memory_type: str = ""  # DDR, DDR2, DDR3...
    form_factor: str = ""  # DIMM, SODIMM...
    freq_mhz: int = 0


@dataclass
class RAMInfo(RecordMixin):
    """Installed memory and the board's maximum capacity"""
    max_size: Size = field(default_factory=Size)
    modules: List[RAMModule] = field(default_factory=list)

    def installed_size(self) -> Size:
        """Total amount of installed RAM"""
        return sum((module.size for module in self.modules), Size(0))

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['installed_size'] = _plain(self.installed_size())
        return data


@dataclass
class DriveInfo(RecordMixin):
    """One installed hard drive or SSD"""
    device: str = ""
    model: str = ""
    serial: str = ""
    size: Size = field(default_factory=Size)
    smart_enabled: bool = False
    smart_passed: bool = False
    drive_type: str = ""  # SSD or HDD
    no_partitions: bool = False


@dataclass
class InterfaceInfo(RecordMixin):
    """A network interface as reported by NetworkManager"""
    device: str = ""
    type: str = ""
    state: str = ""

    def is_wireless(self) -> bool:
        return "wireless" in self.type or "wifi" in self.type

    def is_ethernet(self) -> bool:
        return "ethernet" in self.type
