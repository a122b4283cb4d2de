# hwinventory/collectors/sub_collectors/__init__.py
"""
Sub-collectors for the hardware inventory.
Each sub-collector is responsible for one kind of hardware record.
"""

from .base_sub_collector import SubCollector
from .system_info_sub_collector import SystemInfoSubCollector
from .cpu_sub_collector import CPUSubCollector
from .memory_sub_collector import MemorySubCollector
from .drive_sub_collector import DriveSubCollector
from .network_sub_collector import NetworkSubCollector

__all__ = [
    'SubCollector',
    'SystemInfoSubCollector',
    'CPUSubCollector',
    'MemorySubCollector',
    'DriveSubCollector',
    'NetworkSubCollector'
]
