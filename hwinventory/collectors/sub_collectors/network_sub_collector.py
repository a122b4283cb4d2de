# hwinventory/collectors/sub_collectors/network_sub_collector.py
"""
Network Sub-Collector
Collects network interfaces known to NetworkManager and answers wifi specific questions.
"""

from typing import List

from ...errors import FieldParseError
from ...models import InterfaceInfo
from .base_sub_collector import SubCollector


class NetworkSubCollector(SubCollector):
    """Collects network interfaces via nmcli"""

    def get_section_name(self) -> str:
        return "network"

    def collect(self) -> List[InterfaceInfo]:
        self.log_start()
        interfaces = self.list_interfaces()
        self.log_end(len(interfaces))
        return interfaces

    def list_interfaces(self) -> List[InterfaceInfo]:
        result = self.require(self.runner.run('nmcli', '-t', '-f', 'DEVICE,TYPE,STATE', 'dev'))

        interfaces = []
        for line in result.lines():
            parts = line.split(':')
            if len(parts) != 3:
                raise FieldParseError('nmcli device', line)
            interfaces.append(InterfaceInfo(device=parts[0], type=parts[1], state=parts[2]))
        return interfaces

    def can_scan(self, interface: InterfaceInfo) -> bool:
        """
        True if a wireless interface can scan and finds at least one access point.
        Always False for non-wireless interfaces.
        """
        if not interface.is_wireless():
            return False

        result = self.require(self.runner.run('iwlist', interface.device, 'scan'))
        return any(line.strip().startswith('Cell') for line in result.lines())

    def refresh_state(self, interface: InterfaceInfo) -> InterfaceInfo:
        """Update the state (connected, disconnected, unavailable...) of an interface"""
        for current in self.list_interfaces():
            if current.device == interface.device:
                interface.state = current.state
        return interface

    def is_hard_blocked(self) -> bool:
        """
        True if wifi is switched off by a hardware switch.
        A software block ("rfkill unblock") is not reported here.
        """
        result = self.require(self.runner.run('rfkill', 'list', 'wifi'))
        return any('hard blocked: yes' in line.lower() for line in result.lines())
