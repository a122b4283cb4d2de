# hwinventory/collectors/sub_collectors/system_info_sub_collector.py
"""
System Info Sub-Collector
Collects vendor, model, version and serial number of the machine and whether it is a laptop.
Requires dmidecode (root) and laptop-detect.
"""

from ...errors import CommandError
from ...models import SystemInfo
from ...parsers.extractor import extract_fields
from .base_sub_collector import SubCollector

# dmidecode field name -> SystemInfo attribute
DMI_SYSTEM_FIELDS = {
    'Manufacturer': 'vendor',
    'Product Name': 'model',
    'Version': 'version',
    'Serial Number': 'serial',
}


class SystemInfoSubCollector(SubCollector):
    """Describes the computer itself (DMI type 1 plus laptop detection)"""

    def get_section_name(self) -> str:
        return "system"

    def collect(self) -> SystemInfo:
        self.log_start()

        result = self.require(self.runner.run('dmidecode', '-t', '1'))
        fields = extract_fields(result.lines())

        system = SystemInfo()
        for dmi_name, attribute in DMI_SYSTEM_FIELDS.items():
            if dmi_name in fields:
                setattr(system, attribute, fields[dmi_name])

        system.is_laptop = self._detect_laptop()

        self.log_end()
        return system

    def _detect_laptop(self) -> bool:
        """laptop-detect exits 0 on laptops and 1 otherwise"""
        result = self.runner.run('laptop-detect')
        if result.exit_code == 0:
            return True
        if result.exit_code == 1:
            return False
        raise CommandError.from_result(result)
