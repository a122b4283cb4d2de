# hwinventory/collectors/sub_collectors/drive_sub_collector.py
"""
Drive Sub-Collector
Collects installed disks from lsscsi, smartctl, sysfs and lsblk.
"""

import posixpath
import re
from typing import List

from ...errors import CommandError, FieldParseError
from ...models import DriveInfo
from ...parsers.extractor import normalize_line
from ...utils.byteunit import parse_size
from .base_sub_collector import SubCollector

# smartctl exit status bits
SMART_BIT_PARSE_ERROR = 0x01
SMART_BIT_OPEN_FAILED = 0x02
SMART_BIT_DISK_FAILING = 0x08

CAPACITY_PATTERN = re.compile(r'\[([^\]]+)\]')


class DriveSubCollector(SubCollector):
    """Collects internal SCSI/SATA disks (USB disks are skipped)"""

    def get_section_name(self) -> str:
        return "drives"

    def collect(self) -> List[DriveInfo]:
        self.log_start()

        result = self.require(self.runner.run('lsscsi', '-t'))

        drives = []
        for line in result.lines():
            if 'disk' not in line or 'usb:' in line:
                continue
            if '/dev' not in line:
                continue
            device = line[line.index('/dev'):].strip()
            drives.append(self._collect_drive(device))

        self.log_end(len(drives))
        return drives

    def _collect_drive(self, device: str) -> DriveInfo:
        drive = DriveInfo(device=device)
        self._read_smart_info(drive)
        drive.drive_type = self._read_drive_type(device)
        drive.no_partitions = self._has_no_partitions(device)
        return drive

    def _read_smart_info(self, drive: DriveInfo):
        result = self.runner.run('smartctl', '-i', drive.device)
        if result.exit_code & (SMART_BIT_PARSE_ERROR | SMART_BIT_OPEN_FAILED) or result.exit_code < 0:
            raise CommandError.from_result(result)

        for line in result.lines():
            key, value = normalize_line(line)
            if key == 'User Capacity':
                match = CAPACITY_PATTERN.search(line)
                if not match:
                    raise FieldParseError(key, value, line)
                drive.size = parse_size(match.group(1))
            elif key == 'Device Model':
                drive.model = value
            elif key == 'Serial Number':
                drive.serial = value
            elif key == 'SMART support is':
                if value == 'Enabled':
                    drive.smart_enabled = True
                    drive.smart_passed = self._smart_health_passed(drive.device)
                elif 'Unavailable' in value:
                    drive.smart_enabled = False

    def _smart_health_passed(self, device: str) -> bool:
        """Only an actually failing disk (bit 3) counts as not passed"""
        result = self.runner.run('smartctl', '-H', device)
        if result.exit_code & SMART_BIT_PARSE_ERROR or result.exit_code < 0:
            raise CommandError.from_result(result)
        return not result.exit_code & SMART_BIT_DISK_FAILING

    def _read_drive_type(self, device: str) -> str:
        path = posixpath.join('/sys/block', posixpath.basename(device), 'queue/rotational')
        result = self.require(self.runner.read_file(path))
        lines = result.lines()
        if lines == ['0']:
            return 'SSD'
        if lines == ['1']:
            return 'HDD'
        raise FieldParseError('rotational', result.output)

    def _has_no_partitions(self, device: str) -> bool:
        """lsblk lists the disk itself plus one line per partition"""
        result = self.require(self.runner.run('lsblk', '-lnr', device))
        count = len(result.lines())
        if count == 0:
            raise FieldParseError('lsblk', result.output)
        return count == 1
