# tests/conftest.py
"""
Shared fixtures: a fake runner replaying captured tool output.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from hwinventory.connectors.command_result import CommandResult


class FakeRunner:
    """
    Stands in for LocalRunner/SSHConnector.

    commands maps an argv tuple to either stdout text (exit code 0) or an
    (exit_code, stdout) pair. Unknown commands behave like a missing executable.
    """

    def __init__(self, commands=None, files=None, connect_ok=True):
        self.commands = commands or {}
        self.files = files or {}
        self.connect_ok = connect_ok
        self.connected = False
        self.calls = []

    def connect(self):
        self.connected = self.connect_ok
        return self.connect_ok

    def disconnect(self):
        self.connected = False

    def run(self, name, *args, timeout=None):
        argv = (name,) + args
        command = ' '.join(argv)
        self.calls.append(argv)

        if argv not in self.commands:
            return CommandResult(False, error=f"{name}: command not found", exit_code=127, command=command)

        response = self.commands[argv]
        if isinstance(response, str):
            exit_code, output = 0, response
        else:
            exit_code, output = response
        return CommandResult(exit_code == 0, output=output, exit_code=exit_code, command=command)

    def read_file(self, file_path):
        command = f"read {file_path}"
        if file_path not in self.files:
            return CommandResult(False, error=f"{file_path}: No such file or directory", exit_code=1,
                                 command=command)
        return CommandResult(True, output=self.files[file_path], command=command)


def cpuinfo_block(processor, physical_id, model='Intel(R) Xeon(R) CPU E5-2620 v3 @ 2.40GHz',
                  mhz='2400.000', cores=2, siblings=4):
    return (
        f"processor\t: {processor}\n"
        f"vendor_id\t: GenuineIntel\n"
        f"model name\t: {model}\n"
        f"cpu MHz\t\t: {mhz}\n"
        f"cache size\t: 15360 KB\n"
        f"physical id\t: {physical_id}\n"
        f"siblings\t: {siblings}\n"
        f"core id\t\t: {processor % cores}\n"
        f"cpu cores\t: {cores}\n"
        f"flags\t\t: fpu vme de pse tsc msr pae mce\n"
        f"\n"
    )


DMIDECODE_SYSTEM = """# dmidecode 3.3
Getting SMBIOS data from sysfs.
SMBIOS 2.7 present.

Handle 0x000F, DMI type 1, 27 bytes
System Information
\tManufacturer: LENOVO
\tProduct Name: 20BV001KUS
\tVersion: ThinkPad T450
\tSerial Number: PC0ABCDE
\tUUID: 3c8f2a01-5b1e-11cb-8b2e-d9c5a0b1c2d3
\tWake-up Type: Power Switch
\tSKU Number: LENOVO_MT_20BV_BU_Think_FM_ThinkPad T450
\tFamily: ThinkPad T450

"""

DMIDECODE_MEMORY = """# dmidecode 3.3
Getting SMBIOS data from sysfs.
SMBIOS 2.7 present.

Handle 0x0007, DMI type 16, 23 bytes
Physical Memory Array
\tLocation: System Board Or Motherboard
\tUse: System Memory
\tError Correction Type: None
\tMaximum Capacity: 32 GB
\tError Information Handle: Not Provided
\tNumber Of Devices: 4

Handle 0x0008, DMI type 17, 34 bytes
Memory Device
\tArray Handle: 0x0007
\tError Information Handle: Not Provided
\tTotal Width: 64 bits
\tData Width: 64 bits
\tSize: 8192 MB
\tForm Factor: DIMM
\tSet: None
\tLocator: ChannelA-DIMM0
\tBank Locator: BANK 0
\tType: DDR3
\tType Detail: Synchronous
\tSpeed: 1600 MT/s (0.6 ns)
\tManufacturer: Kingston

Handle 0x0009, DMI type 17, 34 bytes
Memory Device
\tArray Handle: 0x0007
\tSize: No Module Installed
\tForm Factor: DIMM
\tLocator: ChannelA-DIMM1
\tBank Locator: BANK 1
\tType: Unknown
\tSpeed: Unknown

Handle 0x000A, DMI type 17, 34 bytes
Memory Device
\tArray Handle: 0x0007
\tSize: 4096 MB
\tForm Factor: SODIMM
\tLocator: ChannelB-DIMM0
\tBank Locator: BANK 2
\tType: DDR3
\tSpeed: 1333 MHz

Handle 0x000B, DMI type 17, 34 bytes
Memory Device
\tArray Handle: 0x0007
\tSize: 2 MB
\tForm Factor: Chip
\tLocator: SYSTEM ROM
\tType: Flash
\tSpeed: Unknown

"""

LSSCSI = """[0:0:0:0]    disk    sata:5002538e40a1b2c3           /dev/sda
[1:0:0:0]    disk    sata:50014ee2b5c6d7e8           /dev/sdb
[2:0:0:0]    cd/dvd  sata:                           /dev/sr0
[6:0:0:0]    disk    usb: 1-1:1.0                    /dev/sdc
"""

SMARTCTL_SSD = """smartctl 7.2 2020-12-30 r5155 [x86_64-linux-5.15.0-86-generic] (local build)
Copyright (C) 2002-20, Bruce Allen, Christian Franke, www.smartmontools.org

=== START OF INFORMATION SECTION ===
Model Family:     Samsung based SSDs
Device Model:     Samsung SSD 860 EVO 500GB
Serial Number:    S3Z1NB0K123456A
LU WWN Device Id: 5 002538 e40a1b2c3
Firmware Version: RVT03B6Q
User Capacity:    500,107,862,016 bytes [500 GB]
Sector Size:      512 bytes logical/physical
Rotation Rate:    Solid State Device
Device is:        In smartctl database [for details use: -P show]
Local Time is:    Mon Oct 19 10:00:00 2026 UTC
SMART support is: Available - device has SMART capability.
SMART support is: Enabled

"""

SMARTCTL_HDD = """smartctl 7.2 2020-12-30 r5155 [x86_64-linux-5.15.0-86-generic] (local build)

=== START OF INFORMATION SECTION ===
Model Family:     Western Digital Blue
Device Model:     WDC WD10EZEX-08WN4A0
Serial Number:    WD-WCC6Y0ABCDEF
User Capacity:    1,000,204,886,016 bytes [1.00 TB]
Rotation Rate:    7200 rpm
SMART support is: Unavailable - device lacks SMART capability.

"""

NMCLI_DEVICES = """wlp3s0:wifi:connected
enp0s25:ethernet:unavailable
lo:loopback:unmanaged
"""


@pytest.fixture
def make_runner():
    """Factory for FakeRunner instances"""
    return FakeRunner


@pytest.fixture
def cpuinfo_two_sockets():
    """/proc/cpuinfo of two physical CPUs with four logical cores each"""
    blocks = [cpuinfo_block(n, 0) for n in range(4)]
    blocks += [cpuinfo_block(n, 1, mhz='2200.000') for n in range(4, 8)]
    return ''.join(blocks)


@pytest.fixture
def hardware_runner(make_runner, cpuinfo_two_sockets):
    """Runner answering every tool the inventory uses"""
    return make_runner(
        commands={
            ('dmidecode', '-t', '1'): DMIDECODE_SYSTEM,
            ('laptop-detect',): (0, ''),
            ('dmidecode', '-t', '16,17'): DMIDECODE_MEMORY,
            ('lsscsi', '-t'): LSSCSI,
            ('smartctl', '-i', '/dev/sda'): SMARTCTL_SSD,
            ('smartctl', '-H', '/dev/sda'): "SMART overall-health self-assessment test result: PASSED\n",
            ('smartctl', '-i', '/dev/sdb'): (4, SMARTCTL_HDD),
            ('lsblk', '-lnr', '/dev/sda'): "sda 8:0 0 465.8G 0 disk \nsda1 8:1 0 512M 0 part /boot/efi\nsda2 8:2 0 465.3G 0 part /\n",
            ('lsblk', '-lnr', '/dev/sdb'): "sdb 8:16 0 931.5G 0 disk \n",
            ('nmcli', '-t', '-f', 'DEVICE,TYPE,STATE', 'dev'): NMCLI_DEVICES,
        },
        files={
            '/proc/cpuinfo': cpuinfo_two_sockets,
            '/sys/devices/system/cpu/cpu0/cpufreq/cpuinfo_max_freq': "3200000\n",
            '/sys/block/sda/queue/rotational': "0\n",
            '/sys/block/sdb/queue/rotational': "1\n",
        }
    )
