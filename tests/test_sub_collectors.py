# tests/test_sub_collectors.py
"""
Tests for the hardware sub-collectors against captured tool output.
"""

import pytest

from conftest import cpuinfo_block
from hwinventory.collectors.sub_collectors import (
    CPUSubCollector,
    DriveSubCollector,
    MemorySubCollector,
    NetworkSubCollector,
    SystemInfoSubCollector,
)
from hwinventory.errors import CommandError, FieldParseError
from hwinventory.models import InterfaceInfo
from hwinventory.utils.byteunit import ByteUnitParseError, Size

GB = 1024 ** 3
TB = 1024 ** 4


class TestSystemInfoSubCollector:
    """Tests for dmidecode type 1 and laptop detection"""

    def test_collect(self, hardware_runner):
        system = SystemInfoSubCollector(hardware_runner, 'lab').collect()

        assert system.vendor == "LENOVO"
        assert system.model == "20BV001KUS"
        assert system.version == "ThinkPad T450"
        assert system.serial == "PC0ABCDE"
        assert system.is_laptop is True
        assert system.model_version() == "20BV001KUS - ThinkPad T450"

    def test_dmidecode_runs_once(self, hardware_runner):
        SystemInfoSubCollector(hardware_runner, 'lab').collect()
        assert hardware_runner.calls.count(('dmidecode', '-t', '1')) == 1

    def test_not_a_laptop(self, hardware_runner):
        hardware_runner.commands[('laptop-detect',)] = (1, '')
        assert SystemInfoSubCollector(hardware_runner, 'lab').collect().is_laptop is False

    def test_missing_laptop_detect_raises(self, hardware_runner):
        del hardware_runner.commands[('laptop-detect',)]
        with pytest.raises(CommandError) as excinfo:
            SystemInfoSubCollector(hardware_runner, 'lab').collect()
        assert excinfo.value.exit_code == 127

    def test_dmidecode_failure_raises(self, make_runner):
        runner = make_runner({('dmidecode', '-t', '1'): (1, '')})
        with pytest.raises(CommandError):
            SystemInfoSubCollector(runner, 'lab').collect()

    def test_unspecified_version_not_appended(self):
        from hwinventory.models import SystemInfo
        assert SystemInfo(model="OptiPlex 7010", version="Not Specified").model_version() == "OptiPlex 7010"


class TestCPUSubCollector:
    """Tests for /proc/cpuinfo collection"""

    def test_one_record_per_physical_cpu(self, hardware_runner):
        cpus = CPUSubCollector(hardware_runner, 'lab').collect()

        assert len(cpus) == 2
        assert [cpu.id for cpu in cpus] == [0, 4]
        assert [cpu.physical_id for cpu in cpus] == [0, 1]

    def test_fields(self, hardware_runner):
        cpu = CPUSubCollector(hardware_runner, 'lab').collect()[0]

        assert cpu.model == "Intel Xeon CPU E5-2620 v3 @ 2.40GHz"
        assert cpu.physical_cores == 2
        assert cpu.logical_cores == 4

    def test_frequency_from_sysfs_then_cpuinfo(self, hardware_runner):
        cpus = CPUSubCollector(hardware_runner, 'lab').collect()

        assert cpus[0].freq_ghz == pytest.approx(3.2)
        assert cpus[1].freq_ghz == pytest.approx(2.2)

    def test_sysfs_read_uses_record_processor(self, hardware_runner):
        hardware_runner.files['/sys/devices/system/cpu/cpu4/cpufreq/cpuinfo_max_freq'] = "2600000\n"
        cpus = CPUSubCollector(hardware_runner, 'lab').collect()
        assert cpus[1].freq_ghz == pytest.approx(2.6)

    def test_single_cpu_without_physical_id(self, make_runner):
        text = ''.join(cpuinfo_block(n, 0) for n in range(2)).replace("physical id\t: 0\n", "")
        runner = make_runner(files={'/proc/cpuinfo': text})
        cpus = CPUSubCollector(runner, 'vm').collect()
        assert len(cpus) == 1
        assert cpus[0].physical_id == 0

    def test_bad_processor_value(self, make_runner):
        runner = make_runner(files={'/proc/cpuinfo': "processor\t: x\nmodel name\t: Test\n"})
        with pytest.raises(FieldParseError) as excinfo:
            CPUSubCollector(runner, 'lab').collect()
        assert excinfo.value.field_name == 'processor'

    def test_bad_sysfs_frequency(self, hardware_runner):
        hardware_runner.files['/sys/devices/system/cpu/cpu0/cpufreq/cpuinfo_max_freq'] = "fast\n"
        with pytest.raises(FieldParseError):
            CPUSubCollector(hardware_runner, 'lab').collect()

    def test_unreadable_cpuinfo(self, make_runner):
        with pytest.raises(CommandError):
            CPUSubCollector(make_runner(), 'lab').collect()


class TestMemorySubCollector:
    """Tests for dmidecode type 16/17 collection"""

    def test_max_size(self, hardware_runner):
        ram = MemorySubCollector(hardware_runner, 'lab').collect()
        assert ram.max_size == 32 * GB

    def test_modules_exclude_system_rom(self, hardware_runner):
        ram = MemorySubCollector(hardware_runner, 'lab').collect()

        assert [module.slot for module in ram.modules] == ["ChannelA-DIMM0", "ChannelA-DIMM1", "ChannelB-DIMM0"]
        assert [module.size for module in ram.modules] == [8 * GB, 0, 4 * GB]
        assert str(ram.installed_size()) == "12 GB"

    def test_module_details(self, hardware_runner):
        first, empty, third = MemorySubCollector(hardware_runner, 'lab').collect().modules

        assert (first.memory_type, first.form_factor, first.freq_mhz) == ("DDR3", "DIMM", 1600)
        assert (third.memory_type, third.form_factor, third.freq_mhz) == ("DDR3", "SODIMM", 1333)
        assert empty.size == Size(0)
        assert empty.freq_mhz == 0

    def test_bad_size(self, make_runner):
        runner = make_runner({('dmidecode', '-t', '16,17'): "Memory Device\n\tSize: lots MB\n"})
        with pytest.raises(ByteUnitParseError):
            MemorySubCollector(runner, 'lab').collect()

    def test_no_devices(self, make_runner):
        runner = make_runner({('dmidecode', '-t', '16,17'): "# dmidecode 3.3\n"})
        ram = MemorySubCollector(runner, 'lab').collect()
        assert ram.modules == []
        assert ram.max_size == 0

    def test_serialized_sizes(self, hardware_runner):
        data = MemorySubCollector(hardware_runner, 'lab').collect().to_dict()
        assert data['max_size'] == {'bytes': 32 * GB, 'display': '32 GB'}
        assert data['installed_size']['display'] == '12 GB'
        assert data['modules'][0]['size']['display'] == '8 GB'


class TestDriveSubCollector:
    """Tests for drive collection"""

    def test_internal_disks_only(self, hardware_runner):
        drives = DriveSubCollector(hardware_runner, 'lab').collect()
        assert [drive.device for drive in drives] == ["/dev/sda", "/dev/sdb"]

    def test_ssd_with_smart(self, hardware_runner):
        sda = DriveSubCollector(hardware_runner, 'lab').collect()[0]

        assert sda.model == "Samsung SSD 860 EVO 500GB"
        assert sda.serial == "S3Z1NB0K123456A"
        assert sda.size == 500 * GB
        assert sda.smart_enabled is True
        assert sda.smart_passed is True
        assert sda.drive_type == "SSD"
        assert sda.no_partitions is False

    def test_hdd_without_smart(self, hardware_runner):
        sdb = DriveSubCollector(hardware_runner, 'lab').collect()[1]

        assert sdb.model == "WDC WD10EZEX-08WN4A0"
        assert sdb.size == TB
        assert sdb.smart_enabled is False
        assert sdb.smart_passed is False
        assert sdb.drive_type == "HDD"
        assert sdb.no_partitions is True

    def test_failing_disk(self, hardware_runner):
        hardware_runner.commands[('smartctl', '-H', '/dev/sda')] = (8, "result: FAILED!\n")
        sda = DriveSubCollector(hardware_runner, 'lab').collect()[0]
        assert sda.smart_enabled is True
        assert sda.smart_passed is False

    def test_smartctl_open_failure(self, hardware_runner):
        hardware_runner.commands[('smartctl', '-i', '/dev/sdb')] = (2, "")
        with pytest.raises(CommandError):
            DriveSubCollector(hardware_runner, 'lab').collect()

    def test_unknown_rotational_value(self, hardware_runner):
        hardware_runner.files['/sys/block/sda/queue/rotational'] = "2\n"
        with pytest.raises(FieldParseError):
            DriveSubCollector(hardware_runner, 'lab').collect()

    def test_empty_lsblk_output(self, hardware_runner):
        hardware_runner.commands[('lsblk', '-lnr', '/dev/sda')] = ""
        with pytest.raises(FieldParseError):
            DriveSubCollector(hardware_runner, 'lab').collect()

    def test_capacity_without_brackets(self, hardware_runner):
        hardware_runner.commands[('smartctl', '-i', '/dev/sda')] = "User Capacity: 500,107,862,016 bytes\n"
        with pytest.raises(FieldParseError):
            DriveSubCollector(hardware_runner, 'lab').collect()

    def test_no_disks(self, make_runner):
        runner = make_runner({('lsscsi', '-t'): "[2:0:0:0]    cd/dvd  sata:    /dev/sr0\n"})
        assert DriveSubCollector(runner, 'lab').collect() == []


class TestNetworkSubCollector:
    """Tests for nmcli based interface collection"""

    def test_list_interfaces(self, hardware_runner):
        interfaces = NetworkSubCollector(hardware_runner, 'lab').collect()

        assert [i.device for i in interfaces] == ["wlp3s0", "enp0s25", "lo"]
        assert interfaces[0].is_wireless()
        assert interfaces[1].is_ethernet()
        assert interfaces[1].state == "unavailable"

    def test_malformed_line(self, make_runner):
        runner = make_runner({('nmcli', '-t', '-f', 'DEVICE,TYPE,STATE', 'dev'): "wlp3s0:wifi\n"})
        with pytest.raises(FieldParseError):
            NetworkSubCollector(runner, 'lab').collect()

    def test_can_scan(self, hardware_runner):
        hardware_runner.commands[('iwlist', 'wlp3s0', 'scan')] = (
            "wlp3s0    Scan completed :\n"
            "          Cell 01 - Address: 00:11:22:33:44:55\n"
            "                    ESSID:\"lab\"\n"
        )
        collector = NetworkSubCollector(hardware_runner, 'lab')
        wifi, ethernet, _ = collector.list_interfaces()

        assert collector.can_scan(wifi) is True
        assert collector.can_scan(ethernet) is False
        assert ('iwlist', 'enp0s25', 'scan') not in hardware_runner.calls

    def test_scan_without_access_points(self, hardware_runner):
        hardware_runner.commands[('iwlist', 'wlp3s0', 'scan')] = "wlp3s0    No scan results\n"
        collector = NetworkSubCollector(hardware_runner, 'lab')
        assert collector.can_scan(InterfaceInfo("wlp3s0", "wifi", "connected")) is False

    def test_refresh_state(self, hardware_runner):
        collector = NetworkSubCollector(hardware_runner, 'lab')
        interface = InterfaceInfo("enp0s25", "ethernet", "connected")

        assert collector.refresh_state(interface).state == "unavailable"

    def test_hard_blocked(self, hardware_runner):
        hardware_runner.commands[('rfkill', 'list', 'wifi')] = (
            "0: phy0: Wireless LAN\n\tSoft blocked: no\n\tHard blocked: yes\n"
        )
        assert NetworkSubCollector(hardware_runner, 'lab').is_hard_blocked() is True

    def test_soft_blocked_only(self, hardware_runner):
        hardware_runner.commands[('rfkill', 'list', 'wifi')] = (
            "0: phy0: Wireless LAN\n\tSoft blocked: yes\n\tHard blocked: no\n"
        )
        assert NetworkSubCollector(hardware_runner, 'lab').is_hard_blocked() is False
