# hwinventory/collectors/sub_collectors/cpu_sub_collector.py
"""
CPU Sub-Collector
Builds one record per physical CPU from the per-logical-core blocks of /proc/cpuinfo.
"""

from typing import List

from ...errors import FieldParseError
from ...models import CPUInfo
from ...parsers.extractor import FieldMarker, RecordBlock, split_records
from .base_sub_collector import SubCollector

CPUINFO_PATH = '/proc/cpuinfo'
MAX_FREQ_PATH = '/sys/devices/system/cpu/cpu{}/cpufreq/cpuinfo_max_freq'


def _to_int(block: RecordBlock, key: str) -> int:
    value = block.get(key)
    if not value:
        return 0
    try:
        return int(value)
    except ValueError:
        raise FieldParseError(key, value)


class CPUSubCollector(SubCollector):
    """
    Collects installed CPUs.

    Logical cores of the same physical CPU share a "physical id"; only the
    first logical core's fields describe the physical CPU.
    """

    def get_section_name(self) -> str:
        return "cpu"

    def collect(self) -> List[CPUInfo]:
        self.log_start()

        result = self.require(self.runner.read_file(CPUINFO_PATH))
        blocks = split_records(result.lines(), FieldMarker('processor'), merge_key='physical id')

        cpus = [self._build_cpu(block) for block in blocks]

        self.log_end(len(cpus))
        return cpus

    def _build_cpu(self, block: RecordBlock) -> CPUInfo:
        cpu = CPUInfo(
            id=_to_int(block, 'processor'),
            model=block.get('model name'),
            physical_id=_to_int(block, 'physical id'),
            physical_cores=_to_int(block, 'cpu cores'),
            logical_cores=_to_int(block, 'siblings'),
        )
        cpu.freq_ghz = self._read_frequency(cpu.id, block)
        return cpu

    def _read_frequency(self, processor: int, block: RecordBlock) -> float:
        """
        Maximum frequency in GHz.

        If cpufreq is not exposed in sysfs the /proc/cpuinfo frequency is used,
        on the basis that when the BIOS blocks CPU scaling the CPU runs at full speed.
        """
        result = self.runner.read_file(MAX_FREQ_PATH.format(processor))
        if result.success:
            value = result.output.strip()
            try:
                return int(value) / 1000000
            except ValueError:
                raise FieldParseError('cpuinfo_max_freq', value)

        value = block.get('cpu MHz')
        if not value:
            return 0.0
        try:
            return float(value) / 1000
        except ValueError:
            raise FieldParseError('cpu MHz', value)
