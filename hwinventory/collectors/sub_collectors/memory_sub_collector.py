# hwinventory/collectors/sub_collectors/memory_sub_collector.py
"""
Memory Sub-Collector
Collects maximum memory capacity and installed modules from dmidecode types 16 and 17.
"""

import re
from typing import Optional

from ...models import RAMInfo, RAMModule
from ...parsers.extractor import RecordBlock, SentinelMarker, extract_fields, split_records
from ...utils.byteunit import Size, parse_size
from .base_sub_collector import SubCollector

MEMORY_DEVICE = 'Memory Device'
NO_MODULE = 'No Module Installed'

# Device entries that are not RAM
EXCLUDED_SLOTS = {'SYSTEM ROM'}
EXCLUDED_TYPES = {'Flash'}

LEADING_INT_PATTERN = re.compile(r'^\s*(\d+)')


class MemorySubCollector(SubCollector):
    """Collects installed RAM modules"""

    def get_section_name(self) -> str:
        return "memory"

    def collect(self) -> RAMInfo:
        self.log_start()

        result = self.require(self.runner.run('dmidecode', '-t', '16,17'))
        lines = result.lines()

        ram = RAMInfo()
        max_capacity = extract_fields(lines).get('Maximum Capacity')
        if max_capacity:
            ram.max_size = parse_size(max_capacity)

        for block in split_records(lines, SentinelMarker(MEMORY_DEVICE)):
            module = self._build_module(block)
            if module is not None:
                ram.modules.append(module)

        self.log_end(len(ram.modules))
        return ram

    def _build_module(self, block: RecordBlock) -> Optional[RAMModule]:
        module = RAMModule(
            slot=block.get('Locator'),
            memory_type=block.get('Type'),
            form_factor=block.get('Form Factor'),
        )

        if module.slot in EXCLUDED_SLOTS or EXCLUDED_TYPES & {module.memory_type, module.form_factor}:
            self.logger.debug(f"Skipping non-RAM memory device in slot '{module.slot}'")
            return None

        size = block.get('Size')
        if size and size != NO_MODULE:
            module.size = parse_size(size)
        else:
            module.size = Size(0)

        if module.size != 0:
            match = LEADING_INT_PATTERN.match(block.get('Speed'))
            if match:
                module.freq_mhz = int(match.group(1))

        return module
