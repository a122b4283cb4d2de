# hwinventory/collectors/__init__.py
"""
Collectors that assemble hardware inventory documents.
"""

from .base_collector import BaseCollector, CollectionResult
from .inventory_collector import InventoryCollector

__all__ = [
    'BaseCollector',
    'CollectionResult',
    'InventoryCollector'
]
