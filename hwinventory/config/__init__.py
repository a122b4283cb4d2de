# hwinventory/config/__init__.py
"""
Configuration loading for hardware inventory collection.
"""

from .settings import CollectionConfig, ConfigManager, SystemConfig, get_config, initialize_config

__all__ = [
    'CollectionConfig',
    'ConfigManager',
    'SystemConfig',
    'get_config',
    'initialize_config'
]
