# hwinventory/config/settings.py
"""
Configuration management for hardware inventory collection.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import yaml

SECTIONS = ('system', 'cpu', 'memory', 'drives', 'network')
LOCAL_HOSTS = (None, '', 'localhost', '127.0.0.1')


@dataclass
class SystemConfig:
    """Configuration for a machine to inventory"""
    name: str
    host: Optional[str] = None  # None or localhost runs the tools locally
    port: int = 22
    username: str = 'root'
    ssh_key_path: Optional[str] = None
    password_env: Optional[str] = None
    enabled: bool = True
    timeout: Optional[int] = None  # falls back to collection.command_timeout
    sections: List[str] = field(default_factory=list)  # empty means all sections

    def __post_init__(self):
        """Validate configuration after initialization"""
        if not self.name:
            raise ValueError("System name is required")

        unknown = [section for section in self.sections if section not in SECTIONS]
        if unknown:
            raise ValueError(f"Unknown sections for system {self.name}: {', '.join(unknown)}")

    @property
    def is_local(self) -> bool:
        return self.host in LOCAL_HOSTS

    @property
    def password(self) -> Optional[str]:
        return os.getenv(self.password_env) if self.password_env else None

    def enabled_sections(self) -> List[str]:
        return list(self.sections) if self.sections else list(SECTIONS)


@dataclass
class CollectionConfig:
    """Collection behavior configuration"""
    output_directory: str = 'inventory_data'
    output_format: str = 'json'  # 'json', 'yaml'
    command_timeout: int = 30
    use_sudo: bool = False

    def __post_init__(self):
        if self.output_format not in ('json', 'yaml'):
            raise ValueError(f"Unsupported output format: {self.output_format}")


class ConfigManager:
    """Loads inventory configuration from a YAML file"""

    def __init__(self, config_file: str = None):
        self.logger = logging.getLogger('config_manager')

        if config_file:
            self.config_file = Path(config_file)
        else:
            self.config_file = self._find_config_file()

        self.systems: List[SystemConfig] = []
        self.collection_config = CollectionConfig()

        self._load_config()

    def _find_config_file(self) -> Path:
        """Find configuration file in standard locations"""
        possible_locations = [
            Path('config/inventory.yml'),
            Path('/etc/hwinventory/inventory.yml'),
            Path.home() / '.config' / 'hwinventory' / 'inventory.yml'
        ]

        for location in possible_locations:
            if location.exists():
                self.logger.info(f"Found config file at {location}")
                return location

        default_location = Path('config/inventory.yml')
        self._create_default_config(default_location)
        return default_location

    def _create_default_config(self, config_path: Path):
        """Create a default configuration inventorying the local machine"""
        config_path.parent.mkdir(parents=True, exist_ok=True)

        default_config = {
            'systems': [
                {
                    'name': 'localhost',
                    'host': 'localhost',
                    'enabled': True
                }
            ],
            'collection': {
                'output_directory': 'inventory_data',
                'output_format': 'json',
                'command_timeout': 30,
                'use_sudo': False
            }
        }

        with open(config_path, 'w') as f:
            yaml.dump(default_config, f, default_flow_style=False, indent=2)

        self.logger.info(f"Created default configuration at {config_path}")

    def _load_config(self):
        """Load configuration from file"""
        try:
            with open(self.config_file, 'r') as f:
                config_data = yaml.safe_load(f) or {}

            collection_data = config_data.get('collection', {})
            self.collection_config = CollectionConfig(**collection_data)

            self._load_systems_config(config_data.get('systems', []))

            self.logger.info(f"Loaded configuration for {len(self.systems)} systems")

        except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
            self.logger.error(f"Failed to load configuration: {e}")
            raise

    def _load_systems_config(self, systems_data: List[Dict]):
        """Load systems configuration, skipping invalid entries"""
        self.systems = []

        for system_data in systems_data:
            try:
                system_config = SystemConfig(**system_data)
            except (TypeError, ValueError) as e:
                self.logger.error(f"Invalid system configuration: {e}")
                continue

            if system_config.enabled:
                self.systems.append(system_config)

    def get_system_by_name(self, name: str) -> Optional[SystemConfig]:
        """Get system configuration by name"""
        for system in self.systems:
            if system.name == name:
                return system
        return None

    def get_enabled_systems(self) -> List[SystemConfig]:
        """Get all enabled systems"""
        return [system for system in self.systems if system.enabled]

    def validate_configuration(self) -> bool:
        """Validate the entire configuration"""
        if not self.systems:
            self.logger.error("No systems configured")
            return False

        names = [system.name for system in self.systems]
        duplicates = {name for name in names if names.count(name) > 1}
        if duplicates:
            self.logger.error(f"Duplicate system names: {', '.join(sorted(duplicates))}")
            return False

        for system in self.systems:
            self._validate_system_config(system)

        return True

    def _validate_system_config(self, system: SystemConfig):
        """Warn about settings that will probably fail at collection time"""
        if system.ssh_key_path and not Path(system.ssh_key_path).expanduser().exists():
            self.logger.warning(f"SSH key not found for {system.name}: {system.ssh_key_path}")

        if system.password_env and not os.getenv(system.password_env):
            self.logger.warning(f"Password variable {system.password_env} not set for {system.name}")

    def reload_config(self):
        """Reload configuration from file"""
        self.logger.info("Reloading configuration")
        self._load_config()


# Global configuration instance
config_manager = None


def get_config() -> ConfigManager:
    """Get global configuration manager instance"""
    global config_manager
    if config_manager is None:
        config_manager = ConfigManager()
    return config_manager


def initialize_config(config_file: str = None) -> ConfigManager:
    """Initialize configuration manager with specific config file"""
    global config_manager
    config_manager = ConfigManager(config_file)
    return config_manager
