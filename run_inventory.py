#!/usr/bin/env python3
"""
Hardware Inventory Collection
"""

import argparse
import json
import sys
from pathlib import Path

import yaml

from hwinventory.collectors import InventoryCollector
from hwinventory.config.settings import initialize_config
from hwinventory.utils.logging_config import setup_logging, get_logger


def build_collector_config(system, config_manager) -> dict:
    """Flatten system and collection settings into the collector's config dict"""
    collection = config_manager.collection_config
    return {
        'host': system.host,
        'port': system.port,
        'username': system.username,
        'ssh_key_path': system.ssh_key_path,
        'password': system.password,
        'timeout': system.timeout or collection.command_timeout,
        'use_sudo': collection.use_sudo,
        'sections': system.enabled_sections()
    }


def write_result(result, output_dir: Path, system_name: str, output_format: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / f"{system_name}_inventory.{output_format}"

    with open(output_file, 'w') as f:
        if output_format == 'yaml':
            yaml.safe_dump(result.to_dict(), f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(result.to_dict(), f, indent=2, default=str)

    return output_file


def print_summary(data: dict):
    """Short per-section summary of a collected inventory"""
    system = data.get('system', {})
    if 'error' not in system and system:
        print(f"   🖥️  System: {system.get('vendor', '')} {system.get('model', '')}".rstrip())

    cpus = data.get('cpu')
    if isinstance(cpus, list):
        for cpu in cpus:
            print(f"   💻 CPU {cpu['physical_id']}: {cpu['model']} "
                  f"({cpu['physical_cores']} cores, {cpu['freq_ghz']:.2f} GHz)")

    memory = data.get('memory', {})
    if 'installed_size' in memory:
        print(f"   💾 Memory: {memory['installed_size']['display']} in {len(memory['modules'])} slots")

    drives = data.get('drives')
    if isinstance(drives, list):
        for drive in drives:
            print(f"   💽 {drive['device']}: {drive['model']} {drive['size']['display']} ({drive['drive_type']})")

    interfaces = data.get('network')
    if isinstance(interfaces, list):
        print(f"   🌐 Interfaces: {len(interfaces)}")

    for section, content in data.items():
        if isinstance(content, dict) and 'error' in content:
            print(f"   ⚠️  {section}: {content['error']}")


def run_inventory(config_file=None, system_name=None, output_format=None, enable_debug=False) -> bool:
    """Run hardware inventory for all configured systems"""
    print("🚀 Starting Hardware Inventory Collection")
    print("=" * 80)

    setup_logging(enable_debug=enable_debug)
    logger = get_logger('inventory_main')

    config = initialize_config(config_file)

    if not config.validate_configuration():
        logger.error("Configuration validation failed")
        print("❌ Configuration validation failed")
        return False

    systems = config.get_enabled_systems()
    if system_name:
        systems = [system for system in systems if system.name == system_name]
        if not systems:
            print(f"❌ No enabled system named '{system_name}'")
            return False

    output_format = output_format or config.collection_config.output_format
    output_dir = Path(config.collection_config.output_directory)

    results = {}
    for system in systems:
        print(f"\n📡 Collecting from {system.name}...")
        logger.info(f"Starting inventory of {system.name}")

        collector = InventoryCollector(system.name, build_collector_config(system, config))
        result = collector.collect()
        results[system.name] = result

        if result.success:
            output_file = write_result(result, output_dir, system.name, output_format)
            print(f"✅ {system.name}: Collection successful")
            print(f"💾 Saved to {output_file}")
            print_summary(result.data)
        else:
            logger.error(f"{system.name}: Collection failed - {result.error}")
            print(f"❌ {system.name}: Collection failed - {result.error}")

    successful = sum(1 for r in results.values() if r.success)
    print("\n" + "=" * 80)
    print(f"📊 Inventory Summary: {successful}/{len(results)} successful")
    logger.info(f"Inventory completed: {successful}/{len(results)} successful")

    return successful == len(results)


def show_config(config_file=None):
    """Show configured systems"""
    config = initialize_config(config_file)

    print(f"📋 Configuration: {config.config_file}")
    for system in config.systems:
        location = 'local' if system.is_local else f"{system.username}@{system.host}:{system.port}"
        print(f"   • {system.name} ({location}): {', '.join(system.enabled_sections())}")

    collection = config.collection_config
    print(f"📁 Output: {collection.output_directory} ({collection.output_format})")


def main():
    """Main function with command line arguments"""
    parser = argparse.ArgumentParser(description='Hardware Inventory Collection')
    parser.add_argument('command', nargs='?', default='collect',
                        choices=['collect', 'show-config'],
                        help='Action to perform')
    parser.add_argument('--config', help='Path to inventory.yml')
    parser.add_argument('--system', help='Only collect from this system')
    parser.add_argument('--output-format', choices=['json', 'yaml'],
                        help='Override the configured output format')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging')

    args = parser.parse_args()

    if args.command == 'show-config':
        show_config(args.config)
        return 0

    ok = run_inventory(args.config, args.system, args.output_format, args.debug)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
