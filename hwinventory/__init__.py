# hwinventory/__init__.py
"""
Hardware inventory: chassis, CPUs, RAM modules, drives and network interfaces
read from OS diagnostic tools.
"""

__version__ = '0.1.0'
