# hwinventory/collectors/base_collector.py
"""
Base collector class and collection result container.
Provides common logging, error handling and metadata for collectors.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any
import logging
from datetime import datetime


class CollectionResult:
    """Container for collection results with metadata"""

    def __init__(self, success: bool, data: Any = None, error: str = None, metadata: Dict = None):
        self.success = success
        self.data = data
        self.error = error
        self.metadata = metadata or {}
        self.timestamp = datetime.now().isoformat()

    def to_dict(self) -> Dict:
        """Convert result to dictionary for serialization"""
        return {
            'success': self.success,
            'data': self.data,
            'error': self.error,
            'metadata': self.metadata,
            'timestamp': self.timestamp
        }


class BaseCollector(ABC):
    """
    Abstract base class for collectors.

    A collector gathers data from one target system and reports it as a
    CollectionResult instead of raising.
    """

    def __init__(self, name: str, config: Dict):
        self.name = name
        self.config = config
        self.logger = logging.getLogger(f"collector.{name}")

        self.host = config.get('host')
        self.port = config.get('port', 22)
        self.username = config.get('username', 'root')
        self.timeout = config.get('timeout', 30)

    @abstractmethod
    def collect(self) -> CollectionResult:
        """Main collection method that each collector must implement"""
        pass

    @abstractmethod
    def validate_config(self) -> bool:
        """Validate that the collector has all required configuration"""
        pass

    def get_connection_info(self) -> Dict:
        """Get connection information for logging/debugging"""
        return {
            'host': self.host or 'localhost',
            'port': self.port,
            'username': self.username,
            'collector_type': self.__class__.__name__
        }

    def log_collection_start(self):
        self.logger.info(f"Starting collection from {self.host or 'localhost'}")

    def log_collection_end(self, result: CollectionResult):
        if result.success:
            self.logger.info("Collection completed successfully")
        else:
            self.logger.error(f"Collection failed: {result.error}")

    def create_metadata(self, additional_metadata: Dict = None) -> Dict:
        """Create standard metadata for collection results"""
        metadata = {
            'collector_type': self.__class__.__name__,
            'connection_info': self.get_connection_info(),
            'collection_timestamp': datetime.now().isoformat()
        }

        if additional_metadata:
            metadata.update(additional_metadata)

        return metadata
