"""
Registry for managing data collectors.

Provides centralized registration and lookup of collectors by type.
"""

import logging
from typing import Dict, List, Optional, Type

from droidacq.infrastructure.device.adb_client import AdbClient
from droidacq.infrastructure.storage.acquisition_storage import AcquisitionStorage
from .base_collector import BaseCollector, CollectionConfig, CollectionError


class CollectorRegistry:
    """
    Registry of collector classes keyed by their collector type.
    """

    def __init__(self):
        self._collectors: Dict[str, Type[BaseCollector]] = {}
        self.logger = logging.getLogger("collector.registry")

    def register(self, collector_class: Type[BaseCollector]) -> None:
        """
        Register a collector class.

        Raises:
            ValueError: If the class is not a collector or has no type
        """
        if not isinstance(collector_class, type) or not issubclass(collector_class, BaseCollector):
            raise ValueError(f"Class {collector_class} must inherit from BaseCollector")

        collector_type = collector_class.COLLECTOR_TYPE
        if not collector_type:
            raise ValueError(f"Collector {collector_class.__name__} does not define COLLECTOR_TYPE")

        if collector_type in self._collectors:
            self.logger.warning(f"Collector {collector_type} is already registered, overwriting")

        self._collectors[collector_type] = collector_class
        self.logger.debug(f"Registered collector: {collector_type}")

    def get_collector(self, collector_type: str, adb: AdbClient, storage: AcquisitionStorage,
                      config: Optional[CollectionConfig] = None) -> BaseCollector:
        """
        Instantiate a registered collector.

        Raises:
            CollectionError: If no collector of that type is registered
        """
        collector_class = self._collectors.get(collector_type)
        if collector_class is None:
            raise CollectionError(f"Unknown collector type: {collector_type}")
        return collector_class(adb, storage, config)

    def get_available_types(self) -> List[str]:
        return list(self._collectors)

    def is_registered(self, collector_type: str) -> bool:
        return collector_type in self._collectors


def create_default_registry() -> CollectorRegistry:
    """Registry with the environment, services and packages collectors."""
    from .command_collectors import EnvironmentCollector, ServicesCollector
    from .packages_collector import PackagesCollector

    registry = CollectorRegistry()
    for collector_class in (EnvironmentCollector, ServicesCollector, PackagesCollector):
        registry.register(collector_class)
    return registry
