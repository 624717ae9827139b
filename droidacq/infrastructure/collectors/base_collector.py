"""
Base collector interface for acquisition modules.

Defines the contract that all collectors must implement.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Any, Optional

from droidacq.infrastructure.device.adb_client import AdbClient
from droidacq.infrastructure.storage.acquisition_storage import AcquisitionStorage


class CollectionError(Exception):
    """Exception raised during data collection."""
    pass


@dataclass
class DataSource:
    """An artifact written into the case folder."""
    type: str  # "environment", "services", "packages"
    path: Path
    size_bytes: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if isinstance(self.path, str):
            self.path = Path(self.path)

        if self.path.exists():
            self.size_bytes = self.path.stat().st_size


@dataclass
class CollectionConfig:
    """Per-run settings handed to every collector."""

    fast_mode: bool = False


@dataclass
class CollectionResult:
    """Result from a data collection operation."""

    sources: List[DataSource] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    def get_total_size_bytes(self) -> int:
        return sum(source.size_bytes for source in self.sources)


class BaseCollector(ABC):
    """
    Base interface for all acquisition collectors.

    A collector issues its device commands through the shared AdbClient and
    writes its artifacts into the run's AcquisitionStorage.
    """

    COLLECTOR_TYPE = ""

    def __init__(self, adb: AdbClient, storage: AcquisitionStorage,
                 config: Optional[CollectionConfig] = None):
        self.adb = adb
        self.storage = storage
        self.config = config or CollectionConfig()
        self.logger = logging.getLogger(f"collector.{self.__class__.__name__}")

    @property
    def collector_type(self) -> str:
        """Get the type identifier for this collector."""
        return self.COLLECTOR_TYPE

    @abstractmethod
    def collect(self) -> CollectionResult:
        """
        Run the collector against the device.

        Returns:
            Collection result with the artifacts written

        Raises:
            CollectionError: If nothing could be collected
        """
        pass

    def _source(self, path: Path, **metadata) -> DataSource:
        return DataSource(type=self.collector_type, path=path, metadata=metadata)
