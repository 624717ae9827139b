"""
Configuration domain models.

Holds acquisition settings loaded from config.yaml (or JSON) and
overridden from the command line.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, Optional

import yaml


DEFAULT_COLLECTORS = ('environment', 'services', 'packages')


@dataclass
class AcquisitionConfig:
    """
    Main configuration for an acquisition run.

    This centralizes adb, output and collector settings instead of
    spreading defaults across the use case and the collectors.
    """

    # adb settings
    adb_path: Optional[str] = None
    adb_timeout_seconds: int = 300

    # Acquisition settings
    output_root: str = "acquisitions"
    fast_mode: bool = False

    # Collector toggles, in execution order
    collectors: Dict[str, bool] = field(
        default_factory=lambda: {name: True for name in DEFAULT_COLLECTORS}
    )

    def __post_init__(self):
        if self.adb_timeout_seconds <= 0:
            raise ValueError("adb_timeout_seconds must be positive")

        unknown = set(self.collectors) - set(DEFAULT_COLLECTORS)
        if unknown:
            raise ValueError(f"Unknown collectors in configuration: {sorted(unknown)}")

    def get_enabled_collectors(self):
        """Enabled collector names in execution order."""
        return [name for name in DEFAULT_COLLECTORS if self.collectors.get(name, True)]

    @classmethod
    def from_file(cls, file_path: str) -> 'AcquisitionConfig':
        """Load configuration from a file (JSON or YAML)."""
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() in ['.yml', '.yaml']:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AcquisitionConfig':
        adb_data = data.get('adb') or {}
        acquisition_data = data.get('acquisition') or {}

        collectors = {name: True for name in DEFAULT_COLLECTORS}
        collectors.update(data.get('collectors') or {})

        return cls(
            adb_path=adb_data.get('path'),
            adb_timeout_seconds=adb_data.get('timeout_seconds', 300),
            output_root=acquisition_data.get('output_root', 'acquisitions'),
            fast_mode=acquisition_data.get('fast_mode', False),
            collectors=collectors
        )

    def create_collection_config(self, fast_mode: Optional[bool] = None):
        """
        Build the per-run CollectionConfig.

        Args:
            fast_mode: Command line override for `acquisition.fast_mode`
        """
        from droidacq.infrastructure.collectors.base_collector import CollectionConfig

        return CollectionConfig(
            fast_mode=self.fast_mode if fast_mode is None else fast_mode
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'adb': {
                'path': self.adb_path,
                'timeout_seconds': self.adb_timeout_seconds
            },
            'acquisition': {
                'output_root': self.output_root,
                'fast_mode': self.fast_mode
            },
            'collectors': dict(self.collectors)
        }

    def save_to_file(self, file_path: str):
        path = Path(file_path)

        with open(path, 'w', encoding='utf-8') as f:
            if path.suffix.lower() in ['.yml', '.yaml']:
                yaml.dump(self.to_dict(), f, default_flow_style=False, indent=2)
            else:
                json.dump(self.to_dict(), f, indent=2)
