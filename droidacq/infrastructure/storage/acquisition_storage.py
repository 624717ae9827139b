"""
Acquisition Storage Service

Creates the per-run case folder and writes collector artifacts into it.

    <output_root>/
    └── <acquisition uuid>/
        ├── acquisition.json   # run metadata, updated on finalize
        ├── command.log        # acquisition log
        ├── env.txt
        ├── services.txt
        └── packages.json
"""

import json
import uuid
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional


class AcquisitionStorage:
    """
    Storage for a single acquisition run.

    One instance owns one case folder; collectors receive the folder path
    and write through `save_text` / `save_json`.
    """

    INFO_FILENAME = "acquisition.json"

    def __init__(self, storage_path: Path, acquisition_id: str):
        self.storage_path = Path(storage_path)
        self.acquisition_id = acquisition_id
        self.logger = logging.getLogger("acquisition.storage")
        self.info: Dict[str, Any] = {}

    @classmethod
    def create(cls, output_root: str, device_serial: str = "", device_model: str = "",
               output_directory: Optional[str] = None) -> 'AcquisitionStorage':
        """
        Create a new case folder.

        Args:
            output_root: Directory under which a UUID-named case folder is created
            device_serial: Serial of the acquired device
            device_model: Model of the acquired device
            output_directory: Explicit case folder, used instead of a UUID folder
        """
        acquisition_id = str(uuid.uuid4())
        if output_directory:
            storage_path = Path(output_directory)
        else:
            storage_path = Path(output_root) / acquisition_id

        storage_path.mkdir(parents=True, exist_ok=True)

        storage = cls(storage_path, acquisition_id)
        storage.info = {
            "uuid": acquisition_id,
            "started": datetime.now().isoformat(),
            "completed": None,
            "device_serial": device_serial,
            "device_model": device_model,
            "status": "in_progress"
        }
        storage._write_info()
        storage.logger.info(f"Created acquisition folder: {storage_path}")
        return storage

    def path_for(self, filename: str) -> Path:
        return self.storage_path / filename

    def save_text(self, filename: str, content: str) -> Path:
        """Save raw command output."""
        path = self.path_for(filename)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        self.logger.debug(f"Saved {path} ({len(content)} chars)")
        return path

    def save_json(self, filename: str, data: Any) -> Path:
        path = self.path_for(filename)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        self.logger.debug(f"Saved {path}")
        return path

    def load_json(self, filename: str) -> Any:
        with open(self.path_for(filename), 'r', encoding='utf-8') as f:
            return json.load(f)

    def finalize(self, success: bool, summary: Optional[Dict[str, Any]] = None) -> None:
        """Mark the acquisition complete and record its summary."""
        self.info["completed"] = datetime.now().isoformat()
        self.info["status"] = "completed" if success else "completed_with_errors"
        if summary:
            self.info["summary"] = summary
        self._write_info()

    def _write_info(self) -> None:
        self.save_json(self.INFO_FILENAME, self.info)
