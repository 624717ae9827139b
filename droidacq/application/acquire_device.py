"""
Main use case for acquiring a device.

Selects the device, creates the case folder and runs the enabled collectors.
"""

import logging
import time
from typing import Any, Dict, List, Optional, Tuple

from droidacq.logic.models import AcquisitionConfig
from droidacq.infrastructure.collectors import CollectionConfig, CollectionError, CollectorRegistry, create_default_registry
from droidacq.infrastructure.device import AdbDeviceDetector, AdbDevice, AdbClient
from droidacq.infrastructure.storage import AcquisitionStorage
from droidacq.infrastructure.logging import enhanced_logger
from droidacq.infrastructure.shared.error_handling import ErrorSeverity, get_error_service, log_and_continue


class AcquireDeviceUseCase:
    """
    Use case for a live acquisition from one adb device.

    A failing collector is recorded and the remaining collectors still run;
    only the absence of a usable device aborts the acquisition.
    """

    def __init__(self, config_path: Optional[str] = None, verbose: bool = False,
                 config: Optional[AcquisitionConfig] = None,
                 registry: Optional[CollectorRegistry] = None,
                 detector: Optional[AdbDeviceDetector] = None):
        """
        Initialize the acquire device use case.

        Args:
            config_path: Path to configuration file (optional)
            verbose: Enable verbose logging (optional)
            config: Ready configuration, takes precedence over config_path
            registry: Collector registry (defaults to all built-in collectors)
            detector: Device detector (defaults to one built from config)
        """
        self.logger = logging.getLogger("acquire.device")
        self.progress_logger = logging.getLogger("progress")
        self.verbose = verbose

        if config is not None:
            self.config = config
        elif config_path:
            self.config = AcquisitionConfig.from_file(config_path)
        else:
            self.config = AcquisitionConfig()

        self.registry = registry or create_default_registry()
        self.detector = detector or AdbDeviceDetector(
            adb_command=self.config.adb_path,
            timeout_seconds=self.config.adb_timeout_seconds
        )

    def execute(self, device_serial: Optional[str] = None,
                output_directory: Optional[str] = None,
                fast_mode: Optional[bool] = None) -> Dict[str, Any]:
        """
        Run a full acquisition.

        Args:
            device_serial: Specific device serial (auto-detect if None)
            output_directory: Case folder to use instead of a new UUID folder
            fast_mode: Override `acquisition.fast_mode`

        Returns:
            Run summary

        Raises:
            RuntimeError: If adb or a suitable device is not available
        """
        if not self.detector.is_adb_available():
            raise RuntimeError("ADB command not found. Please install Android SDK platform-tools.")

        device = self.detector.select_device(device_serial)
        if device is None:
            raise RuntimeError("No suitable ADB device found. Please connect a device and enable USB debugging.")

        storage = AcquisitionStorage.create(
            self.config.output_root,
            device_serial=device.serial,
            device_model=device.model or "",
            output_directory=output_directory
        )
        return self.execute_on_device(device, self.detector.create_client(device), storage, fast_mode)

    def execute_on_device(self, device: AdbDevice, adb: AdbClient, storage: AcquisitionStorage,
                          fast_mode: Optional[bool] = None) -> Dict[str, Any]:
        """Run the enabled collectors against an already selected device."""
        start_time = time.time()
        get_error_service().reset_error_stats()

        log_file_path = enhanced_logger.setup_logging(str(storage.storage_path), verbose=self.verbose)
        enhanced_logger.log_system_info()

        collection_config = self.config.create_collection_config(fast_mode=fast_mode)
        self.progress_logger.warning(f"Starting acquisition of {device.get_display_name()} into {storage.storage_path}")
        enhanced_logger.create_acquisition_log_entry("start", "Acquisition initiated", {
            "device": device.serial,
            "fast_mode": collection_config.fast_mode,
            "log_file": log_file_path
        })

        try:
            collectors, failed = self._run_collectors(adb, storage, collection_config)
        except Exception as e:
            enhanced_logger.log_error_details(e, f"Acquisition failed after {time.time() - start_time:.2f} seconds")
            storage.finalize(False)
            enhanced_logger.finalize_logging(success=False)
            enhanced_logger.cleanup()
            raise

        execution_time = time.time() - start_time
        summary = {
            "acquisition_id": storage.acquisition_id,
            "storage_path": str(storage.storage_path),
            "device": {
                "serial": device.serial,
                "model": device.model,
                "manufacturer": device.manufacturer,
                "android_version": device.android_version
            },
            "fast_mode": collection_config.fast_mode,
            "collectors": collectors,
            "error_stats": get_error_service().get_error_stats(),
            "execution_time_seconds": round(execution_time, 2)
        }

        success = not failed
        storage.finalize(success, summary)

        enhanced_logger.log_acquisition_summary(
            storage_path=str(storage.storage_path),
            device=device.get_display_name(),
            collectors_run=len(collectors),
            collectors_failed=len(failed),
            execution_time=execution_time
        )
        self.progress_logger.warning(f"Acquisition saved to: {storage.storage_path}")
        enhanced_logger.finalize_logging(success=success)
        enhanced_logger.cleanup()

        return summary

    def _run_collectors(self, adb: AdbClient, storage: AcquisitionStorage,
                        collection_config: CollectionConfig) -> Tuple[Dict[str, Dict[str, Any]], List[str]]:
        collectors: Dict[str, Dict[str, Any]] = {}
        failed: List[str] = []

        for collector_type in self.config.get_enabled_collectors():
            if not self.registry.is_registered(collector_type):
                self.logger.warning(f"No collector registered for {collector_type}, skipping")
                continue

            collector = self.registry.get_collector(collector_type, adb, storage, collection_config)
            try:
                result = collector.collect()
            except CollectionError as e:
                failed.append(collector_type)
                collectors[collector_type] = {"status": "failed", "error": str(e)}
                log_and_continue(
                    f"Failed to run collector {collector_type}: {e}",
                    component="acquire.device",
                    severity=ErrorSeverity.ERROR,
                    operation="collect"
                )
                continue

            collectors[collector_type] = {
                "status": "completed",
                "artifacts": [source.path.name for source in result.sources],
                "size_bytes": result.get_total_size_bytes(),
                "warnings": result.warnings,
                "metadata": result.metadata
            }
            enhanced_logger.create_acquisition_log_entry("collect", f"{collector_type} collected", {
                "artifacts": len(result.sources)
            })

        return collectors, failed
