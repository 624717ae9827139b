"""
ADB Device Detection Service

Locates the adb binary, lists connected devices and picks the one to acquire from.
"""

import re
import shutil
import subprocess
import logging
from typing import List, Optional, Dict
from dataclasses import dataclass

from .adb_client import AdbClient, AdbCommandError


@dataclass
class AdbDevice:
    """Represents a detected ADB device."""
    serial: str
    state: str  # 'device', 'offline', 'unauthorized', etc.
    model: Optional[str] = None
    product: Optional[str] = None
    android_version: Optional[str] = None
    manufacturer: Optional[str] = None

    def __post_init__(self):
        if not self.serial:
            raise ValueError("Device serial cannot be empty")

    def is_ready(self) -> bool:
        """Check if device is ready for acquisition."""
        return self.state == 'device'

    def get_display_name(self) -> str:
        if self.model and self.manufacturer:
            return f"{self.manufacturer} {self.model} ({self.serial})"
        elif self.model:
            return f"{self.model} ({self.serial})"
        return self.serial


class AdbDeviceDetector:
    """
    Finds adb and the device to acquire from.

    Device enrichment goes through an AdbClient so property queries obey
    the same timeout and error contract as every other shell command.
    """

    def __init__(self, adb_command: Optional[str] = None, timeout_seconds: int = 300):
        self.logger = logging.getLogger("adb.detector")
        self.timeout_seconds = timeout_seconds
        self._adb_command = self._find_adb_command(adb_command)

    def _find_adb_command(self, configured: Optional[str]) -> Optional[str]:
        candidates = [configured] if configured else []
        candidates.extend(["adb", "adb.exe"])

        for candidate in candidates:
            resolved = shutil.which(candidate)
            if resolved:
                self.logger.info(f"Found ADB at: {resolved}")
                return resolved

        self.logger.warning("ADB command not found")
        return None

    @property
    def adb_command(self) -> Optional[str]:
        return self._adb_command

    def is_adb_available(self) -> bool:
        return self._adb_command is not None

    def create_client(self, device: AdbDevice) -> AdbClient:
        """Build a shell client bound to the given device."""
        return AdbClient(
            serial=device.serial,
            adb_command=self._adb_command or "adb",
            timeout_seconds=self.timeout_seconds
        )

    def detect_devices(self) -> List[AdbDevice]:
        """
        Detect all connected ADB devices.

        Returns:
            List of detected devices, enriched with getprop data where possible
        """
        if not self._adb_command:
            self.logger.error("ADB command not available")
            return []

        try:
            result = subprocess.run(
                [self._adb_command, "devices", "-l"],
                capture_output=True,
                text=True,
                timeout=10
            )
        except (subprocess.TimeoutExpired, OSError) as e:
            self.logger.error(f"ADB device detection failed: {e}")
            return []

        if result.returncode != 0:
            self.logger.error(f"ADB devices command failed: {result.stderr}")
            return []

        devices = self.parse_device_list(result.stdout)
        for device in devices:
            self._enrich_device_info(device)

        self.logger.info(f"Detected {len(devices)} ADB devices")
        return devices

    @staticmethod
    def parse_device_list(adb_output: str) -> List[AdbDevice]:
        """Parse the output of 'adb devices -l'."""
        devices = []

        for line in adb_output.strip().splitlines():
            line = line.strip()
            if not line or line.startswith("List of devices") or line.startswith("*"):
                continue

            parts = line.split()
            if len(parts) < 2:
                continue

            attributes = dict(
                part.split(':', 1) for part in parts[2:] if ':' in part
            )
            devices.append(AdbDevice(
                serial=parts[0],
                state=parts[1],
                model=attributes.get('model'),
                product=attributes.get('product')
            ))

        return devices

    def _enrich_device_info(self, device: AdbDevice) -> None:
        if not device.is_ready():
            return

        try:
            properties = parse_properties(self.create_client(device).shell("getprop"))
        except AdbCommandError as e:
            self.logger.warning(f"Failed to enrich device {device.serial}: {e}")
            return

        device.model = device.model or properties.get('ro.product.model')
        device.manufacturer = properties.get('ro.product.manufacturer')
        device.android_version = properties.get('ro.build.version.release')

    def select_device(self, serial: Optional[str] = None) -> Optional[AdbDevice]:
        """
        Pick the device to acquire from.

        With a serial, that device must be connected and ready. Without one,
        exactly one ready device must be connected.
        """
        ready_devices = [device for device in self.detect_devices() if device.is_ready()]

        if serial:
            for device in ready_devices:
                if device.serial == serial:
                    self.logger.info(f"Selected device: {device.get_display_name()}")
                    return device
            self.logger.error(f"Device with serial '{serial}' not found or not ready")
            return None

        if len(ready_devices) == 1:
            self.logger.info(f"Using device: {ready_devices[0].get_display_name()}")
            return ready_devices[0]

        if not ready_devices:
            self.logger.warning("No ADB devices ready for acquisition")
        else:
            self.logger.warning(f"Multiple devices detected ({len(ready_devices)}). Please specify device serial.")
            for device in ready_devices:
                self.logger.info(f"  - {device.get_display_name()}")
        return None


def parse_properties(getprop_output: str) -> Dict[str, str]:
    """Parse getprop lines of the form `[key]: [value]`."""
    properties = {}
    for line in getprop_output.splitlines():
        match = re.match(r'\[([^\]]+)\]:\s*\[([^\]]*)\]', line.strip())
        if match:
            key, value = match.groups()
            properties[key] = value
    return properties
