"""
Device access infrastructure.

Handles adb device detection and the shell command boundary.
"""

from .adb_client import AdbClient, AdbCommandError
from .adb_device_detector import AdbDeviceDetector, AdbDevice, parse_properties

__all__ = [
    'AdbClient',
    'AdbCommandError',
    'AdbDeviceDetector',
    'AdbDevice',
    'parse_properties'
]
