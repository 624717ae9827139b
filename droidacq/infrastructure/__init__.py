"""
Infrastructure layer for droidacq.

This module contains technical concerns like device access, parsing, storage and logging.
Collectors live in `droidacq.infrastructure.collectors`.
"""

from .device import AdbClient, AdbCommandError, AdbDeviceDetector, AdbDevice
from .storage import AcquisitionStorage
from .logging import enhanced_logger

__all__ = [
    'AdbClient',
    'AdbCommandError',
    'AdbDeviceDetector',
    'AdbDevice',
    'AcquisitionStorage',
    'enhanced_logger'
]
