"""
Application layer for droidacq.

This module contains the acquisition use cases.
"""

from .acquire_device import AcquireDeviceUseCase

__all__ = [
    'AcquireDeviceUseCase'
]
