"""
Domain models for droidacq.

This module contains the core data structures produced by an acquisition.
"""

from .package import PackageRecord, PackageFileRecord
from .configuration import AcquisitionConfig, DEFAULT_COLLECTORS

__all__ = [
    'PackageRecord',
    'PackageFileRecord',
    'AcquisitionConfig',
    'DEFAULT_COLLECTORS'
]
