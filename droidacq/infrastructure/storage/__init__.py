"""
Storage for acquisition case folders.
"""

from .acquisition_storage import AcquisitionStorage

__all__ = ['AcquisitionStorage']
