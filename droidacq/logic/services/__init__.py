"""
Domain services for droidacq.
"""

from .package_inventory import (
    PackageInventoryService,
    PackageLister,
    FileResolver,
    AttributeAugmenter,
    PackageFlag,
    PackageListingError,
    build_name_index
)

__all__ = [
    'PackageInventoryService',
    'PackageLister',
    'FileResolver',
    'AttributeAugmenter',
    'PackageFlag',
    'PackageListingError',
    'build_name_index'
]
