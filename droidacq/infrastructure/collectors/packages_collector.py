"""
Packages collector.

Writes the package inventory snapshot to packages.json.
"""

from droidacq.logic.services.package_inventory import PackageInventoryService, PackageListingError
from .base_collector import BaseCollector, CollectionResult, CollectionError


class PackagesCollector(BaseCollector):
    """Installed packages, their files and attributes."""

    COLLECTOR_TYPE = "packages"
    OUTPUT_FILENAME = "packages.json"

    def collect(self) -> CollectionResult:
        self.logger.info("Collecting information on installed packages...")
        if self.config.fast_mode:
            self.logger.info("Fast mode enabled, skipping package file digests")

        inventory = PackageInventoryService(self.adb)
        try:
            packages = inventory.collect(fast_mode=self.config.fast_mode)
        except PackageListingError as e:
            raise CollectionError(str(e)) from e

        path = self.storage.save_json(self.OUTPUT_FILENAME, [package.to_dict() for package in packages])

        file_count = sum(len(package.files) for package in packages)
        result = CollectionResult(
            sources=[self._source(path, package_count=len(packages), file_count=file_count)],
            metadata={
                'collector_type': self.collector_type,
                'package_count': len(packages),
                'file_count': file_count,
                'fast_mode': self.config.fast_mode
            }
        )

        without_files = [package.name for package in packages if not package.files]
        if without_files:
            result.warnings.append(f"No files resolved for {len(without_files)} packages")

        self.logger.info(f"Collected {len(packages)} packages backed by {file_count} files")
        return result
