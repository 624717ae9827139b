"""
Package inventory service.

Builds one snapshot of the installed packages on a device out of several
`pm` queries that devices support unevenly:

1. `pm list packages -U -u -i` (or `-U -u` where `-i` is rejected) lists
   every package with its UID and, when available, its installer.
2. `pm path <package>` resolves the files backing each package; outside
   fast mode every file is fingerprinted with the device's digest tools.
3. `pm list packages -d|-s|-3` tag the listed packages as disabled,
   system or third-party.

Only the failure of the listing itself is fatal. Everything after it
degrades to empty fields.
"""

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from droidacq.infrastructure.device.adb_client import AdbClient, AdbCommandError
from droidacq.infrastructure.parsers.line_record_parser import (
    PACKAGE_PREFIX,
    INSTALLER_PREFIX,
    UID_PREFIX,
    strip_prefix,
    iter_prefixed_values,
    parse_int,
    first_token
)
from droidacq.infrastructure.shared.error_handling import ErrorSeverity, log_and_continue
from droidacq.logic.models.package import PackageRecord, PackageFileRecord


COMPONENT = "package.inventory"

LIST_PACKAGES = ("pm", "list", "packages")
ANNOTATED_LIST_ARGS = ("-U", "-u", "-i")
REDUCED_LIST_ARGS = ("-U", "-u")

# Record field -> device-side digest utility
DIGEST_COMMANDS = (
    ("md5", "md5sum"),
    ("sha1", "sha1sum"),
    ("sha256", "sha256sum"),
    ("sha512", "sha512sum"),
)


class PackageListingError(Exception):
    """Raised when no package listing can be obtained from the device."""
    pass


class PackageFlag(Enum):
    """Filtered listing queries, valued by their `pm list packages` argument."""
    DISABLED = "-d"
    SYSTEM = "-s"
    THIRD_PARTY = "-3"


def _mark_disabled(record: PackageRecord) -> None:
    record.disabled = True


def _mark_system(record: PackageRecord) -> None:
    record.system = True


def _mark_third_party(record: PackageRecord) -> None:
    record.third_party = True


FLAG_SETTERS: Dict[PackageFlag, Callable[[PackageRecord], None]] = {
    PackageFlag.DISABLED: _mark_disabled,
    PackageFlag.SYSTEM: _mark_system,
    PackageFlag.THIRD_PARTY: _mark_third_party,
}


def build_name_index(records: List[PackageRecord]) -> Dict[str, List[PackageRecord]]:
    """Map each package name to its records, in listing order."""
    index: Dict[str, List[PackageRecord]] = {}
    for record in records:
        index.setdefault(record.name, []).append(record)
    return index


class FileResolver:
    """Resolves and fingerprints the files backing a package."""

    def __init__(self, adb: AdbClient):
        self.adb = adb
        self.logger = logging.getLogger(COMPONENT)

    def get_package_paths(self, package_name: str) -> List[str]:
        """
        List the device paths of a package's files.

        Raises:
            PackageListingError: If `pm path` fails
        """
        try:
            output = self.adb.shell("pm", "path", package_name)
        except AdbCommandError as e:
            raise PackageListingError(f"failed to launch `pm path` command: {e}") from e

        return list(iter_prefixed_values(output, PACKAGE_PREFIX))

    def resolve_files(self, package_name: str, fast_mode: bool = False) -> List[PackageFileRecord]:
        """
        Build the file records of a package.

        A failing path query yields no files; a failing digest tool leaves
        only its own field empty.
        """
        try:
            paths = self.get_package_paths(package_name)
        except PackageListingError as e:
            cause = e.__cause__
            output = cause.output if isinstance(cause, AdbCommandError) else ""
            log_and_continue(
                f"Failed to get file paths for package {package_name}: {e}: {output}",
                component=COMPONENT,
                severity=ErrorSeverity.ERROR,
                operation="resolve_files"
            )
            return []

        files = []
        for path in paths:
            digests = {} if fast_mode else self._compute_digests(path)
            files.append(PackageFileRecord(path=path, **digests))

        return files

    def _compute_digests(self, path: str) -> Dict[str, str]:
        digests = {}
        for field_name, utility in DIGEST_COMMANDS:
            try:
                digests[field_name] = first_token(self.adb.shell(utility, path))
            except AdbCommandError as e:
                self.logger.debug(f"{utility} failed for {path}: {e}")
        return digests


class PackageLister:
    """Issues the package listing and builds the initial records."""

    def __init__(self, adb: AdbClient, file_resolver: Optional[FileResolver] = None):
        self.adb = adb
        self.file_resolver = file_resolver or FileResolver(adb)
        self.logger = logging.getLogger(COMPONENT)

    def list_packages(self, fast_mode: bool = False) -> List[PackageRecord]:
        """
        List installed packages in device order, with their files resolved.

        Raises:
            PackageListingError: If neither the annotated nor the reduced
                listing can be run
        """
        output, annotated = self._run_listing()

        records = []
        for line in output.splitlines():
            record = self.parse_line(line, annotated)
            if record is None:
                continue

            record.files = self.file_resolver.resolve_files(record.name, fast_mode)
            records.append(record)

        self.logger.info(f"Listed {len(records)} packages ({'annotated' if annotated else 'reduced'} listing)")
        return records

    def _run_listing(self) -> Tuple[str, bool]:
        try:
            return self.adb.shell(*LIST_PACKAGES, *ANNOTATED_LIST_ARGS), True
        except AdbCommandError as e:
            # Some devices reject -i
            self.logger.info(f"Annotated package listing failed, retrying without installer: {e}")

        try:
            return self.adb.shell(*LIST_PACKAGES, *REDUCED_LIST_ARGS), False
        except AdbCommandError as e:
            raise PackageListingError(f"failed to launch `pm list packages` command: {e}") from e

    @staticmethod
    def parse_line(line: str, annotated: bool) -> Optional[PackageRecord]:
        """
        Parse one listing line.

        Annotated lines read `package:<name> installer=<installer> uid:<uid>`,
        reduced lines `package:<name> uid:<uid>`. Missing fields default to
        an empty installer and UID 0.
        """
        fields = line.split()
        if not fields:
            return None

        name = strip_prefix(fields[0], PACKAGE_PREFIX)
        if not name:
            return None

        if annotated:
            installer = strip_prefix(fields[1], INSTALLER_PREFIX) if len(fields) > 1 else ""
            uid_field = fields[2] if len(fields) > 2 else ""
        else:
            installer = ""
            uid_field = fields[1] if len(fields) > 1 else ""

        return PackageRecord(
            name=name,
            installer=installer,
            uid=parse_int(strip_prefix(uid_field, UID_PREFIX))
        )


class AttributeAugmenter:
    """Tags listed packages from the filtered `pm list packages` queries."""

    def __init__(self, adb: AdbClient, flags: Tuple[PackageFlag, ...] = tuple(PackageFlag)):
        self.adb = adb
        self.flags = flags
        self.logger = logging.getLogger(COMPONENT)

    def augment(self, records: List[PackageRecord]) -> List[PackageRecord]:
        """
        Set the disabled/system/third-party flags on existing records.

        Names the filtered queries report that are not in `records` are
        ignored. A flag whose query is unsupported stays False everywhere.
        """
        index = build_name_index(records)

        for flag in self.flags:
            names = self._query_flag(flag)
            if names is None:
                continue

            mark = FLAG_SETTERS[flag]
            for name in names:
                for record in index.get(name, ()):
                    mark(record)

        return records

    def _query_flag(self, flag: PackageFlag) -> Optional[List[str]]:
        try:
            output = self.adb.shell(*LIST_PACKAGES, flag.value)
        except AdbCommandError as e:
            if not e.output:
                log_and_continue(
                    f"Failed to get packages filtered by `{flag.value}`: {e}",
                    component=COMPONENT,
                    severity=ErrorSeverity.INFO,
                    operation="augment",
                    flag=flag.name.lower()
                )
                return None
            output = e.output

        return list(iter_prefixed_values(output, PACKAGE_PREFIX))


class PackageInventoryService:
    """
    Produces package inventory snapshots for one device.

    Each call to `collect` builds a fresh snapshot; nothing is kept between calls.
    """

    def __init__(self, adb: AdbClient):
        self.file_resolver = FileResolver(adb)
        self.lister = PackageLister(adb, self.file_resolver)
        self.augmenter = AttributeAugmenter(adb)
        self.logger = logging.getLogger(COMPONENT)

    def collect(self, fast_mode: bool = False) -> Tuple[PackageRecord, ...]:
        """
        Collect the package inventory.

        Args:
            fast_mode: Skip per-file digests

        Returns:
            Package records in device listing order

        Raises:
            PackageListingError: If the package listing cannot be obtained
        """
        records = self.lister.list_packages(fast_mode)
        self.augmenter.augment(records)

        self.logger.info(f"Package inventory complete: {len(records)} packages")
        return tuple(records)
