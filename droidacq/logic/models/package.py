"""
Package inventory domain models.

One PackageRecord per installed package, each holding the files that back it.
Field names of `to_dict()` are the keys of the on-disk `packages.json` artifact.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class PackageFileRecord:
    """A single file backing an installed package."""
    path: str
    local_name: str = ""
    md5: str = ""
    sha1: str = ""
    sha256: str = ""
    sha512: str = ""
    error: str = ""

    # Filled by the external certificate verifier
    verified_certificate: bool = False
    certificate: Dict[str, Any] = field(default_factory=dict)
    certificate_error: str = ""
    trusted_certificate: bool = False

    def __post_init__(self):
        if not self.path:
            raise ValueError("Package file path cannot be empty")

    def record_certificate(self, certificate: Optional[Dict[str, Any]], verified: bool,
                           error: Optional[Exception] = None) -> None:
        """
        Store the outcome of certificate verification for this file.

        Path and digests are never touched; a failure only shows up in
        `certificate_error`.
        """
        self.certificate = dict(certificate or {})
        self.verified_certificate = verified
        self.certificate_error = str(error) if error is not None else ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'path': self.path,
            'local_name': self.local_name,
            'md5': self.md5,
            'sha1': self.sha1,
            'sha256': self.sha256,
            'sha512': self.sha512,
            'error': self.error,
            'verified_certificate': self.verified_certificate,
            'certificate': self.certificate,
            'certificate_error': self.certificate_error,
            'trusted_certificate': self.trusted_certificate
        }


@dataclass
class PackageRecord:
    """An installed package and the attributes reported by `pm`."""
    name: str
    installer: str = ""
    uid: int = 0
    disabled: bool = False
    system: bool = False
    third_party: bool = False
    files: List[PackageFileRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'files': [package_file.to_dict() for package_file in self.files],
            'installer': self.installer,
            'uid': self.uid,
            'disabled': self.disabled,
            'system': self.system,
            'third_party': self.third_party
        }
