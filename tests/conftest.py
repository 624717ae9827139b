from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import pytest

from droidacq.infrastructure.device.adb_client import AdbCommandError


Argv = Tuple[str, ...]


class FakeAdbClient:
    """
    Scripted stand-in for AdbClient.

    `responses` maps argv tuples to stdout. `failures` maps argv tuples to
    the stdout captured before the command failed. Anything unscripted
    fails with no output, like a utility missing on the device.
    """

    def __init__(self, responses: Optional[Dict[Argv, str]] = None,
                 failures: Optional[Dict[Argv, str]] = None) -> None:
        self.responses: Dict[Argv, str] = dict(responses or {})
        self.failures: Dict[Argv, str] = dict(failures or {})
        self.calls: List[Argv] = []

    def shell(self, *argv: str) -> str:
        self.calls.append(argv)
        if argv in self.failures:
            raise AdbCommandError(list(argv), f"scripted failure: {' '.join(argv)}",
                                  output=self.failures[argv], returncode=1)
        if argv in self.responses:
            return self.responses[argv]
        raise AdbCommandError(list(argv), f"unscripted command: {' '.join(argv)}", returncode=127)

    def called(self, *argv: str) -> bool:
        return argv in self.calls


def digest_responses(path: str, prefix: str = "") -> Dict[Argv, str]:
    """Successful md5/sha1/sha256/sha512 output for one device path."""
    return {
        ("md5sum", path): f"{prefix}md5hex  {path}\n",
        ("sha1sum", path): f"{prefix}sha1hex  {path}\n",
        ("sha256sum", path): f"{prefix}sha256hex  {path}\n",
        ("sha512sum", path): f"{prefix}sha512hex  {path}\n",
    }


@pytest.fixture
def fake_adb():
    def _make(responses: Optional[Dict[Argv, str]] = None,
              failures: Optional[Dict[Argv, str]] = None) -> FakeAdbClient:
        return FakeAdbClient(responses, failures)
    return _make


@pytest.fixture(autouse=True)
def _reset_error_stats():
    from droidacq.infrastructure.shared.error_handling import get_error_service

    get_error_service().reset_error_stats()
    yield
    get_error_service().reset_error_stats()
