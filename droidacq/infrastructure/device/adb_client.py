"""
ADB shell client.

Issues one shell command at a time against a single device and returns
its raw text output.
"""

import subprocess
import logging
from typing import List, Optional


class AdbCommandError(Exception):
    """Raised when an adb shell command cannot be run or exits non-zero."""

    def __init__(self, command: List[str], message: str, output: str = "", returncode: Optional[int] = None):
        super().__init__(message)
        self.command = command
        self.output = output
        self.returncode = returncode


class AdbClient:
    """
    Synchronous adb shell wrapper bound to one device.

    Commands are strict request/response round-trips: there is no
    streaming and no retry. The timeout is the only policy applied here.
    """

    def __init__(self, serial: Optional[str] = None, adb_command: str = "adb", timeout_seconds: int = 300):
        self.serial = serial
        self.adb_command = adb_command
        self.timeout_seconds = timeout_seconds
        self.logger = logging.getLogger("adb.client")

    def _base_command(self) -> List[str]:
        cmd = [self.adb_command]
        if self.serial:
            cmd.extend(["-s", self.serial])
        return cmd

    def shell(self, *argv: str) -> str:
        """
        Run a shell command on the device.

        Args:
            *argv: Command and arguments, e.g. ("pm", "path", "com.example")

        Returns:
            Raw stdout of the command

        Raises:
            AdbCommandError: If adb is missing, times out, or the command exits non-zero
        """
        command = list(argv)
        full_cmd = self._base_command() + ["shell"] + command
        self.logger.debug(f"Executing: {' '.join(full_cmd)}")

        try:
            result = subprocess.run(
                full_cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
                encoding='utf-8',
                errors='ignore'
            )
        except subprocess.TimeoutExpired as e:
            raise AdbCommandError(
                command, f"Command timed out after {self.timeout_seconds}s", output=_as_text(e.stdout)
            ) from e
        except OSError as e:
            raise AdbCommandError(command, f"Unable to execute adb: {e}") from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise AdbCommandError(
                command,
                f"Command `{' '.join(command)}` failed with return code {result.returncode}: {stderr}",
                output=result.stdout or "",
                returncode=result.returncode
            )

        return result.stdout or ""


def _as_text(data) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode('utf-8', errors='ignore')
    return data
