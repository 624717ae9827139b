"""
Single-command collectors.

Each runs one shell command and stores its raw output in the case folder.
"""

from typing import Tuple

from droidacq.infrastructure.device.adb_client import AdbCommandError
from .base_collector import BaseCollector, CollectionResult, CollectionError


class CommandOutputCollector(BaseCollector):
    """Runs COMMAND on the device and saves stdout to OUTPUT_FILENAME."""

    COMMAND: Tuple[str, ...] = ()
    OUTPUT_FILENAME = ""
    DESCRIPTION = ""

    def collect(self) -> CollectionResult:
        self.logger.info(f"Collecting {self.DESCRIPTION}...")
        command = ' '.join(self.COMMAND)

        try:
            output = self.adb.shell(*self.COMMAND)
        except AdbCommandError as e:
            raise CollectionError(f"failed to run `adb shell {command}`: {e}") from e

        path = self.storage.save_text(self.OUTPUT_FILENAME, output)
        return CollectionResult(
            sources=[self._source(path, command=command, line_count=len(output.splitlines()))],
            metadata={'collector_type': self.collector_type}
        )


class EnvironmentCollector(CommandOutputCollector):
    """Environment variables of the device shell."""

    COLLECTOR_TYPE = "environment"
    COMMAND = ("env",)
    OUTPUT_FILENAME = "env.txt"
    DESCRIPTION = "environment"


class ServicesCollector(CommandOutputCollector):
    """Registered system services."""

    COLLECTOR_TYPE = "services"
    COMMAND = ("service", "list")
    OUTPUT_FILENAME = "services.txt"
    DESCRIPTION = "list of services"
