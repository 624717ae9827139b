from __future__ import annotations

import subprocess
from typing import List

import pytest

from droidacq.infrastructure.device import AdbClient, AdbCommandError


def _fake_run(returncode: int = 0, stdout: str = "", stderr: str = ""):
    captured: List[List[str]] = []

    def run(args: List[str], **kwargs: object) -> subprocess.CompletedProcess:
        captured.append(list(args))
        return subprocess.CompletedProcess(args=args, returncode=returncode, stdout=stdout, stderr=stderr)

    return run, captured


def test_shell_builds_serial_scoped_command(monkeypatch: pytest.MonkeyPatch) -> None:
    run, captured = _fake_run(stdout="package:/data/app/base.apk\n")
    monkeypatch.setattr("droidacq.infrastructure.device.adb_client.subprocess.run", run)

    out = AdbClient(serial="ABC123", adb_command="/usr/bin/adb").shell("pm", "path", "com.example")

    assert out == "package:/data/app/base.apk\n"
    assert captured == [["/usr/bin/adb", "-s", "ABC123", "shell", "pm", "path", "com.example"]]


def test_shell_without_serial(monkeypatch: pytest.MonkeyPatch) -> None:
    run, captured = _fake_run(stdout="PATH=/system/bin\n")
    monkeypatch.setattr("droidacq.infrastructure.device.adb_client.subprocess.run", run)

    AdbClient().shell("env")

    assert captured == [["adb", "shell", "env"]]


def test_nonzero_exit_raises_with_captured_output(monkeypatch: pytest.MonkeyPatch) -> None:
    run, _ = _fake_run(returncode=1, stdout="package:com.partial\n", stderr="Unknown option: -i")
    monkeypatch.setattr("droidacq.infrastructure.device.adb_client.subprocess.run", run)

    with pytest.raises(AdbCommandError) as excinfo:
        AdbClient().shell("pm", "list", "packages", "-i")

    assert excinfo.value.output == "package:com.partial\n"
    assert excinfo.value.returncode == 1
    assert excinfo.value.command == ["pm", "list", "packages", "-i"]
    assert "Unknown option" in str(excinfo.value)


def test_timeout_raises_adb_command_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def run(args: List[str], **kwargs: object) -> subprocess.CompletedProcess:
        raise subprocess.TimeoutExpired(cmd=args, timeout=5)

    monkeypatch.setattr("droidacq.infrastructure.device.adb_client.subprocess.run", run)

    with pytest.raises(AdbCommandError) as excinfo:
        AdbClient(timeout_seconds=5).shell("sha512sum", "/data/app/base.apk")

    assert excinfo.value.output == ""
    assert "timed out" in str(excinfo.value)


def test_missing_adb_binary_raises_adb_command_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def run(args: List[str], **kwargs: object) -> subprocess.CompletedProcess:
        raise FileNotFoundError("adb")

    monkeypatch.setattr("droidacq.infrastructure.device.adb_client.subprocess.run", run)

    with pytest.raises(AdbCommandError):
        AdbClient().shell("env")
