from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import pytest

from droidacq.application import AcquireDeviceUseCase
from droidacq.infrastructure.device import AdbDevice
from droidacq.infrastructure.storage import AcquisitionStorage
from droidacq.logic.models import AcquisitionConfig


ANNOTATED = ("pm", "list", "packages", "-U", "-u", "-i")

DEVICE_SCRIPT = {
    ("env",): "PATH=/system/bin\n",
    ANNOTATED: "package:com.example.app installer=com.android.vending uid:10123\n",
    ("pm", "path", "com.example.app"): "package:/data/app/com.example.app/base.apk\n",
    ("pm", "list", "packages", "-3"): "package:com.example.app\n",
}


class StubDetector:
    def __init__(self, adb, device: Optional[AdbDevice] = None, available: bool = True) -> None:
        self.adb = adb
        self.device = device
        self.available = available
        self.requested_serial: Optional[str] = "unset"

    def is_adb_available(self) -> bool:
        return self.available

    def select_device(self, serial: Optional[str] = None) -> Optional[AdbDevice]:
        self.requested_serial = serial
        return self.device

    def create_client(self, device: AdbDevice):
        return self.adb


def _device() -> AdbDevice:
    return AdbDevice(serial="R58M12345", state="device", model="SM_G973F", manufacturer="samsung")


def test_failing_collector_does_not_stop_the_others(fake_adb, tmp_path: Path) -> None:
    adb = fake_adb(DEVICE_SCRIPT)  # `service list` is unscripted and fails
    storage = AcquisitionStorage.create(str(tmp_path))
    use_case = AcquireDeviceUseCase(config=AcquisitionConfig(fast_mode=True), detector=StubDetector(adb))

    summary = use_case.execute_on_device(_device(), adb, storage)

    assert summary["collectors"]["environment"]["status"] == "completed"
    assert summary["collectors"]["services"]["status"] == "failed"
    assert "service list" in summary["collectors"]["services"]["error"]
    assert summary["collectors"]["packages"]["status"] == "completed"
    assert summary["collectors"]["packages"]["artifacts"] == ["packages.json"]
    assert summary["collectors"]["packages"]["size_bytes"] == (storage.storage_path / "packages.json").stat().st_size
    assert summary["fast_mode"] is True
    assert summary["error_stats"]["acquire.device_error"] == 1

    info = json.loads((storage.storage_path / "acquisition.json").read_text(encoding="utf-8"))
    assert info["status"] == "completed_with_errors"
    assert (storage.storage_path / "command.log").exists()
    assert (storage.storage_path / "env.txt").exists()
    assert not (storage.storage_path / "services.txt").exists()
    json.dumps(summary)


def test_disabled_collectors_are_skipped(fake_adb, tmp_path: Path) -> None:
    adb = fake_adb(DEVICE_SCRIPT)
    config = AcquisitionConfig(collectors={"environment": True, "services": False, "packages": False})
    storage = AcquisitionStorage.create(str(tmp_path))

    summary = AcquireDeviceUseCase(config=config, detector=StubDetector(adb)).execute_on_device(_device(), adb, storage)

    assert list(summary["collectors"]) == ["environment"]
    info = json.loads((storage.storage_path / "acquisition.json").read_text(encoding="utf-8"))
    assert info["status"] == "completed"


def test_execute_creates_case_folder_under_output_root(fake_adb, tmp_path: Path) -> None:
    adb = fake_adb({**DEVICE_SCRIPT, ("service", "list"): "Found 0 services:\n"})
    detector = StubDetector(adb, device=_device())
    config = AcquisitionConfig(output_root=str(tmp_path / "cases"))

    summary = AcquireDeviceUseCase(config=config, detector=detector).execute(device_serial="R58M12345")

    assert detector.requested_serial == "R58M12345"
    assert Path(summary["storage_path"]).parent == tmp_path / "cases"
    assert all(c["status"] == "completed" for c in summary["collectors"].values())
    assert summary["device"]["manufacturer"] == "samsung"
    assert summary["fast_mode"] is False


def test_execute_fast_mode_override(fake_adb, tmp_path: Path) -> None:
    adb = fake_adb(DEVICE_SCRIPT)
    detector = StubDetector(adb, device=_device())
    use_case = AcquireDeviceUseCase(config=AcquisitionConfig(fast_mode=False), detector=detector)

    summary = use_case.execute(output_directory=str(tmp_path / "case"), fast_mode=True)

    assert summary["fast_mode"] is True
    assert not any(call[0].endswith("sum") for call in adb.calls)


def test_execute_without_adb_or_device_raises(fake_adb) -> None:
    with pytest.raises(RuntimeError, match="ADB command not found"):
        AcquireDeviceUseCase(config=AcquisitionConfig(), detector=StubDetector(fake_adb(), available=False)).execute()

    with pytest.raises(RuntimeError, match="No suitable ADB device"):
        AcquireDeviceUseCase(config=AcquisitionConfig(), detector=StubDetector(fake_adb(), device=None)).execute()
