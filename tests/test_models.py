from __future__ import annotations

import pytest

from droidacq.logic.models import PackageFileRecord, PackageRecord


def test_package_record_serializes_with_artifact_keys() -> None:
    record = PackageRecord(
        name="com.example.app",
        installer="com.android.vending",
        uid=10123,
        third_party=True,
        files=[PackageFileRecord(path="/data/app/base.apk", md5="abc")],
    )

    data = record.to_dict()

    assert list(data) == ["name", "files", "installer", "uid", "disabled", "system", "third_party"]
    assert data["third_party"] is True
    assert data["files"][0]["md5"] == "abc"
    assert list(data["files"][0]) == [
        "path", "local_name", "md5", "sha1", "sha256", "sha512", "error",
        "verified_certificate", "certificate", "certificate_error", "trusted_certificate",
    ]


def test_package_record_defaults() -> None:
    record = PackageRecord(name="com.example.app")

    assert record.installer == ""
    assert record.uid == 0
    assert record.files == []
    assert (record.disabled, record.system, record.third_party) == (False, False, False)


def test_package_file_record_requires_path() -> None:
    with pytest.raises(ValueError):
        PackageFileRecord(path="")


def test_record_certificate_failure_only_sets_certificate_error() -> None:
    package_file = PackageFileRecord(path="/data/app/base.apk", sha256="digest")

    package_file.record_certificate(None, False, RuntimeError("no signature block"))

    assert package_file.certificate_error == "no signature block"
    assert package_file.verified_certificate is False
    assert package_file.certificate == {}
    assert (package_file.path, package_file.sha256, package_file.error) == ("/data/app/base.apk", "digest", "")


def test_record_certificate_success_stores_info() -> None:
    package_file = PackageFileRecord(path="/data/app/base.apk")

    package_file.record_certificate({"subject": "CN=Example"}, True)

    assert package_file.certificate == {"subject": "CN=Example"}
    assert package_file.verified_certificate is True
    assert package_file.certificate_error == ""
