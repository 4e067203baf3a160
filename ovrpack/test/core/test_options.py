"""Tests for ovrpack.core.options module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from ovrpack.core.options import SigningKey, load_options, parse_options
from ovrpack.core.result import Err, Ok


def _data(**overrides: object) -> dict[str, object]:
    data: dict[str, object] = {
        "packageId": "com.example.app",
        "name": "Example",
        "manifestUri": "https://example.com/manifest.json",
        "manifest": {"name": "Example", "start_url": "/"},
    }
    data.update(overrides)
    return data


class TestParseOptions:
    def test_minimal(self) -> None:
        result = parse_options(_data())

        assert isinstance(result, Ok)
        options = result.value
        assert options.package_id == "com.example.app"
        assert options.name == "Example"
        assert options.manifest_uri == "https://example.com/manifest.json"
        assert options.manifest["start_url"] == "/"
        assert options.signing_key is None

    @pytest.mark.parametrize("package_id", ["", "app", "com.", "1com.example", "com.exa-mple"])
    def test_rejects_bad_package_id(self, package_id: str) -> None:
        result = parse_options(_data(packageId=package_id))

        assert isinstance(result, Err)
        assert result.error.field == "packageId"

    def test_requires_name(self) -> None:
        result = parse_options(_data(name="   "))

        assert isinstance(result, Err)
        assert result.error.field == "name"

    @pytest.mark.parametrize("uri", ["/manifest.json", "ftp://example.com/m.json", "https://"])
    def test_rejects_non_http_manifest_uri(self, uri: str) -> None:
        result = parse_options(_data(manifestUri=uri))

        assert isinstance(result, Err)
        assert result.error.field == "manifestUri"

    def test_requires_manifest_object(self) -> None:
        result = parse_options(_data(manifest="not an object"))

        assert isinstance(result, Err)
        assert result.error.field == "manifest"

    def test_signing_key(self) -> None:
        key = {
            "keyStoreFile": "AAEC",
            "storePassword": " pass ",
            "alias": "my-key",
            "password": "key-pass",
        }
        result = parse_options(_data(signingKey=key))

        assert isinstance(result, Ok)
        assert result.value.signing_key == SigningKey(
            keystore_file="AAEC",
            store_password=" pass ",
            alias="my-key",
            password="key-pass",
            skip_signing=False,
        )

    def test_signing_key_requires_secrets(self) -> None:
        key = {"keyStoreFile": "AAEC", "storePassword": "pass", "alias": "my-key"}
        result = parse_options(_data(signingKey=key))

        assert isinstance(result, Err)
        assert result.error.field == "signingKey.password"

    def test_skip_signing_does_not_require_secrets(self) -> None:
        result = parse_options(_data(signingKey={"keyStoreFile": "AAEC", "skipSigning": True}))

        assert isinstance(result, Ok)
        assert result.value.signing_key is not None
        assert result.value.signing_key.skip_signing is True

    def test_blank_keystore_does_not_require_secrets(self) -> None:
        result = parse_options(_data(signingKey={"keyStoreFile": "  "}))

        assert isinstance(result, Ok)
        assert result.value.signing_key is not None
        assert result.value.signing_key.has_keystore is False

    def test_signing_key_must_be_object(self) -> None:
        result = parse_options(_data(signingKey="AAEC"))

        assert isinstance(result, Err)
        assert result.error.field == "signingKey"

    def test_null_signing_key_is_absent(self) -> None:
        result = parse_options(_data(signingKey=None))

        assert isinstance(result, Ok)
        assert result.value.signing_key is None


def test_signing_key_repr_hides_secrets() -> None:
    key = SigningKey(keystore_file="AAEC", store_password="s3cret", alias="a", password="hunter2")
    text = repr(key)

    assert "s3cret" not in text
    assert "hunter2" not in text
    assert "AAEC" not in text


class TestLoadOptions:
    def test_loads_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "options.json"
        path.write_text(json.dumps(_data()), encoding="utf-8")

        result = load_options(path)

        assert isinstance(result, Ok)
        assert result.value.package_id == "com.example.app"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_options(tmp_path / "missing.json")

        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "options.json"
        path.write_text("{", encoding="utf-8")

        result = load_options(path)

        assert isinstance(result, Err)
        assert "Invalid JSON" in result.error.message

    def test_root_must_be_object(self, tmp_path: Path) -> None:
        path = tmp_path / "options.json"
        path.write_text("[]", encoding="utf-8")

        result = load_options(path)

        assert isinstance(result, Err)
        assert "JSON object" in result.error.message
