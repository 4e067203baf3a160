from __future__ import annotations

import os
from pathlib import Path

import pytest

from ovrpack.platform.files import atomic_write_text, write_new_bytes


def test_atomic_write_text_creates_parent_dirs(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "manifest.json"
    atomic_write_text(path, '{"name":"Example"}\n')

    assert path.read_text(encoding="utf-8") == '{"name":"Example"}\n'


def test_atomic_write_text_cleans_temp_file_on_replace_failure(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    path = tmp_path / "manifest.json"

    def fail_replace(_src: Path, _dst: Path) -> None:
        raise OSError("replace failed")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(OSError, match="replace failed"):
        atomic_write_text(path, "payload", encoding="utf-8")

    assert list(path.parent.glob(f".{path.name}.*.tmp")) == []


def test_write_new_bytes_writes_content(tmp_path: Path) -> None:
    path = tmp_path / "key.keystore"
    write_new_bytes(path, b"\x00\x01\xfe")

    assert path.read_bytes() == b"\x00\x01\xfe"


def test_write_new_bytes_never_overwrites(tmp_path: Path) -> None:
    path = tmp_path / "key.keystore"
    path.write_bytes(b"other request")

    with pytest.raises(FileExistsError):
        write_new_bytes(path, b"mine")

    assert path.read_bytes() == b"other request"
