"""Unit tests for atomic JSON persistence."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from src.utils.errors import StorageError
from src.utils.json_io import read_json, write_data, write_json


class TestWriteJson:
    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "svt-2021" / "stockholm" / "1.json"
        write_json([{"id": "1"}], target)
        assert json.loads(target.read_text(encoding="utf-8")) == [{"id": "1"}]

    def test_keeps_non_ascii_readable(self, tmp_path: Path) -> None:
        target = tmp_path / "a.json"
        write_json({"title": "Räksmörgås"}, target)
        assert "Räksmörgås" in target.read_text(encoding="utf-8")

    def test_overwrites_and_leaves_no_temp_files(self, tmp_path: Path) -> None:
        target = tmp_path / "a.json"
        write_json([1], target)
        write_json([1, 2], target)
        assert read_json(target) == [1, 2]
        assert [p.name for p in tmp_path.iterdir()] == ["a.json"]

    def test_unserialisable_data_raises_and_keeps_old_file(self, tmp_path: Path) -> None:
        target = tmp_path / "a.json"
        write_json({"ok": True}, target)
        with pytest.raises(StorageError):
            write_json({"bad": object()}, target)
        assert read_json(target) == {"ok": True}
        assert [p.name for p in tmp_path.iterdir()] == ["a.json"]

    def test_unwritable_location_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(StorageError) as exc_info:
            write_json([], blocker / "a.json")
        assert exc_info.value.provider_name == "filesystem"


class TestWriteData:
    def test_writes_text(self, tmp_path: Path) -> None:
        target = tmp_path / "out" / "1.xml"
        write_data("<articles>\n</articles>", target)
        assert target.read_text(encoding="utf-8") == "<articles>\n</articles>"


class TestReadJson:
    def test_missing_file_returns_default(self, tmp_path: Path) -> None:
        assert read_json(tmp_path / "missing.json", default={}) == {}

    def test_corrupt_file_raises(self, tmp_path: Path) -> None:
        target = tmp_path / "broken.json"
        target.write_text("{not json", encoding="utf-8")
        with pytest.raises(StorageError, match="Could not read"):
            read_json(target, default={})
