"""Unit tests for shared utilities (sboot.utils)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from sboot import utils
from sboot.utils import ensure_dir, print_debug, save_json, write_text_file


class TestSaveJson:
    @pytest.mark.asyncio
    async def test_writes_pretty_json(self, tmp_path: Path):
        target = tmp_path / "out" / "structure.json"
        result = await save_json({"basePackage": "com.example"}, target)
        assert result == target
        text = target.read_text(encoding="utf-8")
        assert text.endswith("\n")
        assert json.loads(text) == {"basePackage": "com.example"}

    @pytest.mark.asyncio
    async def test_non_json_values_use_str(self, tmp_path: Path):
        target = tmp_path / "paths.json"
        await save_json({"path": Path("/tmp/x")}, target)
        assert json.loads(target.read_text(encoding="utf-8")) == {"path": "/tmp/x"}


class TestFileHelpers:
    @pytest.mark.unit
    def test_ensure_dir_is_idempotent(self, tmp_path: Path):
        target = tmp_path / "a" / "b"
        assert ensure_dir(target) == target
        assert ensure_dir(target) == target
        assert target.is_dir()

    @pytest.mark.unit
    def test_write_text_file_overwrites(self, tmp_path: Path):
        target = tmp_path / "nested" / "Foo.java"
        write_text_file(target, "first")
        write_text_file(target, "second")
        assert target.read_text(encoding="utf-8") == "second"


class TestPrintDebug:
    @pytest.mark.unit
    def test_silent_without_debug(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("DEBUG", raising=False)
        with utils.console.capture() as capture:
            print_debug("hidden")
        assert capture.get() == ""

    @pytest.mark.unit
    def test_prints_with_debug(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DEBUG", "1")
        with utils.console.capture() as capture:
            print_debug("visible")
        assert "visible" in capture.get()
