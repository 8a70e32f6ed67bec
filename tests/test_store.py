"""Tests for the flat cache stores and command helpers."""

from pathlib import Path

import pytest

from twir_digest import commands
from twir_digest.errors import CacheFormatError, CollaboratorError
from twir_digest.store import CacheFiles, LineStore


def test_line_store_round_trip(tmp_path: Path):
    store = LineStore(tmp_path / "nested" / "prs")
    assert not store.exists()
    with pytest.raises(CacheFormatError):
        store.load()
    store.save(["* [a](b)", "* [c](d)"])
    assert store.path.read_text(encoding="utf-8") == "* [a](b)\n* [c](d)\n"
    assert store.load() == ["* [a](b)", "* [c](d)"]


def test_rotate_moves_raw_entries(tmp_path: Path):
    cache = CacheFiles(tmp_path)
    cache.last_prs.save(["old"])
    cache.prs.save(["new"])
    cache.rotate()
    assert not cache.prs.exists()
    assert cache.last_prs.load() == ["new"]


def test_run_command_missing_binary():
    with pytest.raises(CollaboratorError):
        commands.run_command("/nonexistent/twir-digest-binary", ["--help"])


def test_list_branches(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(commands, "git", lambda args, repo_dir: "  master\n* twir-600\n  twir-599\n")
    assert commands.list_branches(tmp_path) == (["master", "twir-600", "twir-599"], "twir-600")
