"""Shared fixtures for fluentfs tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from fluentfs.matcher import PathMatcher


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a standard test directory tree.

    Structure::

        root/
        ├── other/
        │   └── e.txt
        ├── sub/
        │   ├── deep/
        │   │   └── d.txt
        │   ├── c.txt
        │   └── c.dll
        ├── a.txt
        ├── b.txt
        ├── app.dll
        ├── app.config
        └── notes.md
    """
    (tmp_path / "other").mkdir()
    (tmp_path / "other" / "e.txt").write_text("e")
    (tmp_path / "sub" / "deep").mkdir(parents=True)
    (tmp_path / "sub" / "deep" / "d.txt").write_text("d")
    (tmp_path / "sub" / "c.txt").write_text("c")
    (tmp_path / "sub" / "c.dll").write_bytes(b"\x00")
    (tmp_path / "b.txt").write_text("b")
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "app.dll").write_bytes(b"\x00")
    (tmp_path / "app.config").write_text("<configuration />")
    (tmp_path / "notes.md").write_text("notes")
    return tmp_path


class FakeEnumerator:
    """Enumerator answering from a fixed pattern table and recording calls."""

    def __init__(self, table: dict[str, list[str]] | None = None) -> None:
        self.table: dict[str, list[str]] = dict(table or {})
        self.calls: list[str] = []

    def get_all_files_matching(self, pattern: str) -> list[str]:
        self.calls.append(pattern)
        return list(self.table.get(pattern, []))


@pytest.fixture
def fake_enumerator() -> FakeEnumerator:
    return FakeEnumerator()


@pytest.fixture
def fake_matcher(fake_enumerator: FakeEnumerator) -> PathMatcher:
    return PathMatcher(fake_enumerator)
