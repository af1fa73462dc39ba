"""Tests for the discovery engine."""

import logging
import os
from pathlib import Path

import pytest

from substring_counter.discovery.engine import discover_files


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.txt").write_text("b")
    (tmp_path / "sub" / "deeper").mkdir()
    (tmp_path / "sub" / "deeper" / "c.bin").write_bytes(b"c")
    (tmp_path / "empty").mkdir()
    return tmp_path


class TestDiscoverFiles:
    """Test cases for discover_files."""

    def test_finds_files_recursively(self, tree: Path) -> None:
        found = {p.relative_to(tree).as_posix() for p in discover_files(tree)}
        assert found == {"a.txt", "sub/b.txt", "sub/deeper/c.bin"}

    def test_is_lazy(self, tree: Path) -> None:
        result = discover_files(tree)
        assert hasattr(result, "__next__")

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert list(discover_files(tmp_path)) == []

    def test_skips_symlinks_by_default(self, tree: Path) -> None:
        os.symlink(tree / "a.txt", tree / "link.txt")
        os.symlink(tree / "missing.txt", tree / "broken.txt")
        found = {p.name for p in discover_files(tree)}
        assert "link.txt" not in found
        assert "broken.txt" not in found
        assert "a.txt" in found

    def test_follow_links_includes_linked_files(self, tree: Path) -> None:
        os.symlink(tree / "a.txt", tree / "link.txt")
        os.symlink(tree / "missing.txt", tree / "broken.txt")
        found = {p.name for p in discover_files(tree, follow_links=True)}
        assert "link.txt" in found
        assert "broken.txt" not in found

    def test_walk_errors_are_logged_and_skipped(self, tmp_path: Path, caplog) -> None:
        missing = tmp_path / "does-not-exist"
        logger = logging.getLogger("test.discovery")
        with caplog.at_level(logging.ERROR, logger="test.discovery"):
            assert list(discover_files(missing, logger=logger)) == []
        assert any(str(missing) in record.getMessage() for record in caplog.records)
