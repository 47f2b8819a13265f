"""Tests for FileSystemGateway discovery, reading and snapshots."""

from pathlib import Path

import pytest

from convention_linter.domain.constants import DEFAULT_EXCLUDED_DIRS
from convention_linter.domain.errors import ParseError
from convention_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway


class TestFileSystemGateway:
    def test_list_python_files_sorted_relative_posix(self, tmp_path: Path) -> None:
        (tmp_path / "pkg" / "sub").mkdir(parents=True)
        (tmp_path / "pkg" / "b.py").write_text("")
        (tmp_path / "pkg" / "sub" / "a.py").write_text("")
        (tmp_path / "main.py").write_text("")
        (tmp_path / "notes.txt").write_text("")
        (tmp_path / ".venv" / "lib").mkdir(parents=True)
        (tmp_path / ".venv" / "lib" / "site.py").write_text("")

        files = FileSystemGateway().list_python_files(str(tmp_path), DEFAULT_EXCLUDED_DIRS)

        assert files == ["main.py", "pkg/b.py", "pkg/sub/a.py"]

    def test_snapshot_tree_lists_nested_directories(self, tmp_path: Path) -> None:
        (tmp_path / "apps" / "core").mkdir(parents=True)
        (tmp_path / "docs").mkdir()
        (tmp_path / "__pycache__" / "nested").mkdir(parents=True)

        tree = FileSystemGateway().snapshot_tree(str(tmp_path), DEFAULT_EXCLUDED_DIRS)

        assert tree.directories == frozenset({"apps", "apps/core", "docs", "__pycache__"})
        assert tree.has_directory("apps/core/")

    def test_read_text_missing_file_raises_parse_error(self, tmp_path: Path) -> None:
        with pytest.raises(ParseError, match="cannot read file"):
            FileSystemGateway().read_source(str(tmp_path / "absent.py"))

    def test_read_text_undecodable_raises_parse_error(self, tmp_path: Path) -> None:
        target = tmp_path / "latin.py"
        target.write_bytes(b"name = '\xff\xfe'\n")
        with pytest.raises(ParseError, match="cannot decode"):
            FileSystemGateway().read_source(str(target))

    def test_directory_checks(self, tmp_path: Path) -> None:
        gateway = FileSystemGateway()
        assert gateway.is_directory(str(tmp_path)) is True
        assert gateway.is_readable(str(tmp_path)) is True
        assert gateway.is_directory(str(tmp_path / "missing")) is False

    def test_snapshot_tree_records_excluded_names_without_descending(self, tmp_path: Path) -> None:
        (tmp_path / "build" / "lib").mkdir(parents=True)
        (tmp_path / "venv" / "bin").mkdir(parents=True)

        tree = FileSystemGateway().snapshot_tree(str(tmp_path), DEFAULT_EXCLUDED_DIRS)

        assert tree.has_directory("build")
        assert tree.has_directory("venv")
        assert not tree.has_directory("build/lib")

    def test_read_source_strips_utf8_bom(self, tmp_path: Path) -> None:
        target = tmp_path / "bom.py"
        target.write_bytes(b"\xef\xbb\xbfx = 1\n")
        assert FileSystemGateway().read_source(str(target)) == "x = 1\n"

    def test_read_source_honours_coding_cookie(self, tmp_path: Path) -> None:
        target = tmp_path / "legacy.py"
        target.write_bytes("# -*- coding: latin-1 -*-\nname = 'café'\n".encode("latin-1"))
        assert "café" in FileSystemGateway().read_source(str(target))

    def test_read_source_non_ascii_utf8(self, tmp_path: Path) -> None:
        target = tmp_path / "greeting.py"
        target.write_text("greeting = 'grüß dich'\n", encoding="utf-8")
        assert FileSystemGateway().read_source(str(target)) == "greeting = 'grüß dich'\n"
