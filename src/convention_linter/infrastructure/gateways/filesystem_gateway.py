"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

import logging
import os
import tokenize
from pathlib import Path

from convention_linter.domain.entities import ProjectTree
from convention_linter.domain.errors import ParseError
from convention_linter.domain.protocols import FileSystemProtocol

logger: logging.Logger = logging.getLogger(__name__)


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        return str(Path(path).resolve())

    def is_directory(self, path: str) -> bool:
        """Check if path is a directory."""
        return Path(path).is_dir()

    def is_readable(self, path: str) -> bool:
        """Check if path can be listed or read by this process."""
        return os.access(path, os.R_OK | (os.X_OK if Path(path).is_dir() else 0))

    def join_path(self, *paths: str) -> str:
        """Join path components into a single path string."""
        return str(Path(*paths))

    def read_source(self, path: str) -> str:
        """Read a Python source file, honouring a BOM or PEP 263 coding cookie.

        Unreadable or undecodable files raise ParseError.
        """
        try:
            with tokenize.open(path) as f:
                return f.read()
        except SyntaxError as exc:
            raise ParseError(path, 0, f"cannot decode source: {exc.msg}") from exc
        except UnicodeDecodeError as exc:
            raise ParseError(path, 0, f"cannot decode source: {exc.reason}") from exc
        except OSError as exc:
            raise ParseError(path, 0, f"cannot read file: {exc.strerror or exc}") from exc

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        Path(path).write_text(content, encoding=encoding)

    def list_python_files(self, root: str, excluded_dirs: frozenset[str]) -> list[str]:
        """Sorted posix paths, relative to root, of every .py file below it."""
        root_path = Path(root)
        found: list[str] = []
        for dirpath, dirnames, filenames in os.walk(root_path, onerror=self._log_walk_error):
            dirnames[:] = sorted(d for d in dirnames if d not in excluded_dirs)
            relative_dir = Path(dirpath).relative_to(root_path)
            for filename in filenames:
                if filename.endswith(".py"):
                    found.append((relative_dir / filename).as_posix())
        return sorted(found)

    def snapshot_tree(self, root: str, excluded_dirs: frozenset[str] = frozenset()) -> ProjectTree:
        """One-shot snapshot of every directory below root.

        Excluded names are recorded but not descended into.
        """
        root_path = Path(root)
        directories: set[str] = set()
        for dirpath, dirnames, _ in os.walk(root_path, onerror=self._log_walk_error):
            relative_dir = Path(dirpath).relative_to(root_path)
            for dirname in dirnames:
                directories.add((relative_dir / dirname).as_posix())
            dirnames[:] = [d for d in dirnames if d not in excluded_dirs]
        return ProjectTree(root=str(root_path), directories=frozenset(directories))

    @staticmethod
    def _log_walk_error(error: OSError) -> None:
        logger.warning("Skipping unreadable path %s: %s", error.filename, error.strerror)
