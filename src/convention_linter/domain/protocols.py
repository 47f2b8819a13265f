from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    import astroid

    from convention_linter.domain.entities import ProjectTree, Report


class AstroidProtocol(Protocol):
    def parse_source(self, text: str, path: str) -> "astroid.nodes.Module":
        """Parse source text; raise ParseError on failure."""
        ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        ...

    def is_directory(self, path: str) -> bool:
        """Check if path is a directory."""
        ...

    def is_readable(self, path: str) -> bool:
        """Check if path can be listed or read by this process."""
        ...

    def join_path(self, *paths: str) -> str:
        """Join path components into a single path string."""
        ...

    def read_source(self, path: str) -> str:
        """Read a Python source file; raise ParseError when unreadable or undecodable."""
        ...

    def list_python_files(self, root: str, excluded_dirs: frozenset[str]) -> list[str]:
        """Sorted posix paths, relative to root, of every .py file below it."""
        ...

    def snapshot_tree(
        self, root: str, excluded_dirs: frozenset[str] = frozenset()
    ) -> "ProjectTree":
        """One-shot snapshot of the directories under root."""
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        ...


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def debug(self, message: str) -> None: ...
    def handshake(self) -> None: ...
    def set_quiet(self, quiet: bool) -> None: ...


class ReportRendererProtocol(Protocol):
    """Turns a finished Report into the text written to stdout or --output."""

    def render(self, report: "Report") -> str: ...
