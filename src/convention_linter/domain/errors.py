"""Error taxonomy for a checker run."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from convention_linter.domain.rules import Violation


class ConventionLinterError(Exception):
    """Base class for every error the checker raises."""


class ParseError(ConventionLinterError):
    """One file could not be read or parsed. Isolated: becomes a single report entry."""

    def __init__(self, file: str, line: int, message: str) -> None:
        super().__init__(f"{file}:{line}: {message}")
        self.file = file
        self.line = line
        self.message = message


class ConfigError(ConventionLinterError):
    """Fatal: configuration is malformed or names unknown rules."""

    def __init__(
        self, message: str, violations: tuple[Violation, ...] = ()
    ) -> None:
        super().__init__(message)
        self.message = message
        self.violations = violations


class RootPathError(ConventionLinterError):
    """Fatal: the project root is missing or unreadable."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot analyze '{path}': {reason}")
        self.path = path
        self.reason = reason


class AnalysisAborted(ConventionLinterError):
    """The run was cancelled; no partial report may be emitted."""
