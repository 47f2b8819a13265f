"""Domain models for rules and violations."""

from dataclasses import dataclass, replace

__all__ = [
    "FileRule",
    "ProjectRule",
    "Violation",
]

from typing import Any, Protocol

from convention_linter.domain.entities import ProjectTree, Severity, SourceUnit


@dataclass(frozen=True)
class Violation:
    """A single reported deviation from a configured rule."""

    rule_id: str
    severity: Severity
    file_path: str
    line: int
    message: str
    column: int | None = None
    symbol_name: str | None = None
    demoted: bool = False
    """Private-helper finding; reported one level below the rule's effective severity."""

    @property
    def location(self) -> str:
        """path:line[:column], as printed by editors."""
        if self.column is None:
            return f"{self.file_path}:{self.line}"
        return f"{self.file_path}:{self.line}:{self.column}"

    def sort_key(self) -> tuple[str, int, str, int, str, str]:
        """File path, then line, then rule id; column and message break remaining ties."""
        return (
            self.file_path,
            self.line,
            self.rule_id,
            -1 if self.column is None else self.column,
            self.message,
            self.symbol_name or "",
        )

    def with_severity(self, severity: Severity) -> "Violation":
        return replace(self, severity=severity, demoted=False)

    def to_dict(self) -> dict[str, Any]:
        """Structured record with stable field names."""
        return {
            "file": self.file_path,
            "line": self.line,
            "column": self.column,
            "severity": self.severity.value,
            "rule_id": self.rule_id,
            "message": self.message,
        }


# -----------------------------------------------------------------------------
# Rule protocols. A rule is a stateless object holding only its settings; it
# never sees another rule's output, so any subset can be enabled.
# -----------------------------------------------------------------------------


class FileRule(Protocol):
    """Evaluated once per SourceUnit."""

    rule_id: str
    description: str
    default_severity: Severity

    def check(self, unit: SourceUnit) -> list[Violation]:
        """Return every violation of this rule in one file."""
        ...


class ProjectRule(Protocol):
    """Evaluated once per run over the directory snapshot."""

    rule_id: str
    description: str
    default_severity: Severity

    def check_project(self, tree: ProjectTree) -> list[Violation]:
        """Return every violation of this rule for the project tree."""
        ...
