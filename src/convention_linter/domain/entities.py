"""Domain entities: severities, classified facts, analysis units and reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal

import astroid

from convention_linter.domain.names import NameShape

if TYPE_CHECKING:
    from convention_linter.domain.rules import Violation


class Severity(str, Enum):
    """Severity of a reported violation."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    def lowered(self) -> Severity:
        """Return the next lower severity; INFO is the floor."""
        if self is Severity.ERROR:
            return Severity.WARNING
        return Severity.INFO


class ScopeKind(str, Enum):
    """Kind of scope a variable is bound in."""

    MODULE = "module"
    CLASS = "class"
    FUNCTION = "function"
    COMPREHENSION = "comprehension"


LiteralKind = Literal["numeric", "string"]
LiteralContext = Literal["comparison", "arithmetic", "default", "other"]
BindingKind = Literal["assign", "annotated", "unpack", "loop", "with", "walrus"]


@dataclass(frozen=True)
class ParameterFact:
    """One parameter of a function signature."""

    name: str
    annotated: bool
    is_receiver: bool
    line: int
    column: int


@dataclass(frozen=True)
class FunctionSymbol:
    """A function or method definition."""

    name: str
    qualified_name: str
    is_method: bool
    parameters: tuple[ParameterFact, ...]
    return_annotation: str | None
    starts_with_verb: bool | None
    """None when the verb lexicon cannot judge the name (fail open)."""
    is_public: bool
    is_nested: bool
    is_property: bool
    line: int
    column: int

    @property
    def is_dunder(self) -> bool:
        return NameShape.is_dunder(self.name)

    @property
    def unannotated_parameters(self) -> tuple[ParameterFact, ...]:
        return tuple(
            p for p in self.parameters if not p.annotated and not p.is_receiver
        )


@dataclass(frozen=True)
class VariableSymbol:
    """A name bound by an assignment."""

    name: str
    is_constant: bool
    declared_type: str | None
    scope: ScopeKind
    scope_name: str
    scope_statement_count: int
    is_type_alias: bool
    binding: BindingKind
    is_public: bool
    line: int
    column: int

    @property
    def is_unpacked(self) -> bool:
        return self.binding == "unpack"

    @property
    def is_dunder(self) -> bool:
        return NameShape.is_dunder(self.name)


@dataclass(frozen=True)
class LiteralUse:
    """A literal together with its syntactic context."""

    value: Any
    kind: LiteralKind
    enclosing_symbol: str
    is_named_constant: bool
    context: LiteralContext
    compared_name: str | None
    line: int
    column: int


@dataclass(frozen=True)
class SourceFacts:
    """Everything the classifier extracted from one tree."""

    functions: tuple[FunctionSymbol, ...] = ()
    variables: tuple[VariableSymbol, ...] = ()
    literals: tuple[LiteralUse, ...] = ()
    suppressions: dict[int, frozenset[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class SourceUnit:
    """One parsed and classified file. Owned by the worker analysing it."""

    path: str
    text: str
    tree: astroid.nodes.Module
    facts: SourceFacts


@dataclass(frozen=True)
class ProjectTree:
    """Snapshot of the relative directory paths present under a project root."""

    root: str
    directories: frozenset[str]

    def has_directory(self, relative_path: str) -> bool:
        return relative_path.strip("/") in self.directories


@dataclass(frozen=True)
class FileResult:
    """Violations produced for one file by one worker."""

    path: str
    violations: tuple[Violation, ...]
    parsed: bool = True


@dataclass(frozen=True)
class ReportSummary:
    """Counts by severity plus the run's exit code."""

    errors: int
    warnings: int
    infos: int
    exit_code: int

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for serialization."""
        return {
            "errors": self.errors,
            "warnings": self.warnings,
            "exit_code": self.exit_code,
        }


@dataclass(frozen=True)
class Report:
    """Ordered violations for a whole run."""

    violations: tuple[Violation, ...] = ()
    files_analyzed: int = 0

    @property
    def summary(self) -> ReportSummary:
        errors = sum(1 for v in self.violations if v.severity is Severity.ERROR)
        warnings = sum(1 for v in self.violations if v.severity is Severity.WARNING)
        infos = sum(1 for v in self.violations if v.severity is Severity.INFO)
        return ReportSummary(
            errors=errors,
            warnings=warnings,
            infos=infos,
            exit_code=1 if errors else 0,
        )

    @property
    def exit_code(self) -> int:
        return self.summary.exit_code

    def has_errors(self) -> bool:
        """Check if any error-severity violation was reported."""
        return self.summary.errors > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for the structured report."""
        return {
            "violations": [v.to_dict() for v in self.violations],
            "summary": self.summary.to_dict(),
        }
