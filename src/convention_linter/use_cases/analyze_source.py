"""Analyze Source Use Case - read, parse, classify and evaluate one file."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from convention_linter.domain.constants import RULE_PARSE_ERROR, SUPPRESS_ALL
from convention_linter.domain.entities import FileResult, Severity, SourceUnit
from convention_linter.domain.errors import ParseError
from convention_linter.domain.rules import FileRule, Violation
from convention_linter.domain.services.symbol_classifier import SymbolClassifier

if TYPE_CHECKING:
    import astroid

    from convention_linter.domain.protocols import AstroidProtocol, FileSystemProtocol

logger: logging.Logger = logging.getLogger(__name__)


class SourceAnalyzer:
    """
    Parser -> Classifier -> file rules, for one file at a time.

    Holds only immutable collaborators, so a bound ``analyze_path`` can be
    submitted to a process pool. Each call owns its SourceUnit and returns
    an immutable FileResult; nothing is shared between files.
    """

    def __init__(
        self,
        parser: AstroidProtocol,
        filesystem: FileSystemProtocol,
        classifier: SymbolClassifier,
        rules: tuple[FileRule, ...],
        root: str,
    ) -> None:
        self.parser = parser
        self.filesystem = filesystem
        self.classifier = classifier
        self.rules = rules
        self.root = root

    def analyze_path(self, relative_path: str) -> FileResult:
        """Analyze one file under root. A read or parse failure yields one parse.error."""
        try:
            text = self.filesystem.read_source(self.filesystem.join_path(self.root, relative_path))
        except ParseError as exc:
            return self.create_parse_failure(relative_path, exc)
        return self.analyze_text(text, relative_path)

    def analyze_text(self, text: str, relative_path: str) -> FileResult:
        try:
            tree = self.parser.parse_source(text, relative_path)
        except ParseError as exc:
            return self.create_parse_failure(relative_path, exc)
        try:
            violations = self.evaluate_tree(tree, text, relative_path)
        except Exception as exc:
            return self.create_internal_failure(relative_path, exc)
        return FileResult(path=relative_path, violations=tuple(violations))

    def evaluate_tree(
        self, tree: astroid.nodes.Module, text: str, relative_path: str
    ) -> list[Violation]:
        """Run every configured rule over an already-parsed tree, honouring suppressions."""
        unit = SourceUnit(
            path=relative_path,
            text=text,
            tree=tree,
            facts=self.classifier.classify(tree, text),
        )
        violations: list[Violation] = []
        for rule in self.rules:
            violations.extend(rule.check(unit))
        suppressions = unit.facts.suppressions
        if not suppressions:
            return violations
        return [v for v in violations if not self._is_suppressed(v, suppressions)]

    @staticmethod
    def create_parse_failure(relative_path: str, error: ParseError) -> FileResult:
        logger.debug("Parse failure in %s: %s", relative_path, error.message)
        return FileResult(
            path=relative_path,
            violations=(
                Violation(
                    rule_id=RULE_PARSE_ERROR,
                    severity=Severity.ERROR,
                    file_path=relative_path,
                    line=error.line,
                    message=error.message,
                ),
            ),
            parsed=False,
        )

    @staticmethod
    def create_internal_failure(relative_path: str, error: BaseException) -> FileResult:
        """An unexpected failure while analysing one file; reported like a parse failure."""
        logger.warning("Analysis failed for %s: %s: %s", relative_path, type(error).__name__, error)
        return SourceAnalyzer.create_parse_failure(
            relative_path,
            ParseError(relative_path, 0, f"internal error: {type(error).__name__}: {error}"),
        )

    @staticmethod
    def _is_suppressed(violation: Violation, suppressions: dict[int, frozenset[str]]) -> bool:
        disabled = suppressions.get(violation.line)
        if not disabled:
            return False
        return SUPPRESS_ALL in disabled or violation.rule_id in disabled
