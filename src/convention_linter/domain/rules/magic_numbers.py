"""Magic Number Rule - numeric literals used directly in logic."""

from convention_linter.domain.constants import (
    CANONICAL_NUMBERS,
    DEFAULT_MAX_ATTEMPTS_STYLE_THRESHOLD,
    RETRY_NAME_FRAGMENTS,
    RULE_MAGIC_NUMBER,
)
from convention_linter.domain.entities import LiteralUse, Severity, SourceUnit
from convention_linter.domain.rules import Violation

_CONTEXT_LABELS: dict[str, str] = {
    "comparison": "a comparison",
    "arithmetic": "an arithmetic expression",
    "default": "a default parameter value",
}


class MagicNumberRule:
    """
    Numeric literals in comparisons, arithmetic or parameter defaults must be
    bound to a named constant.

    0, 1 and -1 are always exempt, as is anything inside a constant's own
    definition. A comparison against a retry-like counter (``attempts > 3``)
    only counts literals at or above ``max_attempts_style_threshold``.
    """

    rule_id: str = RULE_MAGIC_NUMBER
    description: str = "Numeric literals in logic must be bound to a named UPPER_SNAKE_CASE constant."
    default_severity: Severity = Severity.ERROR

    def __init__(
        self,
        allowed_numbers: frozenset[int | float] = frozenset(),
        max_attempts_style_threshold: int = DEFAULT_MAX_ATTEMPTS_STYLE_THRESHOLD,
    ) -> None:
        self.allowed_numbers = CANONICAL_NUMBERS | allowed_numbers
        self.max_attempts_style_threshold = max_attempts_style_threshold

    def check(self, unit: SourceUnit) -> list[Violation]:
        violations: list[Violation] = []
        for literal in unit.facts.literals:
            if not self.is_candidate(literal):
                continue
            violations.append(
                Violation(
                    rule_id=self.rule_id,
                    severity=self.default_severity,
                    file_path=unit.path,
                    line=literal.line,
                    column=literal.column,
                    message=self._message(literal),
                    symbol_name=literal.enclosing_symbol,
                )
            )
        return violations

    def is_candidate(self, literal: LiteralUse) -> bool:
        """True when the literal is an undeclared magic number."""
        if literal.kind != "numeric" or literal.is_named_constant:
            return False
        if literal.context not in _CONTEXT_LABELS:
            return False
        if literal.value in self.allowed_numbers:
            return False
        if self._is_retry_comparison(literal):
            return abs(literal.value) >= self.max_attempts_style_threshold
        return True

    def _message(self, literal: LiteralUse) -> str:
        where = _CONTEXT_LABELS[literal.context]
        if self._is_retry_comparison(literal):
            return (
                f"Magic number {literal.value!r} compared with retry counter "
                f"'{literal.compared_name}' in {literal.enclosing_symbol}; "
                "bind it to a constant such as MAX_ATTEMPTS"
            )
        if literal.compared_name:
            where = f"{where} with '{literal.compared_name}'"
        return (
            f"Magic number {literal.value!r} used in {where} in "
            f"{literal.enclosing_symbol}; bind it to a named constant"
        )

    @staticmethod
    def _is_retry_comparison(literal: LiteralUse) -> bool:
        if literal.context != "comparison" or not literal.compared_name:
            return False
        lowered = literal.compared_name.lower()
        return any(fragment in lowered for fragment in RETRY_NAME_FRAGMENTS)
