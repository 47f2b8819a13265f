"""Naming rules: snake_case identifiers, verb-prefixed functions, generic variable names."""

from convention_linter.domain.constants import (
    DEFAULT_GENERIC_NAME_MAX_STATEMENTS,
    DEFAULT_GENERIC_NAMES,
    RULE_GENERIC_NAME,
    RULE_SNAKE_CASE,
    RULE_VERB_PREFIX,
)
from convention_linter.domain.entities import ScopeKind, Severity, SourceUnit
from convention_linter.domain.names import NameShape
from convention_linter.domain.rules import Violation


class SnakeCaseRule:
    """
    Functions, methods, parameters and variables must be snake_case.

    UPPER_SNAKE_CASE is accepted for variables (constants). Dunder names,
    receiver parameters and module-level type aliases are exempt.
    """

    rule_id: str = RULE_SNAKE_CASE
    description: str = "Function, method, parameter and variable names must be snake_case."
    default_severity: Severity = Severity.WARNING

    def check(self, unit: SourceUnit) -> list[Violation]:
        violations: list[Violation] = []
        for function in unit.facts.functions:
            kind = "Method" if function.is_method else "Function"
            if not function.is_dunder and not NameShape.is_snake_case(function.name):
                violations.append(
                    self._violation(
                        unit,
                        function.line,
                        function.column,
                        function.name,
                        f"{kind} name '{function.name}' is not snake_case",
                    )
                )
            for parameter in function.parameters:
                if parameter.is_receiver or NameShape.is_snake_case(parameter.name):
                    continue
                violations.append(
                    self._violation(
                        unit,
                        parameter.line,
                        parameter.column,
                        parameter.name,
                        f"Parameter '{parameter.name}' of '{function.qualified_name}' is not snake_case",
                    )
                )
        for variable in unit.facts.variables:
            if variable.is_dunder or variable.is_type_alias or variable.is_constant:
                continue
            if NameShape.is_snake_case(variable.name):
                continue
            violations.append(
                self._violation(
                    unit,
                    variable.line,
                    variable.column,
                    variable.name,
                    f"Variable name '{variable.name}' is not snake_case "
                    "(use UPPER_SNAKE_CASE only for constants)",
                )
            )
        return violations

    def _violation(
        self, unit: SourceUnit, line: int, column: int, name: str, message: str
    ) -> Violation:
        return Violation(
            rule_id=self.rule_id,
            severity=self.default_severity,
            file_path=unit.path,
            line=line,
            column=column,
            message=message,
            symbol_name=name,
        )


class VerbPrefixRule:
    """
    Function and method names must start with a verb from the lexicon.

    Names the lexicon cannot judge (properties, dunders, empty lexicon) are
    skipped. Underscore-prefixed helpers are reported one severity lower.
    """

    rule_id: str = RULE_VERB_PREFIX
    description: str = "Function and method names should start with a verb (get_, create_, process_, ...)."
    default_severity: Severity = Severity.WARNING

    def check(self, unit: SourceUnit) -> list[Violation]:
        violations: list[Violation] = []
        for function in unit.facts.functions:
            if function.starts_with_verb is not False:
                continue
            token = NameShape.first_token(function.name)
            violations.append(
                Violation(
                    rule_id=self.rule_id,
                    severity=self.default_severity,
                    file_path=unit.path,
                    line=function.line,
                    column=function.column,
                    message=(
                        f"Name '{function.name}' should start with a verb; "
                        f"'{token}' is not in the verb lexicon"
                    ),
                    symbol_name=function.name,
                    demoted=NameShape.is_private(function.name),
                )
            )
        return violations


class GenericNameRule:
    """Banned generic variable names in scopes larger than a few statements."""

    rule_id: str = RULE_GENERIC_NAME
    description: str = "Avoid generic variable names (data, info, tmp, ...) outside tiny scopes."
    default_severity: Severity = Severity.WARNING

    def __init__(
        self,
        banned_names: frozenset[str] = DEFAULT_GENERIC_NAMES,
        max_statements: int = DEFAULT_GENERIC_NAME_MAX_STATEMENTS,
    ) -> None:
        self.banned_names = banned_names
        self.max_statements = max_statements

    def check(self, unit: SourceUnit) -> list[Violation]:
        violations: list[Violation] = []
        reported: set[tuple[str, str]] = set()
        for variable in unit.facts.variables:
            if variable.name not in self.banned_names:
                continue
            if variable.scope is ScopeKind.COMPREHENSION:
                continue
            if variable.scope_statement_count <= self.max_statements:
                continue
            key = (variable.scope_name, variable.name)
            if key in reported:
                continue
            reported.add(key)
            violations.append(
                Violation(
                    rule_id=self.rule_id,
                    severity=self.default_severity,
                    file_path=unit.path,
                    line=variable.line,
                    column=variable.column,
                    message=(
                        f"Generic variable name '{variable.name}' in {variable.scope_name} "
                        f"({variable.scope_statement_count} statements); use a descriptive name"
                    ),
                    symbol_name=variable.name,
                )
            )
        return violations
