"""Type Hint Rules - absence of annotations on the public surface."""

from convention_linter.domain.constants import RULE_MISSING_HINT
from convention_linter.domain.entities import (
    FunctionSymbol,
    ScopeKind,
    Severity,
    SourceUnit,
    VariableSymbol,
)
from convention_linter.domain.rules import Violation


class MissingTypeHintRule:
    """
    Rule for missing parameter, return and variable annotations.

    Only absence is detected; annotation correctness is not inferred.
    One violation per function lists every gap in its signature.
    """

    rule_id: str = RULE_MISSING_HINT
    description: str = "Public functions and module/class variables must carry type annotations."
    default_severity: Severity = Severity.WARNING

    def __init__(self, public_only: bool = True) -> None:
        self.public_only = public_only

    def check(self, unit: SourceUnit) -> list[Violation]:
        violations: list[Violation] = []
        for function in unit.facts.functions:
            violation = self._check_function(unit.path, function)
            if violation is not None:
                violations.append(violation)
        violations.extend(self._check_variables(unit.path, unit.facts.variables))
        return violations

    def _check_function(self, path: str, function: FunctionSymbol) -> Violation | None:
        if self.public_only and not function.is_public:
            return None
        gaps = [f"parameter '{p.name}'" for p in function.unannotated_parameters]
        if function.return_annotation is None:
            gaps.append("return type")
        if not gaps:
            return None
        return Violation(
            rule_id=self.rule_id,
            severity=self.default_severity,
            file_path=path,
            line=function.line,
            column=function.column,
            message=f"Missing type hints in '{function.qualified_name}': {', '.join(gaps)}",
            symbol_name=function.name,
        )

    def _check_variables(
        self, path: str, variables: tuple[VariableSymbol, ...]
    ) -> list[Violation]:
        # A name annotated anywhere in its scope counts as declared.
        declared = {
            (v.scope_name, v.name)
            for v in variables
            if v.binding == "annotated"
        }
        reported: set[tuple[str, str]] = set()
        violations: list[Violation] = []
        for variable in variables:
            if variable.scope not in (ScopeKind.MODULE, ScopeKind.CLASS):
                continue
            if variable.binding != "assign":
                continue
            if variable.is_dunder or variable.is_type_alias:
                continue
            if self.public_only and not variable.is_public:
                continue
            key = (variable.scope_name, variable.name)
            if key in declared or key in reported:
                continue
            reported.add(key)
            violations.append(
                Violation(
                    rule_id=self.rule_id,
                    severity=self.default_severity,
                    file_path=path,
                    line=variable.line,
                    column=variable.column,
                    message=(
                        f"Missing type annotation for {variable.scope.value} "
                        f"variable '{variable.name}'"
                    ),
                    symbol_name=variable.name,
                )
            )
        return violations
