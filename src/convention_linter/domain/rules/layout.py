"""Project layout rules, evaluated once per run over the directory snapshot."""

from convention_linter.domain.constants import DEFAULT_REQUIRED_DIRS, RULE_REQUIRED_DIR
from convention_linter.domain.entities import ProjectTree, Severity
from convention_linter.domain.rules import Violation


class RequiredDirectoryRule:
    """Project root must contain every configured directory."""

    rule_id: str = RULE_REQUIRED_DIR
    description: str = "Project root must contain the required directories (apps/, utils/, tests/, docs/)."
    default_severity: Severity = Severity.ERROR

    def __init__(self, required_dirs: tuple[str, ...] = DEFAULT_REQUIRED_DIRS) -> None:
        self.required_dirs = required_dirs

    def check_project(self, tree: ProjectTree) -> list[Violation]:
        violations: list[Violation] = []
        for directory in self.required_dirs:
            name = directory.strip("/")
            if tree.has_directory(name):
                continue
            violations.append(
                Violation(
                    rule_id=self.rule_id,
                    severity=self.default_severity,
                    file_path=name,
                    line=0,
                    message=f"Required directory '{name}/' is missing from the project root",
                    symbol_name=name,
                )
            )
        return violations
