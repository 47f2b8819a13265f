"""Tests for domain entities: severities, violations and reports."""

from convention_linter.domain.entities import Report, Severity
from convention_linter.domain.rules import Violation


class TestSeverity:
    def test_lowered(self) -> None:
        assert Severity.ERROR.lowered() is Severity.WARNING
        assert Severity.WARNING.lowered() is Severity.INFO
        assert Severity.INFO.lowered() is Severity.INFO


class TestViolation:
    def test_location_and_dict(self) -> None:
        violation = Violation(
            rule_id="naming.snake_case",
            severity=Severity.WARNING,
            file_path="src/app.py",
            line=4,
            column=8,
            message="Variable name 'userName' is not snake_case",
        )
        assert violation.location == "src/app.py:4:8"
        assert list(violation.to_dict()) == ["file", "line", "column", "severity", "rule_id", "message"]
        assert violation.to_dict()["severity"] == "warning"

    def test_with_severity_clears_demotion(self) -> None:
        violation = Violation("naming.verb_prefix", Severity.WARNING, "a.py", 1, "m", demoted=True)
        lowered = violation.with_severity(Severity.INFO)
        assert lowered.severity is Severity.INFO
        assert lowered.demoted is False
        assert violation.demoted is True


class TestReport:
    def test_exit_code_follows_error_presence(self) -> None:
        warning = Violation("naming.snake_case", Severity.WARNING, "a.py", 1, "m")
        error = Violation("magic-number.undeclared", Severity.ERROR, "a.py", 2, "m")
        assert Report((warning,)).exit_code == 0
        assert Report((warning, error)).exit_code == 1
        assert Report((warning, error)).has_errors() is True

    def test_to_dict_shape(self) -> None:
        report = Report((Violation("layout.required-dir", Severity.ERROR, "tests", 0, "missing"),))
        payload = report.to_dict()
        assert list(payload) == ["violations", "summary"]
        assert payload["summary"] == {"errors": 1, "warnings": 0, "exit_code": 1}
        assert payload["violations"][0]["column"] is None
