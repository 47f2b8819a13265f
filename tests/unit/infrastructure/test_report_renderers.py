"""Tests for text/JSON report renderers and the rule table."""

import json

import pytest
from rich.console import Console

from convention_linter.domain.config import ConfigurationLoader
from convention_linter.domain.entities import Report, Severity
from convention_linter.domain.rules import Violation
from convention_linter.infrastructure.reporters import (
    JsonReportRenderer,
    RendererFactory,
    RuleTableReporter,
    TextReportRenderer,
)


@pytest.fixture
def report() -> Report:
    return Report(
        violations=(
            Violation(
                "magic-number.undeclared",
                Severity.ERROR,
                "app/models.py",
                12,
                "Magic number 3 used in a comparison with 'x' in Update; bind it to a named constant",
                column=15,
            ),
            Violation(
                "naming.snake_case",
                Severity.WARNING,
                "app/models.py",
                12,
                "Function name 'Update' is not snake_case",
                column=0,
            ),
        ),
        files_analyzed=1,
    )


class TestTextReportRenderer:
    def test_line_format_and_summary(self, report: Report) -> None:
        rendered = TextReportRenderer().render(report)
        assert rendered.splitlines() == [
            "app/models.py:12: [error] magic-number.undeclared: "
            "Magic number 3 used in a comparison with 'x' in Update; bind it to a named constant",
            "app/models.py:12: [warning] naming.snake_case: Function name 'Update' is not snake_case",
            "1 errors, 1 warnings",
        ]

    def test_empty_report(self) -> None:
        assert TextReportRenderer().render(Report()) == "0 errors, 0 warnings\n"


class TestJsonReportRenderer:
    def test_structure_and_key_order(self, report: Report) -> None:
        rendered = JsonReportRenderer().render(report)
        payload = json.loads(rendered)
        assert list(payload) == ["violations", "summary"]
        assert payload["summary"] == {"errors": 1, "warnings": 1, "exit_code": 1}
        assert payload["violations"][0] == {
            "file": "app/models.py",
            "line": 12,
            "column": 15,
            "severity": "error",
            "rule_id": "magic-number.undeclared",
            "message": "Magic number 3 used in a comparison with 'x' in Update; bind it to a named constant",
        }

    def test_byte_identical_for_equal_reports(self, report: Report) -> None:
        renderer = JsonReportRenderer()
        assert renderer.render(report) == renderer.render(Report(report.violations, 1))


class TestRendererFactory:
    def test_known_formats(self) -> None:
        assert isinstance(RendererFactory.create_renderer("text"), TextReportRenderer)
        assert isinstance(RendererFactory.create_renderer("json"), JsonReportRenderer)

    def test_unknown_format(self) -> None:
        with pytest.raises(ValueError, match="Unknown output format"):
            RendererFactory.create_renderer("xml")


class TestRuleTableReporter:
    def test_table_lists_every_rule_with_effective_state(self) -> None:
        console = Console(record=True, width=200)
        config = ConfigurationLoader(
            {"rules": {"naming.verb_prefix": {"enabled": False, "severity": "info"}}}
        )
        RuleTableReporter(console=console).report_rules(config)
        output = console.export_text()
        assert "naming.verb_prefix" in output
        assert "layout.required-dir" in output
        assert "C9104" in output
        verb_row = next(line for line in output.splitlines() if "naming.verb_prefix" in line)
        assert "no" in verb_row
        assert "info" in verb_row
