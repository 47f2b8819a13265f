"""Report renderers (text, JSON) and the rule catalog table."""

import json
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from convention_linter.domain.protocols import ReportRendererProtocol
from convention_linter.domain.rules.catalog import RULE_SPECS

if TYPE_CHECKING:
    from convention_linter.domain.config import ConfigurationLoader
    from convention_linter.domain.entities import Report


class TextReportRenderer(ReportRendererProtocol):
    """One ``path:line: [severity] rule_id: message`` line per violation, then the totals."""

    def render(self, report: "Report") -> str:
        lines = [
            f"{v.file_path}:{v.line}: [{v.severity.value}] {v.rule_id}: {v.message}"
            for v in report.violations
        ]
        summary = report.summary
        lines.append(f"{summary.errors} errors, {summary.warnings} warnings")
        return "\n".join(lines) + "\n"


class JsonReportRenderer(ReportRendererProtocol):
    """Structured report; key order is fixed so identical runs are byte-identical."""

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def render(self, report: "Report") -> str:
        return json.dumps(report.to_dict(), indent=self.indent) + "\n"


class RuleTableReporter:
    """Rich table of every rule with its effective state under a configuration."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def build_table(self, config: "ConfigurationLoader") -> Table:
        table = Table(title="Convention Rules", header_style="bold #007BFF")
        table.add_column("Rule", style="#00EEFF", no_wrap=True)
        table.add_column("Enabled")
        table.add_column("Severity")
        table.add_column("Pylint")
        table.add_column("Description")
        for spec in RULE_SPECS:
            enabled = config.is_rule_enabled(spec.rule_id)
            severity = config.get_severity(spec.rule_id) or spec.default_severity
            table.add_row(
                spec.rule_id,
                "yes" if enabled else "[dim]no[/dim]",
                severity.value,
                f"{spec.pylint_msgid} {spec.pylint_symbol}" if spec.pylint_msgid else "-",
                spec.description,
            )
        return table

    def report_rules(self, config: "ConfigurationLoader") -> None:
        """Print the rule table."""
        self.console.print(self.build_table(config))


class RendererFactory:
    """Maps the --format option to a renderer."""

    FORMATS: tuple[str, ...] = ("text", "json")

    @staticmethod
    def create_renderer(output_format: str) -> ReportRendererProtocol:
        if output_format == "json":
            return JsonReportRenderer()
        if output_format == "text":
            return TextReportRenderer()
        raise ValueError(
            f"Unknown output format '{output_format}' "
            f"(expected one of: {', '.join(RendererFactory.FORMATS)})"
        )
