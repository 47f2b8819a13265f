"""Project telemetry: user-facing progress on stderr plus a logger."""

import logging

from rich.console import Console
from rich.markup import escape

from convention_linter.domain.protocols import TelemetryPort


class ProjectTelemetry(TelemetryPort):
    """
    Progress and diagnostics for one CLI session.

    Everything goes to stderr so stdout carries only the report.
    """

    def __init__(
        self,
        project_name: str,
        color: str,
        welcome_msg: str,
        quiet: bool = False,
    ) -> None:
        self.project_name = project_name
        self.color = color
        self.welcome_msg = welcome_msg
        self.quiet = quiet
        self.console = Console(stderr=True, highlight=False)
        self.logger: logging.Logger = logging.getLogger(project_name.lower())

    def set_quiet(self, quiet: bool) -> None:
        """Suppress progress steps; warnings and errors still print."""
        self.quiet = quiet

    def handshake(self) -> None:
        self.logger.info("%s: %s", self.project_name, self.welcome_msg)
        if not self.quiet:
            self.console.print(
                f"[bold {self.color}]{self.project_name}[/] {escape(self.welcome_msg)}"
            )

    def step(self, message: str) -> None:
        self.logger.info(message)
        if not self.quiet:
            self.console.print(f"[{self.color}]>[/] {escape(message)}")

    def warning(self, message: str) -> None:
        self.logger.warning(message)
        self.console.print(f"[yellow]warning:[/] {escape(message)}")

    def error(self, message: str) -> None:
        self.logger.error(message)
        self.console.print(f"[bold red]error:[/] {escape(message)}")

    def debug(self, message: str) -> None:
        self.logger.debug(message)
