"""CLI entry points for the convention checker - Thin Controller using Typer."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import typer

from convention_linter.domain.config import ConfigurationLoader
from convention_linter.domain.errors import (
    AnalysisAborted,
    ConfigError,
    ConventionLinterError,
    RootPathError,
)
from convention_linter.domain.protocols import (
    AstroidProtocol,
    FileSystemProtocol,
    TelemetryPort,
)
from convention_linter.infrastructure.reporters import RendererFactory, RuleTableReporter
from convention_linter.use_cases.check_conventions import CheckConventionsUseCase

EXIT_FATAL: int = 2


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    telemetry: TelemetryPort
    astroid_gateway: AstroidProtocol
    filesystem: FileSystemProtocol
    rule_table_reporter: RuleTableReporter
    config_loader_factory: Callable[[Optional[str], str], ConfigurationLoader]


class CLIAppFactory:
    """Creates the Typer app. No top-level functions."""

    @staticmethod
    def configure_logging(verbose: bool) -> None:
        """--verbose switches the root logger to DEBUG."""
        level = logging.DEBUG if verbose else logging.WARNING
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
        logging.getLogger().setLevel(level)

    @staticmethod
    def report_fatal(telemetry: TelemetryPort, exc: ConventionLinterError) -> None:
        """Print a fatal error (and any configuration violations) to stderr."""
        telemetry.error(str(exc))
        if isinstance(exc, ConfigError):
            for violation in exc.violations:
                telemetry.error(
                    f"{violation.file_path}: [{violation.severity.value}] "
                    f"{violation.rule_id}: {violation.message}"
                )

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies. No Service Locator."""
        app = typer.Typer(
            name="conventions",
            help="Check Python sources against naming, magic-number, type-hint and layout conventions.",
            add_completion=False,
        )

        @app.command()
        def check(
            root: Path = typer.Argument(Path("."), help="Project root to analyze"),  # noqa: B008
            config: Optional[Path] = typer.Option(  # noqa: B008
                None, "--config", "-c", help="TOML configuration file"
            ),
            output_format: str = typer.Option(
                "text", "--format", "-f", help="Report format: text or json"
            ),
            jobs: Optional[int] = typer.Option(
                None, "--jobs", "-j", min=1, help="Worker processes (default: CPU count)"
            ),
            output: Optional[Path] = typer.Option(  # noqa: B008
                None, "--output", "-o", help="Write the report to a file instead of stdout"
            ),
            quiet: bool = typer.Option(False, "--quiet", "-q", help="Hide progress output"),
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
        ) -> None:
            """Analyze a project and report convention violations. Exit 1 on any error."""
            CLIAppFactory.configure_logging(verbose)
            deps.telemetry.set_quiet(quiet)
            deps.telemetry.handshake()
            try:
                renderer = RendererFactory.create_renderer(output_format)
            except ValueError as exc:
                deps.telemetry.error(str(exc))
                raise typer.Exit(code=EXIT_FATAL) from exc
            try:
                config_loader = deps.config_loader_factory(
                    str(config) if config else None, str(root)
                )
                use_case = CheckConventionsUseCase(
                    filesystem=deps.filesystem,
                    parser=deps.astroid_gateway,
                    config_loader=config_loader,
                    telemetry=deps.telemetry,
                    jobs=jobs,
                )
                report = use_case.execute(str(root))
            except (ConfigError, RootPathError, AnalysisAborted) as exc:
                CLIAppFactory.report_fatal(deps.telemetry, exc)
                raise typer.Exit(code=EXIT_FATAL) from exc

            rendered = renderer.render(report)
            if output is not None:
                deps.filesystem.write_text(str(output), rendered)
                deps.telemetry.step(f"Report written to {output}")
            else:
                typer.echo(rendered, nl=False)
            raise typer.Exit(code=report.exit_code)

        @app.command()
        def rules(
            config: Optional[Path] = typer.Option(  # noqa: B008
                None, "--config", "-c", help="TOML configuration file"
            ),
        ) -> None:
            """List every rule with its enabled state and effective severity."""
            try:
                config_loader = deps.config_loader_factory(
                    str(config) if config else None, "."
                )
            except ConfigError as exc:
                CLIAppFactory.report_fatal(deps.telemetry, exc)
                raise typer.Exit(code=EXIT_FATAL) from exc
            deps.rule_table_reporter.report_rules(config_loader)

        return app
