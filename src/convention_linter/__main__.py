"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from convention_linter.infrastructure.di.container import ConventionContainer
from convention_linter.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = ConventionContainer()
    deps = CLIDependencies(
        telemetry=container.get_telemetry_port(),
        astroid_gateway=container.get_astroid_gateway(),
        filesystem=container.get_filesystem_gateway(),
        rule_table_reporter=container.get_rule_table_reporter(),
        config_loader_factory=ConventionContainer.create_config_loader,
    )
    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
