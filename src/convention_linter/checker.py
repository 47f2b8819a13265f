"""
Pylint plugin entry point - composition root for the checker plugin.

Enable with ``pylint --load-plugins=convention_linter.checker``.
"""

from pylint.lint import PyLinter

from convention_linter.infrastructure.di.container import ConventionContainer
from convention_linter.use_cases.checks.conventions import ConventionChecker


def register(linter: PyLinter) -> None:
    """Register checkers."""
    container = ConventionContainer.get_instance()
    linter.register_checker(
        ConventionChecker(
            linter,
            config_loader=container.get_config_loader(),
            parser=container.get_astroid_gateway(),
            filesystem=container.get_filesystem_gateway(),
        )
    )
