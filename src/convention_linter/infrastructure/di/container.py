"""Dependency Injection Container for the convention checker."""

from typing import TYPE_CHECKING, Any, Optional, cast

from convention_linter.domain.config import ConfigurationLoader
from convention_linter.infrastructure.config_file_loader import ConfigFileLoader
from convention_linter.infrastructure.gateways.astroid_gateway import AstroidGateway
from convention_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from convention_linter.infrastructure.reporters import RuleTableReporter
from convention_linter.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from convention_linter.domain.protocols import (
        AstroidProtocol,
        FileSystemProtocol,
        TelemetryPort,
    )


class ConventionContainer:
    """
    Dependency Injection Container.

    The configuration is built lazily on first request, from the nearest
    pyproject.toml above the working directory; the CLI builds its own per
    invocation through create_config_loader().
    """

    _instance: Optional["ConventionContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        self.register_singleton(
            "TelemetryPort",
            ProjectTelemetry("CONVENTIONS", "cyan", "Convention checker online"),
        )
        self.register_singleton("AstroidGateway", AstroidGateway())
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton("RuleTableReporter", RuleTableReporter())

    def register_singleton(self, key: str, instance: Any) -> None:
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_telemetry_port(self) -> "TelemetryPort":
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_astroid_gateway(self) -> "AstroidProtocol":
        return cast("AstroidProtocol", self.get("AstroidGateway"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_rule_table_reporter(self) -> RuleTableReporter:
        return cast(RuleTableReporter, self.get("RuleTableReporter"))

    def get_config_loader(self) -> ConfigurationLoader:
        """Configuration for the working directory (used by the pylint plugin)."""
        if "ConfigurationLoader" not in self._singletons:
            self.register_singleton("ConfigurationLoader", self.create_config_loader())
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    @staticmethod
    def create_config_loader(
        config_path: str | None = None, start_dir: str = "."
    ) -> ConfigurationLoader:
        """Load and validate the override for one run. Raises ConfigError."""
        config_dict, source = ConfigFileLoader.load_config(config_path, start_dir)
        return ConfigurationLoader(config_dict, source)

    @classmethod
    def get_instance(cls) -> "ConventionContainer":
        if cls._instance is None:
            cls._instance = ConventionContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None
