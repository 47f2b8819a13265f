from pathlib import Path

import pytest

from convention_linter.domain.errors import ConfigError
from convention_linter.infrastructure.di.container import ConventionContainer
from convention_linter.infrastructure.gateways.astroid_gateway import AstroidGateway
from convention_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway


class TestConventionContainer:
    def test_initialization_registers_telemetry(self) -> None:
        container = ConventionContainer()
        telemetry = container.get("TelemetryPort")
        assert telemetry is not None
        assert telemetry.project_name == "CONVENTIONS"

    def test_register_and_get_singleton(self) -> None:
        container = ConventionContainer()
        mock_dep = {"foo": "bar"}
        container.register_singleton("MockDep", mock_dep)

        retrieved = container.get("MockDep")
        assert retrieved is mock_dep

    def test_get_missing_dependency_raises_error(self) -> None:
        container = ConventionContainer()
        with pytest.raises(ValueError, match=r"Dependency 'Missing' not registered\."):
            container.get("Missing")

    def test_gateways_are_registered(self) -> None:
        container = ConventionContainer()
        assert isinstance(container.get_astroid_gateway(), AstroidGateway)
        assert isinstance(container.get_filesystem_gateway(), FileSystemGateway)

    def test_get_instance_is_shared_until_reset(self) -> None:
        ConventionContainer.reset()
        first = ConventionContainer.get_instance()
        assert ConventionContainer.get_instance() is first
        ConventionContainer.reset()
        assert ConventionContainer.get_instance() is not first
        ConventionContainer.reset()


class TestCreateConfigLoader:
    def test_reads_explicit_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "conventions.toml"
        config_file.write_text('exclude = ["build/*"]\n')
        loader = ConventionContainer.create_config_loader(str(config_file), str(tmp_path))
        assert loader.is_excluded("build/gen.py")
        assert loader.source == str(config_file)

    def test_invalid_override_raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "conventions.toml"
        config_file.write_text('[rules."not.a.rule"]\nenabled = false\n')
        with pytest.raises(ConfigError):
            ConventionContainer.create_config_loader(str(config_file), str(tmp_path))
