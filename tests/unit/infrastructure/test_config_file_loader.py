"""Tests for ConfigFileLoader discovery and TOML parsing."""

from pathlib import Path

import pytest

from convention_linter.domain.errors import ConfigError
from convention_linter.infrastructure.config_file_loader import DEFAULTS_SOURCE, ConfigFileLoader


class TestLoadConfig:
    def test_nearest_pyproject_walking_up(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            '[tool.convention-linter]\nexclude = ["build/*"]\n'
        )
        nested = tmp_path / "src" / "pkg"
        nested.mkdir(parents=True)

        config_dict, source = ConfigFileLoader.load_config(None, str(nested))

        assert config_dict == {"exclude": ["build/*"]}
        assert source == str(tmp_path / "pyproject.toml")

    def test_pyproject_without_section_means_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n')
        assert ConfigFileLoader.load_config(None, str(tmp_path)) == ({}, DEFAULTS_SOURCE)

    def test_explicit_file_with_top_level_keys(self, tmp_path: Path) -> None:
        config_file = tmp_path / "conventions.toml"
        config_file.write_text(
            'max_attempts_style_threshold = 4\n[rules."naming.verb_prefix"]\nseverity = "info"\n'
        )

        config_dict, source = ConfigFileLoader.load_config(str(config_file), str(tmp_path))

        assert config_dict == {
            "max_attempts_style_threshold": 4,
            "rules": {"naming.verb_prefix": {"severity": "info"}},
        }
        assert source == str(config_file)

    def test_explicit_file_prefers_tool_table(self, tmp_path: Path) -> None:
        config_file = tmp_path / "pyproject.toml"
        config_file.write_text('[tool.convention-linter]\nrequired_dirs = ["src"]\n')
        config_dict, _ = ConfigFileLoader.load_config(str(config_file), ".")
        assert config_dict == {"required_dirs": ["src"]}

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            ConfigFileLoader.load_config(str(tmp_path / "nope.toml"), str(tmp_path))

    def test_malformed_toml_is_config_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "bad.toml"
        config_file.write_text("exclude = [unclosed\n")
        with pytest.raises(ConfigError, match="malformed TOML"):
            ConfigFileLoader.load_config(str(config_file), str(tmp_path))
