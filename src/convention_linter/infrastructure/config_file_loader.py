"""Load [tool.convention-linter] from a TOML file. Infrastructure I/O only."""

import logging
import sys
from pathlib import Path

from convention_linter.domain.constants import TOOL_SECTION
from convention_linter.domain.errors import ConfigError

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

logger: logging.Logger = logging.getLogger(__name__)

DEFAULTS_SOURCE: str = "<defaults>"


class ConfigFileLoader:
    """
    Finds and parses the configuration override. No top-level functions.

    Returns (config_dict, source) where source is the file the table came
    from, or <defaults> when there is no override.
    """

    @staticmethod
    def load_config(
        config_path: str | None = None, start_dir: str = "."
    ) -> tuple[dict[str, object], str]:
        """Explicit --config file, else the nearest pyproject.toml walking up from start_dir."""
        if config_path is not None:
            path = Path(config_path)
            if not path.is_file():
                raise ConfigError(f"Configuration file not found: {config_path}")
            return ConfigFileLoader.read_tool_table(path, allow_top_level=True), str(path)

        current_path = Path(start_dir).resolve()
        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if config_file.is_file():
                logger.debug("Using configuration from %s", config_file)
                config_dict = ConfigFileLoader.read_tool_table(config_file)
                return config_dict, str(config_file) if config_dict else DEFAULTS_SOURCE
        return {}, DEFAULTS_SOURCE

    @staticmethod
    def read_tool_table(path: Path, allow_top_level: bool = False) -> dict[str, object]:
        """
        Parse one TOML file and return its [tool.convention-linter] table.

        With allow_top_level, a file without that table is read as the table
        itself (a dedicated config file rather than a pyproject.toml).
        """
        try:
            with path.open("rb") as f:
                data = toml_lib.load(f)
        except toml_lib.TOMLDecodeError as exc:
            raise ConfigError(f"{path}: malformed TOML: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"{path}: cannot read configuration: {exc}") from exc
        tool_section = data.get("tool", {}) or {}
        if not isinstance(tool_section, dict):
            raise ConfigError(f"{path}: [tool] must be a table")
        if TOOL_SECTION in tool_section:
            config_dict = tool_section[TOOL_SECTION]
            if not isinstance(config_dict, dict):
                raise ConfigError(f"{path}: [tool.{TOOL_SECTION}] must be a table")
            return config_dict
        if allow_top_level:
            return {key: value for key, value in data.items() if key != "tool"}
        return {}
