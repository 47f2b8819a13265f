"""Configuration loader for checker settings. Immutable value object created by Infrastructure."""

from __future__ import annotations

import fnmatch
import logging
from types import MappingProxyType
from typing import Mapping

from convention_linter.domain.constants import (
    CONFIG_UNKNOWN_RULE,
    DEFAULT_GENERIC_NAME_MAX_STATEMENTS,
    DEFAULT_GENERIC_NAMES,
    DEFAULT_MAX_ATTEMPTS_STYLE_THRESHOLD,
    DEFAULT_REQUIRED_DIRS,
    DEFAULT_VERB_PREFIXES,
)
from convention_linter.domain.entities import Severity
from convention_linter.domain.errors import ConfigError
from convention_linter.domain.rules import Violation
from convention_linter.domain.rules.catalog import RuleCatalog

logger: logging.Logger = logging.getLogger(__name__)

KNOWN_KEYS: frozenset[str] = frozenset(
    {
        "exclude",
        "max_attempts_style_threshold",
        "generic_name_max_statements",
        "verb_prefixes",
        "extend_verb_prefixes",
        "generic_names",
        "required_dirs",
        "allowed_numbers",
        "typing_public_only",
        "rules",
    }
)
RULE_TABLE_KEYS: frozenset[str] = frozenset({"enabled", "severity"})


class ConfigurationLoader:
    """
    Immutable configuration for one run.

    Created by Infrastructure from (config_dict, source). Domain does not
    read the filesystem; ConfigFileLoader finds and parses the TOML and the
    composition root constructs ConfigurationLoader from the tool table.
    Every value is validated here, so an invalid override fails before any
    file is scheduled.
    """

    def __init__(
        self,
        config_dict: Mapping[str, object] | None = None,
        source: str = "<defaults>",
    ) -> None:
        self._config = MappingProxyType(dict(config_dict or {}))
        self._source = source
        self.validate_config(self._config)

        self._exclude = self._get_str_list("exclude", ())
        self._threshold = self._get_int(
            "max_attempts_style_threshold", DEFAULT_MAX_ATTEMPTS_STYLE_THRESHOLD
        )
        self._generic_max = self._get_int(
            "generic_name_max_statements", DEFAULT_GENERIC_NAME_MAX_STATEMENTS
        )
        verbs = frozenset(
            self._get_str_list("verb_prefixes", tuple(sorted(DEFAULT_VERB_PREFIXES)))
        )
        self._verb_prefixes = verbs | frozenset(
            self._get_str_list("extend_verb_prefixes", ())
        )
        self._generic_names = frozenset(
            self._get_str_list("generic_names", tuple(sorted(DEFAULT_GENERIC_NAMES)))
        )
        self._required_dirs = self._get_str_list("required_dirs", DEFAULT_REQUIRED_DIRS)
        self._allowed_numbers = self._get_numbers("allowed_numbers")
        self._typing_public_only = self._get_bool("typing_public_only", True)
        self._enabled, self._severities = self._parse_rules_table()

    def validate_config(self, config: Mapping[str, object]) -> None:
        """Warn on unknown keys; raise ConfigError for unknown rule ids."""
        for key in sorted(set(config) - KNOWN_KEYS):
            logger.warning(
                "Configuration Warning: unknown key '%s' in %s is ignored.", key, self._source
            )
        rules = config.get("rules", {})
        if not isinstance(rules, Mapping):
            raise ConfigError(f"{self._source}: 'rules' must be a table")
        unknown = sorted(str(rule_id) for rule_id in rules if rule_id not in RuleCatalog.known_rule_ids())
        if unknown:
            raise ConfigError(
                f"{self._source}: unknown rule id(s): {', '.join(unknown)}",
                violations=tuple(
                    Violation(
                        rule_id=CONFIG_UNKNOWN_RULE,
                        severity=Severity.ERROR,
                        file_path=self._source,
                        line=0,
                        message=f"Unknown rule id '{rule_id}'",
                        symbol_name=rule_id,
                    )
                    for rule_id in unknown
                ),
            )

    @property
    def config(self) -> Mapping[str, object]:
        """Return the raw override table."""
        return self._config

    @property
    def source(self) -> str:
        """Where the override came from (file path or <defaults>)."""
        return self._source

    @property
    def excluded_paths(self) -> tuple[str, ...]:
        return self._exclude

    @property
    def max_attempts_style_threshold(self) -> int:
        return self._threshold

    @property
    def generic_name_max_statements(self) -> int:
        return self._generic_max

    @property
    def verb_prefixes(self) -> frozenset[str]:
        return self._verb_prefixes

    @property
    def generic_names(self) -> frozenset[str]:
        return self._generic_names

    @property
    def required_dirs(self) -> tuple[str, ...]:
        return self._required_dirs

    @property
    def allowed_numbers(self) -> frozenset[int | float]:
        return self._allowed_numbers

    @property
    def typing_public_only(self) -> bool:
        return self._typing_public_only

    def is_rule_enabled(self, rule_id: str) -> bool:
        """Rules are enabled unless the override turns them off."""
        return self._enabled.get(rule_id, True)

    def get_severity(self, rule_id: str) -> Severity | None:
        """Configured severity override, or None to keep the rule's default."""
        return self._severities.get(rule_id)

    def is_excluded(self, relative_path: str) -> bool:
        """
        Match a posix path relative to the root against the exclusion globs.

        A glob naming a directory (``build`` or ``build/``) excludes everything
        below it.
        """
        path = relative_path.replace("\\", "/")
        if path.startswith("./"):
            path = path[2:]
        for pattern in self._exclude:
            prefix = pattern.rstrip("/")
            if fnmatch.fnmatchcase(path, pattern) or fnmatch.fnmatchcase(path, prefix):
                return True
            if fnmatch.fnmatchcase(path, f"{prefix}/*"):
                return True
        return False

    # ------------------------------------------------------------------

    def _parse_rules_table(self) -> tuple[dict[str, bool], dict[str, Severity]]:
        enabled: dict[str, bool] = {}
        severities: dict[str, Severity] = {}
        rules = self._config.get("rules", {})
        for rule_id, setting in dict(rules).items():
            if isinstance(setting, bool):
                enabled[rule_id] = setting
                continue
            if isinstance(setting, str):
                severities[rule_id] = self._parse_severity(rule_id, setting)
                continue
            if not isinstance(setting, Mapping):
                raise ConfigError(
                    f"{self._source}: rules.\"{rule_id}\" must be a table, a boolean or a severity"
                )
            for key in sorted(set(setting) - RULE_TABLE_KEYS):
                logger.warning(
                    "Configuration Warning: unknown key '%s' for rule '%s' is ignored.",
                    key,
                    rule_id,
                )
            if "enabled" in setting:
                if not isinstance(setting["enabled"], bool):
                    raise ConfigError(
                        f"{self._source}: rules.\"{rule_id}\".enabled must be a boolean"
                    )
                enabled[rule_id] = setting["enabled"]
            if "severity" in setting:
                severities[rule_id] = self._parse_severity(rule_id, setting["severity"])
        return enabled, severities

    def _parse_severity(self, rule_id: str, raw: object) -> Severity:
        try:
            return Severity(str(raw).lower())
        except ValueError:
            allowed = ", ".join(s.value for s in Severity)
            raise ConfigError(
                f"{self._source}: invalid severity '{raw}' for rule '{rule_id}' "
                f"(expected one of: {allowed})"
            ) from None

    def _get_str_list(self, key: str, default: tuple[str, ...]) -> tuple[str, ...]:
        raw = self._config.get(key)
        if raw is None:
            return tuple(default)
        if not isinstance(raw, (list, tuple)) or not all(isinstance(x, str) for x in raw):
            raise ConfigError(f"{self._source}: '{key}' must be a list of strings")
        return tuple(raw)

    def _get_int(self, key: str, default: int) -> int:
        raw = self._config.get(key, default)
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
            raise ConfigError(f"{self._source}: '{key}' must be a non-negative integer")
        return raw

    def _get_bool(self, key: str, default: bool) -> bool:
        raw = self._config.get(key, default)
        if not isinstance(raw, bool):
            raise ConfigError(f"{self._source}: '{key}' must be a boolean")
        return raw

    def _get_numbers(self, key: str) -> frozenset[int | float]:
        raw = self._config.get(key, [])
        if not isinstance(raw, (list, tuple)) or not all(
            isinstance(x, (int, float)) and not isinstance(x, bool) for x in raw
        ):
            raise ConfigError(f"{self._source}: '{key}' must be a list of numbers")
        return frozenset(raw)
