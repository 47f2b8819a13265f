"""Rule catalog: static rule metadata and construction of the enabled rule set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from convention_linter.domain.constants import (
    RULE_GENERIC_NAME,
    RULE_MAGIC_NUMBER,
    RULE_MISSING_HINT,
    RULE_PARSE_ERROR,
    RULE_REQUIRED_DIR,
    RULE_SNAKE_CASE,
    RULE_VERB_PREFIX,
)
from convention_linter.domain.entities import Severity
from convention_linter.domain.rules import FileRule, ProjectRule
from convention_linter.domain.rules.layout import RequiredDirectoryRule
from convention_linter.domain.rules.magic_numbers import MagicNumberRule
from convention_linter.domain.rules.naming import (
    GenericNameRule,
    SnakeCaseRule,
    VerbPrefixRule,
)
from convention_linter.domain.rules.type_hints import MissingTypeHintRule

if TYPE_CHECKING:
    from convention_linter.domain.config import ConfigurationLoader

RuleScope = Literal["file", "project", "run"]


@dataclass(frozen=True)
class RuleSpec:
    """Static metadata shown to users; never interpreted."""

    rule_id: str
    default_severity: Severity
    scope: RuleScope
    description: str
    pylint_msgid: str | None = None
    pylint_symbol: str | None = None


RULE_SPECS: tuple[RuleSpec, ...] = (
    RuleSpec(
        RULE_SNAKE_CASE,
        SnakeCaseRule.default_severity,
        "file",
        SnakeCaseRule.description,
        "C9101",
        "convention-snake-case",
    ),
    RuleSpec(
        RULE_VERB_PREFIX,
        VerbPrefixRule.default_severity,
        "file",
        VerbPrefixRule.description,
        "C9102",
        "convention-verb-prefix",
    ),
    RuleSpec(
        RULE_GENERIC_NAME,
        GenericNameRule.default_severity,
        "file",
        GenericNameRule.description,
        "C9103",
        "convention-generic-name",
    ),
    RuleSpec(
        RULE_MAGIC_NUMBER,
        MagicNumberRule.default_severity,
        "file",
        MagicNumberRule.description,
        "C9104",
        "convention-magic-number",
    ),
    RuleSpec(
        RULE_MISSING_HINT,
        MissingTypeHintRule.default_severity,
        "file",
        MissingTypeHintRule.description,
        "C9105",
        "convention-missing-hint",
    ),
    RuleSpec(
        RULE_REQUIRED_DIR,
        RequiredDirectoryRule.default_severity,
        "project",
        RequiredDirectoryRule.description,
    ),
    RuleSpec(
        RULE_PARSE_ERROR,
        Severity.ERROR,
        "run",
        "Every analysed file must be readable and syntactically valid.",
    ),
)


class RuleCatalog:
    """Lookup over RULE_SPECS plus factories for configured rule instances."""

    @staticmethod
    def known_rule_ids() -> frozenset[str]:
        return frozenset(spec.rule_id for spec in RULE_SPECS)

    @staticmethod
    def get_spec(rule_id: str) -> RuleSpec | None:
        for spec in RULE_SPECS:
            if spec.rule_id == rule_id:
                return spec
        return None

    @staticmethod
    def build_file_rules(config: ConfigurationLoader) -> tuple[FileRule, ...]:
        """Instantiate enabled per-file rules with their configured settings."""
        candidates: tuple[FileRule, ...] = (
            SnakeCaseRule(),
            VerbPrefixRule(),
            GenericNameRule(
                banned_names=config.generic_names,
                max_statements=config.generic_name_max_statements,
            ),
            MagicNumberRule(
                allowed_numbers=config.allowed_numbers,
                max_attempts_style_threshold=config.max_attempts_style_threshold,
            ),
            MissingTypeHintRule(public_only=config.typing_public_only),
        )
        return tuple(rule for rule in candidates if config.is_rule_enabled(rule.rule_id))

    @staticmethod
    def build_project_rules(config: ConfigurationLoader) -> tuple[ProjectRule, ...]:
        """Instantiate enabled layout rules."""
        candidates: tuple[ProjectRule, ...] = (
            RequiredDirectoryRule(required_dirs=config.required_dirs),
        )
        return tuple(rule for rule in candidates if config.is_rule_enabled(rule.rule_id))

    @staticmethod
    def build_pylint_msgs() -> dict[str, tuple[str, str, str]]:
        """Pylint ``msgs`` table for the rules that report through pylint."""
        return {
            spec.pylint_msgid: ("%s", spec.pylint_symbol, spec.description)
            for spec in RULE_SPECS
            if spec.pylint_msgid and spec.pylint_symbol
        }

