"""Rule identifiers, default lexicons and run defaults."""

RULE_SNAKE_CASE: str = "naming.snake_case"
RULE_VERB_PREFIX: str = "naming.verb_prefix"
RULE_GENERIC_NAME: str = "naming.generic_name"
RULE_MAGIC_NUMBER: str = "magic-number.undeclared"
RULE_MISSING_HINT: str = "typing.missing-hint"
RULE_REQUIRED_DIR: str = "layout.required-dir"
RULE_PARSE_ERROR: str = "parse.error"

# Emitted only inside a fatal ConfigError, never through the rule engine.
CONFIG_UNKNOWN_RULE: str = "config.unknown-rule"

TOOL_SECTION: str = "convention-linter"
SUPPRESSION_MARKER: str = "conventions:"
SUPPRESS_ALL: str = "all"

DEFAULT_VERB_PREFIXES: frozenset[str] = frozenset(
    {
        "add",
        "apply",
        "build",
        "calculate",
        "can",
        "check",
        "clear",
        "close",
        "collect",
        "compute",
        "convert",
        "count",
        "create",
        "delete",
        "do",
        "emit",
        "ensure",
        "evaluate",
        "execute",
        "extract",
        "fetch",
        "filter",
        "find",
        "format",
        "generate",
        "get",
        "handle",
        "has",
        "init",
        "is",
        "iter",
        "list",
        "load",
        "log",
        "make",
        "merge",
        "normalize",
        "open",
        "parse",
        "print",
        "process",
        "read",
        "record",
        "register",
        "remove",
        "render",
        "report",
        "reset",
        "resolve",
        "run",
        "save",
        "send",
        "set",
        "setup",
        "should",
        "sort",
        "start",
        "stop",
        "test",
        "to",
        "update",
        "validate",
        "visit",
        "leave",
        "write",
    }
)

DEFAULT_GENERIC_NAMES: frozenset[str] = frozenset(
    {"data", "info", "var", "tmp", "temp", "obj"}
)

DEFAULT_GENERIC_NAME_MAX_STATEMENTS: int = 3

DEFAULT_REQUIRED_DIRS: tuple[str, ...] = ("apps", "utils", "tests", "docs")

# Off-by-one and loop idioms; always exempt regardless of configuration.
CANONICAL_NUMBERS: frozenset[int] = frozenset({0, 1, -1})

DEFAULT_MAX_ATTEMPTS_STYLE_THRESHOLD: int = 2

RETRY_NAME_FRAGMENTS: tuple[str, ...] = ("attempt", "retry", "retries", "tries")

PROPERTY_DECORATORS: frozenset[str] = frozenset(
    {"property", "cached_property", "setter", "getter", "deleter"}
)

TYPE_ALIAS_FACTORIES: frozenset[str] = frozenset(
    {"TypeVar", "NewType", "NamedTuple", "namedtuple", "TypedDict", "ParamSpec", "TypeAlias"}
)

# Directories never walked during discovery.
DEFAULT_EXCLUDED_DIRS: frozenset[str] = frozenset(
    {
        ".git",
        ".hg",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        ".tox",
        ".venv",
        "__pycache__",
        "build",
        "dist",
        "node_modules",
        "venv",
    }
)
