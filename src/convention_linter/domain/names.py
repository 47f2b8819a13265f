"""Pure identifier-shape predicates shared by the classifier and the naming rules."""

import re

_SNAKE_CASE = re.compile(r"^_*[a-z][a-z0-9_]*$")
_UPPER_SNAKE_CASE = re.compile(r"^_*[A-Z][A-Z0-9_]*$")
_CAP_WORDS = re.compile(r"^_*[A-Z][a-zA-Z0-9]*$")


class NameShape:
    """Identifier classification. No state; every helper is a static method."""

    @staticmethod
    def is_dunder(name: str) -> bool:
        return len(name) > 4 and name.startswith("__") and name.endswith("__")

    @staticmethod
    def is_private(name: str) -> bool:
        """Underscore-prefixed, but not a dunder special name."""
        return name.startswith("_") and not NameShape.is_dunder(name)

    @staticmethod
    def is_snake_case(name: str) -> bool:
        return name == "_" or bool(_SNAKE_CASE.match(name))

    @staticmethod
    def is_constant(name: str) -> bool:
        """Fully upper-case with underscores and digits only (UPPER_SNAKE_CASE)."""
        return bool(_UPPER_SNAKE_CASE.match(name))

    @staticmethod
    def is_cap_words(name: str) -> bool:
        return bool(_CAP_WORDS.match(name)) and not NameShape.is_constant(name)

    @staticmethod
    def first_token(name: str) -> str:
        """First underscore-delimited token, ignoring leading underscores."""
        return name.lstrip("_").split("_", 1)[0]
