"""Pytest configuration and shared builders.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/
on sys.path. Test modules have no __init__.py, so shared helpers live here
as fixtures rather than importable modules.
"""

from pathlib import Path
from typing import Callable

import astroid
import pytest

from convention_linter.domain.constants import DEFAULT_VERB_PREFIXES
from convention_linter.domain.entities import SourceFacts, SourceUnit
from convention_linter.domain.services.symbol_classifier import SymbolClassifier


@pytest.fixture
def classify() -> Callable[..., SourceFacts]:
    """Parse inline source and return its classified facts."""

    def _classify(code: str, verb_prefixes: frozenset[str] = DEFAULT_VERB_PREFIXES) -> SourceFacts:
        return SymbolClassifier(verb_prefixes).classify(astroid.parse(code), code)

    return _classify


@pytest.fixture
def make_unit() -> Callable[..., SourceUnit]:
    """Parse and classify inline source into a SourceUnit for rule tests."""

    def _make_unit(
        code: str,
        path: str = "pkg/module.py",
        verb_prefixes: frozenset[str] = DEFAULT_VERB_PREFIXES,
    ) -> SourceUnit:
        tree = astroid.parse(code)
        return SourceUnit(
            path=path,
            text=code,
            tree=tree,
            facts=SymbolClassifier(verb_prefixes).classify(tree, code),
        )

    return _make_unit


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Create a project tree under tmp_path from {relative_path: source} plus extra dirs."""

    def _make_project(
        files: dict[str, str],
        directories: tuple[str, ...] = ("apps", "utils", "tests", "docs"),
    ) -> Path:
        for directory in directories:
            (tmp_path / directory).mkdir(parents=True, exist_ok=True)
        for relative_path, source in files.items():
            target = tmp_path / relative_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(source, encoding="utf-8")
        return tmp_path

    return _make_project
