"""Convention checks (C9101-C9105) reported through pylint."""

from typing import TYPE_CHECKING

import astroid
from pylint.checkers import BaseChecker

from convention_linter.domain.rules.catalog import RULE_SPECS, RuleCatalog
from convention_linter.domain.services.symbol_classifier import SymbolClassifier
from convention_linter.use_cases.analyze_source import SourceAnalyzer

if TYPE_CHECKING:
    from pylint.lint import PyLinter

    from convention_linter.domain.config import ConfigurationLoader
    from convention_linter.domain.protocols import AstroidProtocol, FileSystemProtocol


class ConventionChecker(BaseChecker):
    """C9101-C9105: naming, magic numbers, type hints. Thin: delegates to the file rules."""

    name: str = "convention-linter"

    def __init__(
        self,
        linter: "PyLinter",
        config_loader: "ConfigurationLoader",
        parser: "AstroidProtocol",
        filesystem: "FileSystemProtocol",
    ) -> None:
        self.msgs = RuleCatalog.build_pylint_msgs()  # type: ignore[assignment]
        super().__init__(linter)
        self._msgids: dict[str, str] = {
            spec.rule_id: spec.pylint_msgid for spec in RULE_SPECS if spec.pylint_msgid
        }
        self._analyzer = SourceAnalyzer(
            parser=parser,
            filesystem=filesystem,
            classifier=SymbolClassifier(config_loader.verb_prefixes),
            rules=RuleCatalog.build_file_rules(config_loader),
            root=".",
        )

    def visit_module(self, node: astroid.nodes.Module) -> None:
        """Evaluate the tree pylint already parsed; report each violation."""
        text = self._read_source(node)
        for violation in self._analyzer.evaluate_tree(node, text, node.file or node.name):
            msgid = self._msgids.get(violation.rule_id)
            if msgid is None:
                continue
            self.add_message(
                msgid,
                line=violation.line,
                col_offset=violation.column,
                args=(violation.message,),
            )

    @staticmethod
    def _read_source(node: astroid.nodes.Module) -> str:
        if node.file_bytes is None and not node.file:
            return ""
        with node.stream() as stream:
            return stream.read().decode(node.file_encoding or "utf-8", errors="replace")
