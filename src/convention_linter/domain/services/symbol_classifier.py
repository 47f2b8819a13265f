"""Symbol Classifier - turns an astroid tree into the typed facts the rules consume."""

from __future__ import annotations

import io
import logging
import tokenize

import astroid

from convention_linter.domain.constants import (
    PROPERTY_DECORATORS,
    SUPPRESSION_MARKER,
    TYPE_ALIAS_FACTORIES,
)
from convention_linter.domain.entities import (
    BindingKind,
    FunctionSymbol,
    LiteralContext,
    LiteralUse,
    ParameterFact,
    ScopeKind,
    SourceFacts,
    VariableSymbol,
)
from convention_linter.domain.names import NameShape

logger: logging.Logger = logging.getLogger(__name__)

MODULE_SCOPE_NAME: str = "<module>"

_COMPREHENSION_SCOPES = (
    astroid.nodes.ListComp,
    astroid.nodes.SetComp,
    astroid.nodes.DictComp,
    astroid.nodes.GeneratorExp,
)
_UNPACKING_NODES = (astroid.nodes.Tuple, astroid.nodes.List, astroid.nodes.Starred)


class SymbolClassifier:
    """
    Walks one module tree and extracts functions, variables, literal uses and
    suppression comments.

    Stateless between calls: every classify() builds fresh caches, so one
    instance can be shared by any number of files.
    """

    def __init__(self, verb_prefixes: frozenset[str]) -> None:
        self.verb_prefixes = verb_prefixes

    def classify(self, tree: astroid.nodes.Module, text: str = "") -> SourceFacts:
        """Return the facts for a parsed module. `text` feeds suppression comments."""
        statement_counts: dict[int, int] = {}
        functions = tuple(
            self._function_symbol(node)
            for node in tree.nodes_of_class(astroid.nodes.FunctionDef)
        )
        variables: list[VariableSymbol] = []
        for assign_name in tree.nodes_of_class(astroid.nodes.AssignName):
            symbol = self._variable_symbol(assign_name, statement_counts)
            if symbol is not None:
                variables.append(symbol)
        literals: list[LiteralUse] = []
        for const in tree.nodes_of_class(astroid.nodes.Const):
            use = self._literal_use(const)
            if use is not None:
                literals.append(use)
        return SourceFacts(
            functions=functions,
            variables=tuple(variables),
            literals=tuple(literals),
            suppressions=self.read_suppressions(text) if text else {},
        )

    # ------------------------------------------------------------------
    # Functions
    # ------------------------------------------------------------------

    def _function_symbol(self, node: astroid.nodes.FunctionDef) -> FunctionSymbol:
        decorators = self._decorator_names(node)
        is_method = isinstance(node.parent, astroid.nodes.ClassDef)
        is_property = bool(decorators & PROPERTY_DECORATORS)
        has_receiver = is_method and "staticmethod" not in decorators
        is_nested = self._enclosing_function(node) is not None
        return FunctionSymbol(
            name=node.name,
            qualified_name=self.qualified_name(node),
            is_method=is_method,
            parameters=self._parameters(node, has_receiver),
            return_annotation=node.returns.as_string() if node.returns else None,
            starts_with_verb=self._starts_with_verb(node.name, is_property),
            is_public=(
                not NameShape.is_private(node.name)
                and not is_nested
                and not self._has_private_class_ancestor(node)
            ),
            is_nested=is_nested,
            is_property=is_property,
            line=node.lineno or 0,
            column=node.col_offset or 0,
        )

    def _parameters(
        self, node: astroid.nodes.FunctionDef, has_receiver: bool
    ) -> tuple[ParameterFact, ...]:
        args = node.args
        line = node.lineno or 0
        positional = list(
            zip(args.posonlyargs or [], args.posonlyargs_annotations or [])
        ) + list(zip(args.args or [], args.annotations or []))
        facts: list[ParameterFact] = []
        for index, (arg, annotation) in enumerate(positional):
            facts.append(
                ParameterFact(
                    name=arg.name,
                    annotated=annotation is not None,
                    is_receiver=has_receiver and index == 0,
                    line=arg.lineno or line,
                    column=arg.col_offset or 0,
                )
            )
        if args.vararg:
            facts.append(
                ParameterFact(
                    name=args.vararg,
                    annotated=args.varargannotation is not None,
                    is_receiver=False,
                    line=line,
                    column=0,
                )
            )
        for arg, annotation in zip(
            args.kwonlyargs or [], args.kwonlyargs_annotations or []
        ):
            facts.append(
                ParameterFact(
                    name=arg.name,
                    annotated=annotation is not None,
                    is_receiver=False,
                    line=arg.lineno or line,
                    column=arg.col_offset or 0,
                )
            )
        if args.kwarg:
            facts.append(
                ParameterFact(
                    name=args.kwarg,
                    annotated=args.kwargannotation is not None,
                    is_receiver=False,
                    line=line,
                    column=0,
                )
            )
        return tuple(facts)

    def _starts_with_verb(self, name: str, is_property: bool) -> bool | None:
        if not self.verb_prefixes or is_property or NameShape.is_dunder(name):
            return None
        token = NameShape.first_token(name)
        if not token:
            return None
        return any(token.startswith(stem) for stem in self.verb_prefixes)

    @staticmethod
    def _decorator_names(node: astroid.nodes.FunctionDef) -> frozenset[str]:
        if not node.decorators:
            return frozenset()
        names: set[str] = set()
        for decorator in node.decorators.nodes:
            if isinstance(decorator, astroid.nodes.Call):
                decorator = decorator.func
            if isinstance(decorator, astroid.nodes.Name):
                names.add(decorator.name)
            elif isinstance(decorator, astroid.nodes.Attribute):
                names.add(decorator.attrname)
        return frozenset(names)

    # ------------------------------------------------------------------
    # Variables
    # ------------------------------------------------------------------

    def _variable_symbol(
        self,
        node: astroid.nodes.AssignName,
        statement_counts: dict[int, int],
    ) -> VariableSymbol | None:
        binding, statement = self._binding(node)
        if binding is None or statement is None:
            return None
        scope_node = node.scope()
        scope = self._scope_kind(scope_node)
        declared_type = None
        if isinstance(statement, astroid.nodes.AnnAssign) and statement.annotation:
            declared_type = statement.annotation.as_string()
        key = id(scope_node)
        if key not in statement_counts:
            statement_counts[key] = self.count_statements(scope_node)
        return VariableSymbol(
            name=node.name,
            is_constant=NameShape.is_constant(node.name),
            declared_type=declared_type,
            scope=scope,
            scope_name=self._scope_name(scope_node),
            scope_statement_count=statement_counts[key],
            is_type_alias=(
                scope is ScopeKind.MODULE
                and self._is_type_alias(node.name, statement, declared_type)
            ),
            binding=binding,
            is_public=(
                scope in (ScopeKind.MODULE, ScopeKind.CLASS)
                and not NameShape.is_private(node.name)
                and not self._has_private_class_ancestor(node)
            ),
            line=node.lineno or 0,
            column=node.col_offset or 0,
        )

    @staticmethod
    def _binding(
        node: astroid.nodes.AssignName,
    ) -> tuple[BindingKind | None, astroid.nodes.NodeNG | None]:
        """Classify how a name is bound; (None, None) for bindings that are not variables."""
        child: astroid.nodes.NodeNG = node
        parent = node.parent
        unpacked = False
        while isinstance(parent, _UNPACKING_NODES):
            unpacked = True
            child, parent = parent, parent.parent
        if isinstance(parent, astroid.nodes.Assign):
            if child in parent.targets:
                return ("unpack" if unpacked else "assign"), parent
            return None, None
        if isinstance(parent, astroid.nodes.AnnAssign):
            return "annotated", parent
        if isinstance(parent, (astroid.nodes.For, astroid.nodes.Comprehension)):
            return "loop", parent
        if isinstance(parent, astroid.nodes.With):
            return "with", parent
        if isinstance(parent, astroid.nodes.NamedExpr):
            return "walrus", parent
        return None, None

    @staticmethod
    def _scope_kind(scope_node: astroid.nodes.NodeNG) -> ScopeKind:
        if isinstance(scope_node, astroid.nodes.Module):
            return ScopeKind.MODULE
        if isinstance(scope_node, astroid.nodes.ClassDef):
            return ScopeKind.CLASS
        if isinstance(scope_node, _COMPREHENSION_SCOPES):
            return ScopeKind.COMPREHENSION
        return ScopeKind.FUNCTION

    def _scope_name(self, scope_node: astroid.nodes.NodeNG) -> str:
        if isinstance(scope_node, _COMPREHENSION_SCOPES):
            return f"{self._scope_name(scope_node.parent.scope())}.<comprehension>"
        if isinstance(scope_node, astroid.nodes.Lambda) and not isinstance(
            scope_node, astroid.nodes.FunctionDef
        ):
            return f"{self._scope_name(scope_node.parent.scope())}.<lambda>"
        return self.qualified_name(scope_node)

    @staticmethod
    def _is_type_alias(
        name: str,
        statement: astroid.nodes.NodeNG,
        declared_type: str | None,
    ) -> bool:
        if declared_type is not None and declared_type.endswith("TypeAlias"):
            return True
        value = getattr(statement, "value", None)
        if isinstance(value, astroid.nodes.Call):
            func = value.func
            func_name = getattr(func, "name", None) or getattr(func, "attrname", None)
            if func_name in TYPE_ALIAS_FACTORIES:
                return NameShape.is_cap_words(name) or NameShape.is_constant(name)
            return False
        if not NameShape.is_cap_words(name):
            return False
        if isinstance(value, astroid.nodes.Subscript):
            return True
        if isinstance(value, astroid.nodes.BinOp) and value.op == "|":
            return True
        if isinstance(value, astroid.nodes.Name):
            return NameShape.is_cap_words(value.name)
        if isinstance(value, astroid.nodes.Attribute):
            return NameShape.is_cap_words(value.attrname)
        return False

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------

    def _literal_use(self, node: astroid.nodes.Const) -> LiteralUse | None:
        value = node.value
        anchor: astroid.nodes.NodeNG = node
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float, complex)):
            parent = node.parent
            if isinstance(parent, astroid.nodes.UnaryOp) and parent.op in ("-", "+"):
                value = -value if parent.op == "-" else value
                anchor = parent
            kind = "numeric"
        elif isinstance(value, str):
            kind = "string"
        else:
            return None
        context, compared_name = self._literal_context(anchor)
        if kind == "string" and context != "comparison":
            return None
        return LiteralUse(
            value=value,
            kind=kind,
            enclosing_symbol=self._enclosing_symbol(anchor),
            is_named_constant=self._inside_constant_definition(anchor),
            context=context,
            compared_name=compared_name,
            line=anchor.lineno or 0,
            column=anchor.col_offset or 0,
        )

    @staticmethod
    def _literal_context(
        anchor: astroid.nodes.NodeNG,
    ) -> tuple[LiteralContext, str | None]:
        parent = anchor.parent
        # `x in (2, 3)`: the container is the compared operand.
        if isinstance(
            parent, (astroid.nodes.Tuple, astroid.nodes.List, astroid.nodes.Set)
        ) and isinstance(parent.parent, astroid.nodes.Compare):
            anchor, parent = parent, parent.parent
        if isinstance(parent, astroid.nodes.Compare):
            operands = [parent.left] + [right for _, right in parent.ops]
            for operand in operands:
                if operand is anchor:
                    continue
                if isinstance(operand, astroid.nodes.Name):
                    return "comparison", operand.name
                if isinstance(operand, astroid.nodes.Attribute):
                    return "comparison", operand.attrname
            return "comparison", None
        if isinstance(parent, astroid.nodes.BinOp):
            return "arithmetic", None
        if isinstance(parent, astroid.nodes.AugAssign) and parent.value is anchor:
            return "arithmetic", None
        if isinstance(parent, astroid.nodes.Arguments) and (
            anchor in parent.defaults or anchor in (parent.kw_defaults or [])
        ):
            return "default", None
        return "other", None

    def _enclosing_symbol(self, anchor: astroid.nodes.NodeNG) -> str:
        node = anchor.parent
        while node is not None:
            if isinstance(node, (astroid.nodes.FunctionDef, astroid.nodes.ClassDef)):
                return self.qualified_name(node)
            node = node.parent
        return MODULE_SCOPE_NAME

    @staticmethod
    def _inside_constant_definition(anchor: astroid.nodes.NodeNG) -> bool:
        node = anchor
        while node is not None and not node.is_statement:
            node = node.parent
        if isinstance(node, astroid.nodes.Assign):
            targets = node.targets
        elif isinstance(node, astroid.nodes.AnnAssign) and node.value is not None:
            targets = [node.target]
        else:
            return False
        names: list[str] = []
        for target in targets:
            if isinstance(target, astroid.nodes.AssignName):
                names.append(target.name)
            elif isinstance(target, (astroid.nodes.Tuple, astroid.nodes.List)):
                for element in target.elts:
                    if not isinstance(element, astroid.nodes.AssignName):
                        return False
                    names.append(element.name)
            else:
                return False
        return bool(names) and all(NameShape.is_constant(name) for name in names)

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    @staticmethod
    def qualified_name(node: astroid.nodes.NodeNG) -> str:
        """Dotted chain of enclosing class/function names, or <module>."""
        parts: list[str] = []
        current = node
        while current is not None:
            if isinstance(current, (astroid.nodes.FunctionDef, astroid.nodes.ClassDef)):
                parts.append(current.name)
            current = current.parent
        if not parts:
            return MODULE_SCOPE_NAME
        return ".".join(reversed(parts))

    @staticmethod
    def count_statements(scope_node: astroid.nodes.NodeNG) -> int:
        """Statements spanned by a scope's body; a nested def or class counts once."""
        body = getattr(scope_node, "body", None)
        if not isinstance(body, list):
            return 1
        total = 0
        pending: list[astroid.nodes.NodeNG] = list(body)
        while pending:
            node = pending.pop()
            if node.is_statement:
                total += 1
            if isinstance(
                node,
                (astroid.nodes.FunctionDef, astroid.nodes.ClassDef, astroid.nodes.Lambda),
            ):
                continue
            pending.extend(node.get_children())
        return total

    @staticmethod
    def _enclosing_function(
        node: astroid.nodes.NodeNG,
    ) -> astroid.nodes.FunctionDef | None:
        current = node.parent
        while current is not None:
            if isinstance(current, astroid.nodes.FunctionDef):
                return current
            current = current.parent
        return None

    @staticmethod
    def _has_private_class_ancestor(node: astroid.nodes.NodeNG) -> bool:
        current = node.parent
        while current is not None:
            if isinstance(current, astroid.nodes.ClassDef) and NameShape.is_private(
                current.name
            ):
                return True
            current = current.parent
        return False

    @staticmethod
    def read_suppressions(text: str) -> dict[int, frozenset[str]]:
        """Map line -> rule ids named by `# conventions: disable=...` comments."""
        suppressions: dict[int, frozenset[str]] = {}
        try:
            tokens = list(tokenize.generate_tokens(io.StringIO(text).readline))
        except (tokenize.TokenError, IndentationError, SyntaxError) as exc:
            logger.debug("Suppression scan skipped: %s", exc)
            return suppressions
        for tok_type, tok_string, start, _, _ in tokens:
            if tok_type != tokenize.COMMENT:
                continue
            body = tok_string.lstrip("#").strip()
            if not body.startswith(SUPPRESSION_MARKER):
                continue
            directive = body[len(SUPPRESSION_MARKER):].strip()
            if not directive.startswith("disable="):
                continue
            rule_ids = frozenset(
                part.strip()
                for part in directive[len("disable="):].split(",")
                if part.strip()
            )
            if rule_ids:
                suppressions[start[0]] = suppressions.get(start[0], frozenset()) | rule_ids
        return suppressions
