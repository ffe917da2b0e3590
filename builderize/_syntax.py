# SPDX-FileCopyrightText: Michael Popoloski
# SPDX-License-Identifier: MIT

"""Synthesis of builder-call expressions from a Python syntax tree.

:class:`TreeSynthesizer` walks a tree produced by :func:`ast.parse` and
returns a *construction expression*: a small tree of calls, member accesses,
arrays and literals which, rendered and evaluated against a
:class:`~builderize.builders.Builders` namespace, rebuilds an equivalent tree.
"""

import ast
import keyword
import logging
import math
from collections import ChainMap
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from builderize._builders import lower_camel
from builderize._diagnostics import ReplacementParseError, UnrecognizedNodeError
from builderize._signatures import SignatureResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Statement:
    expr: "ConstructionExpr"


@dataclass(frozen=True)
class Call:
    callee: "ConstructionExpr"
    args: Tuple["ConstructionExpr", ...]


@dataclass(frozen=True)
class Member:
    obj: "ConstructionExpr"
    prop: "ConstructionExpr"
    computed: bool = False


@dataclass(frozen=True)
class Ref:
    name: str


@dataclass(frozen=True)
class Array:
    elements: Tuple["ConstructionExpr", ...]


@dataclass(frozen=True)
class Literal:
    value: Any
    raw: Optional[str] = None


ConstructionExpr = Union[Statement, Call, Member, Ref, Array, Literal]

LITERAL_TYPES = (type(None), bool, int, float, complex, str, bytes)

_ABSENT = object()


def is_opaque(value) -> bool:
    """True for literal values whose ``repr`` does not evaluate back to them."""
    if value is Ellipsis:
        return True
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, complex):
        return not (math.isfinite(value.real) and math.isfinite(value.imag))
    return False


def parse_fragment(fragment: str, name: str = None) -> ast.expr:
    try:
        return ast.parse(fragment.strip(), mode="eval").body
    except SyntaxError as e:
        raise ReplacementParseError(fragment, name, e.msg) from e


class ReplacementTable:
    """Identifier substitutions, shadowed per recursive path.

    Tables are never modified: :meth:`shadow` returns a child table in which
    the name no longer has a replacement, and the parent keeps its own view.
    """

    def __init__(self, replacements: Union[Mapping[str, str], Iterable[Tuple[str, str]]] = ()):
        bindings = dict(replacements)
        for name, fragment in bindings.items():
            parse_fragment(fragment, name)
        self._chain = ChainMap(bindings)

    @classmethod
    def _from_chain(cls, chain):
        table = cls.__new__(cls)
        table._chain = chain
        return table

    def lookup(self, name: str) -> Optional[str]:
        return self._chain.get(name)

    def shadow(self, name: str) -> "ReplacementTable":
        return self._from_chain(self._chain.new_child({name: None}))

    def parse(self, name: str) -> ast.expr:
        """Return a fresh tree for the fragment bound to ``name``."""
        return parse_fragment(self._chain[name], name)

    def __contains__(self, name):
        return self.lookup(name) is not None

    def __bool__(self):
        return any(fragment is not None for fragment in self._chain.values())

    def __repr__(self):
        live = {k: v for k, v in self._chain.items() if v is not None}
        return f"ReplacementTable({live!r})"


class TreeSynthesizer:
    """Turns syntax nodes into builder-call construction expressions.

    Args:
        resolver: Supplies the field order for each node kind. A resolver
            backed by the ast schema is created when omitted.
        namespace: The name the builders namespace is referenced by in the
            generated code.
    """

    def __init__(self, resolver: SignatureResolver = None, namespace: str = "b"):
        self.resolver = resolver if resolver is not None else SignatureResolver()
        self.namespace = namespace

    def synthesize(self, node, replacements=None) -> ConstructionExpr:
        if not isinstance(replacements, ReplacementTable):
            replacements = ReplacementTable(replacements or ())
        return self._synthesize(node, replacements)

    def builder(self, name: str) -> Member:
        """The callee expression for the builder called ``name``."""
        if keyword.iskeyword(name) or not name.isidentifier():
            return Member(Ref(self.namespace), Literal(name), computed=True)
        return Member(Ref(self.namespace), Ref(name))

    def _synthesize(self, node, table: ReplacementTable) -> ConstructionExpr:
        if isinstance(node, ast.Module):
            return Statement(self._program(node, table))
        if isinstance(node, list):
            return Array(tuple(self._value(element, table) for element in node))
        if is_opaque(node):
            return Literal(node, raw=ast.unparse(ast.Constant(value=node, kind=None)))
        if not isinstance(node, ast.AST):
            raise UnrecognizedNodeError(node)

        if isinstance(node, ast.Name) and node.id in table:
            logger.debug("replacing %s with %r", node.id, table.lookup(node.id))
            return self._synthesize(table.parse(node.id), table.shadow(node.id))

        kind = type(node).__name__
        # source positions live in _attributes; a reflected signature could
        # still list them
        positions = getattr(type(node), "_attributes", ())
        args = []
        for field in self.resolver.resolve(kind):
            if field in positions:
                continue
            value = getattr(node, field, _ABSENT)
            if value is _ABSENT:
                continue
            args.append(self._value(value, table))
        return Call(self.builder(lower_camel(kind)), tuple(args))

    def _program(self, module: ast.Module, table: ReplacementTable) -> Call:
        args = [self._synthesize(module.body, table)]
        type_ignores = getattr(module, "type_ignores", None)
        if type_ignores:
            args.append(self._synthesize(type_ignores, table))
        return Call(self.builder("program"), tuple(args))

    def _value(self, value, table: ReplacementTable) -> ConstructionExpr:
        if isinstance(value, (ast.AST, list)) or is_opaque(value):
            return self._synthesize(value, table)
        if isinstance(value, LITERAL_TYPES):
            return Literal(value)
        raise UnrecognizedNodeError(value)


def synthesize(node, replacements=None, resolver=None, namespace="b") -> ConstructionExpr:
    """Synthesize the construction expression for ``node``."""
    return TreeSynthesizer(resolver, namespace).synthesize(node, replacements)
