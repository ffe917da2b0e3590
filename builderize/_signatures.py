# SPDX-FileCopyrightText: Michael Popoloski
# SPDX-License-Identifier: MIT

"""Discovery of the ordered field list each builder expects.

The resolver caches one field list per node kind. Where the list comes from
is up to a :class:`SignatureProvider`:

- :class:`SchemaSignatureProvider` reads the node class's ``_fields``.
- :class:`ReflectiveSignatureProvider` calls the builder with no arguments
  and reads the field names back out of the error it raises.
- :class:`TableSignatureProvider` looks them up in a prebuilt table, such as
  one written by ``scripts/signature_gen.py``.
"""

import ast
import json
import logging
import re
import threading
from typing import Dict, Iterable, Mapping, Tuple

from builderize._builders import Builders, lower_camel
from builderize._diagnostics import SchemaDiscoveryError

logger = logging.getLogger(__name__)

Signature = Tuple[str, ...]

# Kinds whose builders take no fields, so calling them with no arguments
# succeeds instead of reporting a signature.
ZERO_FIELD_KINDS = frozenset(
    (
        # expr_context
        "Load", "Store", "Del",
        # boolop
        "And", "Or",
        # operator
        "Add", "Sub", "Mult", "MatMult", "Div", "Mod", "Pow",
        "LShift", "RShift", "BitOr", "BitXor", "BitAnd", "FloorDiv",
        # unaryop
        "Invert", "Not", "UAdd", "USub",
        # cmpop
        "Eq", "NotEq", "Lt", "LtE", "Gt", "GtE", "Is", "IsNot", "In", "NotIn",
        # stmt
        "Pass", "Break", "Continue",
    )
)

_QUOTED = re.compile(r"'([^']*)'|\"([^\"]*)\"")


class SignatureProvider:
    """Supplies the ordered field names a node kind's builder consumes."""

    def fields(self, kind: str) -> Signature:
        raise NotImplementedError


class SchemaSignatureProvider(SignatureProvider):
    def __init__(self, module=ast):
        self.module = module

    def fields(self, kind: str) -> Signature:
        cls = vars(self.module).get(kind)
        if not (isinstance(cls, type) and issubclass(cls, ast.AST)):
            raise SchemaDiscoveryError(kind, f"no node class in {self.module.__name__}")
        return tuple(cls._fields)


def parse_signature(kind: str, message: str) -> Signature:
    """Extract the quoted parameter names that follow ``kind`` in ``message``.

    The kind has to appear as a whole word, so ``BinOp`` is not found inside
    ``MyBinOp(...)``.
    """
    match = re.search(r"\b%s\b" % re.escape(kind), message)
    if match is None:
        raise SchemaDiscoveryError(kind, f"kind not mentioned in builder error: {message!r}")

    start = message.find("(", match.end())
    end = message.find(")", start + 1) if start != -1 else -1
    if end == -1:
        raise SchemaDiscoveryError(kind, f"no parameter list in builder error: {message!r}")

    return tuple(a or b for a, b in _QUOTED.findall(message[start + 1 : end]))


class ReflectiveSignatureProvider(SignatureProvider):
    """Provokes a builder into describing its own parameters."""

    def __init__(self, builders=None):
        self.builders = builders if builders is not None else Builders()

    def fields(self, kind: str) -> Signature:
        name = lower_camel(kind)
        try:
            builder = self.builders[name]
        except KeyError:
            raise SchemaDiscoveryError(kind, f"no builder named {name!r}") from None

        try:
            builder()
        except Exception as e:
            return parse_signature(kind, str(e))
        raise SchemaDiscoveryError(kind, f"builder {name!r} accepted a call with no fields")


class TableSignatureProvider(SignatureProvider):
    def __init__(self, table: Mapping[str, Iterable[str]]):
        self.table = {kind: tuple(fields) for kind, fields in table.items()}

    @classmethod
    def from_file(cls, path):
        with open(path, "r", encoding="utf-8") as f:
            return cls(json.load(f))

    def fields(self, kind: str) -> Signature:
        try:
            return self.table[kind]
        except KeyError:
            raise SchemaDiscoveryError(kind, "not in signature table") from None


def generate_signature_table(builders=None) -> Dict[str, list]:
    """Discover the signature of every builder by reflection.

    Builders that do not correspond to a node kind, and kinds that take no
    fields, are left out.
    """
    builders = builders if builders is not None else Builders()
    provider = ReflectiveSignatureProvider(builders)
    table = {}
    for name in builders:
        kind = getattr(builders[name], "kind", None)
        if kind is None or kind in ZERO_FIELD_KINDS:
            continue
        table[kind] = list(provider.fields(kind))
    return table


class SignatureResolver:
    """Memoizes field lists by kind on top of a :class:`SignatureProvider`."""

    def __init__(self, provider: SignatureProvider = None):
        self.provider = provider if provider is not None else SchemaSignatureProvider()
        self._cache: Dict[str, Signature] = {kind: () for kind in ZERO_FIELD_KINDS}
        self._lock = threading.Lock()

    def resolve(self, kind: str) -> Signature:
        try:
            return self._cache[kind]
        except KeyError:
            pass

        fields = tuple(self.provider.fields(kind))
        with self._lock:
            # first writer wins, so every caller sees the same tuple
            fields = self._cache.setdefault(kind, fields)
        logger.debug("resolved %s%s", kind, fields)
        return fields

    def __contains__(self, kind):
        return kind in self._cache
