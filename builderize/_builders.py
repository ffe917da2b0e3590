# SPDX-FileCopyrightText: Michael Popoloski
# SPDX-License-Identifier: MIT

"""Builder functions for Python syntax tree nodes.

Every concrete node class gets a builder named after it in lowerCamel case
(``BinOp`` -> ``binOp``) that takes the node's fields positionally, in
declaration order. Several names come out as Python keywords (``if``,
``return``, ``and``), so builders are reachable by subscription as well as
by attribute::

    b = Builders()
    b.binOp(b.constant(1, None), b.add(), b.constant(2, None))
    b["if"](b.name("x", b.load()), [b["pass"]()], [])

A builder for a kind with fields refuses to be called with no arguments at
all; the error message names the kind followed by its quoted field list,
which is what signature discovery relies on.
"""

import ast

# Aliases kept in the ast module for backwards compatibility. They never come
# out of the parser.
DEPRECATED_KINDS = frozenset(
    (
        "Num",
        "Str",
        "Bytes",
        "NameConstant",
        "Ellipsis",
        "Index",
        "ExtSlice",
        "Suite",
        "AugLoad",
        "AugStore",
        "Param",
        "slice",
    )
)


class BuilderArgumentError(TypeError):
    """A builder was called with the wrong number of field values."""


def lower_camel(kind):
    return kind[:1].lower() + kind[1:]


def node_classes(module=ast, base=ast.AST):
    """Yield the concrete (leaf) node classes defined in ``module``."""
    for cls in base.__subclasses__():
        if cls.__name__ in DEPRECATED_KINDS:
            continue
        children = list(node_classes(module, cls))
        if children:
            yield from children
        elif vars(module).get(cls.__name__) is cls:
            yield cls


def make_builder(cls):
    kind = cls.__name__
    fields = tuple(cls._fields)
    signature = "{}({})".format(kind, ", ".join(repr(f) for f in fields))

    def build(*args):
        if fields and not args:
            raise BuilderArgumentError(f"no value given for field {fields[0]!r} of {signature}")
        if len(args) > len(fields):
            raise BuilderArgumentError(
                f"{signature} takes at most {len(fields)} field values ({len(args)} given)"
            )
        return cls(**dict(zip(fields, args)))

    build.__name__ = build.__qualname__ = lower_camel(kind)
    build.kind = kind
    build.__doc__ = f"Build a {kind} node from {signature}."
    return build


def program(body, type_ignores=()):
    """Build a Module from a list of statements."""
    return ast.Module(body=list(body), type_ignores=list(type_ignores))


class Builders:
    """Namespace of node builders, one per concrete node class of ``module``."""

    def __init__(self, module=ast):
        self._builders = {}
        for cls in node_classes(module):
            self._builders[lower_camel(cls.__name__)] = make_builder(cls)
        self._builders["program"] = program

    def __getattr__(self, name):
        try:
            return self.__dict__["_builders"][name]
        except KeyError:
            raise AttributeError(f"no builder named {name!r}") from None

    def __getitem__(self, name):
        return self._builders[name]

    def __contains__(self, name):
        return name in self._builders

    def __iter__(self):
        return iter(sorted(self._builders))

    def __len__(self):
        return len(self._builders)

    def __dir__(self):
        return sorted(self._builders)

    def __repr__(self):
        return f"<Builders: {len(self._builders)} builders>"
