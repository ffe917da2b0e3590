# SPDX-FileCopyrightText: Michael Popoloski
# SPDX-License-Identifier: MIT

"""Layout decisions and text rendering for construction expressions.

Everything renders on one line unless :func:`is_multiline` says otherwise.
A call or array goes multiline as soon as it has more than one argument or
element, so the output favors short lines over wide ones.
"""

from functools import singledispatch

from builderize._diagnostics import UnsupportedLayoutError
from builderize._syntax import Array, Call, Literal, Member, Ref, Statement


@singledispatch
def is_multiline(expr) -> bool:
    raise UnsupportedLayoutError(expr)


@is_multiline.register
def _(expr: Statement) -> bool:
    return is_multiline(expr.expr)


@is_multiline.register
def _(expr: Call) -> bool:
    return len(expr.args) > 1 or any(is_multiline(arg) for arg in expr.args)


@is_multiline.register
def _(expr: Member) -> bool:
    return is_multiline(expr.obj) or is_multiline(expr.prop)


@is_multiline.register
def _(expr: Ref) -> bool:
    return False


@is_multiline.register
def _(expr: Array) -> bool:
    if len(expr.elements) > 1:
        return True
    return len(expr.elements) == 1 and is_multiline(expr.elements[0])


@is_multiline.register
def _(expr: Literal) -> bool:
    return "\n" in literal_text(expr)


def literal_text(expr: Literal) -> str:
    """The source text a literal renders as."""
    if expr.raw is not None:
        return expr.raw
    if isinstance(expr.value, str):
        return quote(expr.value)
    return repr(expr.value)


def quote(text: str) -> str:
    """Format a string literal in single quotes."""
    literal = repr(text)
    if literal.startswith('"'):
        # repr only switches to double quotes when the text holds a single
        # quote and no double quote
        literal = "'" + literal[1:-1].replace("'", "\\'") + "'"
    return literal


class Renderer:
    """Renders construction expressions as Python source.

    Args:
        indent: The text added per nesting level.
    """

    def __init__(self, indent: str = "  "):
        self.step = indent
        self._handlers = {
            Statement: self._statement,
            Call: self._call,
            Member: self._member,
            Ref: self._ref,
            Array: self._array,
            Literal: self._literal,
        }

    def render(self, expr, indent: str = "") -> str:
        try:
            handler = self._handlers[type(expr)]
        except KeyError:
            raise UnsupportedLayoutError(expr) from None
        return handler(expr, indent)

    def _lines(self, items, indent):
        inner = indent + self.step
        lines = []
        for item in items:
            lines.append(inner + self.render(item, inner))
        return ",\n".join(lines)

    def _statement(self, expr, indent):
        return self.render(expr.expr, indent) + "\n"

    def _call(self, expr, indent):
        callee = self.render(expr.callee, indent)
        if not is_multiline(expr):
            return "{}({})".format(callee, ", ".join(self.render(a, indent) for a in expr.args))

        if len(expr.args) == 1 and isinstance(expr.args[0], Array):
            body = self._lines(expr.args[0].elements, indent)
            return f"{callee}([\n{body}\n{indent}])"
        return f"{callee}(\n{self._lines(expr.args, indent)}\n{indent})"

    def _member(self, expr, indent):
        obj = self.render(expr.obj, indent)
        prop = self.render(expr.prop, indent)
        if expr.computed:
            return f"{obj}[{prop}]"
        return f"{obj}.{prop}"

    def _ref(self, expr, indent):
        return expr.name

    def _array(self, expr, indent):
        if not is_multiline(expr):
            return "[{}]".format(", ".join(self.render(e, indent) for e in expr.elements))
        return f"[\n{self._lines(expr.elements, indent)}\n{indent}]"

    def _literal(self, expr, indent):
        return literal_text(expr)


def render(expr, indent: str = "  ") -> str:
    """Render ``expr`` with ``indent`` as the nesting step."""
    return Renderer(indent).render(expr)
