# SPDX-FileCopyrightText: Michael Popoloski
# SPDX-License-Identifier: MIT

"""Errors raised while turning a syntax tree into builder code.

None of these are recoverable: they propagate to the top-level caller and no
partial output is produced.
"""


class BuilderizeError(Exception):
    """Base class for every error raised by builderize."""


class SchemaDiscoveryError(BuilderizeError):
    """The field list of a node kind could not be determined."""

    def __init__(self, kind: str, reason: str):
        super().__init__(f"cannot discover fields of {kind}: {reason}")
        self.kind = kind
        self.reason = reason


class UnrecognizedNodeError(BuilderizeError):
    """A value is neither a node, a list nor a literal."""

    def __init__(self, value):
        super().__init__(f"unrecognized node: {value!r} ({type(value).__name__})")
        self.value = value


class UnsupportedLayoutError(BuilderizeError):
    """The layout planner or renderer got an expression type it can't handle."""

    def __init__(self, expr):
        super().__init__(f"unsupported construction expression: {type(expr).__name__}")
        self.expr = expr


class ReplacementParseError(BuilderizeError):
    """A replacement fragment is not a single valid expression."""

    def __init__(self, fragment: str, name: str = None, reason: str = None):
        message = f"invalid replacement {fragment!r}"
        if name is not None:
            message = f"invalid replacement for {name}: {fragment!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.fragment = fragment
        self.name = name


class VerificationError(BuilderizeError):
    """Evaluating the generated code did not reproduce the input."""

    def __init__(self, diff: str):
        super().__init__("generated code does not reconstruct the input:\n" + diff)
        self.diff = diff
