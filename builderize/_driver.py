# SPDX-FileCopyrightText: Michael Popoloski
# SPDX-License-Identifier: MIT

"""Parse, synthesize and render in one step, plus the command line tool."""

import argparse
import ast
import copy
import difflib
import keyword
import logging
import sys
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from builderize._builders import Builders
from builderize._diagnostics import BuilderizeError, ReplacementParseError, VerificationError
from builderize._layout import Renderer
from builderize._signatures import (
    ReflectiveSignatureProvider,
    SchemaSignatureProvider,
    SignatureProvider,
    SignatureResolver,
    TableSignatureProvider,
)
from builderize._syntax import ReplacementTable, TreeSynthesizer

logger = logging.getLogger(__name__)


@dataclass
class ConvertOptions:
    namespace: str = "b"
    indent: str = "  "
    verify: bool = False
    signatures: Optional[SignatureProvider] = None


def parse_replacements(pairs: Iterable[str]) -> Dict[str, str]:
    """Turn ``NAME=SOURCE`` strings into an ordered replacement mapping."""
    replacements = {}
    for pair in pairs:
        name, sep, fragment = pair.partition("=")
        name = name.strip()
        if not sep or not name.isidentifier():
            raise ReplacementParseError(pair, reason="expected NAME=SOURCE")
        replacements[name] = fragment
    return replacements


class _Substituter(ast.NodeTransformer):
    """Applies a replacement table directly to a tree.

    A fragment is visited with its own name shadowed, so other replacements
    still apply inside it but the name itself is never substituted again.
    """

    def __init__(self, table: ReplacementTable):
        self.table = table

    def visit_Name(self, node):
        if node.id in self.table:
            substituter = self.__class__(self.table.shadow(node.id))
            return substituter.visit(self.table.parse(node.id))
        return node


class Driver:
    """Converts Python source into builder code.

    A driver owns one signature resolver, so field lists discovered for one
    conversion are reused by the next.
    """

    def __init__(self, options: ConvertOptions = None):
        self.options = options if options is not None else ConvertOptions()
        self.builders = Builders()
        self.resolver = SignatureResolver(self.options.signatures)
        self.synthesizer = TreeSynthesizer(self.resolver, self.options.namespace)
        self.renderer = Renderer(self.options.indent)

    def convert(self, source: str, replacements=None) -> str:
        tree = ast.parse(source)
        table = ReplacementTable(replacements or ())
        text = self.renderer.render(self.synthesizer.synthesize(tree, table))
        if self.options.verify:
            self.verify(tree, text, table)
        return text

    def verify(self, tree: ast.AST, text: str, replacements=None) -> ast.AST:
        """Check that evaluating ``text`` rebuilds ``tree``.

        ``text`` is evaluated with nothing but the builders namespace in
        scope. The result and the original (with the same replacements
        applied) are printed with :func:`ast.unparse` and must match.
        """
        table = replacements
        if not isinstance(table, ReplacementTable):
            table = ReplacementTable(replacements or ())

        scope = {"__builtins__": {}, self.options.namespace: self.builders}
        try:
            rebuilt = eval(compile(text, "<builderize>", "eval"), scope)
        except Exception as e:
            raise VerificationError(f"evaluation failed: {e}") from e

        expected = ast.unparse(_Substituter(table).visit(copy.deepcopy(tree)))
        actual = ast.unparse(rebuilt)
        if expected != actual:
            diff = difflib.unified_diff(
                expected.splitlines(keepends=True),
                actual.splitlines(keepends=True),
                "input",
                "rebuilt",
            )
            raise VerificationError("".join(diff))

        logger.debug("verified %d characters of builder code", len(text))
        return rebuilt


def convert(source: str, replacements=None, options: ConvertOptions = None) -> str:
    """Convert ``source`` into code that rebuilds its syntax tree."""
    return Driver(options).convert(source, replacements)


def signature_provider(spec: str, builders: Builders = None) -> SignatureProvider:
    if spec == "schema":
        return SchemaSignatureProvider()
    if spec == "reflect":
        return ReflectiveSignatureProvider(builders)
    return TableSignatureProvider.from_file(spec)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="builderize",
        description="Print code that rebuilds the syntax tree of a Python source file",
    )
    parser.add_argument("file", nargs="?", default="-", help="Source file (default: stdin)")
    parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    parser.add_argument(
        "--replace",
        "-r",
        action="append",
        default=[],
        metavar="NAME=SOURCE",
        help="Replace the first occurrence of NAME along each path with the SOURCE expression",
    )
    parser.add_argument("--namespace", default="b", help="Name of the builders namespace")
    parser.add_argument("--indent", type=int, default=2, help="Spaces per nesting level")
    parser.add_argument(
        "--signatures",
        default="schema",
        help="Where builder signatures come from: 'schema', 'reflect' or a JSON table file",
    )
    parser.add_argument(
        "--verify", action="store_true", help="Evaluate the output and check it rebuilds the input"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output")

    args = parser.parse_args(argv)

    if not args.namespace.isidentifier() or keyword.iskeyword(args.namespace):
        parser.error(f"--namespace must be an identifier, not {args.namespace!r}")
    if args.indent < 0:
        parser.error("--indent cannot be negative")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    try:
        if args.file == "-":
            source = sys.stdin.read()
        else:
            with open(args.file, "r", encoding="utf-8") as f:
                source = f.read()

        options = ConvertOptions(
            namespace=args.namespace,
            indent=" " * args.indent,
            verify=args.verify,
            signatures=signature_provider(args.signatures),
        )
        text = convert(source, parse_replacements(args.replace), options)
    except (BuilderizeError, SyntaxError, OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except RecursionError:
        print("error: input is nested too deeply to convert", file=sys.stderr)
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
    else:
        sys.stdout.write(text)
    return 0

