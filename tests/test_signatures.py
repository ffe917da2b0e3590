# SPDX-FileCopyrightText: Michael Popoloski
# SPDX-License-Identifier: MIT

import json
import threading

import pytest

from builderize.builders import Builders, node_classes
from builderize.diagnostics import SchemaDiscoveryError
from builderize.signatures import (
    ZERO_FIELD_KINDS,
    ReflectiveSignatureProvider,
    SchemaSignatureProvider,
    SignatureProvider,
    SignatureResolver,
    TableSignatureProvider,
    generate_signature_table,
    parse_signature,
)


class CountingProvider(SignatureProvider):
    def __init__(self):
        self.calls = []

    def fields(self, kind):
        self.calls.append(kind)
        if kind == "Frobnicate":
            raise SchemaDiscoveryError(kind, "unknown")
        return ["left", "op", "right"]


class TestParseSignature:
    def test_builder_message(self):
        message = "no value given for field 'left' of BinOp('left', 'op', 'right')"
        assert parse_signature("BinOp", message) == ("left", "op", "right")

    def test_double_quotes_and_annotations(self):
        message = (
            'no value or default function given for field "operator" of '
            'BinaryExpression("operator": BinaryOperator, "left": Expression, "right": Expression)'
        )
        assert parse_signature("BinaryExpression", message) == ("operator", "left", "right")

    def test_kind_must_be_a_whole_word(self):
        message = "MyBinOp('a', 'b') is not BinOp('left', 'op', 'right')"
        assert parse_signature("BinOp", message) == ("left", "op", "right")

        with pytest.raises(SchemaDiscoveryError):
            parse_signature("BinOp", "MyBinOp('a', 'b')")

    def test_empty_parameter_list(self):
        assert parse_signature("Widget", "Widget() takes nothing") == ()

    def test_missing_parenthesis(self):
        with pytest.raises(SchemaDiscoveryError) as excinfo:
            parse_signature("BinOp", "BinOp('left', 'op'")
        assert excinfo.value.kind == "BinOp"

        with pytest.raises(SchemaDiscoveryError):
            parse_signature("BinOp", "BinOp needs some fields")


def test_schema_provider():
    provider = SchemaSignatureProvider()
    assert provider.fields("BinOp") == ("left", "op", "right")
    assert provider.fields("Name") == ("id", "ctx")
    assert provider.fields("Load") == ()

    with pytest.raises(SchemaDiscoveryError):
        provider.fields("Frobnicate")
    with pytest.raises(SchemaDiscoveryError):
        provider.fields("parse")


def test_reflective_provider():
    provider = ReflectiveSignatureProvider(Builders())
    assert provider.fields("BinOp") == ("left", "op", "right")
    assert provider.fields("Constant") == ("value", "kind")
    assert provider.fields("If") == ("test", "body", "orelse")


def test_reflective_provider_agrees_with_schema():
    reflective = ReflectiveSignatureProvider(Builders())
    schema = SchemaSignatureProvider()
    for cls in node_classes():
        if cls._fields:
            assert reflective.fields(cls.__name__) == schema.fields(cls.__name__)


def test_reflective_provider_failures():
    provider = ReflectiveSignatureProvider(Builders())

    with pytest.raises(SchemaDiscoveryError) as excinfo:
        provider.fields("Frobnicate")
    assert "no builder" in str(excinfo.value)

    # zero-field builders succeed when probed
    with pytest.raises(SchemaDiscoveryError) as excinfo:
        provider.fields("Load")
    assert "accepted a call" in str(excinfo.value)


def test_reflective_provider_with_other_builders():
    def widget(*args):
        raise ValueError("Widget requires ('size', \"color\")")

    provider = ReflectiveSignatureProvider({"widget": widget})
    assert provider.fields("Widget") == ("size", "color")


def test_table_provider(tmp_path):
    provider = TableSignatureProvider({"BinOp": ["left", "op", "right"]})
    assert provider.fields("BinOp") == ("left", "op", "right")
    with pytest.raises(SchemaDiscoveryError):
        provider.fields("Name")

    path = tmp_path / "signatures.json"
    path.write_text(json.dumps({"Name": ["id", "ctx"]}))
    assert TableSignatureProvider.from_file(path).fields("Name") == ("id", "ctx")


def test_generate_signature_table():
    table = generate_signature_table(Builders())
    assert table["BinOp"] == ["left", "op", "right"]
    assert table["Name"] == ["id", "ctx"]
    assert "Load" not in table
    assert "program" not in table
    assert not set(table) & ZERO_FIELD_KINDS

    provider = TableSignatureProvider(table)
    assert provider.fields("Constant") == ("value", "kind")


class TestResolver:
    def test_memoizes(self):
        provider = CountingProvider()
        resolver = SignatureResolver(provider)

        first = resolver.resolve("Widget")
        second = resolver.resolve("Widget")
        assert first == ("left", "op", "right")
        assert first is second
        assert provider.calls == ["Widget"]
        assert "Widget" in resolver

    def test_seeded_with_zero_field_kinds(self):
        provider = CountingProvider()
        resolver = SignatureResolver(provider)

        for kind in ("Load", "Add", "Pass"):
            assert kind in resolver
            assert resolver.resolve(kind) == ()
        assert provider.calls == []

    def test_failures_are_not_cached(self):
        provider = CountingProvider()
        resolver = SignatureResolver(provider)

        for _ in range(2):
            with pytest.raises(SchemaDiscoveryError):
                resolver.resolve("Frobnicate")
        assert provider.calls == ["Frobnicate", "Frobnicate"]
        assert "Frobnicate" not in resolver

    def test_reflective_resolver_handles_zero_field_kinds(self):
        resolver = SignatureResolver(ReflectiveSignatureProvider(Builders()))
        assert resolver.resolve("Load") == ()
        assert resolver.resolve("Name") == ("id", "ctx")

    def test_defaults_to_schema(self):
        resolver = SignatureResolver()
        assert isinstance(resolver.provider, SchemaSignatureProvider)
        assert resolver.resolve("Call") == ("func", "args", "keywords")

    def test_concurrent_resolution(self):
        resolver = SignatureResolver(CountingProvider())
        results = []

        def worker():
            results.append(resolver.resolve("Widget"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r is results[0] for r in results)
