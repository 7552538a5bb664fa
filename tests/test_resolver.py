"""Tests for type resolution against a proto tree."""

import pytest

from xsdgen.codegen.core.proto import Element, ProtoTree, SimpleType
from xsdgen.codegen.core.resolver import ResolvedType, TypeResolver


class ExplodingTree:
    """A tree that fails on any lookup."""

    def simple_base(self, name):
        raise AssertionError(f"tree consulted for {name}")

    declared_type = simple_base
    definition = simple_base


@pytest.fixture
def resolver():
    return TypeResolver(
        ProtoTree(
            [
                SimpleType(name="Amount", base="Price"),
                SimpleType(name="Price", base="xs:decimal"),
                SimpleType(name="Tags", base="xs:string", is_list=True),
                Element(name="price", type="xs:decimal"),
                SimpleType(name="Loop", base="Back"),
                SimpleType(name="Back", base="Loop"),
            ]
        )
    )


class TestResolveBase:
    def test_single_lookup(self, resolver):
        assert resolver.resolve_base("Amount") == "Price"

    def test_declared_base_is_not_followed(self):
        resolver = TypeResolver(
            ProtoTree([SimpleType(name="A", base="B"), SimpleType(name="B", base="xs:string")])
        )
        assert resolver.resolve_base("A") == "B"
        assert resolver.resolve_base("B") == "string"

    def test_strips_prefix(self, resolver):
        assert resolver.resolve_base("tns:Price") == "decimal"

    def test_element_declaration(self, resolver):
        assert resolver.resolve_base("price") == "decimal"

    def test_unknown_name_is_returned(self, resolver):
        assert resolver.resolve_base("Product") == "Product"

    def test_list_type_is_not_followed(self, resolver):
        assert resolver.resolve_base("Tags") == "Tags"

    def test_cycle_terminates(self, resolver):
        assert resolver.resolve_base("Loop") == "Back"
        assert resolver.resolve_base("Back") == "Loop"


class TestResolveField:
    def test_builtin_skips_tree(self):
        resolver = TypeResolver(ExplodingTree())
        assert resolver.resolve_field("xs:string", "go") == ResolvedType(
            "string", True, "string"
        )

    def test_derived_simple_type(self, resolver):
        resolved = resolver.resolve_field("Price", "java")
        assert resolved == ResolvedType("BigDecimal", True, "decimal")

    def test_derived_from_user_type(self, resolver):
        resolved = resolver.resolve_field("Amount", "java")
        assert resolved == ResolvedType("Price", False, "Price")

    def test_user_type_becomes_identifier(self, resolver):
        resolved = resolver.resolve_field("tns:order-line", "rust")
        assert resolved == ResolvedType("OrderLine", False, "order-line")

    def test_empty_reference_defaults_to_any_type(self, resolver):
        assert resolver.field_type("", "typescript") == "string"


class TestUnresolved:
    def test_builtin(self, resolver):
        assert not resolver.unresolved("xs:int")

    def test_defined(self, resolver):
        assert not resolver.unresolved("Price")
        assert not resolver.unresolved("Tags")

    def test_missing(self, resolver):
        assert resolver.unresolved("Product")

    def test_empty(self, resolver):
        assert not resolver.unresolved("")
