"""Tests for building proto trees from XSD markup."""

import logging

import pytest

from xsdgen.codegen import get_generator
from xsdgen.codegen.core.proto import (
    Attribute,
    AttributeGroup,
    ComplexType,
    Element,
    Group,
    NodeKind,
    SimpleType,
)
from xsdgen.parser import SchemaParseError, parse_schema



def schema(body: str) -> str:
    return (
        '<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema" '
        'xmlns:tns="urn:example">' + body + "</xs:schema>"
    )


class TestDocumentErrors:
    def test_malformed(self):
        with pytest.raises(SchemaParseError, match="Malformed"):
            parse_schema("<xs:schema")

    def test_wrong_root(self):
        with pytest.raises(SchemaParseError, match="found 'root'"):
            parse_schema("<root/>")

    def test_empty_schema(self):
        assert len(parse_schema(schema(""))) == 0

    def test_imports_are_skipped(self, caplog):
        caplog.set_level(logging.INFO, logger="xsdgen")
        tree = parse_schema(
            schema('<xs:import namespace="urn:other" schemaLocation="other.xsd"/>')
        )

        assert len(tree) == 0
        assert "Skipping xs:import of other.xsd" in caplog.text


class TestSimpleTypes:
    def test_order_schema(self, order_xsd_text):
        tree = parse_schema(order_xsd_text)

        age = tree.find(NodeKind.SIMPLE_TYPE, "Age")
        assert age == SimpleType(name="Age", doc="Age in years", base="xs:positiveInteger")

    def test_list(self):
        tree = parse_schema(
            schema('<xs:simpleType name="Codes"><xs:list itemType="xs:string"/></xs:simpleType>')
        )
        assert tree[0] == SimpleType(name="Codes", base="xs:string", is_list=True)

    def test_union_member_types(self):
        tree = parse_schema(
            schema(
                '<xs:simpleType name="Currency">'
                '<xs:union memberTypes="tns:USD EUR">'
                '<xs:simpleType><xs:restriction base="xs:int"/></xs:simpleType>'
                "</xs:union>"
                "</xs:simpleType>"
            )
        )

        currency = tree[0]
        assert currency.is_union
        assert currency.member_types == {"USD": "", "EUR": "", "int": "xs:int"}

    def test_inline_restriction_base(self):
        tree = parse_schema(
            schema(
                '<xs:simpleType name="Size"><xs:restriction>'
                '<xs:simpleType><xs:restriction base="xs:int"/></xs:simpleType>'
                "</xs:restriction></xs:simpleType>"
            )
        )

        assert [node.name for node in tree] == ["Size-base", "Size"]
        assert tree[1].base == "Size-base"
        assert tree[0].base == "xs:int"


class TestComplexTypes:
    def test_order_schema(self, order_xsd_text):
        order = parse_schema(order_xsd_text).find(NodeKind.COMPLEX_TYPE, "Order")

        assert order.elements == [
            Element(name="item", type="Product", plural=True),
            Element(name="note", type="xs:string", optional=True),
        ]
        assert order.attributes == [Attribute(name="id", type="xs:ID", optional=False)]

    def test_choice_makes_elements_optional(self):
        tree = parse_schema(
            schema(
                '<xs:complexType name="Payment"><xs:choice>'
                '<xs:element name="card" type="xs:string"/>'
                '<xs:element name="cash" type="xs:decimal"/>'
                "</xs:choice></xs:complexType>"
            )
        )

        assert all(element.optional for element in tree[0].elements)

    def test_repeated_sequence_makes_elements_plural(self):
        tree = parse_schema(
            schema(
                '<xs:complexType name="Lines"><xs:sequence maxOccurs="unbounded">'
                '<xs:element name="line" type="xs:string"/>'
                "</xs:sequence></xs:complexType>"
            )
        )

        assert tree[0].elements[0].plural

    def test_group_and_attribute_group_references(self):
        tree = parse_schema(
            schema(
                '<xs:group name="Contact"><xs:sequence>'
                '<xs:element name="email" type="xs:string"/>'
                "</xs:sequence></xs:group>"
                '<xs:attributeGroup name="Common">'
                '<xs:attribute name="lang" type="xs:language"/>'
                "</xs:attributeGroup>"
                '<xs:complexType name="Person">'
                '<xs:sequence><xs:group ref="tns:Contact"/></xs:sequence>'
                '<xs:attributeGroup ref="tns:Common"/>'
                "</xs:complexType>"
            )
        )

        person = tree.find(NodeKind.COMPLEX_TYPE, "Person")
        assert person.groups == [Group(name="Contact", ref="tns:Contact")]
        assert person.attribute_groups == [AttributeGroup(name="Common", ref="tns:Common")]
        assert isinstance(tree.definition("Contact"), Group)
        assert tree.definition("Common").attributes == [
            Attribute(name="lang", type="xs:language", optional=True)
        ]

    def test_complex_content_extension(self):
        tree = parse_schema(
            schema(
                '<xs:complexType name="Base"><xs:sequence>'
                '<xs:element name="id" type="xs:int"/>'
                "</xs:sequence></xs:complexType>"
                '<xs:complexType name="Special"><xs:complexContent>'
                '<xs:extension base="tns:Base"><xs:sequence>'
                '<xs:element name="extra" type="xs:string"/>'
                "</xs:sequence></xs:extension>"
                "</xs:complexContent></xs:complexType>"
            )
        )

        special = tree.find(NodeKind.COMPLEX_TYPE, "Special")
        assert special.groups == [Group(name="Base", ref="tns:Base")]
        assert [element.name for element in special.elements] == ["extra"]

    def test_simple_content_extension(self):
        tree = parse_schema(
            schema(
                '<xs:complexType name="Price"><xs:simpleContent>'
                '<xs:extension base="xs:decimal">'
                '<xs:attribute name="currency" type="xs:string" use="required"/>'
                "</xs:extension></xs:simpleContent></xs:complexType>"
            )
        )

        price = tree[0]
        assert price.groups == []
        assert price.attributes == [Attribute(name="currency", type="xs:string")]


class TestInlineTypes:
    def test_anonymous_complex_type_precedes_element(self):
        tree = parse_schema(
            schema(
                '<xs:element name="order"><xs:complexType><xs:sequence>'
                '<xs:element name="id" type="xs:int"/>'
                "</xs:sequence></xs:complexType></xs:element>"
            )
        )

        assert [type(node) for node in tree] == [ComplexType, Element]
        assert tree[1].type == "order"

    def test_anonymous_attribute_type_is_qualified_on_collision(self):
        tree = parse_schema(
            schema(
                '<xs:simpleType name="size"><xs:restriction base="xs:string"/></xs:simpleType>'
                '<xs:complexType name="Item">'
                '<xs:attribute name="size"><xs:simpleType>'
                '<xs:restriction base="xs:int"/>'
                "</xs:simpleType></xs:attribute>"
                "</xs:complexType>"
            )
        )

        item = tree.find(NodeKind.COMPLEX_TYPE, "Item")
        assert item.attributes[0].type == "Item-size"
        assert tree.definition("Item-size").base == "xs:int"

    def test_element_reference(self):
        tree = parse_schema(
            schema(
                '<xs:complexType name="Cart"><xs:sequence>'
                '<xs:element ref="tns:item" minOccurs="0" maxOccurs="5"/>'
                "</xs:sequence></xs:complexType>"
            )
        )

        assert tree[0].elements == [
            Element(name="item", type="tns:item", plural=True, optional=True)
        ]


class TestEndToEnd:
    def test_order_schema_to_go(self, order_xsd_text):
        code = get_generator("go").generate(parse_schema(order_xsd_text))

        assert "// Age is Age in years\ntype Age uint" in code
        assert '\tIdAttr string `xml:"id,attr"`' in code
        assert '\tItem []Product `xml:"item"`' in code
        assert '\tNote string `xml:"note,omitempty"`' in code
        assert code.index("type Product struct") < code.index("type Order struct")

    def test_inline_root_element_to_typescript(self):
        tree = parse_schema(
            schema(
                '<xs:element name="Order"><xs:complexType><xs:sequence>'
                '<xs:element name="id" type="xs:int"/>'
                "</xs:sequence></xs:complexType></xs:element>"
            )
        )

        code = get_generator("typescript").generate(tree)

        assert code.count("export class Order {") == 1
        assert "id!: number;" in code
