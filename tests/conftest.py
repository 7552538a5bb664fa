"""Shared fixtures: small proto trees and XSD documents."""

import pytest

from xsdgen.codegen.core.proto import (
    Attribute,
    ComplexType,
    Element,
    ProtoTree,
    SimpleType,
)

ORDER_XSD = """\
<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <xs:simpleType name="Age">
    <xs:annotation>
      <xs:documentation>Age in years</xs:documentation>
    </xs:annotation>
    <xs:restriction base="xs:positiveInteger"/>
  </xs:simpleType>
  <xs:complexType name="Order">
    <xs:sequence>
      <xs:element name="item" type="Product" maxOccurs="unbounded"/>
      <xs:element name="note" type="xs:string" minOccurs="0"/>
    </xs:sequence>
    <xs:attribute name="id" type="xs:ID" use="required"/>
  </xs:complexType>
  <xs:complexType name="Product">
    <xs:sequence>
      <xs:element name="name" type="xs:string"/>
    </xs:sequence>
  </xs:complexType>
</xs:schema>
"""


@pytest.fixture
def age_tree():
    """A single simple type restricting a built-in."""
    return ProtoTree([SimpleType(name="Age", base="xs:positiveInteger")])


@pytest.fixture
def currency_tree():
    """A union whose members are resolved by name."""
    return ProtoTree(
        [SimpleType(name="Currency", is_union=True, member_types={"USD": "", "EUR": ""})]
    )


@pytest.fixture
def order_tree():
    """Order references Product before Product is declared."""
    return ProtoTree(
        [
            ComplexType(
                name="Order",
                elements=[Element(name="item", type="Product", plural=True)],
            ),
            ComplexType(
                name="Product",
                elements=[Element(name="name", type="xs:string")],
            ),
        ]
    )


@pytest.fixture
def customer_id_tree():
    """A top-level element whose name is not a valid identifier."""
    return ProtoTree([Element(name="customer-id", type="xs:string")])


@pytest.fixture
def forward_reference_tree():
    """An attribute typed by a simple type declared later."""
    return ProtoTree(
        [
            ComplexType(name="Item", attributes=[Attribute(name="code", type="Code")]),
            SimpleType(name="Code", base="xs:string"),
        ]
    )


@pytest.fixture
def order_xsd(tmp_path):
    """The order schema written to a temporary .xsd file."""
    path = tmp_path / "order.xsd"
    path.write_text(ORDER_XSD, encoding="utf-8")
    return path


@pytest.fixture
def order_xsd_text():
    """The order schema as text."""
    return ORDER_XSD


@pytest.fixture
def shared_code_tree():
    """Two top-level attributes typed by a simple type declared after both."""
    return ProtoTree(
        [
            Attribute(name="Lang", type="Code"),
            Attribute(name="Country", type="tns:Code"),
            SimpleType(name="Code", base="xs:string"),
        ]
    )


@pytest.fixture
def mutual_recursion_tree():
    """A contains B, B optionally contains A."""
    return ProtoTree(
        [
            ComplexType(name="A", elements=[Element(name="b", type="B")]),
            ComplexType(name="B", elements=[Element(name="a", type="A", optional=True)]),
        ]
    )
