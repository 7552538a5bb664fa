"""TypeScript output for the common schema shapes."""

import pytest

from xsdgen.codegen import get_generator
from xsdgen.codegen.core.proto import ComplexType, Element, ProtoTree, SimpleType
from xsdgen.codegen.languages.typescript.generator import property_key


@pytest.fixture
def ts():
    return get_generator("ts")


class TestTypeScript:
    def test_file_layout(self, ts, age_tree):
        assert ts.generate(age_tree) == (
            "// Code generated by xsdgen. DO NOT EDIT.\n"
            "\n"
            "export namespace schema {\n"
            "    // Age ...\n"
            "    export type Age = number;\n"
            "}\n"
        )

    def test_union_members_are_optional(self, ts, currency_tree):
        code = ts.generate(currency_tree)

        assert "export class Currency {" in code
        assert "USD?: USD;" in code
        assert "EUR?: EUR;" in code

    def test_plural_element(self, ts, order_tree):
        code = ts.generate(order_tree)

        assert "item!: Array<Product>;" in code
        assert "name!: string;" in code
        assert code.index("export class Product") < code.index("export class Order")

    def test_renamed_element(self, ts, customer_id_tree):
        code = ts.generate(customer_id_tree)

        assert "export type CustomerId = string;" in code
        assert "export const CustomerIdXmlName = 'customer-id';" in code

    def test_forward_reference(self, ts, forward_reference_tree):
        code = ts.generate(forward_reference_tree)

        assert "code!: string;" in code
        assert code.index("export type Code = string;") < code.index("export class Item")

    def test_shared_reference_is_emitted_once(self, ts, shared_code_tree):
        code = ts.generate(shared_code_tree)

        assert code.count("export type Code ") == 1
        assert code.index("export type Code = string;") < code.index(
            "export type Lang = string;"
        )
        assert "export type Country = string;" in code

    def test_renamed_class_and_quoted_keys(self, ts):
        tree = ProtoTree(
            [
                ComplexType(
                    name="line-item",
                    elements=[Element(name="unit-price", type="xs:decimal", optional=True)],
                )
            ]
        )

        code = ts.generate(tree)

        assert "export class LineItem {" in code
        assert "static readonly xmlName = 'line-item';" in code
        assert "'unit-price'?: number;" in code

    def test_list_alias(self, ts):
        tree = ProtoTree([SimpleType(name="Codes", base="xs:string", is_list=True)])
        assert "export type Codes = Array<string>;" in ts.generate(tree)


def test_property_key():
    assert property_key("name") == "name"
    assert property_key("$ref") == "$ref"
    assert property_key("unit-price") == "'unit-price'"
