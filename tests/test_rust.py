"""Rust output for the common schema shapes."""

import pytest

from xsdgen.codegen import get_generator
from xsdgen.codegen.core.proto import (
    ComplexType,
    Element,
    Group,
    ProtoTree,
)

DERIVES = "#[derive(Debug, Clone, PartialEq, Serialize, Deserialize)]"


@pytest.fixture
def rust():
    return get_generator("rs")


class TestRust:
    def test_type_alias(self, rust, age_tree):
        assert rust.generate(age_tree) == (
            "// Code generated by xsdgen. DO NOT EDIT.\n"
            "\n"
            "/// Age ...\n"
            "pub type Age = u64;\n"
        )

    def test_union_members_are_optional(self, rust, currency_tree):
        code = rust.generate(currency_tree)

        assert (
            '    #[serde(rename = "USD")]\n'
            "    #[serde(default)]\n"
            "    pub usd: Option<USD>,"
        ) in code

    def test_plural_element(self, rust, order_tree):
        code = rust.generate(order_tree)

        assert "use serde::{Deserialize, Serialize};" in code
        assert (
            f"{DERIVES}\n"
            "pub struct Order {\n"
            '    #[serde(rename = "item")]\n'
            "    #[serde(default)]\n"
            "    pub item: Vec<Product>,\n"
            "}"
        ) in code
        assert code.index("pub struct Product") < code.index("pub struct Order")

    def test_renamed_element_is_a_newtype(self, rust, customer_id_tree):
        code = rust.generate(customer_id_tree)

        assert (
            f"{DERIVES}\n"
            '#[serde(rename = "customer-id")]\n'
            "pub struct CustomerId(pub String);"
        ) in code

    def test_forward_reference(self, rust, forward_reference_tree):
        code = rust.generate(forward_reference_tree)

        assert '    #[serde(rename = "@code")]\n    pub code: String,' in code
        assert code.index("pub type Code = String;") < code.index("pub struct Item")

    def test_recursive_and_keyword_fields(self, rust):
        tree = ProtoTree(
            [
                ComplexType(
                    name="Node",
                    elements=[
                        Element(name="type", type="xs:string"),
                        Element(name="child", type="Node", optional=True),
                    ],
                )
            ]
        )

        code = rust.generate(tree)

        assert "pub r#type: String," in code
        assert "pub child: Option<Box<Node>>," in code

    def test_mutual_recursion_is_boxed(self, rust, mutual_recursion_tree):
        code = rust.generate(mutual_recursion_tree)

        assert (
            '    #[serde(rename = "a")]\n'
            "    #[serde(default)]\n"
            "    pub a: Option<Box<A>>,"
        ) in code
        assert '    #[serde(rename = "b")]\n    pub b: B,' in code

    def test_group_is_flattened(self, rust):
        tree = ProtoTree(
            [
                Group(name="Contact", elements=[Element(name="email", type="xs:string")]),
                ComplexType(name="Person", groups=[Group(name="Contact", ref="Contact")]),
            ]
        )

        code = rust.generate(tree)

        assert "    #[serde(flatten)]\n    pub contact: Contact," in code

    def test_comment_prefix(self, rust, age_tree):
        rust_without_comments = get_generator("rust", {"add_comments": False})
        assert "///" not in rust_without_comments.generate(age_tree)
