"""Ruby output for the common schema shapes."""

import pytest

from xsdgen.codegen import get_generator
from xsdgen.codegen.core.proto import ComplexType, Element, ProtoTree, SimpleType


@pytest.fixture
def ruby():
    return get_generator("rb")


class TestRuby:
    def test_file_layout(self, ruby, age_tree):
        assert ruby.generate(age_tree) == (
            "# frozen_string_literal: true\n"
            "\n"
            "# Code generated by xsdgen. DO NOT EDIT.\n"
            "\n"
            "module Schema\n"
            "  # Age ...\n"
            "  class Age < Integer; end\n"
            "end\n"
        )

    def test_union(self, ruby, currency_tree):
        code = ruby.generate(currency_tree)

        assert "element :usd, 'Schema::USD', tag: 'USD'" in code
        assert "element :eur, 'Schema::EUR', tag: 'EUR'" in code

    def test_plural_element(self, ruby, order_tree):
        code = ruby.generate(order_tree)

        assert "require 'xmlmapper'" in code
        assert (
            "  class Order\n"
            "    include XmlMapper\n"
            "\n"
            "    has_many :item, 'Schema::Product', tag: 'item'\n"
            "  end"
        ) in code
        assert "element :name, String, tag: 'name'" in code
        assert code.index("class Product") < code.index("class Order")

    def test_renamed_element(self, ruby, customer_id_tree):
        code = ruby.generate(customer_id_tree)

        assert (
            "  class CustomerId\n"
            "    include XmlMapper\n"
            "\n"
            "    tag 'customer-id'\n"
            "    content :value, String\n"
            "  end"
        ) in code

    def test_forward_reference(self, ruby, forward_reference_tree):
        code = ruby.generate(forward_reference_tree)

        assert "attribute :code, String, tag: 'code'" in code
        assert code.index("class Code < String; end") < code.index("class Item")

    def test_date_requires_library(self, ruby):
        tree = ProtoTree(
            [ComplexType(name="Person", elements=[Element(name="born", type="xs:date")])]
        )

        code = ruby.generate(tree)

        assert "require 'date'\nrequire 'xmlmapper'" in code
        assert "element :born, Date, tag: 'born'" in code

    def test_list_alias(self, ruby):
        tree = ProtoTree([SimpleType(name="Codes", base="xs:string", is_list=True)])
        assert "class Codes < Array; end" in ruby.generate(tree)

    def test_module_name(self, order_tree):
        ruby = get_generator("ruby", {"package_name": "Ota"})
        code = ruby.generate(order_tree)

        assert "module Ota" in code
        assert "'Ota::Product'" in code
