"""
Ruby code generator implementation.

Generates xmlmapper classes inside one module.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from ...core.generator import CodeGenerator, GenerationContext, Member
from ...core.naming import field_identifier, unique_name
from ...core.proto import (
    Attribute,
    AttributeGroup,
    ComplexType,
    Element,
    Group,
    Node,
    NodeKind,
    SimpleType,
)
from ...core.resolver import ResolvedType

MAPPER_LIBRARY = "xmlmapper"


class RubyGenerator(CodeGenerator):
    """Code generator for Ruby xmlmapper classes."""

    comment_prefix = "#"
    type_imports = {"Date": "date", "DateTime": "date"}
    file_template = "file.rb.j2"

    @property
    def language_name(self) -> str:
        return "ruby"

    @property
    def file_extension(self) -> str:
        return ".rb"

    def get_template_directory(self) -> Optional[Path]:
        """Return the Ruby templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    def sequence_type(self, type_name: str) -> str:
        # Ruby arrays are untyped
        return "Array"

    def mapper_type(self, member: Member, ctx: GenerationContext) -> str:
        """Type argument of a mapping macro; user types are named lazily."""
        if member.builtin:
            return member.type
        return f"'{ctx.config.package_name}::{member.type}'"

    def generate_simple_type(self, node: SimpleType, ctx: GenerationContext) -> str:
        if node.is_list:
            return self._alias(node, self.resolve_type(node.base, ctx), True, ctx)

        if node.is_union and node.member_types:
            return self._class(node, self.union_members(node, ctx), ctx)

        return self._alias(node, self.resolve_type(node.base, ctx), False, ctx)

    def generate_complex_type(self, node: ComplexType, ctx: GenerationContext) -> str:
        return self._class(node, self.members(node, ctx), ctx)

    def generate_group(self, node: Group, ctx: GenerationContext) -> str:
        return self._class(node, self.members(node, ctx), ctx)

    def generate_attribute_group(
        self, node: AttributeGroup, ctx: GenerationContext
    ) -> str:
        return self._class(node, self.members(node, ctx), ctx)

    def generate_element(self, node: Element, ctx: GenerationContext) -> str:
        return self._alias(node, self.resolve_type(node.type, ctx), node.plural, ctx)

    def generate_attribute(self, node: Attribute, ctx: GenerationContext) -> str:
        return self._alias(node, self.resolve_type(node.type, ctx), node.plural, ctx)

    def _alias(
        self,
        node: Node,
        resolved: ResolvedType,
        plural: bool,
        ctx: GenerationContext,
    ) -> str:
        """``class X < T; end``, or a mapper class keeping the schema name."""
        name = self.declaration_name(node, ctx)
        superclass = self.sequence_type(resolved.name) if plural else resolved.name

        if name == node.name:
            return self.render_template(
                "alias.rb.j2",
                {
                    "name": name,
                    "superclass": superclass,
                    "comment": self.comment(name, node, ctx),
                },
            )

        self.require(MAPPER_LIBRARY, ctx)
        if plural or resolved.builtin:
            macro = f"content :value, {superclass}"
        else:
            member = Member(NodeKind.ELEMENT, node.name, resolved.name)
            macro = f"has_one :value, {self.mapper_type(member, ctx)}"

        return self.render_template(
            "class.rb.j2",
            {
                "name": name,
                "comment": self.comment(name, node, ctx),
                "xml_name": node.name,
                "mappings": [macro],
                "indent": ctx.config.indent,
            },
        )

    def _class(self, node: Node, members: List[Member], ctx: GenerationContext) -> str:
        self.require(MAPPER_LIBRARY, ctx)
        name = self.declaration_name(node, ctx)

        used: Set[str] = set()
        return self.render_template(
            "class.rb.j2",
            {
                "name": name,
                "comment": self.comment(name, node, ctx),
                "xml_name": node.name if name != node.name else None,
                "mappings": [self._mapping(member, used, ctx) for member in members],
                "indent": ctx.config.indent,
            },
        )

    def _mapping(self, member: Member, used: Set[str], ctx: GenerationContext) -> str:
        if member.kind == NodeKind.ATTRIBUTE:
            macro = "has_many" if member.plural else "attribute"
        elif member.kind in (NodeKind.GROUP, NodeKind.ATTRIBUTE_GROUP):
            macro = "has_many" if member.plural else "has_one"
        else:
            macro = "has_many" if member.plural else "element"

        field_name = unique_name(field_identifier(member.name) or "value", used)
        return (
            f"{macro} :{field_name}, {self.mapper_type(member, ctx)}, "
            f"tag: '{member.name}'"
        )
