"""
Rust code generator implementation.

Generates serde-derived structs and type aliases. Field and container names
that differ from the schema vocabulary carry ``#[serde(rename)]``; attribute
fields are renamed with an ``@`` prefix as understood by quick-xml.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from ...core.generator import CodeGenerator, GenerationContext, Member
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
from .naming import rust_field_name

SERDE_IMPORT = "serde::{Deserialize, Serialize}"

DERIVES = "#[derive(Debug, Clone, PartialEq, Serialize, Deserialize)]"


class RustGenerator(CodeGenerator):
    """Code generator for serde-compatible Rust types."""

    comment_prefix = "///"
    file_template = "file.rs.j2"

    @property
    def language_name(self) -> str:
        return "rust"

    @property
    def file_extension(self) -> str:
        return ".rs"

    def get_template_directory(self) -> Optional[Path]:
        """Return the Rust templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    def sequence_type(self, type_name: str) -> str:
        return f"Vec<{type_name}>"

    def generate_simple_type(self, node: SimpleType, ctx: GenerationContext) -> str:
        if node.is_list:
            return self._alias(node, self.alias_type(node.base, True, ctx), ctx)

        if node.is_union and node.member_types:
            members = self.union_members(node, ctx)
            for member in members:
                member.optional = True
            return self._struct(node, members, ctx)

        return self._alias(node, self.alias_type(node.base, False, ctx), ctx)

    def generate_complex_type(self, node: ComplexType, ctx: GenerationContext) -> str:
        return self._struct(node, self.members(node, ctx), ctx)

    def generate_group(self, node: Group, ctx: GenerationContext) -> str:
        return self._struct(node, self.members(node, ctx), ctx)

    def generate_attribute_group(
        self, node: AttributeGroup, ctx: GenerationContext
    ) -> str:
        return self._struct(node, self.members(node, ctx), ctx)

    def generate_element(self, node: Element, ctx: GenerationContext) -> str:
        return self._alias(node, self.alias_type(node.type, node.plural, ctx), ctx)

    def generate_attribute(self, node: Attribute, ctx: GenerationContext) -> str:
        return self._alias(node, self.alias_type(node.type, node.plural, ctx), ctx)

    def _alias(self, node: Node, target: str, ctx: GenerationContext) -> str:
        """``pub type X = T;``, or a renamed newtype when X differs from the schema name."""
        name = self.declaration_name(node, ctx)
        context = {
            "name": name,
            "type": target,
            "comment": self.comment(name, node, ctx),
            "derives": None,
            "xml_name": None,
        }
        if name != node.name:
            self.require(SERDE_IMPORT, ctx)
            context.update(derives=DERIVES, xml_name=node.name)
        return self.render_template("alias.rs.j2", context)

    def _struct(self, node: Node, members: List[Member], ctx: GenerationContext) -> str:
        self.require(SERDE_IMPORT, ctx)
        name = self.declaration_name(node, ctx)

        used: Set[str] = set()
        return self.render_template(
            "struct.rs.j2",
            {
                "name": name,
                "comment": self.comment(name, node, ctx),
                "derives": DERIVES,
                "xml_name": node.name if name != node.name else None,
                "fields": [self._field(member, used) for member in members],
                "indent": ctx.config.indent,
            },
        )

    def _field(self, member: Member, used: Set[str]) -> Dict[str, Any]:
        type_name = member.type
        if member.plural:
            type_name = self.sequence_type(type_name)
        elif member.recursive:
            # Types in a cycle need an indirection to have a known size
            type_name = f"Box<{type_name}>"

        if member.optional and not member.plural:
            type_name = f"Option<{type_name}>"

        if member.kind in (NodeKind.GROUP, NodeKind.ATTRIBUTE_GROUP):
            attributes = [] if member.plural else ["#[serde(flatten)]"]
        elif member.kind == NodeKind.ATTRIBUTE:
            attributes = [f'#[serde(rename = "@{member.name}")]']
        else:
            attributes = [f'#[serde(rename = "{member.name}")]']

        if member.plural or member.optional:
            attributes.append("#[serde(default)]")

        return {
            "attributes": attributes,
            "name": rust_field_name(member.name, used),
            "type": type_name,
        }
