"""
TypeScript code generator implementation.

Generates TypeScript type aliases and classes inside a namespace. Property
keys are the original schema names, so serialized documents keep their
vocabulary.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from ...core.generator import CodeGenerator, GenerationContext, Member
from ...core.naming import unique_name
from ...core.proto import (
    Attribute,
    AttributeGroup,
    ComplexType,
    Element,
    Group,
    Node,
    SimpleType,
)

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def property_key(name: str) -> str:
    """Quote a property key unless it is a plain identifier."""
    if _IDENTIFIER.match(name):
        return name
    return f"'{name}'"


class TypeScriptGenerator(CodeGenerator):
    """Code generator for TypeScript classes and type aliases."""

    comment_prefix = "//"
    file_template = "file.ts.j2"

    @property
    def language_name(self) -> str:
        return "typescript"

    @property
    def file_extension(self) -> str:
        return ".ts"

    def get_template_directory(self) -> Optional[Path]:
        """Return the TypeScript templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    def sequence_type(self, type_name: str) -> str:
        return f"Array<{type_name}>"

    def generate_simple_type(self, node: SimpleType, ctx: GenerationContext) -> str:
        if node.is_list:
            return self._alias(node, self.alias_type(node.base, True, ctx), ctx)

        if node.is_union and node.member_types:
            members = self.union_members(node, ctx)
            # Exactly one alternative is present in a document
            for member in members:
                member.optional = True
            return self._class(node, members, ctx)

        return self._alias(node, self.alias_type(node.base, False, ctx), ctx)

    def generate_complex_type(self, node: ComplexType, ctx: GenerationContext) -> str:
        return self._class(node, self.members(node, ctx), ctx)

    def generate_group(self, node: Group, ctx: GenerationContext) -> str:
        return self._class(node, self.members(node, ctx), ctx)

    def generate_attribute_group(
        self, node: AttributeGroup, ctx: GenerationContext
    ) -> str:
        return self._class(node, self.members(node, ctx), ctx)

    def generate_element(self, node: Element, ctx: GenerationContext) -> str:
        return self._alias(node, self.alias_type(node.type, node.plural, ctx), ctx)

    def generate_attribute(self, node: Attribute, ctx: GenerationContext) -> str:
        return self._alias(node, self.alias_type(node.type, node.plural, ctx), ctx)

    def _alias(self, node: Node, target: str, ctx: GenerationContext) -> str:
        name = self.declaration_name(node, ctx)
        return self.render_template(
            "alias.ts.j2",
            {
                "name": name,
                "type": target,
                "comment": self.comment(name, node, ctx),
                "xml_name": node.name if name != node.name else None,
            },
        )

    def _class(self, node: Node, members: List[Member], ctx: GenerationContext) -> str:
        name = self.declaration_name(node, ctx)
        used: Set[str] = set()
        return self.render_template(
            "class.ts.j2",
            {
                "name": name,
                "comment": self.comment(name, node, ctx),
                "xml_name": node.name if name != node.name else None,
                "properties": [self._property(member, used) for member in members],
                "indent": ctx.config.indent,
            },
        )

    def _property(self, member: Member, used: Set[str]) -> Dict[str, Any]:
        type_name = member.type
        if member.plural:
            type_name = self.sequence_type(type_name)
        return {
            "key": property_key(unique_name(member.name, used)),
            "type": type_name,
            "marker": "?" if member.optional else "!",
        }
