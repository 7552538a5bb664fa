"""
Go code generator implementation.

Generates Go types with encoding/xml struct tags from a proto tree.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from ...core.generator import CodeGenerator, GenerationContext, Member
from ...core.naming import type_identifier, unique_name
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

XML_PACKAGE = "encoding/xml"


class GoGenerator(CodeGenerator):
    """Code generator for Go structs with XML tags."""

    comment_prefix = "//"
    type_imports = {"time.": "time", "xml.": XML_PACKAGE}
    file_template = "file.go.j2"

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "go"

    @property
    def file_extension(self) -> str:
        """Return Go file extension."""
        return ".go"

    def get_template_directory(self) -> Optional[Path]:
        """Return the Go templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    def sequence_type(self, type_name: str) -> str:
        return f"[]{type_name}"

    # Routines

    def generate_simple_type(self, node: SimpleType, ctx: GenerationContext) -> str:
        if node.is_list:
            resolved = self.resolve_type(node.base, ctx)
            return self._alias(node, resolved, True, ctx)

        if node.is_union and node.member_types:
            return self._struct(node, self.union_members(node, ctx), ctx)

        resolved = self.resolve_type(node.base, ctx)
        return self._alias(node, resolved, False, ctx)

    def generate_complex_type(self, node: ComplexType, ctx: GenerationContext) -> str:
        return self._struct(node, self.members(node, ctx), ctx)

    def generate_group(self, node: Group, ctx: GenerationContext) -> str:
        return self._struct(node, self.members(node, ctx), ctx)

    def generate_attribute_group(
        self, node: AttributeGroup, ctx: GenerationContext
    ) -> str:
        return self._struct(node, self.members(node, ctx), ctx)

    def generate_element(self, node: Element, ctx: GenerationContext) -> str:
        resolved = self.resolve_type(node.type, ctx)
        return self._alias(node, resolved, node.plural, ctx)

    def generate_attribute(self, node: Attribute, ctx: GenerationContext) -> str:
        resolved = self.resolve_type(node.type, ctx)
        return self._alias(node, resolved, node.plural, ctx)

    # Rendering

    def _alias(
        self,
        node: Node,
        resolved: ResolvedType,
        plural: bool,
        ctx: GenerationContext,
    ) -> str:
        """Render ``type X T``, or a tagged wrapper struct when X was renamed."""
        name = self.declaration_name(node, ctx)
        target = resolved.name
        if plural:
            target = self.note_type(self.sequence_type(target), ctx)

        context = {
            "name": name,
            "comment": self.comment(name, node, ctx),
            "indent": ctx.config.indent,
        }

        if name == node.name:
            context["type"] = target
            return self.render_template("alias.go.j2", context)

        # Keep the original name through an XMLName field
        self.require(XML_PACKAGE, ctx)
        if resolved.builtin and not plural:
            value = {"name": "Value", "type": target, "tag": 'xml:",chardata"'}
        elif plural:
            value = {"name": "Value", "type": target, "tag": 'xml:",any"'}
        else:
            value = {"name": "", "type": target, "tag": "", "embedded": True}

        context.update(xml_name=node.name, fields=[value])
        return self.render_template("struct.go.j2", context)

    def _struct(self, node: Node, members: List[Member], ctx: GenerationContext) -> str:
        name = self.declaration_name(node, ctx)
        renamed = name != node.name
        if renamed:
            self.require(XML_PACKAGE, ctx)

        used = {"XMLName"} if renamed else set()
        fields = [self._field(member, used) for member in members]

        return self.render_template(
            "struct.go.j2",
            {
                "name": name,
                "comment": self.comment(name, node, ctx),
                "xml_name": node.name if renamed else None,
                "fields": fields,
                "indent": ctx.config.indent,
            },
        )

    def _field(self, member: Member, used: Set[str]) -> Dict[str, Any]:
        """Template data for one struct field."""
        type_name = member.type
        if member.plural:
            type_name = self.sequence_type(type_name)
        elif member.recursive:
            # Value types in a cycle need an indirection
            type_name = f"*{type_name}"

        if member.kind in (NodeKind.GROUP, NodeKind.ATTRIBUTE_GROUP):
            if not member.plural:
                return {"name": "", "type": type_name, "tag": "", "embedded": True}
            field_name = unique_name(type_identifier(member.name), used)
            return {"name": field_name, "type": type_name, "tag": ""}

        field_name = type_identifier(member.name)
        options = ""
        if member.kind == NodeKind.ATTRIBUTE:
            field_name += "Attr"
            options = ",attr"
        if member.optional:
            options += ",omitempty"

        return {
            "name": unique_name(field_name, used),
            "type": type_name,
            "tag": f'xml:"{member.name}{options}"',
        }

    def validate_tree(self, tree) -> List[str]:
        """Validate a proto tree for Go generation."""
        warnings = super().validate_tree(tree)
        if not self.config.package_name.isidentifier():
            warnings.append(f"Invalid Go package name: {self.config.package_name}")
        return warnings
