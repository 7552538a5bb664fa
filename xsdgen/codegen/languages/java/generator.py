"""
Java code generator implementation.

Generates JAXB-annotated static nested classes inside one container class.
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
from ...core.resolver import ResolvedType
from .naming import java_field_name

JAXB_PACKAGE = "jakarta.xml.bind.annotation"


class JavaGenerator(CodeGenerator):
    """Code generator for JAXB-annotated Java classes."""

    comment_prefix = "//"
    type_imports = {
        "BigDecimal": "java.math.BigDecimal",
        "BigInteger": "java.math.BigInteger",
        "QName": "javax.xml.namespace.QName",
        "List<": "java.util.List",
    }
    file_template = "file.java.j2"

    @property
    def language_name(self) -> str:
        return "java"

    @property
    def file_extension(self) -> str:
        return ".java"

    @property
    def container_class(self) -> str:
        """Name of the public class all declarations are nested in."""
        return self.config.custom.get("container_class", "Schema")

    def get_template_directory(self) -> Optional[Path]:
        """Return the Java templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    def sequence_type(self, type_name: str) -> str:
        return f"List<{type_name}>"

    def annotation(self, name: str, ctx: GenerationContext, arguments: str = "") -> str:
        """Spell a JAXB annotation and request its import."""
        self.require(f"{JAXB_PACKAGE}.{name}", ctx)
        if arguments:
            return f"@{name}({arguments})"
        return f"@{name}"

    # Routines

    def generate_simple_type(self, node: SimpleType, ctx: GenerationContext) -> str:
        if node.is_list:
            return self._value_class(node, self.resolve_type(node.base, ctx), True, ctx)

        if node.is_union and node.member_types:
            return self._class(node, self.union_members(node, ctx), ctx)

        return self._value_class(node, self.resolve_type(node.base, ctx), False, ctx)

    def generate_complex_type(self, node: ComplexType, ctx: GenerationContext) -> str:
        return self._class(node, self.members(node, ctx), ctx)

    def generate_group(self, node: Group, ctx: GenerationContext) -> str:
        return self._class(node, self.members(node, ctx), ctx)

    def generate_attribute_group(
        self, node: AttributeGroup, ctx: GenerationContext
    ) -> str:
        return self._class(node, self.members(node, ctx), ctx)

    def generate_element(self, node: Element, ctx: GenerationContext) -> str:
        return self._value_class(node, self.resolve_type(node.type, ctx), node.plural, ctx)

    def generate_attribute(self, node: Attribute, ctx: GenerationContext) -> str:
        return self._value_class(node, self.resolve_type(node.type, ctx), node.plural, ctx)

    # Rendering

    def _is_simple(self, resolved: ResolvedType, ctx: GenerationContext) -> bool:
        """Whether a resolved type maps to XML character data."""
        if resolved.builtin:
            return True
        return isinstance(ctx.tree.definition(resolved.base), SimpleType)

    def _value_class(
        self,
        node: Node,
        resolved: ResolvedType,
        plural: bool,
        ctx: GenerationContext,
    ) -> str:
        """A class standing in for an alias of ``resolved``."""
        name = self.declaration_name(node, ctx)
        context = self._declaration_context(node, name, ctx)

        if not plural and not self._is_simple(resolved, ctx):
            context["extends"] = resolved.name
            return self.render_template("class.java.j2", context)

        type_name = resolved.name
        if plural:
            type_name = self.note_type(self.sequence_type(type_name), ctx)

        if self._is_simple(resolved, ctx):
            annotations = [self.annotation("XmlValue", ctx)]
            if plural:
                annotations.append(self.annotation("XmlList", ctx))
        else:
            annotations = [
                self.annotation("XmlElement", ctx, f'name = "{resolved.base}"')
            ]

        context["fields"] = [
            {"annotations": annotations, "type": type_name, "name": "value"}
        ]
        return self.render_template("class.java.j2", context)

    def _class(self, node: Node, members: List[Member], ctx: GenerationContext) -> str:
        name = self.declaration_name(node, ctx)
        context = self._declaration_context(node, name, ctx)

        used: Set[str] = set()
        context["fields"] = [self._field(member, used, ctx) for member in members]
        return self.render_template("class.java.j2", context)

    def _declaration_context(
        self, node: Node, name: str, ctx: GenerationContext
    ) -> Dict[str, Any]:
        context = {
            "name": name,
            "comment": self.comment(name, node, ctx),
            "access": self.annotation("XmlAccessorType", ctx, "XmlAccessType.FIELD"),
            "xml_name": None,
            "extends": None,
            "fields": [],
            "indent": ctx.config.indent,
        }
        self.require(f"{JAXB_PACKAGE}.XmlAccessType", ctx)

        if name != node.name:
            context["xml_name"] = self.annotation(
                "XmlRootElement", ctx, f'name = "{node.name}"'
            )
        return context

    def _field(self, member: Member, used: Set[str], ctx: GenerationContext) -> Dict[str, Any]:
        type_name = member.type
        if member.plural:
            type_name = self.sequence_type(type_name)

        arguments = f'name = "{member.name}"'
        required = not member.optional and member.kind in (
            NodeKind.ATTRIBUTE,
            NodeKind.ELEMENT,
        )
        if required:
            arguments += ", required = true"

        if member.kind == NodeKind.ATTRIBUTE:
            annotations = [self.annotation("XmlAttribute", ctx, arguments)]
            if member.plural:
                annotations.append(self.annotation("XmlList", ctx))
        else:
            annotations = [self.annotation("XmlElement", ctx, arguments)]

        return {
            "annotations": annotations,
            "type": type_name,
            "name": java_field_name(member.name, used),
        }

    def assembly_context(self, ctx: GenerationContext) -> Dict[str, Any]:
        context = super().assembly_context(ctx)
        context["container_class"] = self.container_class
        return context
