"""Build a proto tree from XSD markup.

Walks the top-level declarations of one schema document with
``xml.etree.ElementTree`` and turns each of them into a proto tree node:

- ``simpleType`` (restriction, list, union)
- ``complexType`` (attributes, attribute group references, model groups,
  simple/complex content extension and restriction bodies)
- ``group`` and ``attributeGroup`` definitions
- top-level ``element`` and ``attribute`` declarations

Anonymous inline types are named after their owner and placed in the tree
right before it. ``import``/``include``/``redefine`` are logged and skipped.
"""

from __future__ import annotations

from xml.etree import ElementTree as ET

from .codegen.core.builtins import is_builtin
from .codegen.core.naming import strip_namespace_prefix
from .codegen.core.proto import (
    Attribute,
    AttributeGroup,
    ComplexType,
    Element,
    Group,
    Node,
    ProtoTree,
    SimpleType,
)
from .logging_config import get_logger

logger = get_logger(__name__)

XSD_NS = "http://www.w3.org/2001/XMLSchema"
NS = {"xs": XSD_NS}

MODEL_GROUPS = ("sequence", "choice", "all")
DEFINITION_TAGS = ("simpleType", "complexType", "group", "attributeGroup")
EXTERNAL_TAGS = ("import", "include", "redefine", "override")


class SchemaParseError(Exception):
    """Raised when a document is not a well-formed XML schema."""

    pass


def _local(tag: str) -> str:
    """Local part of an ElementTree ``{namespace}name`` tag."""
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def _q(tag: str) -> str:
    """Return fully qualified tag name."""
    return f"{{{XSD_NS}}}{tag}"


class XsdParser:
    """Parse one XSD document into a ``ProtoTree``.

    Usage:
        tree = XsdParser().parse(xsd_bytes)
    """

    def __init__(self) -> None:
        self._nodes: list[Node] = []
        self._defined: set[str] = set()

    # -------------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------------

    def parse(self, data: bytes | str) -> ProtoTree:
        """Parse schema markup.

        Raises:
            SchemaParseError: If the markup is malformed or not a schema.
        """
        try:
            root = ET.fromstring(data)
        except ET.ParseError as e:
            raise SchemaParseError(f"Malformed schema document: {e}") from e

        if root.tag != _q("schema"):
            raise SchemaParseError(
                f"Root element must be xs:schema, found '{_local(root.tag)}'"
            )

        self._nodes = []
        self._defined = {
            child.get("name", "")
            for child in root
            if _local(child.tag) in DEFINITION_TAGS
        }

        for child in root:
            if not isinstance(child.tag, str):
                continue  # comments and processing instructions
            self._top_level(child)

        logger.debug("Parsed schema into %d nodes", len(self._nodes))
        return ProtoTree(self._nodes)

    def _top_level(self, node: ET.Element) -> None:
        tag = _local(node.tag)
        name = node.get("name", "")

        if tag == "simpleType":
            self._simple_type(node, name)
        elif tag == "complexType":
            self._complex_type(node, name)
        elif tag == "group":
            self._group_definition(node, name)
        elif tag == "attributeGroup":
            self._attribute_group_definition(node, name)
        elif tag == "element":
            self._nodes.append(self._element(node, owner=""))
        elif tag == "attribute":
            self._nodes.append(self._attribute(node, owner=""))
        elif tag in EXTERNAL_TAGS:
            logger.info(
                "Skipping xs:%s of %s", tag, node.get("schemaLocation") or node.get("namespace")
            )
        elif tag not in ("annotation", "notation"):
            logger.debug("Ignoring top-level xs:%s", tag)

    # -------------------------------------------------------------------------
    # Helper methods
    # -------------------------------------------------------------------------

    def _doc(self, node: ET.Element) -> str:
        """Text of the node's annotation/documentation children."""
        texts = [
            doc.text.strip()
            for doc in node.findall("xs:annotation/xs:documentation", NS)
            if doc.text and doc.text.strip()
        ]
        return "\n".join(texts)

    def _plural(self, node: ET.Element) -> bool:
        """Whether a particle may occur more than once."""
        return node.get("maxOccurs") not in (None, "0", "1")

    def _anonymous_name(self, candidate: str, owner: str) -> str:
        """Reserve a type name for an anonymous inline type."""
        base = candidate or "Anonymous"
        if base in self._defined and owner:
            base = f"{owner}-{base}"
        name = base
        counter = 1
        while name in self._defined:
            name = f"{base}{counter}"
            counter += 1
        self._defined.add(name)
        return name

    # -------------------------------------------------------------------------
    # Simple types
    # -------------------------------------------------------------------------

    def _simple_type(self, node: ET.Element, name: str) -> SimpleType:
        simple = SimpleType(name=name, doc=self._doc(node))

        restriction = node.find("xs:restriction", NS)
        item_list = node.find("xs:list", NS)
        union = node.find("xs:union", NS)

        if restriction is not None:
            simple.base = restriction.get("base") or self._inline_base(
                restriction, f"{name}-base"
            )
        elif item_list is not None:
            simple.is_list = True
            simple.base = item_list.get("itemType") or self._inline_base(
                item_list, f"{name}-item"
            )
        elif union is not None:
            simple.is_union = True
            for reference in (union.get("memberTypes") or "").split():
                # Resolved by name during generation
                simple.member_types[strip_namespace_prefix(reference)] = ""
            for inline in union.findall("xs:simpleType", NS):
                base = self._restriction_base(inline)
                simple.member_types[strip_namespace_prefix(base)] = base

        self._nodes.append(simple)
        return simple

    def _restriction_base(self, node: ET.Element) -> str:
        restriction = node.find("xs:restriction", NS)
        if restriction is not None and restriction.get("base"):
            return restriction.get("base", "")
        return "string"

    def _inline_base(self, node: ET.Element, candidate: str) -> str:
        """Name of the inline simple type under ``node``, or ``anySimpleType``."""
        inline = node.find("xs:simpleType", NS)
        if inline is None:
            return "anySimpleType"
        return self._inline_simple_type(inline, candidate, "")

    def _inline_simple_type(self, node: ET.Element, candidate: str, owner: str) -> str:
        name = self._anonymous_name(candidate, owner)
        self._simple_type(node, name)
        return name

    # -------------------------------------------------------------------------
    # Complex types and model groups
    # -------------------------------------------------------------------------

    def _complex_type(self, node: ET.Element, name: str) -> ComplexType:
        complex_type = ComplexType(name=name, doc=self._doc(node))
        self._complex_body(node, complex_type, name)

        content = node.find("xs:simpleContent", NS)
        if content is None:
            content = node.find("xs:complexContent", NS)

        if content is not None:
            extension = content.find("xs:extension", NS)
            restriction = content.find("xs:restriction", NS)
            body = extension if extension is not None else restriction
            if body is not None:
                base = body.get("base", "")
                if (
                    extension is not None
                    and _local(content.tag) == "complexContent"
                    and base
                    and not is_builtin(base)
                ):
                    # Members of the base type come in through a group reference
                    complex_type.groups.append(
                        Group(name=strip_namespace_prefix(base), ref=base)
                    )
                self._complex_body(body, complex_type, name)

        self._nodes.append(complex_type)
        return complex_type

    def _complex_body(self, node: ET.Element, target: ComplexType, owner: str) -> None:
        """Collect the members of a complexType (or content extension) body."""
        for child in node:
            if not isinstance(child.tag, str):
                continue
            tag = _local(child.tag)

            if tag == "attribute":
                target.attributes.append(self._attribute(child, owner))
            elif tag == "attributeGroup":
                reference = child.get("ref", "")
                target.attribute_groups.append(
                    AttributeGroup(name=strip_namespace_prefix(reference), ref=reference)
                )
            elif tag == "group":
                target.groups.append(self._group_reference(child, False))
            elif tag in MODEL_GROUPS:
                self._particles(
                    child,
                    target,
                    owner,
                    plural=self._plural(child),
                    optional=tag == "choice" or child.get("minOccurs") == "0",
                )

    def _particles(
        self,
        container: ET.Element,
        target: ComplexType | Group,
        owner: str,
        plural: bool,
        optional: bool,
    ) -> None:
        """Flatten a sequence/choice/all into ``target`` elements and groups."""
        for child in container:
            if not isinstance(child.tag, str):
                continue
            tag = _local(child.tag)

            if tag == "element":
                target.elements.append(self._element(child, owner, plural, optional))
            elif tag == "group":
                target.groups.append(self._group_reference(child, plural))
            elif tag in MODEL_GROUPS:
                self._particles(
                    child,
                    target,
                    owner,
                    plural=plural or self._plural(child),
                    optional=optional
                    or tag == "choice"
                    or child.get("minOccurs") == "0",
                )

    def _group_reference(self, node: ET.Element, plural: bool) -> Group:
        reference = node.get("ref", "")
        return Group(
            name=strip_namespace_prefix(reference),
            ref=reference,
            plural=plural or self._plural(node),
        )

    def _group_definition(self, node: ET.Element, name: str) -> Group:
        group = Group(name=name, doc=self._doc(node))
        for child in node:
            if isinstance(child.tag, str) and _local(child.tag) in MODEL_GROUPS:
                self._particles(
                    child,
                    group,
                    name,
                    plural=self._plural(child),
                    optional=_local(child.tag) == "choice",
                )
        self._nodes.append(group)
        return group

    def _attribute_group_definition(self, node: ET.Element, name: str) -> AttributeGroup:
        group = AttributeGroup(name=name, doc=self._doc(node))
        for child in node:
            if not isinstance(child.tag, str):
                continue
            tag = _local(child.tag)
            if tag == "attribute":
                group.attributes.append(self._attribute(child, name))
            elif tag == "attributeGroup":
                reference = child.get("ref", "")
                group.attribute_groups.append(
                    AttributeGroup(name=strip_namespace_prefix(reference), ref=reference)
                )
        self._nodes.append(group)
        return group

    # -------------------------------------------------------------------------
    # Elements and attributes
    # -------------------------------------------------------------------------

    def _element(
        self,
        node: ET.Element,
        owner: str,
        plural: bool = False,
        optional: bool = False,
    ) -> Element:
        reference = node.get("ref")
        if reference:
            name, type_name = strip_namespace_prefix(reference), reference
        else:
            name = node.get("name", "")
            type_name = node.get("type", "")
            if not type_name:
                type_name = self._inline_type(node, name, owner)

        return Element(
            name=name,
            doc=self._doc(node),
            type=type_name,
            plural=plural or self._plural(node),
            optional=optional or node.get("minOccurs") == "0",
        )

    def _attribute(self, node: ET.Element, owner: str) -> Attribute:
        reference = node.get("ref")
        if reference:
            name, type_name = strip_namespace_prefix(reference), reference
        else:
            name = node.get("name", "")
            type_name = node.get("type", "")
            if not type_name:
                type_name = self._inline_type(node, name, owner)

        return Attribute(
            name=name,
            doc=self._doc(node),
            type=type_name,
            optional=node.get("use") != "required",
        )

    def _inline_type(self, node: ET.Element, name: str, owner: str) -> str:
        """Declare the anonymous type of an element/attribute; returns its name."""
        inline_complex = node.find("xs:complexType", NS)
        if inline_complex is not None:
            type_name = self._anonymous_name(name, owner)
            self._complex_type(inline_complex, type_name)
            return type_name

        inline_simple = node.find("xs:simpleType", NS)
        if inline_simple is not None:
            return self._inline_simple_type(inline_simple, name, owner)

        return ""


def parse_schema(data: bytes | str) -> ProtoTree:
    """Parse XSD markup into a proto tree.

    Args:
        data: Schema document as bytes or text.

    Raises:
        SchemaParseError: If the document is malformed or not a schema.
    """
    return XsdParser().parse(data)
