"""
Proto tree: the intermediate representation of a parsed XSD document.

The parser produces an ordered sequence of schema construct nodes; the code
generators only ever read it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, Iterable, Iterator, List, Optional, Tuple

from ...logging_config import get_logger

logger = get_logger(__name__)


class NodeKind(Enum):
    """Schema construct kinds."""

    SIMPLE_TYPE = "simple_type"
    COMPLEX_TYPE = "complex_type"
    GROUP = "group"
    ATTRIBUTE_GROUP = "attribute_group"
    ELEMENT = "element"
    ATTRIBUTE = "attribute"


@dataclass
class Node:
    """Common fields of every proto tree node."""

    name: str
    doc: str = ""

    kind: ClassVar[NodeKind]


@dataclass
class Attribute(Node):
    """An attribute declaration or reference."""

    type: str = ""
    plural: bool = False
    optional: bool = False

    kind: ClassVar[NodeKind] = NodeKind.ATTRIBUTE


@dataclass
class Element(Node):
    """An element declaration or reference."""

    type: str = ""
    plural: bool = False
    optional: bool = False

    kind: ClassVar[NodeKind] = NodeKind.ELEMENT


@dataclass
class SimpleType(Node):
    """
    A simple type definition.

    ``member_types`` maps union member names to their type reference; an
    empty reference means the member is resolved by its name later on.
    """

    base: str = ""
    is_list: bool = False
    is_union: bool = False
    member_types: Dict[str, str] = field(default_factory=dict)

    kind: ClassVar[NodeKind] = NodeKind.SIMPLE_TYPE


@dataclass
class AttributeGroup(Node):
    """An attribute group definition (``ref`` empty) or reference."""

    ref: str = ""
    attributes: List[Attribute] = field(default_factory=list)
    attribute_groups: List["AttributeGroup"] = field(default_factory=list)

    kind: ClassVar[NodeKind] = NodeKind.ATTRIBUTE_GROUP


@dataclass
class Group(Node):
    """A model group definition (``ref`` empty) or reference."""

    ref: str = ""
    plural: bool = False
    elements: List[Element] = field(default_factory=list)
    groups: List["Group"] = field(default_factory=list)

    kind: ClassVar[NodeKind] = NodeKind.GROUP


@dataclass
class ComplexType(Node):
    """A complex type definition."""

    attribute_groups: List[AttributeGroup] = field(default_factory=list)
    attributes: List[Attribute] = field(default_factory=list)
    groups: List[Group] = field(default_factory=list)
    elements: List[Element] = field(default_factory=list)

    kind: ClassVar[NodeKind] = NodeKind.COMPLEX_TYPE


# Kinds whose nodes define a type that other declarations can reference
DEFINING_KINDS = (
    NodeKind.SIMPLE_TYPE,
    NodeKind.COMPLEX_TYPE,
    NodeKind.GROUP,
    NodeKind.ATTRIBUTE_GROUP,
)


class ProtoTree:
    """
    Ordered, read-only sequence of proto tree nodes.

    The tree is indexed once on construction, separately per construct kind.
    When several nodes of one kind share a name the first one wins; the later
    ones are reported in ``duplicates``.
    """

    def __init__(self, nodes: Iterable[Optional[Node]] = ()):
        self._nodes: Tuple[Optional[Node], ...] = tuple(nodes)
        self._by_kind: Dict[NodeKind, Dict[str, Node]] = {
            kind: {} for kind in NodeKind
        }
        self._simple_bases: Dict[str, str] = {}
        self._declared_types: Dict[str, str] = {}
        self._definitions: Dict[str, Node] = {}
        self.duplicates: List[Tuple[NodeKind, str]] = []
        self._build_index()

    def _build_index(self):
        for node in self._nodes:
            if node is None:
                continue

            index = self._by_kind[node.kind]
            if node.name in index:
                logger.warning(
                    "Duplicate %s '%s' - first definition wins",
                    node.kind.value,
                    node.name,
                )
                self.duplicates.append((node.kind, node.name))
                continue
            index[node.name] = node

            if isinstance(node, SimpleType):
                if not node.is_list and not node.is_union:
                    self._simple_bases.setdefault(node.name, node.base)
            elif isinstance(node, (Attribute, Element)):
                self._declared_types.setdefault(node.name, node.type)

            if node.kind in DEFINING_KINDS and not getattr(node, "ref", ""):
                self._definitions.setdefault(node.name, node)

    def __iter__(self) -> Iterator[Optional[Node]]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, index: int) -> Optional[Node]:
        return self._nodes[index]

    def simple_base(self, name: str) -> Optional[str]:
        """Base of the first non-list, non-union simple type named ``name``."""
        return self._simple_bases.get(name)

    def declared_type(self, name: str) -> Optional[str]:
        """Type of the first attribute or element named ``name``."""
        return self._declared_types.get(name)

    def definition(self, name: str) -> Optional[Node]:
        """First type-defining node (simple/complex type, group, attribute group)."""
        return self._definitions.get(name)

    def find(self, kind: NodeKind, name: str) -> Optional[Node]:
        """Find a node by construct kind and name."""
        return self._by_kind[kind].get(name)

    def nodes_of(self, kind: NodeKind) -> List[Node]:
        """All indexed nodes of a kind, in tree order."""
        return list(self._by_kind[kind].values())
