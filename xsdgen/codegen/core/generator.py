"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement, the
per-run generation state, and the shared emission machinery: dispatch over
proto tree node classes, the emit-once cache, dependency-first ordering and
output assembly.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Set, Union

from ...logging_config import get_logger
from .builtins import Language, is_builtin
from .config import GeneratorConfig, load_config
from .naming import strip_namespace_prefix, type_identifier, unique_name
from .proto import (
    Attribute,
    AttributeGroup,
    ComplexType,
    Element,
    Group,
    Node,
    NodeKind,
    ProtoTree,
    SimpleType,
)
from .resolver import ResolvedType, TypeResolver
from .templates import TemplateEngine, create_template_engine, doc_comment

logger = get_logger(__name__)

# Raised whenever a declaration has to carry its original schema name
XML_NAME_FLAG = "xml_name"

# Prefix of flags that request an import/require of a module
IMPORT_FLAG_PREFIX = "import:"


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


@dataclass
class GenerationState:
    """Mutable state of one generation pass for one target language."""

    # Schema name -> emitted declaration (memoization and "already emitted")
    cache: Dict[str, str] = field(default_factory=dict)
    # Declarations in first-emission order
    declarations: List[str] = field(default_factory=list)
    # Cross-cutting flags raised by individual emissions
    flags: Set[str] = field(default_factory=set)
    # Names currently being emitted (recursion guard)
    visiting: Set[str] = field(default_factory=set)
    # Schema name -> generated type identifier
    identifiers: Dict[str, str] = field(default_factory=dict)
    used_identifiers: Set[str] = field(default_factory=set)
    # Descriptions of nodes no routine exists for
    skipped: List[str] = field(default_factory=list)


@dataclass
class GenerationContext:
    """Everything a generation routine may read or update during one pass."""

    tree: ProtoTree
    resolver: TypeResolver
    state: GenerationState
    config: GeneratorConfig


@dataclass
class Member:
    """One member of a composite declaration, already resolved."""

    kind: NodeKind
    name: str  # original schema name, used as serialization tag
    type: str  # target-language type spelling
    plural: bool = False
    optional: bool = False
    builtin: bool = False
    # References a declaration whose emission is still in progress (a cycle)
    recursive: bool = False


# Node class -> name of the generation routine handling it
ROUTINES: Dict[type, str] = {
    SimpleType: "generate_simple_type",
    ComplexType: "generate_complex_type",
    Group: "generate_group",
    AttributeGroup: "generate_attribute_group",
    Element: "generate_element",
    Attribute: "generate_attribute",
}


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    # Line comment marker used for documentation comments
    comment_prefix = "//"

    # Type spelling fragment -> module that must be imported when it is used
    type_imports: Dict[str, str] = {}

    # Name of the file-level template wrapping all declarations
    file_template = ""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or load_config(self.language_name)
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        template_dir = self.get_template_directory()
        if template_dir:
            self._template_engine = create_template_engine(template_dir)
        else:
            # Fallback to in-memory templates
            self._template_engine = create_template_engine()

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'go', 'java')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.go')."""
        pass

    @property
    def language(self) -> Language:
        """Built-in type table column of this generator."""
        return Language(self.language_name)

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    # Generation routines, one per proto tree node class

    @abstractmethod
    def generate_simple_type(self, node: SimpleType, ctx: GenerationContext) -> str:
        """Emit a simple type: list alias, union composite or plain alias."""
        pass

    @abstractmethod
    def generate_complex_type(self, node: ComplexType, ctx: GenerationContext) -> str:
        """Emit a complex type as a composite declaration."""
        pass

    @abstractmethod
    def generate_group(self, node: Group, ctx: GenerationContext) -> str:
        """Emit a model group as a composite declaration."""
        pass

    @abstractmethod
    def generate_attribute_group(
        self, node: AttributeGroup, ctx: GenerationContext
    ) -> str:
        """Emit an attribute group as a composite declaration."""
        pass

    @abstractmethod
    def generate_element(self, node: Element, ctx: GenerationContext) -> str:
        """Emit a top-level element as an alias of its (sequence) type."""
        pass

    @abstractmethod
    def generate_attribute(self, node: Attribute, ctx: GenerationContext) -> str:
        """Emit a top-level attribute as an alias of its (sequence) type."""
        pass

    @abstractmethod
    def sequence_type(self, type_name: str) -> str:
        """Spelling of a repeated value of ``type_name``."""
        pass

    # Dispatch

    def routine_for(self, node: Node) -> Optional[Callable[[Any, GenerationContext], str]]:
        """Look up the generation routine for a node, by its class."""
        routine_name = ROUTINES.get(type(node))
        if routine_name is None:
            return None
        return getattr(self, routine_name)

    def create_context(self, tree: ProtoTree) -> GenerationContext:
        """Create a fresh context for one pass over ``tree``."""
        return GenerationContext(
            tree=tree,
            resolver=TypeResolver(tree),
            state=GenerationState(),
            config=self.config,
        )

    def emit(self, node: Optional[Node], ctx: GenerationContext) -> Optional[str]:
        """
        Emit the declaration for ``node`` unless it was emitted already.

        Returns the cached declaration text, or None for skipped nodes and
        for nodes whose emission is still in progress (recursive references).
        """
        if node is None:
            return None

        routine = self.routine_for(node)
        if routine is None:
            description = f"{type(node).__name__} '{getattr(node, 'name', '?')}'"
            logger.warning(
                "No %s generation routine for %s - skipped",
                self.language_name,
                description,
            )
            ctx.state.skipped.append(description)
            return None

        state = ctx.state
        name = node.name
        if name in state.cache:
            return state.cache[name]
        if name in state.visiting:
            return None

        # A top-level element/attribute typed by its own name is the root of that type
        if isinstance(node, (Element, Attribute)):
            if strip_namespace_prefix(node.type) == name:
                definition = ctx.tree.definition(name)
                if definition is not None and definition is not node:
                    return self.emit(definition, ctx)

        state.visiting.add(name)
        # Self-references resolved by the routine must find this identifier
        if not isinstance(node, (Element, Attribute)):
            self.declaration_name(node, ctx)
        try:
            text = routine(node, ctx)
        finally:
            state.visiting.discard(name)

        # A dependency sharing this name may have been stored meanwhile
        if name in state.cache:
            return state.cache[name]

        state.cache[name] = text
        if text:
            state.declarations.append(text)
        logger.debug("Emitted %s '%s'", node.kind.value, name)
        return text

    def ensure_emitted(self, reference: str, ctx: GenerationContext):
        """Emit the definition a reference names, if the tree has one."""
        if not reference or is_builtin(reference):
            return
        definition = ctx.tree.definition(strip_namespace_prefix(reference))
        if definition is not None:
            self.emit(definition, ctx)

    # Helpers shared by the routines

    def type_name(self, schema_name: str) -> str:
        """Language type identifier for a schema name."""
        return type_identifier(schema_name)

    def declaration_name(self, node: Node, ctx: GenerationContext) -> str:
        """
        Identifier of the declaration emitted for ``node``.

        Identifiers are unique per pass; when one differs from the raw schema
        name the ``xml_name`` flag is raised and the declaration must carry the
        raw name as its serialization tag.
        """
        identifier = ctx.state.identifiers.get(node.name)
        if identifier is None:
            identifier = unique_name(
                self.type_name(node.name), ctx.state.used_identifiers
            )
            ctx.state.identifiers[node.name] = identifier

        if identifier != node.name:
            ctx.state.flags.add(XML_NAME_FLAG)
        return identifier

    def resolve_type(self, reference: str, ctx: GenerationContext) -> ResolvedType:
        """
        Resolve a type reference, emitting the definitions it depends on first.
        """
        self.ensure_emitted(reference, ctx)
        resolved = ctx.resolver.resolve_field(reference, self.language)

        if not resolved.builtin:
            self.ensure_emitted(resolved.base, ctx)
            identifier = ctx.state.identifiers.get(resolved.base)
            if identifier and identifier != resolved.name:
                resolved = ResolvedType(identifier, False, resolved.base)

        self.note_type(resolved.name, ctx)
        return resolved

    def alias_type(self, reference: str, plural: bool, ctx: GenerationContext) -> str:
        """Resolved type of an alias, wrapped in a sequence when plural."""
        resolved = self.resolve_type(reference, ctx)
        if plural:
            return self.note_type(self.sequence_type(resolved.name), ctx)
        return resolved.name

    def _member(self, kind: NodeKind, name: str, reference: str, plural: bool,
                optional: bool, ctx: GenerationContext) -> Member:
        resolved = self.resolve_type(reference, ctx)
        if plural:
            self.note_type(self.sequence_type(resolved.name), ctx)
        return Member(
            kind,
            name,
            resolved.name,
            plural,
            optional,
            resolved.builtin,
            recursive=self.in_progress(resolved, ctx),
        )

    def in_progress(self, resolved: ResolvedType, ctx: GenerationContext) -> bool:
        """Whether a resolved type is still being emitted, i.e. part of a cycle."""
        return not resolved.builtin and resolved.base in ctx.state.visiting

    def members(self, node: Node, ctx: GenerationContext) -> List[Member]:
        """
        Resolved members of a composite node.

        Attribute group references come first, then attributes, nested
        groups and elements, each in declared order.
        """
        result = []

        for group in getattr(node, "attribute_groups", []):
            reference = group.ref or group.name
            result.append(
                self._member(
                    NodeKind.ATTRIBUTE_GROUP,
                    strip_namespace_prefix(reference),
                    reference,
                    False,
                    False,
                    ctx,
                )
            )

        for attribute in getattr(node, "attributes", []):
            result.append(
                self._member(
                    NodeKind.ATTRIBUTE,
                    attribute.name,
                    attribute.type,
                    attribute.plural,
                    attribute.optional,
                    ctx,
                )
            )

        for group in getattr(node, "groups", []):
            reference = group.ref or group.name
            result.append(
                self._member(
                    NodeKind.GROUP,
                    strip_namespace_prefix(reference),
                    reference,
                    group.plural,
                    False,
                    ctx,
                )
            )

        for element in getattr(node, "elements", []):
            result.append(
                self._member(
                    NodeKind.ELEMENT,
                    element.name,
                    element.type,
                    element.plural,
                    element.optional,
                    ctx,
                )
            )

        return result

    def union_members(self, node: SimpleType, ctx: GenerationContext) -> List[Member]:
        """One member per union member type, tagged with the member name."""
        result = []
        for member_name, reference in node.member_types.items():
            if not reference:
                reference = ctx.resolver.resolve_base(member_name)
            resolved = self.resolve_type(reference, ctx)
            result.append(
                Member(NodeKind.SIMPLE_TYPE, member_name, resolved.name,
                       builtin=resolved.builtin,
                       recursive=self.in_progress(resolved, ctx))
            )
        return result

    def comment(self, identifier: str, node: Node, ctx: GenerationContext) -> str:
        """Documentation comment for a declaration ("" when disabled)."""
        if not ctx.config.add_comments:
            return ""
        return doc_comment(identifier, node.doc, self.comment_prefix)

    def note_type(self, type_name: str, ctx: GenerationContext) -> str:
        """Raise the import flags a type spelling requires; returns the spelling."""
        for fragment, module in self.type_imports.items():
            pattern = r"(?<![\w:])" + re.escape(fragment)
            if fragment[-1].isalnum():
                pattern += r"\b"
            if re.search(pattern, type_name):
                ctx.state.flags.add(IMPORT_FLAG_PREFIX + module)
        return type_name

    def require(self, module: str, ctx: GenerationContext):
        """Request an import/require of ``module``."""
        ctx.state.flags.add(IMPORT_FLAG_PREFIX + module)

    def imports(self, ctx: GenerationContext) -> List[str]:
        """Modules requested during the pass, sorted."""
        return sorted(
            flag[len(IMPORT_FLAG_PREFIX):]
            for flag in ctx.state.flags
            if flag.startswith(IMPORT_FLAG_PREFIX)
        )

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template of this generator with context, without trailing newlines."""
        if not self.template_exists(template_name):
            raise GeneratorError(
                f"{template_name} template not found for {self.language_name}"
            )
        return self.template_engine.render_template(template_name, context).rstrip("\n")

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)

    # Pass driver and output assembly

    def run(self, tree: ProtoTree) -> GenerationContext:
        """Walk the tree once, in order, and return the filled context."""
        ctx = self.create_context(tree)
        for node in tree:
            self.emit(node, ctx)
        return ctx

    def assembly_context(self, ctx: GenerationContext) -> Dict[str, Any]:
        """Variables passed to the file template."""
        return {
            "banner": ctx.config.banner,
            "package_name": ctx.config.package_name,
            "imports": self.imports(ctx),
            "declarations": ctx.state.declarations,
            "flags": ctx.state.flags,
            "indent": ctx.config.indent,
            "config": ctx.config,
        }

    def assemble(self, ctx: GenerationContext) -> str:
        """Wrap the accumulated declarations in the file boilerplate."""
        return self.render_template(self.file_template, self.assembly_context(ctx))

    def generate(self, tree: ProtoTree) -> str:
        """
        Generate the complete source for a proto tree.

        Args:
            tree: Proto tree to generate code for

        Returns:
            Formatted source code
        """
        return self.format_code(self.assemble(self.run(tree)))

    def generate_file(self, tree: ProtoTree, output: Union[str, Path]) -> Path:
        """
        Generate the source and write it as ``<output><extension>``.

        I/O failures propagate to the caller; no partial artifact is left.
        """
        from ...utils import write_artifact

        code = self.generate(tree)
        path = write_artifact(output, self.file_extension, code)
        logger.info("Wrote %s code to %s", self.language_name, path)
        return path

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Trailing whitespace is removed, blank line runs collapse to one and
        the file ends with exactly one line ending.
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        formatted = "\n".join(formatted_lines).strip("\n") + "\n"
        if self.config.line_ending != "\n":
            formatted = formatted.replace("\n", self.config.line_ending)
        return formatted

    def validate_tree(self, tree: ProtoTree) -> List[str]:
        """
        Check a proto tree for issues that degrade the generated code.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []
        resolver = TypeResolver(tree)

        for kind, name in tree.duplicates:
            warnings.append(
                f"Duplicate {kind.value} '{name}' ignored - first definition wins"
            )

        def check(owner: str, reference: str):
            if reference and resolver.unresolved(reference):
                warnings.append(
                    f"Unresolved type reference '{reference}' in '{owner}'"
                )

        for node in tree:
            if node is None:
                continue

            if isinstance(node, (Element, Attribute)):
                check(node.name, node.type)

            elif isinstance(node, SimpleType):
                if node.is_union:
                    for member_name, reference in node.member_types.items():
                        check(node.name, reference or member_name)
                else:
                    check(node.name, node.base)

            else:
                for group in getattr(node, "attribute_groups", []):
                    check(node.name, group.ref or group.name)
                for attribute in getattr(node, "attributes", []):
                    check(node.name, attribute.type)
                for group in getattr(node, "groups", []):
                    check(node.name, group.ref or group.name)
                for element in getattr(node, "elements", []):
                    check(node.name, element.type)

                if isinstance(node, ComplexType) and not (
                    node.attribute_groups
                    or node.attributes
                    or node.groups
                    or node.elements
                ):
                    warnings.append(f"Complex type '{node.name}' has no members")

        return list(dict.fromkeys(warnings))


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = ""
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, tree: ProtoTree) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        tree: Proto tree to generate code for

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.validate_tree(tree)

        ctx = generator.run(tree)
        code = generator.format_code(generator.assemble(ctx))

        for description in ctx.state.skipped:
            warnings.append(f"Skipped {description}: no generation routine")

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "node_count": sum(1 for node in tree if node is not None),
            "declaration_count": len(ctx.state.declarations),
            "flags": sorted(ctx.state.flags),
        }

        return GenerationResult(code, warnings, metadata)

    except Exception as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
