"""
Type resolution for code generation.

Maps schema type references (built-in XSD types, namespace-qualified names,
names of types defined in the same proto tree) to the type spelling of a
target language.
"""

from dataclasses import dataclass
from typing import Union

from .builtins import Language, builtin_key, resolve_builtin
from .naming import strip_namespace_prefix, type_identifier
from .proto import ProtoTree

# Type assumed for declarations that carry no type reference at all
DEFAULT_TYPE = "anyType"


@dataclass(frozen=True)
class ResolvedType:
    """Result of resolving a type reference for one language."""

    name: str  # Target-language spelling (e.g. "uint", "Product")
    builtin: bool  # True when the spelling comes from the built-in table
    base: str  # Schema-level name the reference resolved to


class TypeResolver:
    """Resolves type references against a proto tree and the built-in table."""

    def __init__(self, tree: ProtoTree):
        self.tree = tree

    def resolve_base(self, reference: str) -> str:
        """
        Resolve a reference to its base schema type name.

        The namespace prefix is stripped, then the name is looked up once as
        a plain (non-list, non-union) simple type, then as an attribute or
        element declaration; the declared base or type of the first match is
        returned. Derived types are not followed further, so ``A -> B ->
        xs:string`` resolves ``A`` to ``B``. Unknown names are returned
        unchanged.
        """
        name = strip_namespace_prefix(reference)
        if not name:
            return name

        base = self.tree.simple_base(name)
        if base is None:
            base = self.tree.declared_type(name)
        if not base:
            return name

        # Keep built-in references intact (``xml:lang`` has no local alias)
        key = builtin_key(base)
        if key is not None:
            return key
        return strip_namespace_prefix(base)

    def resolve_field(
        self, reference: str, language: Union[Language, str]
    ) -> ResolvedType:
        """
        Resolve a reference to a target-language type.

        Built-in references are answered from the table without touching the
        tree. Everything else goes through ``resolve_base``; a base that is
        not a built-in becomes a type identifier, on the assumption that it
        is declared elsewhere in the same generation pass.
        """
        if not reference:
            reference = DEFAULT_TYPE

        type_name, found = resolve_builtin(reference, language)
        if found:
            return ResolvedType(type_name, True, builtin_key(reference))

        base = self.resolve_base(reference)
        type_name, found = resolve_builtin(base, language)
        if found:
            return ResolvedType(type_name, True, builtin_key(base))

        return ResolvedType(type_identifier(base), False, base)

    def field_type(self, reference: str, language: Union[Language, str]) -> str:
        """Target-language type name for a reference."""
        return self.resolve_field(reference, language).name

    def unresolved(self, reference: str) -> bool:
        """
        Check whether a reference is neither built-in nor defined in the tree.

        Used for diagnostics only; generation treats such references as
        plain type identifiers.
        """
        if not reference or builtin_key(reference) is not None:
            return False

        base = self.resolve_base(reference)
        if builtin_key(base) is not None:
            return False

        return (
            self.tree.definition(base) is None
            and self.tree.declared_type(base) is None
        )
