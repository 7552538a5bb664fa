"""
Core code generation components.

Provides the proto tree, type resolution and the base classes used by all
language generators.
"""

from .builtins import BUILTIN_TYPES, Language, is_builtin, resolve_builtin
from .config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .generator import (
    CodeGenerator,
    GenerationContext,
    GenerationResult,
    GenerationState,
    GeneratorError,
    Member,
    generate_code,
)
from .naming import (
    namespace_prefix,
    strip_namespace_prefix,
    to_snake_case,
    type_identifier,
    upper_first,
)
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
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GenerationContext",
    "GenerationResult",
    "GenerationState",
    "GeneratorError",
    "Member",
    "generate_code",
    # Proto tree
    "Attribute",
    "AttributeGroup",
    "ComplexType",
    "Element",
    "Group",
    "Node",
    "NodeKind",
    "ProtoTree",
    "SimpleType",
    # Type resolution
    "BUILTIN_TYPES",
    "Language",
    "ResolvedType",
    "TypeResolver",
    "is_builtin",
    "resolve_builtin",
    # Naming utilities
    "namespace_prefix",
    "strip_namespace_prefix",
    "to_snake_case",
    "type_identifier",
    "upper_first",
    # Configuration system
    "ConfigError",
    "ConfigManager",
    "GeneratorConfig",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
