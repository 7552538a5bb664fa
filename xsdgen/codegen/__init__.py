"""
xsdgen Code Generation Module

Generates code in various languages from a parsed XSD proto tree.
"""

from .core.config import GeneratorConfig, ConfigManager, load_config
from .core.generator import (
    CodeGenerator,
    GenerationResult,
    GeneratorError,
    generate_code,
)
from .core.proto import ProtoTree
from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    is_language_supported,
    list_all_language_info,
    list_supported_languages,
)


def generate_from_tree(tree: ProtoTree, language="go", config=None) -> GenerationResult:
    """
    Generate code from a proto tree.

    Args:
        tree: Proto tree produced by the parser
        language: Target language name or alias
        config: Generator configuration object, dict or JSON path

    Returns:
        GenerationResult with generated code
    """
    generator = get_generator(language, config)
    return generate_code(generator, tree)


def quick_generate(schema, language="go", **options) -> str:
    """
    Quick code generation from XSD markup.

    Args:
        schema: XSD document as str or bytes
        language: Target language
        **options: Generator options

    Returns:
        Generated code string
    """
    from xsdgen.parser import parse_schema

    tree = parse_schema(schema)
    result = generate_from_tree(tree, language, options)

    if result.success:
        return result.code
    raise GeneratorError(f"Code generation failed: {result.error_message}")


__all__ = [
    "CodeGenerator",
    "ConfigManager",
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorError",
    "GeneratorRegistry",
    "RegistryError",
    "generate_code",
    "generate_from_tree",
    "get_generator",
    "get_language_info",
    "is_language_supported",
    "list_all_language_info",
    "list_supported_languages",
    "load_config",
    "quick_generate",
]
