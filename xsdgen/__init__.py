"""xsdgen - generate type declarations from XML Schema documents."""

from .codegen import generate_from_tree, get_generator, quick_generate
from .parser import parse_schema

__version__ = "0.1.0"

__all__ = [
    "generate_from_tree",
    "get_generator",
    "parse_schema",
    "quick_generate",
]
