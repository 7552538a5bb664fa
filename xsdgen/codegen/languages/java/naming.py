"""
Java-specific naming utilities.

Handles Java reserved words and member naming conventions.
"""

from typing import Set

from ...core.naming import camel_identifier, escape_reserved, unique_name

# Java keywords and literals
JAVA_RESERVED_WORDS = {
    "abstract",
    "assert",
    "boolean",
    "break",
    "byte",
    "case",
    "catch",
    "char",
    "class",
    "const",
    "continue",
    "default",
    "do",
    "double",
    "else",
    "enum",
    "extends",
    "false",
    "final",
    "finally",
    "float",
    "for",
    "goto",
    "if",
    "implements",
    "import",
    "instanceof",
    "int",
    "interface",
    "long",
    "native",
    "new",
    "null",
    "package",
    "private",
    "protected",
    "public",
    "return",
    "short",
    "static",
    "strictfp",
    "super",
    "switch",
    "synchronized",
    "this",
    "throw",
    "throws",
    "transient",
    "true",
    "try",
    "var",
    "void",
    "volatile",
    "while",
}


def java_field_name(name: str, used: Set[str]) -> str:
    """camelCase field name, escaped and unique within one class."""
    field_name = camel_identifier(name) or "value"
    if field_name[0].isdigit():
        field_name = f"_{field_name}"
    return unique_name(escape_reserved(field_name, JAVA_RESERVED_WORDS), used)
