"""
Rust-specific naming utilities.

Handles Rust keywords and field naming conventions.
"""

from typing import Set

from ...core.naming import field_identifier, unique_name

# Strict and reserved keywords usable as raw identifiers (r#name)
RUST_KEYWORDS = {
    "abstract",
    "as",
    "async",
    "await",
    "become",
    "box",
    "break",
    "const",
    "continue",
    "do",
    "dyn",
    "else",
    "enum",
    "extern",
    "false",
    "final",
    "fn",
    "for",
    "if",
    "impl",
    "in",
    "let",
    "loop",
    "macro",
    "match",
    "mod",
    "move",
    "mut",
    "override",
    "priv",
    "pub",
    "ref",
    "return",
    "static",
    "struct",
    "trait",
    "true",
    "try",
    "type",
    "typeof",
    "unsafe",
    "unsized",
    "use",
    "virtual",
    "where",
    "while",
    "yield",
}

# Keywords that cannot be raw identifiers
RUST_PATH_KEYWORDS = {"crate", "self", "Self", "super"}


def rust_field_name(name: str, used: Set[str]) -> str:
    """snake_case field name, unique within one struct and keyword-safe."""
    field_name = field_identifier(name) or "value"
    if field_name[0].isdigit():
        field_name = f"_{field_name}"
    if field_name in RUST_PATH_KEYWORDS:
        field_name = f"{field_name}_"

    field_name = unique_name(field_name, used)
    if field_name in RUST_KEYWORDS:
        return f"r#{field_name}"
    return field_name
