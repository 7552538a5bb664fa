"""
Naming utilities for safe code generation.

Pure string transforms shared by every target language: case conversion,
namespace prefix handling and identifier construction from schema names.
"""

import re
from typing import Set

# Insert an underscore between a lower-case letter or digit and an upper-case letter
_MATCH_ALL_CAP = re.compile(r"([a-z0-9])([A-Z])")

# Delimiters that split a schema name into identifier segments
_SEGMENT_SPLIT = re.compile(r"[:.\-_]")


def upper_first(s: str) -> str:
    """
    Make the first letter of a string uppercase.

    Strings shorter than two characters are upper-cased entirely.
    """
    if len(s) < 2:
        return s.upper()
    return s[0].upper() + s[1:]


def to_snake_case(s: str) -> str:
    """Convert the provided string to snake_case."""
    output = _MATCH_ALL_CAP.sub(r"\1_\2", s)
    output = output.replace("-", "_")
    return output.lower()


def strip_namespace_prefix(s: str) -> str:
    """
    Remove a namespace prefix (``prefix:local`` -> ``local``).

    Only a single colon counts as a prefix separator; anything else is
    returned unchanged.
    """
    parts = s.split(":")
    if len(parts) == 2:
        return parts[1]
    return s


def namespace_prefix(s: str) -> str:
    """Return the namespace prefix of ``prefix:local``, or an empty string."""
    parts = s.split(":")
    if len(parts) == 2:
        return parts[0]
    return ""


def type_identifier(name: str) -> str:
    """
    Build a PascalCase type identifier from a schema name.

    Every segment delimited by ``:``, ``.``, ``-`` or ``_`` gets an upper-case
    first letter and the segments are concatenated, e.g.
    ``customer-id`` -> ``CustomerId``.
    """
    return "".join(upper_first(part) for part in _SEGMENT_SPLIT.split(name))


def field_identifier(name: str) -> str:
    """Build a snake_case member identifier from a schema name."""
    return to_snake_case(type_identifier(name))


def camel_identifier(name: str) -> str:
    """Build a camelCase member identifier from a schema name."""
    parts = field_identifier(name).split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:] if part)


def escape_reserved(name: str, reserved: Set[str], suffix: str = "_") -> str:
    """Append ``suffix`` when ``name`` is a reserved word of the target language."""
    if name in reserved:
        return f"{name}{suffix}"
    return name


def unique_name(name: str, used: Set[str]) -> str:
    """
    Return a name not yet present in ``used`` and record it.

    Conflicts are resolved with a numeric suffix: ``id``, ``id1``, ``id2``...
    """
    candidate = name
    counter = 1
    while candidate in used:
        candidate = f"{name}{counter}"
        counter += 1
    used.add(candidate)
    return candidate
