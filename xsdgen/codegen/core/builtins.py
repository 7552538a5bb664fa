"""
Built-in XSD type table.

Defines the correspondence between XSD primitive/derived data types and the
type spelling used by each supported target language.
https://www.w3.org/TR/xmlschema-2/#datatype
"""

from enum import Enum
from typing import Dict, Optional, Tuple, Union

from .naming import strip_namespace_prefix


class Language(Enum):
    """Supported target languages, in built-in table column order."""

    GO = "go"
    TYPESCRIPT = "typescript"
    JAVA = "java"
    RUST = "rust"
    RUBY = "ruby"

    @property
    def column(self) -> int:
        """Column index of this language in ``BUILTIN_TYPES`` rows."""
        return list(Language).index(self)


# fmt: off
BUILTIN_TYPES: Dict[str, Tuple[str, str, str, str, str]] = {
    #                       Go           TypeScript       Java            Rust           Ruby
    "anyType":            ("string",    "string",        "String",       "String",      "String"),
    "anySimpleType":      ("string",    "string",        "String",       "String",      "String"),
    "ENTITIES":           ("[]string",  "Array<string>", "List<String>", "Vec<String>", "Array"),
    "ENTITY":             ("string",    "string",        "String",       "String",      "String"),
    "ID":                 ("string",    "string",        "String",       "String",      "String"),
    "IDREF":              ("string",    "string",        "String",       "String",      "String"),
    "IDREFS":             ("[]string",  "Array<string>", "List<String>", "Vec<String>", "Array"),
    "NCName":             ("string",    "string",        "String",       "String",      "String"),
    "NMTOKEN":            ("string",    "string",        "String",       "String",      "String"),
    "NMTOKENS":           ("[]string",  "Array<string>", "List<String>", "Vec<String>", "Array"),
    "NOTATION":           ("string",    "string",        "String",       "String",      "String"),
    "Name":               ("string",    "string",        "String",       "String",      "String"),
    "QName":              ("xml.Name",  "string",        "QName",        "String",      "String"),
    "anyURI":             ("string",    "string",        "String",       "String",      "String"),
    "base64Binary":       ("[]byte",    "Uint8Array",    "byte[]",       "Vec<u8>",     "String"),
    "boolean":            ("bool",      "boolean",       "Boolean",      "bool",        "Boolean"),
    "byte":               ("int8",      "number",        "Byte",         "i8",          "Integer"),
    "date":               ("time.Time", "string",        "String",       "String",      "Date"),
    "dateTime":           ("time.Time", "string",        "String",       "String",      "DateTime"),
    "decimal":            ("float64",   "number",        "BigDecimal",   "f64",         "Float"),
    "double":             ("float64",   "number",        "Double",       "f64",         "Float"),
    "duration":           ("string",    "string",        "String",       "String",      "String"),
    "float":              ("float32",   "number",        "Float",        "f32",         "Float"),
    "gDay":               ("string",    "string",        "String",       "String",      "String"),
    "gMonth":             ("string",    "string",        "String",       "String",      "String"),
    "gMonthDay":          ("string",    "string",        "String",       "String",      "String"),
    "gYear":              ("string",    "string",        "String",       "String",      "String"),
    "gYearMonth":         ("string",    "string",        "String",       "String",      "String"),
    "hexBinary":          ("[]byte",    "Uint8Array",    "byte[]",       "Vec<u8>",     "String"),
    "int":                ("int32",     "number",        "Integer",      "i32",         "Integer"),
    "integer":            ("int",       "number",        "Long",         "i64",         "Integer"),
    "language":           ("string",    "string",        "String",       "String",      "String"),
    "long":               ("int64",     "number",        "Long",         "i64",         "Integer"),
    "negativeInteger":    ("int",       "number",        "Long",         "i64",         "Integer"),
    "nonNegativeInteger": ("uint",      "number",        "Long",         "u64",         "Integer"),
    "nonPositiveInteger": ("int",       "number",        "Long",         "i64",         "Integer"),
    "normalizedString":   ("string",    "string",        "String",       "String",      "String"),
    "positiveInteger":    ("uint",      "number",        "Long",         "u64",         "Integer"),
    "short":              ("int16",     "number",        "Short",        "i16",         "Integer"),
    "string":             ("string",    "string",        "String",       "String",      "String"),
    "time":               ("time.Time", "string",        "String",       "String",      "Time"),
    "token":              ("string",    "string",        "String",       "String",      "String"),
    "unsignedByte":       ("uint8",     "number",        "Short",        "u8",          "Integer"),
    "unsignedInt":        ("uint32",    "number",        "Long",         "u32",         "Integer"),
    "unsignedLong":       ("uint64",    "number",        "BigInteger",   "u64",         "Integer"),
    "unsignedShort":      ("uint16",    "number",        "Integer",      "u16",         "Integer"),
    "xml:lang":           ("string",    "string",        "String",       "String",      "String"),
    "xml:space":          ("string",    "string",        "String",       "String",      "String"),
    "xml:base":           ("string",    "string",        "String",       "String",      "String"),
    "xml:id":             ("string",    "string",        "String",       "String",      "String"),
}
# fmt: on


def _as_language(language: Union[Language, str]) -> Language:
    if isinstance(language, Language):
        return language
    return Language(language.lower())


def builtin_key(reference: str) -> Optional[str]:
    """
    Return the table key a type reference denotes, if any.

    The raw reference is tried first so ``xml:lang`` matches, then its local
    name so ``xs:string`` matches.
    """
    if reference in BUILTIN_TYPES:
        return reference
    local = strip_namespace_prefix(reference)
    if local in BUILTIN_TYPES:
        return local
    return None


def is_builtin(reference: str) -> bool:
    """Check whether a type reference names an XSD built-in type."""
    return builtin_key(reference) is not None


def resolve_builtin(
    xsd_name: str, language: Union[Language, str]
) -> Tuple[str, bool]:
    """
    Look up the target-language spelling of an XSD built-in type.

    Args:
        xsd_name: XSD type name, with or without namespace prefix
        language: Target language

    Returns:
        Tuple of (type name, found). ``found`` is False when ``xsd_name`` is
        not a built-in, in which case the caller treats it as user-defined.
    """
    key = builtin_key(xsd_name)
    if key is None:
        return "", False
    return BUILTIN_TYPES[key][_as_language(language).column], True
