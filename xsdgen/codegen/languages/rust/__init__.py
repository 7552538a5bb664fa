"""
Rust code generator module.

Generates serde-derived Rust structs and type aliases from a proto tree.
"""

from .generator import RustGenerator

__all__ = ["RustGenerator"]
