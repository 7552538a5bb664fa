"""
TypeScript code generator module.

Generates TypeScript classes and type aliases from a proto tree.
"""

from .generator import TypeScriptGenerator

__all__ = ["TypeScriptGenerator"]
