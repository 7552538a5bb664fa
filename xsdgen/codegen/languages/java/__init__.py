"""
Java code generator module.

Generates JAXB-annotated Java classes from a proto tree.
"""

from .generator import JavaGenerator

__all__ = ["JavaGenerator"]
