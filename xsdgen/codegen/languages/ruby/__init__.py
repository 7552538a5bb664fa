"""
Ruby code generator module.

Generates xmlmapper classes from a proto tree.
"""

from .generator import RubyGenerator

__all__ = ["RubyGenerator"]
