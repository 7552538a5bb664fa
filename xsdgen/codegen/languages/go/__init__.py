"""
Go code generator module.

Generates Go types with encoding/xml struct tags from a proto tree.
"""

from .generator import GoGenerator

__all__ = ["GoGenerator"]
