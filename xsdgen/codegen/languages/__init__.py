"""
Language-specific code generators.

This module contains generators for different programming languages.
"""

from .go import GoGenerator
from .java import JavaGenerator
from .ruby import RubyGenerator
from .rust import RustGenerator
from .typescript import TypeScriptGenerator

__all__ = [
    "GoGenerator",
    "JavaGenerator",
    "RubyGenerator",
    "RustGenerator",
    "TypeScriptGenerator",
]
