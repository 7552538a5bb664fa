"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with common utilities for code generation.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import DictLoader, Environment, FileSystemLoader, select_autoescape

from .naming import to_snake_case, type_identifier


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


def doc_comment(name: str, doc: str, prefix: str = "//") -> str:
    """
    Build the documentation comment placed above a declaration.

    Args:
        name: Generated identifier of the declaration
        doc: Schema documentation (may be empty)
        prefix: Line comment marker of the target language

    Returns:
        ``<prefix> <name> is <doc>``, continued with ``prefix`` on every
        further line, or ``<prefix> <name> ...`` when there is no doc.
    """
    doc = doc.replace("\t", "").strip()
    if not doc:
        return f"{prefix} {name} ..."
    lines = [line.strip() for line in doc.splitlines()]
    return f"{prefix} {name} is " + f"\n{prefix} ".join(lines)


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = template_dir
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        if self.template_dir and self.template_dir.exists():
            loader = FileSystemLoader(str(self.template_dir))
        else:
            # Use in-memory templates
            loader = DictLoader({})

        self._env = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "xml"], default_for_string=False),
            trim_blocks=True,
            lstrip_blocks=True,
        )

        # Add custom filters for code generation
        self._env.filters["snake_case"] = to_snake_case
        self._env.filters["pascal_case"] = type_identifier
        self._env.filters["indent"] = self._indent_filter
        self._env.filters["doc_comment"] = doc_comment

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """Render a template string with the given context."""
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template string: {e}") from e

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        if not isinstance(self._env.loader, DictLoader):
            # Convert to DictLoader to support in-memory templates
            self._env.loader = DictLoader({})

        self._env.loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        """Check if a template can be loaded."""
        return template_name in self._env.loader.list_templates()

    # Template filters for code generation

    def _indent_filter(self, value: str, spaces: Any = 4) -> str:
        """Indent all non-blank lines in a string."""
        indent = spaces if isinstance(spaces, str) else " " * spaces
        lines = str(value).split("\n")
        return "\n".join(indent + line if line.strip() else line for line in lines)


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, optionally bound to a template directory."""
    return TemplateEngine(template_dir)
