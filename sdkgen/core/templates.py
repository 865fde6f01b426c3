"""
Jinja2 rendering for generated code.

Renderers and the package writer render the ``.j2`` files under
``sdkgen/generators/templates``. The environment is strict: an undefined
variable is a rendering error instead of an empty string in the output.
"""

import json
from typing import Dict, Any, Optional
from pathlib import Path

from jinja2 import (
    Environment,
    FileSystemLoader,
    DictLoader,
    StrictUndefined,
)

from .naming import to_snake_case, to_camel_case, to_pascal_case


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


def indent_code(value: str, spaces: int = 4) -> str:
    """Indent every non-blank line."""
    prefix = " " * spaces
    return "\n".join(prefix + line if line.strip() else line for line in str(value).split("\n"))


def as_comment(value: str) -> str:
    """Turn text into ``#`` comment lines."""
    return "\n".join(f"# {line}" if line.strip() else "#" for line in str(value).split("\n"))


def as_docstring(value: str) -> str:
    """Escape text for use between triple quotes."""
    return str(value).replace("\\", "\\\\").replace('"""', '\\"\\"\\"').strip()


class TemplateEngine:
    """Jinja2 environment with the filters the code templates use."""

    filters = {
        "snake_case": to_snake_case,
        "camel_case": to_camel_case,
        "pascal_case": to_pascal_case,
        "indent_code": indent_code,
        "comment": as_comment,
        "docstring": as_docstring,
        "pyrepr": repr,
        "quote": json.dumps,
    }

    def __init__(self, template_dir: Optional[Path] = None):
        self.template_dir = template_dir
        if template_dir and template_dir.exists():
            loader = FileSystemLoader(str(template_dir))
        else:
            loader = DictLoader({})

        # Generated code is not markup, so autoescape stays off
        self._env = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
            undefined=StrictUndefined,
        )
        self._env.filters.update(self.filters)

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
            return self._env.get_template(template_name).render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def add_template(self, name: str, content: str):
        """Register an in-memory template, replacing any file loader."""
        if not isinstance(self._env.loader, DictLoader):
            self._env.loader = DictLoader({})
        self._env.loader.mapping[name] = content


TEMPLATE_DIRECTORY = Path(__file__).resolve().parent.parent / "generators" / "templates"

_default_engine = None


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine for the given directory."""
    return TemplateEngine(template_dir)


def get_default_template_engine() -> TemplateEngine:
    """Get the template engine bound to the bundled generator templates."""
    global _default_engine
    if _default_engine is None:
        _default_engine = create_template_engine(TEMPLATE_DIRECTORY)
    return _default_engine
