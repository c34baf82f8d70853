"""Jinja2 template rendering for scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``skelgen/scaffolder/templates/`` directory.  The same environment renders
file names (``"{{ App.name }}.txt"``) and file bodies, so filters registered
here are available to both.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for scaffolding.

    Output is source code and file paths, so nothing is HTML-escaped.
    Undefined variables raise instead of rendering as empty strings: a body
    that references a missing binding is an error, and a file name that does
    so falls back to its literal text.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["snake_case"] = _snake_case_filter

    def get_template(self, template_path: str) -> Template:
        """Load a template relative to the template directory.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"app/__main__.py.j2"``).
        """
        return self.env.get_template(template_path)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        return self.env.from_string(template_string).render(context)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _snake_case_filter(value: Any) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", str(value))
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[-_\s]+", "_", s2).lower()
