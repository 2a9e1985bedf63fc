"""Jinja2 rendering for chained and generator templates.

Provides the TemplateRenderer class, the default render capability handed to
``FileProcessor``.  Chain templates are looked up by identifier under the
templates root (``partials/<id>.j2`` and friends); generator templates are
rendered by their path relative to the same root.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .errors import TemplateNotFoundError

# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

TEMPLATE_SUFFIX = ".j2"

# Candidate locations for a chain template, relative to the templates root.
PARTIAL_PATTERNS: tuple[str, ...] = (
    "partials/{name}.j2",
    "partials/{name}.html.j2",
    "{name}/template.j2",
)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates from a templates root.

    Variables are exposed to templates as plain names; the chain executor
    always supplies ``content`` (output of the previous stage) and
    ``template_name`` alongside the caller's context.  Undefined variables
    raise instead of rendering as empty strings.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["pascal_case"] = _pascal_case_filter
        self.env.filters["snake_case"] = _snake_case_filter

    # -- Chain templates ---------------------------------------------------

    def candidate_paths(self, template_id: str) -> list[str]:
        """Return the relative paths searched for *template_id*, in order."""
        return [pattern.format(name=template_id) for pattern in PARTIAL_PATTERNS]

    def find_template_file(self, template_id: str) -> str | None:
        """Return the first existing candidate path for *template_id*, if any."""
        for candidate in self.candidate_paths(template_id):
            if (self.template_dir / candidate).is_file():
                return candidate
        return None

    def render(self, template_id: str, context: dict[str, Any]) -> str:
        """Render the chain template named *template_id*.

        Raises:
            TemplateNotFoundError: If no candidate path exists.
            jinja2.TemplateError: If the template fails to compile or render.
        """
        template_path = self.find_template_file(template_id)
        if template_path is None:
            raise TemplateNotFoundError(template_id, self.candidate_paths(template_id))
        return self.render_path(template_path, context)

    # -- Path / string rendering -------------------------------------------

    def render_path(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a template by its path relative to the templates root.

        Paths are always ``/``-separated, as Jinja2 expects.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    # -- Utility -----------------------------------------------------------

    def list_partials(self) -> list[str]:
        """Return the sorted identifiers of every template under ``partials/``."""
        partials_dir = self.template_dir / "partials"
        if not partials_dir.is_dir():
            return []
        names = {
            p.name[: -len(TEMPLATE_SUFFIX)].removesuffix(".html")
            for p in partials_dir.glob(f"*{TEMPLATE_SUFFIX}")
        }
        return sorted(names)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------


def _pascal_case_filter(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    parts = re.split(r"[-_\s]+", value)
    return "".join(word.capitalize() for word in parts if word)


def _snake_case_filter(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", value)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[-\s]+", "_", s2).lower()
