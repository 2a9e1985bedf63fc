"""Generator templates: one ``template.j2`` per generator directory.

Layout under the templates root::

    <root>/
        controller/template.j2
        view/template.j2
        partials/<chain template>.j2

``partials/`` holds chain templates and is never listed as a generator.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .errors import TemplateError, TemplateNotFoundError
from .processor import LocalFileSystem
from .renderer import TemplateRenderer

GENERATOR_TEMPLATE_NAME = "template.j2"
PARTIALS_DIR_NAME = "partials"


class TemplateManager:
    """Locates and applies generator templates.

    Args:
        renderer: Renderer whose templates root is used for all lookups.
        filesystem: Write capability for rendered output.
    """

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        filesystem: LocalFileSystem | None = None,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.filesystem = filesystem or LocalFileSystem()

    @property
    def templates_root(self) -> Path:
        return self.renderer.template_dir

    # -- Lookup ------------------------------------------------------------

    def get_template_dir(self, generator_type: str) -> Path:
        """Directory holding the templates of *generator_type*."""
        return self.templates_root / str(generator_type)

    def get_template_path(self, generator_type: str) -> Path:
        """Path of the main template of *generator_type*."""
        return self.get_template_dir(generator_type) / GENERATOR_TEMPLATE_NAME

    def template_exists(self, generator_type: str) -> bool:
        return self.get_template_path(generator_type).is_file()

    def available_templates(self) -> list[str]:
        """Sorted generator names found under the templates root."""
        if not self.templates_root.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self.templates_root.iterdir()
            if entry.is_dir()
            and not entry.name.startswith(".")
            and entry.name != PARTIALS_DIR_NAME
        )

    # -- Application -------------------------------------------------------

    def apply_template(
        self,
        generator_type: str,
        destination: str | Path,
        context: dict[str, Any] | None = None,
    ) -> str:
        """Render the template of *generator_type* into *destination*.

        Returns:
            *destination* as a string.

        Raises:
            TemplateError: If the template is missing or rendering/writing
                fails.  The original exception is chained.
        """
        template_path = self.get_template_path(generator_type)
        if not template_path.is_file():
            raise TemplateNotFoundError(str(generator_type), [str(template_path)])

        destination = str(destination)
        relative = f"{generator_type}/{GENERATOR_TEMPLATE_NAME}"
        try:
            result = self.renderer.render_path(relative, dict(context or {}))
            self.filesystem.write(destination, result)
        except Exception as exc:
            raise TemplateError(f"Failed to apply template: {exc}") from exc

        return destination
