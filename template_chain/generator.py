"""Host-side generation helpers.

``FileGenerator`` is what a code generator calls to produce a file.  It
decides, from the destination name alone, whether the file goes through a
template chain or through a plain generator template.

Quick usage::

    from template_chain import Config, FileGenerator

    generator = FileGenerator(Config(templates_path=Path("templates")))
    generator.create_from_template(
        "view", "app/views/posts/index.html._layout._content", {"title": "Posts"}
    )
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .config import Config
from .errors import TemplateError
from .manager import TemplateManager
from .naming import uses_extended_naming
from .processor import FileProcessor, LocalFileSystem
from .renderer import TEMPLATE_SUFFIX, TemplateRenderer
from .utils import print_status


class FileGenerator:
    """Creates files from generator templates or template chains."""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()
        self.filesystem = LocalFileSystem(encoding=self.config.encoding)
        self.renderer = TemplateRenderer(self.config.templates_path)
        self.template_manager = TemplateManager(self.renderer, self.filesystem)
        self.file_processor = FileProcessor(
            self.renderer, self.filesystem, verbose=self.config.verbose
        )

    def create_from_template(
        self,
        template_name: str,
        destination: str | Path,
        context: dict[str, Any] | None = None,
    ) -> str:
        """Create *destination*, returning the path actually written.

        Destinations using extended naming are processed as a chain and
        *template_name* is not consulted; everything else is rendered from
        the ``template_name`` generator template.
        """
        context = context or {}
        try:
            if uses_extended_naming(destination):
                result_file = self.file_processor.process_extended_naming(
                    destination, context
                )
            else:
                result_file = self.template_manager.apply_template(
                    template_name, destination, context
                )
        except Exception as exc:
            print_status("error", f"Failed to create {destination}: {exc}")
            raise

        print_status("create", result_file)
        return result_file

    def copy_template_file(
        self,
        template_name: str,
        source_file: str,
        destination: str | Path,
        context: dict[str, Any] | None = None,
    ) -> str:
        """Copy *source_file* from a generator's template directory.

        Files ending in ``.j2`` are rendered with *context* first; anything
        else is copied verbatim.
        """
        source_path = self.template_manager.get_template_dir(template_name) / source_file
        if not source_path.is_file():
            raise TemplateError(f"Template file not found: {source_path}")

        if source_file.endswith(TEMPLATE_SUFFIX):
            relative = source_path.relative_to(self.renderer.template_dir).as_posix()
            content = self.renderer.render_path(relative, dict(context or {}))
        else:
            content = self.filesystem.read(str(source_path))

        destination = str(destination)
        self.filesystem.write(destination, content)
        print_status("create", destination)
        return destination
