"""Chain executor: applies a decoded template chain stage by stage.

Each stage renders one template with the output of the previous stage bound
to ``content`` and writes the result to an intermediate file named after the
templates still pending.  The last stage writes to the base path::

    File.html._styling._layout._content
      stage 0: content  -> File.html._styling._layout
      stage 1: layout   -> File.html._styling
      stage 2: styling  -> File.html

A failing stage aborts the chain.  Files written by earlier stages are left
on disk.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from .errors import FileProcessingError, TemplateNotFoundError
from .naming import build_intermediate_filename, parse_template_chain
from .utils import print_status

INITIAL_CONTENT_KEY = "initial_content"
CONTENT_KEY = "content"
TEMPLATE_NAME_KEY = "template_name"


# ---------------------------------------------------------------------------
# Capabilities
# ---------------------------------------------------------------------------


class Renderer(Protocol):
    """Anything that can turn a template identifier plus context into text."""

    def render(self, template_id: str, context: dict[str, Any]) -> str: ...


class LocalFileSystem:
    """Filesystem capability backed by the local disk (text mode)."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def ensure_parent_dirs(self, path: str) -> None:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)

    def write(self, path: str, content: str) -> None:
        self.ensure_parent_dirs(path)
        with open(path, "w", encoding=self.encoding) as fh:
            fh.write(content)

    def read(self, path: str) -> str:
        with open(path, encoding=self.encoding) as fh:
            return fh.read()

    def exists(self, path: str) -> bool:
        return os.path.exists(path)


# ---------------------------------------------------------------------------
# FileProcessor
# ---------------------------------------------------------------------------


class FileProcessor:
    """Processes files that use the extended (chained) naming convention.

    Args:
        renderer: Render capability used once per stage.
        filesystem: Write capability; defaults to :class:`LocalFileSystem`.
        verbose: Print a status line for every stage written.
    """

    def __init__(
        self,
        renderer: Renderer,
        filesystem: LocalFileSystem | None = None,
        *,
        verbose: bool = False,
    ) -> None:
        self.renderer = renderer
        self.filesystem = filesystem or LocalFileSystem()
        self.verbose = verbose

    def process_extended_naming(
        self,
        file_path: str | os.PathLike[str],
        context: Mapping[str, Any] | None = None,
    ) -> str:
        """Parse *file_path* and apply its chain.

        Returns *file_path* unchanged (as ``str``) when it carries no chain,
        otherwise the path of the final artifact.
        """
        file_path = os.fspath(file_path)
        parsed = parse_template_chain(file_path)
        if not parsed.has_chain:
            return file_path
        return self.apply_template_chain(parsed.base, parsed.templates, context)

    def apply_template_chain(
        self,
        base_file: str | os.PathLike[str],
        templates: Sequence[str],
        context: Mapping[str, Any] | None = None,
    ) -> str:
        """Apply *templates* (innermost-first) and return the last path written.

        The caller's *context* is never mutated.  Its ``initial_content`` key
        seeds the first stage (empty string when absent).  An empty
        *templates* sequence writes nothing and returns *base_file*.

        Raises:
            FileProcessingError: On any render or write failure; the original
                exception is chained as ``__cause__``.
        """
        base_file = os.fspath(base_file)
        context = dict(context or {})
        current_file = base_file
        current_content = context.get(INITIAL_CONTENT_KEY) or ""

        for index, template_name in enumerate(templates):
            intermediate_file = build_intermediate_filename(base_file, templates, index)
            stage_context = {
                **context,
                CONTENT_KEY: current_content,
                TEMPLATE_NAME_KEY: template_name,
            }
            current_content = self._render_stage(
                index, template_name, intermediate_file, stage_context
            )
            self._write_stage(index, template_name, intermediate_file, current_content)
            current_file = intermediate_file

            if self.verbose:
                print_status(
                    "stage",
                    f"{index + 1}/{len(templates)} {template_name} -> {intermediate_file}",
                )

        return current_file

    # -- Stage helpers -----------------------------------------------------

    def _render_stage(
        self,
        index: int,
        template_name: str,
        intermediate_file: str,
        stage_context: dict[str, Any],
    ) -> str:
        try:
            return self.renderer.render(template_name, stage_context)
        except TemplateNotFoundError as exc:
            raise FileProcessingError(
                f"Template not found: {template_name} (stage {index})",
                stage=index,
                template_name=template_name,
                path=intermediate_file,
            ) from exc
        except Exception as exc:
            raise FileProcessingError(
                f"Failed to render template {template_name!r} at stage {index}: {exc}",
                stage=index,
                template_name=template_name,
                path=intermediate_file,
            ) from exc

    def _write_stage(
        self,
        index: int,
        template_name: str,
        intermediate_file: str,
        content: str,
    ) -> None:
        try:
            self.filesystem.write(intermediate_file, content)
        except Exception as exc:
            raise FileProcessingError(
                f"Failed to write {intermediate_file} at stage {index}: {exc}",
                stage=index,
                template_name=template_name,
                path=intermediate_file,
            ) from exc
