"""Shared pytest fixtures for the template chain test suite.

Provides reusable fixtures for:
- A temporary templates root with chain partials and generator templates
- Real and recording renderers
- A FileProcessor wired to either renderer
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from template_chain.processor import FileProcessor
from template_chain.renderer import TemplateRenderer


# ---------------------------------------------------------------------------
# Templates root
# ---------------------------------------------------------------------------

@pytest.fixture
def templates_root(tmp_path: Path) -> Path:
    """Temporary templates root.

    Layout::

        partials/content.j2        -> "<p>{{ title }}</p>" around content
        partials/layout.html.j2    -> "<body>...</body>"
        styling/template.j2        -> "<style/>" + content
        partials/broken.j2         -> references an undefined variable
        view/template.j2           -> generator template
        view/README.md             -> static file
        view/snippet.txt.j2        -> renderable static file
    """
    root = tmp_path / "templates"
    (root / "partials").mkdir(parents=True)
    (root / "styling").mkdir()
    (root / "view").mkdir()
    (root / ".hidden").mkdir()

    (root / "partials" / "content.j2").write_text(
        "<p>{{ title }}</p>{{ content }}", encoding="utf-8"
    )
    (root / "partials" / "layout.html.j2").write_text(
        "<body>{{ content }}</body>", encoding="utf-8"
    )
    (root / "styling" / "template.j2").write_text(
        "<style/>{{ content }}", encoding="utf-8"
    )
    (root / "partials" / "broken.j2").write_text(
        "{{ missing_variable }}", encoding="utf-8"
    )
    (root / "view" / "template.j2").write_text(
        "<h1>{{ title | pascal_case }}</h1>\n", encoding="utf-8"
    )
    (root / "view" / "README.md").write_text("static {{ not_rendered }}\n", encoding="utf-8")
    (root / "view" / "snippet.txt.j2").write_text("Hello {{ name }}\n", encoding="utf-8")
    return root


@pytest.fixture
def renderer(templates_root: Path) -> TemplateRenderer:
    return TemplateRenderer(templates_root)


@pytest.fixture
def processor(renderer: TemplateRenderer) -> FileProcessor:
    return FileProcessor(renderer)


# ---------------------------------------------------------------------------
# Recording renderer
# ---------------------------------------------------------------------------

@pytest.fixture
def recording_renderer() -> MagicMock:
    """A renderer mock that wraps content as ``<name>content</name>``.

    Every call is recorded, and the context is copied so later mutation
    cannot affect assertions.
    """
    calls: list[tuple[str, dict[str, Any]]] = []

    def _render(template_id: str, context: dict[str, Any]) -> str:
        calls.append((template_id, dict(context)))
        return f"<{template_id}>{context['content']}</{template_id}>"

    mock = MagicMock()
    mock.render.side_effect = _render
    mock.calls = calls
    return mock


@pytest.fixture
def recording_processor(recording_renderer: MagicMock) -> FileProcessor:
    return FileProcessor(recording_renderer)
