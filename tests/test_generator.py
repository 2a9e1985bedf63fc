"""Tests for the host-side FileGenerator (template_chain.generator).

Covers:
- Dispatch between chained and plain destinations
- Status output on success and failure
- copy_template_file for rendered and verbatim files
"""

from __future__ import annotations

from pathlib import Path

import pytest

from template_chain.config import Config
from template_chain.errors import FileProcessingError, TemplateError
from template_chain.generator import FileGenerator


pytestmark = pytest.mark.unit


@pytest.fixture
def generator(templates_root: Path) -> FileGenerator:
    return FileGenerator(Config(templates_path=templates_root))


class TestCreateFromTemplate:
    def test_plain_destination_uses_generator_template(self, generator: FileGenerator, tmp_path: Path, capsys):
        dest = tmp_path / "index.html"
        result = generator.create_from_template("view", dest, {"title": "home"})

        assert result == str(dest)
        assert dest.read_text(encoding="utf-8") == "<h1>Home</h1>\n"
        assert "create" in capsys.readouterr().out

    def test_chained_destination_uses_chain(self, generator: FileGenerator, tmp_path: Path):
        dest = tmp_path / "index.html._layout._content"
        result = generator.create_from_template("view", dest, {"title": "Home"})

        assert result == str(tmp_path / "index.html")
        assert Path(result).read_text(encoding="utf-8") == "<body><p>Home</p></body>"
        assert (tmp_path / "index.html._layout").read_text(encoding="utf-8") == "<p>Home</p>"

    def test_failure_prints_error_and_reraises(self, generator: FileGenerator, tmp_path: Path, capsys):
        with pytest.raises(FileProcessingError):
            generator.create_from_template("view", tmp_path / "a.html._ghost", {})
        assert "error" in capsys.readouterr().out

    def test_missing_generator_template(self, generator: FileGenerator, tmp_path: Path):
        with pytest.raises(TemplateError):
            generator.create_from_template("model", tmp_path / "model.py", {})

    def test_config_wires_components(self, templates_root: Path):
        generator = FileGenerator(Config(templates_path=templates_root, verbose=True, encoding="latin-1"))
        assert generator.renderer.template_dir == templates_root
        assert generator.template_manager.renderer is generator.renderer
        assert generator.file_processor.renderer is generator.renderer
        assert generator.file_processor.verbose is True
        assert generator.filesystem.encoding == "latin-1"


class TestCopyTemplateFile:
    def test_renders_j2_source(self, generator: FileGenerator, tmp_path: Path):
        dest = tmp_path / "snippet.txt"
        result = generator.copy_template_file("view", "snippet.txt.j2", dest, {"name": "World"})
        assert result == str(dest)
        assert dest.read_text(encoding="utf-8") == "Hello World\n"

    def test_copies_other_files_verbatim(self, generator: FileGenerator, tmp_path: Path):
        dest = tmp_path / "docs" / "README.md"
        generator.copy_template_file("view", "README.md", dest)
        assert dest.read_text(encoding="utf-8") == "static {{ not_rendered }}\n"

    def test_missing_source_raises(self, generator: FileGenerator, tmp_path: Path):
        with pytest.raises(TemplateError, match="Template file not found"):
            generator.copy_template_file("view", "nope.txt", tmp_path / "nope.txt")
