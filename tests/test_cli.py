"""Tests for the command-line front end (template_chain.cli).

Covers:
- parse, process, generate, list subcommands
- Context from files and --set
- Exit codes on success and failure, including invalid options and timeouts
"""

from __future__ import annotations

import json
import os
import time
from pathlib import Path
from unittest.mock import patch

import pytest

from template_chain.cli import main


def _run(argv: list[str]) -> int:
    with patch.dict(os.environ, {}, clear=True):
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
    return exc_info.value.code


class TestParseCommand:
    @pytest.mark.unit
    def test_prints_chain(self, capsys):
        assert _run(["parse", "a._styling._layout._content"]) == 0
        out = capsys.readouterr().out
        assert "content -> layout -> styling" in out

    @pytest.mark.unit
    def test_requires_files(self):
        assert _run(["parse"]) == 2


class TestProcessCommand:
    @pytest.mark.integration
    def test_processes_chain_with_assignments(self, tmp_path: Path, templates_root: Path):
        target = tmp_path / "index.html._layout._content"
        code = _run([
            "process", str(target),
            "--templates", str(templates_root),
            "--set", "title=Home",
        ])
        assert code == 0
        assert (tmp_path / "index.html").read_text(encoding="utf-8") == "<body><p>Home</p></body>"

    @pytest.mark.integration
    def test_context_file_and_override(self, tmp_path: Path, templates_root: Path):
        ctx = tmp_path / "ctx.json"
        ctx.write_text(json.dumps({"title": "FromFile"}), encoding="utf-8")
        code = _run([
            "process", str(tmp_path / "a.html._content"),
            "-t", str(templates_root),
            "-c", str(ctx),
            "--set", "title=Override",
        ])
        assert code == 0
        assert (tmp_path / "a.html").read_text(encoding="utf-8") == "<p>Override</p>"

    @pytest.mark.integration
    def test_multiple_files_with_failure(self, tmp_path: Path, templates_root: Path, capsys):
        code = _run([
            "process",
            str(tmp_path / "ok.html._content"),
            str(tmp_path / "bad.html._ghost"),
            "-t", str(templates_root),
            "--set", "title=x",
            "--parallel", "2",
            "--timeout", "10",
        ])
        assert code == 1
        assert (tmp_path / "ok.html").exists()
        assert "failed" in capsys.readouterr().out

    @pytest.mark.unit
    def test_bad_assignment(self, tmp_path: Path):
        assert _run(["process", str(tmp_path / "a._x"), "--set", "novalue"]) == 1

    @pytest.mark.unit
    def test_missing_context_file(self, tmp_path: Path):
        assert _run(["process", str(tmp_path / "a._x"), "-c", str(tmp_path / "nope.json")]) == 1

    @pytest.mark.unit
    def test_malformed_yaml_context(self, tmp_path: Path, capsys):
        ctx = tmp_path / "ctx.yaml"
        ctx.write_text("title: [unclosed\n", encoding="utf-8")
        assert _run(["process", str(tmp_path / "a._x"), "-c", str(ctx)]) == 1
        assert "Invalid YAML" in capsys.readouterr().out

    @pytest.mark.unit
    @pytest.mark.parametrize("flag, value", [
        ("--parallel", "0"),
        ("--parallel", "-2"),
        ("--timeout", "0"),
        ("--timeout", "-1"),
    ])
    def test_invalid_batch_options(self, tmp_path: Path, flag: str, value: str):
        target = tmp_path / "a.html._content"
        assert _run(["process", str(target), flag, value, "--set", "title=x"]) == 1
        assert not (tmp_path / "a.html").exists()

    @pytest.mark.integration
    def test_timeout_returns_without_waiting_for_render(
        self, tmp_path: Path, templates_root: Path
    ):
        def slow_render(self, template_name, context):
            time.sleep(1.5)
            return ""

        start = time.monotonic()
        with patch("template_chain.renderer.TemplateRenderer.render", slow_render):
            code = _run([
                "process", str(tmp_path / "a.html._content"),
                "-t", str(templates_root),
                "--set", "title=x",
                "--timeout", "0.1",
            ])
        elapsed = time.monotonic() - start

        assert code == 1
        assert elapsed < 1.0


class TestGenerateCommand:
    @pytest.mark.integration
    def test_plain_generation(self, tmp_path: Path, templates_root: Path):
        dest = tmp_path / "index.html"
        code = _run([
            "generate", "view", str(dest),
            "-t", str(templates_root),
            "--set", "title=blog",
        ])
        assert code == 0
        assert dest.read_text(encoding="utf-8") == "<h1>Blog</h1>\n"

    @pytest.mark.integration
    def test_missing_generator(self, tmp_path: Path, templates_root: Path):
        code = _run(["generate", "model", str(tmp_path / "m.py"), "-t", str(templates_root)])
        assert code == 1


class TestListCommand:
    @pytest.mark.unit
    def test_lists_generators_and_partials(self, templates_root: Path, capsys):
        assert _run(["list", "-t", str(templates_root)]) == 0
        out = capsys.readouterr().out
        assert "styling" in out
        assert "view" in out
        assert "partials" in out

    @pytest.mark.unit
    def test_empty_root(self, tmp_path: Path, capsys):
        assert _run(["list", "-t", str(tmp_path)]) == 0
        assert "No templates found" in capsys.readouterr().out
