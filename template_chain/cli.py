"""Command-line front end.

Usage::

    template-chain parse "app/views/index.html._layout._content"
    template-chain process "out/index.html._layout._content" --set title=Home
    template-chain generate controller app/controllers/posts_controller.py -c ctx.yaml
    template-chain list --templates ./templates
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any

from .batch import ChainJob, process_many
from .config import BatchConfig, Config
from .errors import TemplateChainError
from .generator import FileGenerator
from .naming import parse_template_chain
from .utils import (
    console,
    load_context,
    parse_assignments,
    print_chain_table,
    print_error,
    print_success,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="template-chain",
        description="Chained-template file generation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  template-chain parse File.html._styling._layout._content\n"
            "  template-chain process out/File.html._layout._content --set title=Home\n"
            "  template-chain list --templates ./templates\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="Show the chain encoded in filenames")
    parse_cmd.add_argument("files", nargs="+", help="Filenames to decode")

    context_args = argparse.ArgumentParser(add_help=False)
    context_args.add_argument(
        "--templates", "-t",
        default=None,
        help="Templates root (default: bundled templates or $TEMPLATE_CHAIN_TEMPLATES_PATH)",
    )
    context_args.add_argument(
        "--context", "-c",
        default=None,
        help="JSON or YAML file with template variables",
    )
    context_args.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Template variable (repeatable, overrides --context)",
    )
    context_args.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Report every stage written",
    )

    process_cmd = subparsers.add_parser(
        "process", parents=[context_args], help="Apply the chains encoded in filenames"
    )
    process_cmd.add_argument("files", nargs="+", help="Chained filenames to produce")
    process_cmd.add_argument(
        "--parallel", "-p",
        type=int,
        default=None,
        help="Maximum chains processed concurrently",
    )
    process_cmd.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-chain timeout in seconds",
    )

    generate_cmd = subparsers.add_parser(
        "generate", parents=[context_args], help="Create a file from a generator template"
    )
    generate_cmd.add_argument("generator", help="Generator template name (e.g. view)")
    generate_cmd.add_argument("destination", help="File to create (may use extended naming)")

    list_cmd = subparsers.add_parser("list", help="List available generator templates")
    list_cmd.add_argument("--templates", "-t", default=None, help="Templates root")

    return parser


def _build_config(args: argparse.Namespace) -> Config:
    config = Config.from_env()
    if getattr(args, "templates", None):
        config.templates_path = Path(args.templates)
    if getattr(args, "verbose", False):
        config.verbose = True
    overrides: dict[str, Any] = {}
    if getattr(args, "parallel", None) is not None:
        overrides["max_parallel"] = args.parallel
    if getattr(args, "timeout", None) is not None:
        overrides["chain_timeout"] = args.timeout
    if overrides:
        config.batch = BatchConfig.model_validate(
            {**config.batch.model_dump(), **overrides}
        )
    return config


def _build_context(args: argparse.Namespace) -> dict[str, Any]:
    context: dict[str, Any] = {}
    if args.context:
        context.update(load_context(args.context))
    context.update(parse_assignments(args.assignments))
    return context


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_parse(args: argparse.Namespace) -> int:
    print_chain_table((f, parse_template_chain(f)) for f in args.files)
    return 0


def _cmd_process(args: argparse.Namespace) -> int:
    config = _build_config(args)
    context = _build_context(args)
    generator = FileGenerator(config)
    jobs = [ChainJob(file_path=f, context=dict(context)) for f in args.files]

    results = asyncio.run(
        process_many(
            generator.file_processor,
            jobs,
            max_parallel=config.batch.max_parallel,
            timeout=config.batch.chain_timeout,
        )
    )
    for result in results:
        console.print(f"  {result.summary()}")

    failed = sum(1 for r in results if not r.success)
    if failed:
        print_error(f"{failed} of {len(results)} file(s) failed.")
        return 1
    print_success(f"Processed {len(results)} file(s).")
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    generator = FileGenerator(_build_config(args))
    generator.create_from_template(args.generator, args.destination, _build_context(args))
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    generator = FileGenerator(_build_config(args))
    names = generator.template_manager.available_templates()
    if not names:
        console.print(f"[yellow]No templates found in {generator.renderer.template_dir}[/yellow]")
        return 0
    for name in names:
        console.print(name)
    partials = generator.renderer.list_partials()
    if partials:
        console.print(f"[dim]partials: {', '.join(partials)}[/dim]")
    return 0


_COMMANDS = {
    "parse": _cmd_parse,
    "process": _cmd_process,
    "generate": _cmd_generate,
    "list": _cmd_list,
}


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``template-chain`` and ``python -m template_chain``."""
    args = _build_parser().parse_args(argv)
    try:
        code = _COMMANDS[args.command](args)
    except (TemplateChainError, ValueError, OSError) as exc:
        print_error(f"Error: {exc}")
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
