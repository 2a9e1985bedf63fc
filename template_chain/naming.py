"""Extended file naming: decoding template chains out of filenames.

A filename may carry an ordered stack of decorator templates after its base
name, each segment prefixed with an underscore::

    File.html._styling._layout._content

The decorator nearest the base is applied last (outermost wrap) and the one
farthest away is applied first, so the parsed template list is
innermost-first::

    parse_template_chain("File.html._styling._layout._content")
    -> ChainDescriptor(base="File.html", templates=("content", "layout", "styling"))

Every function here is pure string manipulation; nothing touches the disk.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass

DECORATOR_PREFIX = "_"
SEGMENT_SEPARATOR = "."
EXTENDED_NAMING_MARKER = SEGMENT_SEPARATOR + DECORATOR_PREFIX


@dataclass(frozen=True)
class ChainDescriptor:
    """Result of parsing a filename.

    Attributes:
        base: Directory (as supplied) joined with the base name, decorators
            stripped.  Equal to the input when there is no chain.
        templates: Template identifiers, innermost-first.
    """

    base: str
    templates: tuple[str, ...] = ()

    @property
    def has_chain(self) -> bool:
        return bool(self.templates)


def parse_template_chain(filename: str | os.PathLike[str]) -> ChainDescriptor:
    """Split *filename* into its base path and template chain.

    The final path component is split on dots and scanned for the first
    segment starting with an underscore.  That segment and everything after
    it form the chain; trailing segments without an underscore are swept in
    as well.  Never raises.
    """
    filename = os.fspath(filename)
    basename = os.path.basename(filename)
    dirname = os.path.dirname(filename)

    parts = basename.split(SEGMENT_SEPARATOR)
    start = next(
        (i for i, part in enumerate(parts) if part.startswith(DECORATOR_PREFIX)),
        None,
    )
    if start is None:
        return ChainDescriptor(base=filename)

    base_name = SEGMENT_SEPARATOR.join(parts[:start])
    templates = [_strip_prefix(part) for part in parts[start:]]
    templates.reverse()

    return ChainDescriptor(
        base=os.path.join(dirname, base_name),
        templates=tuple(templates),
    )


def uses_extended_naming(filename: str | os.PathLike[str]) -> bool:
    """Return ``True`` if the basename of *filename* contains ``._``.

    This is a substring check, not a parse: ``a._b.html`` is flagged even
    though callers may disagree about its segment boundaries.
    """
    return EXTENDED_NAMING_MARKER in os.path.basename(os.fspath(filename))


def format_decorators(templates: Sequence[str]) -> str:
    """Render an innermost-first template list as a decorator suffix.

    Examples::

        format_decorators(["content", "layout"]) -> "._layout._content"
        format_decorators([]) -> ""
    """
    return "".join(
        f"{EXTENDED_NAMING_MARKER}{name}" for name in reversed(templates)
    )


def build_intermediate_filename(
    base_file: str | os.PathLike[str],
    templates: Sequence[str],
    current_index: int,
) -> str:
    """Filename written after stage *current_index* of a chain.

    The name keeps decorators for every template still pending, so the
    final stage writes to *base_file* itself::

        build_intermediate_filename("File.html", ["content", "layout", "styling"], 0)
        -> "File.html._styling._layout"
    """
    base_file = os.fspath(base_file)
    remaining = list(templates[current_index + 1:])
    if not remaining:
        return base_file

    return os.path.join(
        os.path.dirname(base_file),
        os.path.basename(base_file) + format_decorators(remaining),
    )


def _strip_prefix(segment: str) -> str:
    if segment.startswith(DECORATOR_PREFIX):
        return segment[len(DECORATOR_PREFIX):]
    return segment
