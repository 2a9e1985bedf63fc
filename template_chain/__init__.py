"""Chained-template file generation.

A target filename may encode a stack of decorator templates after its base
name (``File.html._styling._layout._content``).  This package decodes such
names and applies the chain stage by stage, writing an intermediate file per
stage.

Quick usage::

    from template_chain import FileProcessor, TemplateRenderer

    processor = FileProcessor(TemplateRenderer("templates"))
    processor.process_extended_naming("out/File.html._layout._content", {"title": "Home"})
"""

from .batch import ChainJob, ChainResult, process_many
from .config import BatchConfig, Config
from .errors import (
    FileProcessingError,
    TemplateChainError,
    TemplateError,
    TemplateNotFoundError,
)
from .generator import FileGenerator
from .manager import TemplateManager
from .naming import (
    ChainDescriptor,
    build_intermediate_filename,
    format_decorators,
    parse_template_chain,
    uses_extended_naming,
)
from .processor import FileProcessor, LocalFileSystem, Renderer
from .renderer import TemplateRenderer

__version__ = "0.1.0"

__all__ = [
    "BatchConfig",
    "ChainDescriptor",
    "ChainJob",
    "ChainResult",
    "Config",
    "FileGenerator",
    "FileProcessingError",
    "FileProcessor",
    "LocalFileSystem",
    "Renderer",
    "TemplateChainError",
    "TemplateError",
    "TemplateManager",
    "TemplateNotFoundError",
    "TemplateRenderer",
    "build_intermediate_filename",
    "format_decorators",
    "parse_template_chain",
    "process_many",
    "uses_extended_naming",
]
