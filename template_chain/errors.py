"""Exception hierarchy for template chain processing.

Parsing never raises; everything below is raised by the renderer, the
template manager, or the chain executor.
"""

from __future__ import annotations


class TemplateChainError(Exception):
    """Base class for all errors raised by this package."""


class TemplateError(TemplateChainError):
    """Raised when a template cannot be located, read, or applied."""


class TemplateNotFoundError(TemplateError):
    """Raised when a template identifier does not resolve to a file."""

    def __init__(self, template_id: str, searched: list[str] | None = None) -> None:
        self.template_id = template_id
        self.searched = list(searched or [])
        super().__init__(f"Template not found: {template_id}")


class FileProcessingError(TemplateChainError):
    """Raised when a stage of a template chain fails.

    The original exception is always attached as ``__cause__``.

    Attributes:
        stage: Zero-based index of the failing stage.
        template_name: Template applied at that stage.
        path: Intermediate file the stage was going to write.
    """

    def __init__(
        self,
        message: str,
        *,
        stage: int | None = None,
        template_name: str | None = None,
        path: str | None = None,
    ) -> None:
        self.stage = stage
        self.template_name = template_name
        self.path = path
        super().__init__(message)
