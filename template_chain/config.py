"""Template chain configuration.

Typed configuration built on Pydantic v2.  A ``Config`` is created once by the
CLI (or the embedding host) and passed explicitly to whatever constructs the
renderer, the template manager, and the batch driver.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from .renderer import DEFAULT_TEMPLATE_DIR

_TRUE_VALUES = {"1", "true", "yes", "on"}


class BatchConfig(BaseModel):
    """Tuning knobs for processing many chained files at once."""

    max_parallel: int = Field(
        default=4, ge=1, description="Maximum chains applied concurrently"
    )
    chain_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Per-chain timeout in seconds (None waits indefinitely)",
    )


class Config(BaseModel):
    """Global template chain configuration."""

    templates_path: Path = Field(default=DEFAULT_TEMPLATE_DIR)
    encoding: str = Field(default="utf-8")
    verbose: bool = Field(default=False)
    batch: BatchConfig = Field(default_factory=BatchConfig)

    @property
    def partials_path(self) -> Path:
        """Directory holding chain (decorator) templates."""
        return self.templates_path / "partials"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            TEMPLATE_CHAIN_TEMPLATES_PATH, TEMPLATE_CHAIN_ENCODING,
            TEMPLATE_CHAIN_VERBOSE, TEMPLATE_CHAIN_MAX_PARALLEL,
            TEMPLATE_CHAIN_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("TEMPLATE_CHAIN_TEMPLATES_PATH"):
            kwargs["templates_path"] = Path(os.environ["TEMPLATE_CHAIN_TEMPLATES_PATH"])
        if os.environ.get("TEMPLATE_CHAIN_ENCODING"):
            kwargs["encoding"] = os.environ["TEMPLATE_CHAIN_ENCODING"]
        if os.environ.get("TEMPLATE_CHAIN_VERBOSE"):
            kwargs["verbose"] = os.environ["TEMPLATE_CHAIN_VERBOSE"].strip().lower() in _TRUE_VALUES

        batch_kwargs: dict[str, Any] = {}
        if os.environ.get("TEMPLATE_CHAIN_MAX_PARALLEL"):
            batch_kwargs["max_parallel"] = int(os.environ["TEMPLATE_CHAIN_MAX_PARALLEL"])
        if os.environ.get("TEMPLATE_CHAIN_TIMEOUT"):
            batch_kwargs["chain_timeout"] = float(os.environ["TEMPLATE_CHAIN_TIMEOUT"])

        return cls(batch=BatchConfig(**batch_kwargs), **kwargs)
