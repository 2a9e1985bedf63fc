"""Concurrent processing of many chained files.

A single chain is strictly sequential, but chains for different files share
nothing, so they can run side by side.  Each chain runs in a worker thread;
an ``asyncio.Semaphore`` held until each thread finishes bounds how many
run at once.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from .processor import FileProcessor


@dataclass
class ChainJob:
    """One file to process, with its own template context."""

    file_path: str
    context: dict[str, Any] = field(default_factory=dict)


@dataclass
class ChainResult:
    """Outcome of processing one ``ChainJob``."""

    file_path: str
    success: bool
    output: str | None = None
    error: str | None = None
    duration_seconds: float = 0.0

    def summary(self) -> str:
        """Return a one-line, Rich-markup summary of the result."""
        if self.success:
            return f"[green]OK[/green] {self.file_path} -> {self.output} ({self.duration_seconds:.2f}s)"
        return f"[red]FAILED[/red] {self.file_path}: {self.error}"


async def process_many(
    processor: FileProcessor,
    jobs: Sequence[ChainJob],
    *,
    max_parallel: int = 4,
    timeout: float | None = None,
) -> list[ChainResult]:
    """Process every job, at most *max_parallel* at a time.

    A failing or timed-out job yields a failed ``ChainResult``; the rest of
    the batch still runs.  A timed-out worker thread cannot be interrupted:
    it keeps its slot until the render finishes, so no more than
    *max_parallel* chains ever run at once.  The function returns without
    waiting for such threads; they may still finish writing their files.

    Returns:
        One result per job, in the order of *jobs*.
    """
    if max_parallel < 1:
        raise ValueError("max_parallel must be at least 1")

    loop = asyncio.get_running_loop()
    semaphore = asyncio.Semaphore(max_parallel)
    executor = ThreadPoolExecutor(
        max_workers=max_parallel, thread_name_prefix="template-chain"
    )
    in_flight: list[asyncio.Future[str]] = []

    async def _run(job: ChainJob) -> ChainResult:
        await semaphore.acquire()
        future = loop.run_in_executor(
            executor, processor.process_extended_naming, job.file_path, job.context
        )
        # The slot is freed when the thread is done, not when we stop waiting.
        future.add_done_callback(lambda _: semaphore.release())
        in_flight.append(future)
        return await _process_one(job, future, timeout)

    try:
        return list(await asyncio.gather(*(_run(job) for job in jobs)))
    finally:
        for future in in_flight:
            if not future.done():
                future.cancel()
        executor.shutdown(wait=False, cancel_futures=True)


async def _process_one(
    job: ChainJob,
    future: asyncio.Future[str],
    timeout: float | None,
) -> ChainResult:
    start = time.monotonic()
    try:
        output = await asyncio.wait_for(asyncio.shield(future), timeout=timeout)
    except asyncio.TimeoutError:
        return ChainResult(
            file_path=job.file_path,
            success=False,
            error=f"Timed out after {timeout}s",
            duration_seconds=time.monotonic() - start,
        )
    except Exception as exc:
        return ChainResult(
            file_path=job.file_path,
            success=False,
            error=str(exc),
            duration_seconds=time.monotonic() - start,
        )

    return ChainResult(
        file_path=job.file_path,
        success=True,
        output=output,
        duration_seconds=time.monotonic() - start,
    )
