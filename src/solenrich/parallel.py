"""
Bounded fan-out for independent async lookups.

Every operation in a batch starts immediately, is raced against its own
timeout, and settles into a by-name result map. A failing or slow lookup
degrades to its fallback and never blocks or aborts its siblings.
"""

import asyncio
import logging
from collections import Counter
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from solenrich.config import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ParallelTask(Generic[T]):
    """A named async operation with an optional fallback value."""

    name: str
    """Result key; unique within a batch."""

    fn: Callable[[], Awaitable[T]]
    """Zero-argument coroutine function performing the lookup."""

    fallback: T | None = None
    """Value reported when the operation fails or times out."""


async def _call(fn: Callable[[], Awaitable[T]]) -> T:
    return await fn()


def _consume_outcome(future: "asyncio.Future[Any]") -> None:
    """Retrieve the result of an abandoned operation."""
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        logger.debug(f"Abandoned operation finished with {type(error).__name__}: {error}")


async def _settle(
    task: ParallelTask[T],
    running: "asyncio.Future[T]",
    timeout: float,
    cancel_on_timeout: bool,
) -> T | None:
    try:
        return await asyncio.wait_for(asyncio.shield(running), timeout)
    except asyncio.TimeoutError as e:
        if running.done() and not running.cancelled() and running.exception() is None:
            # Completed on the same loop iteration the timer fired
            return running.result()
        if running.done():
            # The operation raised TimeoutError itself
            logger.warning(f"{task.name} failed: {type(e).__name__}: {e}")
        else:
            logger.warning(f"{task.name} timed out after {timeout}s")
            if cancel_on_timeout:
                running.cancel()
            running.add_done_callback(_consume_outcome)
        return task.fallback
    except asyncio.CancelledError:
        if not running.cancelled():
            raise
        logger.warning(f"{task.name} failed: operation was cancelled")
        return task.fallback
    except Exception as e:
        logger.warning(f"{task.name} failed: {type(e).__name__}: {e}")
        return task.fallback


async def parallel_fetch(
    tasks: Sequence[ParallelTask[T]],
    timeout: float | None = None,
    *,
    cancel_on_timeout: bool = False,
) -> dict[str, T | None]:
    """
    Run tasks in parallel with per-task timeouts.

    All operations are scheduled before any is awaited. Each one is given
    ``timeout`` seconds; a task that fails or times out reports its
    fallback (or None) and the error is logged, never raised. The batch
    returns once every task has settled, so its duration is bounded by the
    slowest individual timeout.

    Timed-out operations are not cancelled by default: they keep running
    unobserved. Pass ``cancel_on_timeout=True`` to cancel them instead.

    Args:
        tasks: Tasks with unique names
        timeout: Per-task timeout in seconds; zero or less times out every
            task not already finished (default: settings
            ``parallel_timeout_seconds``)
        cancel_on_timeout: Cancel operations that exceed the timeout

    Returns:
        Dict mapping every task name to its value or fallback, in
        submission order

    Raises:
        ValueError: If task names repeat
    """
    if timeout is None:
        timeout = get_settings().parallel_timeout_seconds

    duplicates = sorted(name for name, count in Counter(t.name for t in tasks).items() if count > 1)
    if duplicates:
        raise ValueError(f"Duplicate task names: {', '.join(duplicates)}")

    if not tasks:
        return {}

    running = [asyncio.ensure_future(_call(task.fn)) for task in tasks]

    try:
        outcomes = await asyncio.gather(
            *(
                _settle(task, future, timeout, cancel_on_timeout)
                for task, future in zip(tasks, running)
            )
        )
    except asyncio.CancelledError:
        for future in running:
            if not future.done():
                future.add_done_callback(_consume_outcome)
        raise

    return {task.name: outcome for task, outcome in zip(tasks, outcomes)}
