"""
Bounded-concurrency executor for async tasks.

Runs up to ``concurrency`` tasks at a time. Workers share a cursor over the
task list; each worker claims the next unclaimed index, awaits that task and
records its outcome at the same index, until the list is exhausted.

Outcomes come back in input order as :class:`Fulfilled` or :class:`Rejected`
values. One task failing never cancels or blocks its siblings.

Usage::

    from hatchcast.services.pool import run_bounded

    outcomes = await run_bounded([lambda: fetch(a), lambda: fetch(b)], concurrency=4)
    values = [o.value for o in outcomes if o.ok]
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Fulfilled(Generic[T]):
    """A task that completed with a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """A task that raised."""

    reason: BaseException

    @property
    def ok(self) -> bool:
        return False


Outcome = Fulfilled[T] | Rejected


async def run_bounded(
    tasks: Sequence[Callable[[], Awaitable[T]]],
    concurrency: int,
) -> list[Outcome[T]]:
    """
    Run zero-argument async callables with at most ``concurrency`` in flight.

    Args:
        tasks: Task factories, called once each, in order of claiming.
        concurrency: Maximum number of tasks awaited at the same time (>= 1).

    Returns:
        One outcome per task, aligned with ``tasks`` regardless of completion order.

    Raises:
        ValueError: If ``concurrency`` is less than 1.
    """
    if concurrency < 1:
        msg = f"concurrency must be >= 1, got {concurrency}"
        raise ValueError(msg)

    if not tasks:
        return []

    results: list[Outcome[T] | None] = [None] * len(tasks)
    next_index = 0

    async def worker() -> None:
        nonlocal next_index
        while next_index < len(tasks):
            # Claim and advance with no await in between
            i = next_index
            next_index += 1
            try:
                value = await tasks[i]()
            except Exception as exc:  # noqa: BLE001
                results[i] = Rejected(exc)
            else:
                results[i] = Fulfilled(value)

    await asyncio.gather(*(worker() for _ in range(min(concurrency, len(tasks)))))
    return [r for r in results if r is not None]


def partition(outcomes: Sequence[Outcome[T]]) -> tuple[list[T], list[tuple[int, BaseException]]]:
    """Split outcomes into fulfilled values and ``(index, reason)`` failures."""
    values: list[T] = []
    failures: list[tuple[int, BaseException]] = []
    for i, outcome in enumerate(outcomes):
        if isinstance(outcome, Fulfilled):
            values.append(outcome.value)
        else:
            failures.append((i, outcome.reason))
    return values, failures
