# File: font_scout/deadline.py
"""font_scout.deadline: Run an awaitable against a deadline and tag the outcome."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Generic, TypeVar, Union

__all__ = ["Completed", "TimedOut", "Outcome", "run_with_deadline"]

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Completed(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class TimedOut:
    timeout: float


Outcome = Union[Completed[T], TimedOut]


async def run_with_deadline(aw: Awaitable[T], timeout: float) -> Outcome[T]:
    """Await *aw* for at most *timeout* seconds.

    On expiry the task is cancelled and awaited, so its ``finally`` blocks
    and ``async with`` exits have run by the time :class:`TimedOut` is
    returned. Exceptions raised by *aw* propagate unchanged.
    """
    try:
        value = await asyncio.wait_for(aw, timeout=timeout)
    except asyncio.TimeoutError:
        return TimedOut(timeout)
    return Completed(value)
