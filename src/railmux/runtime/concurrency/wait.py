"""Join primitive for fan-out dispatch.

`gather_settled` starts every awaitable at once and returns only when all
of them have finished, one `Settled` per input in input order. Failures
are captured, not raised; the caller decides what to keep.

Example:
    >>> outcomes = await gather_settled(client_a.execute(q), client_b.execute(q))
    >>> data = [o.value for o in outcomes if o.is_fulfilled]
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class SettledStatus(StrEnum):
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


@dataclass(slots=True, frozen=True)
class Settled(Generic[T]):
    """Outcome of one joined awaitable: a value or the exception it raised."""

    value: T | None = None
    error: BaseException | None = None

    @classmethod
    def of(cls, outcome: T | BaseException) -> Settled[T]:
        if isinstance(outcome, BaseException):
            return cls(error=outcome)
        return cls(value=outcome)

    @property
    def status(self) -> SettledStatus:
        return SettledStatus.REJECTED if self.error is not None else SettledStatus.FULFILLED

    @property
    def is_fulfilled(self) -> bool:
        return self.error is None

    @property
    def is_rejected(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


async def gather_settled(*aws: Awaitable[T]) -> list[Settled[T]]:
    """Run all awaitables concurrently and wait for every one to settle.

    Cancelling the caller cancels the pending awaitables and propagates.
    """
    if not aws:
        return []
    outcomes = await asyncio.gather(*aws, return_exceptions=True)
    return [Settled.of(o) for o in outcomes]
