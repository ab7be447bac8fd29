"""Dispatch strategies across workspace handles.

Three ways to send one logical operation to N independently authenticated
workspaces:

- `try_each` (fallback): sequential, first success wins, later handles are
  never touched. For operations keyed by a globally unique resource ID.
- `from_all` (fan-out-merge): concurrent, waits for every handle, keeps
  the successes tagged by workspace and drops the failures. For
  enumerations with no ID to key on.
- `on_primary` (single-target): the first handle only. For operations
  with no ownership test, such as creating a project.

Example:
    >>> project = await try_each(handles, lambda c: ops.get_project(c, "prj_123"))
    >>> teams = await from_all(handles, ops.list_teams)
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeVar

from railmux.client import BackendConnection
from railmux.foundation.errors import AggregateFailure, RailwayError, TransportError, classify_exception
from railmux.runtime.concurrency import gather_settled

logger = logging.getLogger("railmux.routing")

T = TypeVar("T")

Operation = Callable[[BackendConnection], Awaitable[T]]


class Strategy(StrEnum):
    """Dispatch strategy assigned to each router operation."""
    FALLBACK = "fallback"
    FAN_OUT = "fan_out"
    SINGLE_TARGET = "single_target"


@dataclass(slots=True, frozen=True)
class WorkspaceHandle:
    """Binding of a workspace label to its live backend connection."""

    label: str
    connection: BackendConnection


@dataclass(slots=True, frozen=True)
class TaggedResult(Generic[T]):
    """One workspace's contribution to a fan-out result."""

    workspace: str
    data: T

    def to_dict(self) -> dict[str, Any]:
        return {"workspace": self.workspace, "data": self.data}


def as_railway_error(exc: BaseException) -> RailwayError:
    """Classify a per-handle failure. Foreign exceptions become TransportError."""
    if isinstance(exc, RailwayError):
        return exc
    return TransportError(str(exc) or type(exc).__name__, code=classify_exception(exc))


async def try_each(handles: Sequence[WorkspaceHandle], op: Operation[T], *, name: str = "operation") -> T:
    """Try `op` against each handle in order until one succeeds.

    Raises:
        AggregateFailure: no handles configured, or every handle failed. The
            message is the last handle's error; `errors` keeps all of them.
    """
    if not handles:
        raise AggregateFailure.no_workspaces()

    errors: list[RailwayError] = []
    for handle in handles:
        try:
            result = await op(handle.connection)
        except Exception as e:
            err = as_railway_error(e)
            errors.append(err)
            logger.debug(f"[{name}] workspace {handle.label!r} failed: {err}")
            continue
        logger.debug(f"[{name}] served by workspace {handle.label!r} after {len(errors)} miss(es)")
        return result

    logger.info(f"[{name}] all {len(handles)} workspaces failed")
    raise AggregateFailure.exhausted(errors) from errors[-1]


async def from_all(handles: Sequence[WorkspaceHandle], op: Operation[T], *, name: str = "operation") -> list[TaggedResult[T]]:
    """Run `op` against every handle concurrently and merge the successes.

    Waits for all handles to settle. Results keep handle order; failed
    handles are left out (and logged). An empty list is a normal result,
    including when every handle failed.
    """
    async def call(handle: WorkspaceHandle) -> T:
        return await op(handle.connection)

    settled = await gather_settled(*(call(h) for h in handles))

    merged: list[TaggedResult[T]] = []
    for handle, outcome in zip(handles, settled):
        if outcome.is_fulfilled:
            merged.append(TaggedResult(workspace=handle.label, data=outcome.value))  # type: ignore[arg-type]
        else:
            err = as_railway_error(outcome.error)  # type: ignore[arg-type]
            logger.warning(f"[{name}] dropping workspace {handle.label!r}: {err}")
    return merged


async def on_primary(handles: Sequence[WorkspaceHandle], op: Operation[T], *, name: str = "operation") -> T:
    """Run `op` against the first handle only; its error propagates unchanged."""
    if not handles:
        raise AggregateFailure.no_workspaces()
    primary = handles[0]
    logger.debug(f"[{name}] targeting primary workspace {primary.label!r}")
    try:
        return await op(primary.connection)
    except RailwayError:
        raise
    except Exception as e:
        raise as_railway_error(e) from e
