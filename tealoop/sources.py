"""Ready-made event sources.

All of them follow the EventSource contract: called once with `dispatch` when
the loop is built, then feed events in on their own schedule.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable, Iterable
from typing import Any, TypeVar

from tealoop.contracts import Dispatch, EventSource

logger = logging.getLogger(__name__)

EventT = TypeVar("EventT")

# Strong references to running pump tasks; the event loop only keeps weak ones.
_PUMPS: set[asyncio.Task[None]] = set()


def from_iterable(events: Iterable[EventT]) -> EventSource[EventT]:
    """Dispatch a fixed sequence of events synchronously, in order, when wired."""

    snapshot = tuple(events)

    def source(dispatch: Dispatch[EventT]) -> None:
        for event in snapshot:
            dispatch(event)

    return source


def after(delay: float, event: EventT) -> EventSource[EventT]:
    """Dispatch `event` once, `delay` seconds after wiring, on the running asyncio loop."""

    def source(dispatch: Dispatch[EventT]) -> None:
        asyncio.get_running_loop().call_later(delay, dispatch, event)

    return source


async def _pump(events: AsyncIterable[EventT], dispatch: Dispatch[EventT]) -> None:
    async for event in events:
        dispatch(event)


def _pump_done(task: asyncio.Task[Any]) -> None:
    _PUMPS.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("event source task %s failed", task.get_name(), exc_info=exc)


def from_async_iterable(events: AsyncIterable[EventT], *, name: str | None = None) -> EventSource[EventT]:
    """Dispatch every item of an async iterable from a task on the running asyncio loop."""

    def source(dispatch: Dispatch[EventT]) -> None:
        task = asyncio.get_running_loop().create_task(_pump(events, dispatch), name=name)
        _PUMPS.add(task)
        task.add_done_callback(_pump_done)

    return source
