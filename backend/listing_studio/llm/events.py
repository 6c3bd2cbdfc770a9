"""Generation stream events and the sinks that receive them.

A generation produces, in order: one ``started`` event, any number of
``delta`` events, then exactly one terminal event (``finished`` or
``error``). Sinks are a notification side-channel: a send that fails is
logged and the pipeline carries on.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from typing import Annotated, Any, Literal, Protocol, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class _EventBase(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    @property
    def is_terminal(self) -> bool:
        return False

    def to_wire(self) -> dict[str, Any]:
        """``{"event": name, "data": {camelCase fields}}``"""
        return {
            "event": self.event,  # type: ignore[attr-defined]
            "data": self.model_dump(by_alias=True, exclude={"event"}),
        }

    def to_sse(self) -> str:
        return f"event: {self.event}\ndata: {json.dumps(self.to_wire())}\n\n"  # type: ignore[attr-defined]


class StartedEvent(_EventBase):
    event: Literal["started"] = "started"
    estimated_tokens: int = 0


class DeltaEvent(_EventBase):
    event: Literal["delta"] = "delta"
    text: str


class FinishedEvent(_EventBase):
    event: Literal["finished"] = "finished"
    full_text: str
    input_tokens: int
    output_tokens: int
    cost_cents: int

    @property
    def is_terminal(self) -> bool:
        return True


class ErrorEvent(_EventBase):
    event: Literal["error"] = "error"
    message: str

    @property
    def is_terminal(self) -> bool:
        return True


StreamEvent = Annotated[
    Union[StartedEvent, DeltaEvent, FinishedEvent, ErrorEvent],
    Field(discriminator="event"),
]


class SinkClosedError(Exception):
    """Raised by a sink that no longer accepts events."""


class EventSink(Protocol):
    def send(self, event: StreamEvent) -> None: ...


def notify(sink: EventSink, event: StreamEvent) -> None:
    """Best-effort delivery.

    A failed send never fails the generation: the sink only mirrors progress
    to a consumer, it does not control the pipeline. The failure is logged.
    """
    try:
        sink.send(event)
    except SinkClosedError:
        logger.debug("Dropped %s event: sink already closed", event.event)
    except Exception:
        logger.warning("Failed to deliver %s event to sink", event.event, exc_info=True)


class QueueSink:
    """asyncio.Queue backed sink, consumed with ``async for event in sink.events()``.

    The sink closes itself after the first terminal event, so a consumer sees
    at most one ``finished``/``error`` and nothing after it.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[StreamEvent] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, event: StreamEvent) -> None:
        if self._closed:
            raise SinkClosedError(f"cannot send {event.event!r} after a terminal event")
        self._queue.put_nowait(event)
        if event.is_terminal:
            self._closed = True

    async def events(self) -> AsyncIterator[StreamEvent]:
        while True:
            event = await self._queue.get()
            yield event
            if event.is_terminal:
                return
