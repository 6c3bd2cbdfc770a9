"""Tests for stream events, notify and QueueSink."""

import json
import logging

import pytest
from pydantic import TypeAdapter

from listing_studio.llm.events import (
    DeltaEvent,
    ErrorEvent,
    FinishedEvent,
    QueueSink,
    SinkClosedError,
    StartedEvent,
    StreamEvent,
    notify,
)


class TestWireFormat:
    def test_finished_uses_camel_case(self):
        event = FinishedEvent(full_text="Hi", input_tokens=10, output_tokens=5, cost_cents=0)
        assert event.to_wire() == {
            "event": "finished",
            "data": {"fullText": "Hi", "inputTokens": 10, "outputTokens": 5, "costCents": 0},
        }

    def test_started_wire(self):
        assert StartedEvent(estimated_tokens=42).to_wire() == {
            "event": "started",
            "data": {"estimatedTokens": 42},
        }

    def test_to_sse_frame(self):
        frame = DeltaEvent(text="Sunlit").to_sse()
        assert frame.startswith("event: delta\ndata: ")
        assert frame.endswith("\n\n")
        payload = json.loads(frame.split("data: ", 1)[1])
        assert payload == {"event": "delta", "data": {"text": "Sunlit"}}

    def test_discriminated_union(self):
        adapter = TypeAdapter(StreamEvent)
        event = adapter.validate_python({"event": "error", "message": "boom"})
        assert event == ErrorEvent(message="boom")

    def test_terminal_flags(self):
        assert not StartedEvent().is_terminal
        assert not DeltaEvent(text="x").is_terminal
        assert ErrorEvent(message="x").is_terminal
        assert FinishedEvent(full_text="", input_tokens=0, output_tokens=0, cost_cents=0).is_terminal


class TestNotify:
    def test_delivers(self):
        sink = QueueSink()
        notify(sink, StartedEvent())
        assert not sink.closed

    def test_closed_sink_is_ignored(self, caplog):
        sink = QueueSink()
        notify(sink, ErrorEvent(message="first"))
        with caplog.at_level(logging.DEBUG, logger="listing_studio.llm.events"):
            notify(sink, ErrorEvent(message="second"))
        assert "sink already closed" in caplog.text

    def test_failing_sink_is_logged_not_raised(self, caplog):
        class BrokenSink:
            def send(self, event):
                raise ConnectionResetError("client went away")

        with caplog.at_level(logging.WARNING, logger="listing_studio.llm.events"):
            notify(BrokenSink(), DeltaEvent(text="x"))
        assert "Failed to deliver delta event" in caplog.text


class TestQueueSink:
    def test_rejects_events_after_terminal(self):
        sink = QueueSink()
        sink.send(FinishedEvent(full_text="", input_tokens=0, output_tokens=0, cost_cents=0))
        assert sink.closed
        with pytest.raises(SinkClosedError):
            sink.send(DeltaEvent(text="late"))

    @pytest.mark.asyncio
    async def test_events_stop_at_terminal(self):
        sink = QueueSink()
        sink.send(StartedEvent(estimated_tokens=3))
        sink.send(DeltaEvent(text="a"))
        sink.send(ErrorEvent(message="boom"))

        received = [event async for event in sink.events()]

        assert [e.event for e in received] == ["started", "delta", "error"]
