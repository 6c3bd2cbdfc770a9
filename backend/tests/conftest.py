"""Pytest configuration and fixtures for tests."""

from __future__ import annotations

import json

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from listing_studio.database import Base
from listing_studio.llm.base import CompletionClient
from listing_studio.llm.events import DeltaEvent, StartedEvent, notify
from listing_studio.schemas.generation import AgentInfo, CompletionResult
from listing_studio.schemas.property import PropertySnapshot

VALID_ANALYSIS = json.dumps(
    {
        "selling_points": [
            "Chef's kitchen with Viking appliances",
            "Pool with spa",
            "Walking distance to BART",
        ],
        "target_buyer": "Young professional couple seeking urban living with outdoor space",
        "neighborhood_appeal": "Mission Bay offers walkability and proximity to tech employers",
        "comparable_positioning": "Priced below comparable renovated homes in the area",
        "emotional_hooks": ["Entertain in style", "Your urban oasis", "Steps from everything"],
    }
)


@pytest.fixture(scope="session")
def engine():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
    )
    # Import all models so they're registered
    import listing_studio.models  # noqa: F401

    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def db(engine) -> Session:
    """Provide a fresh database session for each test."""
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def snapshot() -> PropertySnapshot:
    return PropertySnapshot(
        address="123 Oak Street",
        city="San Francisco",
        state="CA",
        zip="94105",
        beds=3,
        baths=2.5,
        sqft=1800,
        price=95_000_000,
        property_type="single_family",
        year_built=2015,
        lot_size="0.25 acres",
        parking="2-car garage",
        key_features=["hardwood floors", "chef's kitchen", "pool"],
        neighborhood="Mission Bay",
        neighborhood_highlights=["Walk Score 95"],
        school_district="SFUSD",
        nearby_amenities=["Whole Foods 0.3mi"],
    )


@pytest.fixture
def agent_info() -> AgentInfo:
    return AgentInfo(
        name="Jane Smith",
        phone="555-1234",
        email="jane@example.com",
        brokerage="RE/MAX",
    )


# ── Helpers ────────────────────────────────────────────────────────────────


class RecordingSink:
    """Sink that keeps every event it is sent."""

    def __init__(self) -> None:
        self.events: list = []

    def send(self, event) -> None:
        self.events.append(event)

    @property
    def kinds(self) -> list[str]:
        return [e.event for e in self.events]


class FakeCompletionClient(CompletionClient):
    """In-memory client: canned analysis for ``complete``, canned deltas for ``stream``."""

    def __init__(
        self,
        analysis_text: str = VALID_ANALYSIS,
        deltas: tuple[str, ...] = ("Sunlit ", "three-bedroom ", "home."),
        complete_usage: tuple[int, int] = (120, 80),
        stream_usage: tuple[int, int] = (400, 250),
        stream_error: Exception | None = None,
    ) -> None:
        self.analysis_text = analysis_text
        self.deltas = deltas
        self.complete_usage = complete_usage
        self.stream_usage = stream_usage
        self.stream_error = stream_error
        self.complete_calls: list[tuple[str, str, int]] = []
        self.stream_calls: list[tuple[str, str, int]] = []

    @property
    def model_name(self) -> str:
        return "fake-model"

    async def complete(self, system_prompt, user_prompt, max_tokens):
        self.complete_calls.append((system_prompt, user_prompt, max_tokens))
        return CompletionResult(self.analysis_text, *self.complete_usage)

    async def stream(self, system_prompt, user_prompt, max_tokens, sink):
        self.stream_calls.append((system_prompt, user_prompt, max_tokens))
        notify(sink, StartedEvent(estimated_tokens=self.stream_usage[0]))
        for text in self.deltas:
            notify(sink, DeltaEvent(text=text))
        if self.stream_error is not None:
            raise self.stream_error
        return CompletionResult("".join(self.deltas), *self.stream_usage)


def sse_frame(event_type: str, payload: dict | None = None) -> str:
    frame = f"event: {event_type}\n"
    if payload is not None:
        frame += f"data: {json.dumps(payload)}\n"
    return frame + "\n"


def message_start(input_tokens: int = 25) -> str:
    return sse_frame(
        "message_start",
        {
            "type": "message_start",
            "message": {
                "id": "msg_123",
                "type": "message",
                "role": "assistant",
                "content": [],
                "model": "claude-sonnet-4-5-20250929",
                "usage": {"input_tokens": input_tokens, "output_tokens": 1},
            },
        },
    )


def text_delta(text: str) -> str:
    return sse_frame(
        "content_block_delta",
        {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": text}},
    )


def message_delta(output_tokens: int) -> str:
    return sse_frame(
        "message_delta",
        {
            "type": "message_delta",
            "delta": {"stop_reason": "end_turn", "stop_sequence": None},
            "usage": {"output_tokens": output_tokens},
        },
    )
