"""Streaming generation endpoints.

Each request runs its pipeline as an independent asyncio task that writes
events into a ``QueueSink``; the response drains the sink as
``text/event-stream`` until the terminal event. Once the pipeline returns, a
successful result is saved as generated content and every outcome, failed or
not, is recorded in the generation analytics.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from functools import partial

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session, sessionmaker

from listing_studio.database import get_db, get_session_factory
from listing_studio.llm.base import CompletionClient
from listing_studio.llm.events import ErrorEvent, QueueSink, notify
from listing_studio.routers.dependencies import get_agent_info, get_client
from listing_studio.schemas.generation import (
    AgentInfo,
    GenerateEmailRequest,
    GenerateListingRequest,
    GenerateSocialRequest,
    GenerationOptions,
    GenerationRequest,
    GenerationResult,
)
from listing_studio.services import (
    analytics_service,
    brand_voice_service,
    content_service,
    email_service,
    listing_service,
    property_service,
    social_service,
)
from listing_studio.utils.exceptions import ListingStudioError, NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/generate")

# Strong references so running generations are not garbage collected
_running: set[asyncio.Task] = set()

# (result or None, latency in ms, error message or None)
OutcomeRecorder = Callable[[GenerationResult | None, int, str | None], None]


def _record_outcome(
    session_factory: sessionmaker,
    property_id: int,
    generation_type: str,
    model_used: str,
    fields: dict,
    result: GenerationResult | None,
    latency_ms: int,
    error: str | None,
) -> None:
    with session_factory() as db:
        if result is not None:
            content_service.save_result(db, property_id, result, generation_type, **fields)
        analytics_service.record_generation(
            db,
            property_id,
            generation_type,
            model_used,
            input_tokens=result.input_tokens if result else 0,
            output_tokens=result.output_tokens if result else 0,
            cost_cents=result.cost_cents if result else 0,
            latency_ms=latency_ms,
            success=result is not None,
            error_message=error,
        )


def _recorder(
    session_factory: sessionmaker,
    client: CompletionClient,
    property_id: int,
    generation_type: str,
    **fields,
) -> OutcomeRecorder:
    return partial(
        _record_outcome,
        session_factory,
        property_id,
        generation_type,
        client.model_name,
        fields,
    )


async def _run_generation(
    job: Awaitable[GenerationResult], sink: QueueSink, record: OutcomeRecorder
) -> None:
    started = time.monotonic()
    result: GenerationResult | None = None
    error: str | None = None
    try:
        result = await job
    except ListingStudioError as e:
        logger.error("Generation failed: %s", e)
        error = str(e)
        # No-op when the client already delivered an error event
        notify(sink, ErrorEvent(message=error))
    except Exception:
        logger.exception("Unexpected error during generation")
        error = "Unexpected error during generation"
        notify(sink, ErrorEvent(message=error))
    latency_ms = int((time.monotonic() - started) * 1000)

    try:
        record(result, latency_ms, error)
    except Exception:
        logger.exception("Failed to record generation outcome")


async def _drain(sink: QueueSink, task: asyncio.Task) -> AsyncIterator[str]:
    async for event in sink.events():
        yield event.to_sse()
    await task


def _stream_response(
    job: Awaitable[GenerationResult], sink: QueueSink, record: OutcomeRecorder
) -> StreamingResponse:
    task = asyncio.create_task(_run_generation(job, sink, record))
    _running.add(task)
    task.add_done_callback(_running.discard)
    return StreamingResponse(
        _drain(sink, task),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )


def _load_inputs(db: Session, property_id: int, brand_voice_id: int | None):
    try:
        snapshot = property_service.get_snapshot(db, property_id)
        voice_block = brand_voice_service.get_voice_block(db, brand_voice_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return snapshot, voice_block


@router.post("/listing")
async def generate_listing(
    body: GenerateListingRequest,
    db: Session = Depends(get_db),
    client: CompletionClient = Depends(get_client),
    agent_info: AgentInfo = Depends(get_agent_info),
    session_factory: sessionmaker = Depends(get_session_factory),
) -> StreamingResponse:
    snapshot, voice_block = _load_inputs(db, body.property_id, body.brand_voice_id)
    request = GenerationRequest(
        snapshot=snapshot,
        options=GenerationOptions(
            style=body.style,
            tone=body.tone,
            length=body.length,
            seo_keywords=body.seo_keywords,
        ),
        brand_voice_block=voice_block,
        agent_info=agent_info,
    )
    sink = QueueSink()
    record = _recorder(
        session_factory,
        client,
        body.property_id,
        "listing",
        style=body.style,
        tone=body.tone,
        length=body.length,
        seo_keywords=body.seo_keywords,
        brand_voice_id=body.brand_voice_id,
    )
    return _stream_response(listing_service.generate_listing(client, request, sink), sink, record)


@router.post("/social")
async def generate_social(
    body: GenerateSocialRequest,
    db: Session = Depends(get_db),
    client: CompletionClient = Depends(get_client),
    agent_info: AgentInfo = Depends(get_agent_info),
    session_factory: sessionmaker = Depends(get_session_factory),
) -> StreamingResponse:
    snapshot, voice_block = _load_inputs(db, body.property_id, body.brand_voice_id)
    sink = QueueSink()
    job = social_service.generate_social_posts(
        client, snapshot, body.platform, voice_block, agent_info, sink
    )
    record = _recorder(
        session_factory,
        client,
        body.property_id,
        f"social_{body.platform}",
        brand_voice_id=body.brand_voice_id,
    )
    return _stream_response(job, sink, record)


@router.post("/email")
async def generate_email(
    body: GenerateEmailRequest,
    db: Session = Depends(get_db),
    client: CompletionClient = Depends(get_client),
    agent_info: AgentInfo = Depends(get_agent_info),
    session_factory: sessionmaker = Depends(get_session_factory),
) -> StreamingResponse:
    snapshot, voice_block = _load_inputs(db, body.property_id, body.brand_voice_id)
    sink = QueueSink()
    job = email_service.generate_email(
        client, snapshot, body.template_type, voice_block, agent_info, sink
    )
    record = _recorder(
        session_factory,
        client,
        body.property_id,
        f"email_{body.template_type}",
        brand_voice_id=body.brand_voice_id,
    )
    return _stream_response(job, sink, record)
