"""Brand voice extraction and storage.

Extraction is the single-stage variant of the generation pipeline: one
non-streaming call over the agent's sample listings, validated as JSON.
"""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING

from listing_studio.llm.cost import calculate_cost_cents
from listing_studio.llm.prompts import (
    MAX_TOKENS_BRAND_VOICE,
    build_voice_block,
    build_voice_extraction_prompt,
)
from listing_studio.models.brand_voice import BrandVoice
from listing_studio.schemas.generation import VoiceExtractionResult
from listing_studio.utils.exceptions import (
    BrandVoiceNotFoundError,
    InsufficientSamplesError,
    VoiceSchemaError,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from listing_studio.llm.base import CompletionClient

logger = logging.getLogger(__name__)

MIN_SAMPLE_LISTINGS = 2

# Opening ``` with an optional language tag such as ```json
_OPENING_FENCE_RE = re.compile(r"^```[A-Za-z0-9_+-]*")


def strip_code_fence(text: str) -> str:
    """Unwrap a Markdown code fence. The closing fence is optional."""
    text = text.strip()
    if text.startswith("```"):
        text = _OPENING_FENCE_RE.sub("", text, count=1)
        if text.endswith("```"):
            text = text[: -len("```")]
    return text.strip()


async def extract_voice(
    client: CompletionClient, sample_listings: list[str]
) -> VoiceExtractionResult:
    if len(sample_listings) < MIN_SAMPLE_LISTINGS:
        raise InsufficientSamplesError(
            f"At least {MIN_SAMPLE_LISTINGS} sample listings are required "
            "to extract a voice profile."
        )

    system, user = build_voice_extraction_prompt(sample_listings)
    response = await client.complete(system, user, MAX_TOKENS_BRAND_VOICE)

    style_json = strip_code_fence(response.text)
    try:
        json.loads(style_json)
    except json.JSONDecodeError as e:
        raise VoiceSchemaError(
            f"Failed to parse brand voice extraction as JSON: {e}"
        ) from e

    logger.info(
        "Extracted brand voice from %d samples (%d input / %d output tokens)",
        len(sample_listings),
        response.input_tokens,
        response.output_tokens,
    )
    return VoiceExtractionResult(
        style_json=style_json,
        input_tokens=response.input_tokens,
        output_tokens=response.output_tokens,
        cost_cents=calculate_cost_cents(response.input_tokens, response.output_tokens),
    )


async def create_brand_voice(
    db: Session,
    client: CompletionClient,
    name: str,
    description: str | None,
    sample_listings: list[str],
) -> BrandVoice:
    extraction = await extract_voice(client, sample_listings)
    voice = BrandVoice(
        name=name,
        description=description,
        extracted_style=extraction.style_json,
        source_listings=json.dumps(sample_listings),
        sample_count=len(sample_listings),
    )
    db.add(voice)
    db.commit()
    db.refresh(voice)
    return voice


def get_brand_voice(db: Session, voice_id: int) -> BrandVoice:
    voice = db.query(BrandVoice).filter(BrandVoice.id == voice_id).first()
    if not voice:
        raise BrandVoiceNotFoundError(f"Brand voice {voice_id} not found")
    return voice


def get_voice_block(db: Session, voice_id: int | None) -> str | None:
    """Prompt block for an optional stored voice; None when no voice is selected."""
    if voice_id is None:
        return None
    voice = get_brand_voice(db, voice_id)
    block = build_voice_block(voice.extracted_style)
    if block is None:
        logger.warning("Brand voice %d has an unreadable style; generating without it", voice_id)
    return block


def list_brand_voices(db: Session) -> list[BrandVoice]:
    return db.query(BrandVoice).order_by(BrandVoice.created_at.desc()).all()


def delete_brand_voice(db: Session, voice_id: int) -> None:
    voice = get_brand_voice(db, voice_id)
    db.delete(voice)
    db.commit()
