from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

from listing_studio.llm.prompts import build_listing_prompt, max_tokens_for_listing
from listing_studio.services.pipeline_service import run_two_stage_pipeline

if TYPE_CHECKING:
    from listing_studio.llm.base import CompletionClient
    from listing_studio.llm.events import EventSink
    from listing_studio.schemas.generation import GenerationRequest, GenerationResult


async def generate_listing(
    client: CompletionClient, request: GenerationRequest, sink: EventSink
) -> GenerationResult:
    """Analyze the property, then stream a listing description."""
    return await run_two_stage_pipeline(
        client,
        request.snapshot,
        partial(_listing_prompt_from_analysis, request),
        max_tokens_for_listing(request.options.length),
        sink,
        kind="listing",
    )


def _listing_prompt_from_analysis(
    request: GenerationRequest, analysis_json: str
) -> tuple[str, str]:
    return build_listing_prompt(
        request.snapshot,
        analysis_json,
        request.options,
        request.brand_voice_block,
        request.agent_info,
    )
