from __future__ import annotations

from typing import TYPE_CHECKING

from listing_studio.llm.prompts import MAX_TOKENS_SOCIAL, build_social_prompt
from listing_studio.services.pipeline_service import run_two_stage_pipeline

if TYPE_CHECKING:
    from listing_studio.llm.base import CompletionClient
    from listing_studio.llm.events import EventSink
    from listing_studio.schemas.generation import AgentInfo, GenerationResult
    from listing_studio.schemas.property import PropertySnapshot


async def generate_social_posts(
    client: CompletionClient,
    snapshot: PropertySnapshot,
    platform: str,
    brand_voice_block: str | None,
    agent_info: AgentInfo,
    sink: EventSink,
) -> GenerationResult:
    """Analyze the property, then stream three posts for ``platform``."""
    return await run_two_stage_pipeline(
        client,
        snapshot,
        lambda analysis_json: build_social_prompt(
            snapshot, analysis_json, platform, brand_voice_block, agent_info
        ),
        MAX_TOKENS_SOCIAL,
        sink,
        kind=f"social_{platform}",
    )
