from __future__ import annotations

from typing import TYPE_CHECKING

from listing_studio.llm.prompts import MAX_TOKENS_EMAIL, build_email_prompt
from listing_studio.services.pipeline_service import run_two_stage_pipeline

if TYPE_CHECKING:
    from listing_studio.llm.base import CompletionClient
    from listing_studio.llm.events import EventSink
    from listing_studio.schemas.generation import AgentInfo, GenerationResult
    from listing_studio.schemas.property import PropertySnapshot


async def generate_email(
    client: CompletionClient,
    snapshot: PropertySnapshot,
    template_type: str,
    brand_voice_block: str | None,
    agent_info: AgentInfo,
    sink: EventSink,
) -> GenerationResult:
    """Analyze the property, then stream a ``template_type`` marketing email."""
    return await run_two_stage_pipeline(
        client,
        snapshot,
        lambda analysis_json: build_email_prompt(
            snapshot, analysis_json, template_type, brand_voice_block, agent_info
        ),
        MAX_TOKENS_EMAIL,
        sink,
        kind=f"email_{template_type}",
    )
