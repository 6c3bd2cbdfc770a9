"""Two-stage generation pipeline shared by every content kind.

Stage 1 asks for a structured property analysis (non-streaming) and
validates it. Stage 2 streams the marketing copy, conditioned on that
analysis. Token usage of both stages is summed and priced once.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import ValidationError

from listing_studio.llm.cost import calculate_cost_cents
from listing_studio.llm.events import FinishedEvent, notify
from listing_studio.llm.prompts import MAX_TOKENS_ANALYSIS, build_analysis_prompt
from listing_studio.schemas.generation import GenerationResult, PropertyAnalysis
from listing_studio.utils.exceptions import AnalysisSchemaError

if TYPE_CHECKING:
    from listing_studio.llm.base import CompletionClient
    from listing_studio.llm.events import EventSink
    from listing_studio.schemas.generation import CompletionResult
    from listing_studio.schemas.property import PropertySnapshot

logger = logging.getLogger(__name__)

# Builds the stage-2 (system, user) prompt from the validated analysis text
StageTwoPromptBuilder = Callable[[str], tuple[str, str]]


class PipelineStage(StrEnum):
    ANALYZING = "analyzing"
    GENERATING = "generating"
    DONE = "done"
    FAILED = "failed"


def validate_analysis(analysis_text: str) -> PropertyAnalysis:
    try:
        return PropertyAnalysis.model_validate_json(analysis_text)
    except ValidationError as e:
        raise AnalysisSchemaError(
            f"Failed to parse property analysis from the model: {e}"
        ) from e


async def run_property_analysis(
    client: CompletionClient, snapshot: PropertySnapshot
) -> CompletionResult:
    """Stage 1. Returns the analysis text only once it matches the schema."""
    system, user = build_analysis_prompt(snapshot)
    result = await client.complete(system, user, MAX_TOKENS_ANALYSIS)
    validate_analysis(result.text)
    return result


async def run_two_stage_pipeline(
    client: CompletionClient,
    snapshot: PropertySnapshot,
    build_stage_two: StageTwoPromptBuilder,
    max_tokens: int,
    sink: EventSink,
    kind: str,
) -> GenerationResult:
    stage = PipelineStage.ANALYZING
    logger.info("[%s] %s: %s", kind, stage, snapshot.address)
    try:
        analysis = await run_property_analysis(client, snapshot)

        stage = PipelineStage.GENERATING
        logger.info("[%s] %s (max_tokens=%d)", kind, stage, max_tokens)
        system, user = build_stage_two(analysis.text)
        generated = await client.stream(system, user, max_tokens, sink)
    except Exception:
        logger.warning("[%s] %s during %s", kind, PipelineStage.FAILED, stage)
        raise

    input_tokens = analysis.input_tokens + generated.input_tokens
    output_tokens = analysis.output_tokens + generated.output_tokens
    cost_cents = calculate_cost_cents(input_tokens, output_tokens)

    notify(
        sink,
        FinishedEvent(
            full_text=generated.text,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cost_cents=cost_cents,
        ),
    )
    logger.info(
        "[%s] %s: input_tokens=%d output_tokens=%d cost_cents=%d",
        kind,
        PipelineStage.DONE,
        input_tokens,
        output_tokens,
        cost_cents,
    )
    return GenerationResult(
        full_text=generated.text,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        cost_cents=cost_cents,
        analysis_json=analysis.text,
    )
