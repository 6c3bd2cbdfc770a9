from __future__ import annotations

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict

from listing_studio.schemas.property import PropertySnapshot


class AgentInfo(BaseModel):
    name: str = ""
    phone: str = ""
    email: str = ""
    brokerage: str = ""


class GenerationOptions(BaseModel):
    style: str = ""
    tone: str = ""
    length: str = "medium"
    seo_keywords: list[str] = []


class GenerationRequest(BaseModel):
    """Everything one listing generation needs; frozen for the duration of the call."""

    model_config = ConfigDict(frozen=True)

    snapshot: PropertySnapshot
    options: GenerationOptions
    brand_voice_block: str | None = None
    agent_info: AgentInfo = AgentInfo()


class CompletionResult(NamedTuple):
    text: str
    input_tokens: int
    output_tokens: int


class PropertyAnalysis(BaseModel):
    """Stage-1 analysis. Parsing the model output against this is the schema check."""

    selling_points: list[str]
    target_buyer: str
    neighborhood_appeal: str
    comparable_positioning: str
    emotional_hooks: list[str]


class GenerationResult(BaseModel):
    full_text: str
    input_tokens: int
    output_tokens: int
    cost_cents: int
    # Raw stage-1 text, kept for audit and export
    analysis_json: str


class VoiceExtractionResult(BaseModel):
    style_json: str
    input_tokens: int
    output_tokens: int
    cost_cents: int


# -- request bodies ------------------------------------------------------------


class GenerateListingRequest(BaseModel):
    property_id: int
    style: str
    tone: str
    length: str = "medium"
    seo_keywords: list[str] = []
    brand_voice_id: int | None = None


class GenerateSocialRequest(BaseModel):
    property_id: int
    platform: str
    brand_voice_id: int | None = None


class GenerateEmailRequest(BaseModel):
    property_id: int
    template_type: str
    brand_voice_id: int | None = None
