from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator


class GeneratedContentResponse(BaseModel):
    id: int
    property_id: int
    content: str
    generation_type: str
    style: str | None
    tone: str | None
    length: str | None
    seo_keywords: list[str]
    brand_voice_id: int | None
    tokens_used: int
    generation_cost_cents: int
    is_favorite: bool
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("seo_keywords", mode="before")
    @classmethod
    def decode_keywords(cls, value: Any) -> Any:
        if isinstance(value, str):
            return json.loads(value) if value else []
        return value or []
