from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator


class BrandVoiceCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    sample_listings: list[str]


class BrandVoiceResponse(BaseModel):
    id: int
    name: str
    description: str | None
    extracted_style: dict[str, Any]
    sample_count: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("extracted_style", mode="before")
    @classmethod
    def decode_style(cls, value: Any) -> Any:
        if isinstance(value, str):
            decoded = json.loads(value)
            return decoded if isinstance(decoded, dict) else {"raw": decoded}
        return value
