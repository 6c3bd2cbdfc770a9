from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

_LIST_FIELDS = ("key_features", "neighborhood_highlights", "nearby_amenities")


class PropertyCreate(BaseModel):
    address: str = Field(..., min_length=1)
    city: str
    state: str
    zip: str
    beds: int = Field(..., ge=0)
    baths: float = Field(..., ge=0)
    sqft: int = Field(..., ge=0)
    price: int = Field(..., ge=0, description="Asking price in cents")
    property_type: str
    year_built: int | None = None
    lot_size: str | None = None
    parking: str | None = None
    key_features: list[str] = []
    neighborhood: str | None = None
    neighborhood_highlights: list[str] = []
    school_district: str | None = None
    nearby_amenities: list[str] = []
    agent_notes: str | None = None


class PropertySnapshot(PropertyCreate):
    """Immutable view of a property handed to the prompt builders.

    Validates straight from a ``Property`` row; the JSON text columns are
    decoded into lists.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator(*_LIST_FIELDS, mode="before")
    @classmethod
    def decode_json_list(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                decoded = json.loads(value)
            except json.JSONDecodeError:
                return []
            if not isinstance(decoded, list):
                return []
            # Numbers are kept as text; nulls and nested values are dropped
            return [
                item if isinstance(item, str) else str(item)
                for item in decoded
                if isinstance(item, (str, int, float)) and not isinstance(item, bool)
            ]
        return value or []


class PropertyResponse(PropertySnapshot):
    id: int
    created_at: datetime
    updated_at: datetime
