from __future__ import annotations

from listing_studio.llm.prompts.common import (
    format_price,
    location_line,
    or_na,
    property_type_label,
    size_line,
)
from listing_studio.schemas.property import PropertySnapshot

ANALYSIS_SYSTEM_PROMPT = """You are a real estate market analyst. Given property details, produce a JSON analysis with exactly these fields:
- "selling_points": array of 5 strings, each a specific compelling feature (not generic)
- "target_buyer": string describing the ideal buyer persona in 1-2 sentences
- "neighborhood_appeal": string describing what makes the location desirable in 1-2 sentences
- "comparable_positioning": string describing how to position this property vs typical listings in the area
- "emotional_hooks": array of 3 strings, each an emotional angle for marketing

Respond with ONLY valid JSON. No markdown, no explanation."""


def build_analysis_prompt(snapshot: PropertySnapshot) -> tuple[str, str]:
    """Stage-1 prompt: structured market analysis of one property."""
    user = (
        f"Property: {location_line(snapshot)}\n"
        f"Type: {property_type_label(snapshot)} | Built: {or_na(snapshot.year_built)}\n"
        f"{size_line(snapshot)}\n"
        f"Price: ${format_price(snapshot.price)}\n"
        f"Lot: {or_na(snapshot.lot_size)} | Parking: {or_na(snapshot.parking)}\n"
        f"Key Features: {', '.join(snapshot.key_features)}\n"
        f"Neighborhood: {or_na(snapshot.neighborhood)}\n"
        f"Highlights: {', '.join(snapshot.neighborhood_highlights)}\n"
        f"Schools: {or_na(snapshot.school_district)}\n"
        f"Nearby: {', '.join(snapshot.nearby_amenities)}"
    )
    return ANALYSIS_SYSTEM_PROMPT, user
