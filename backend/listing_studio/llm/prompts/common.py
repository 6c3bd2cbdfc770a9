from __future__ import annotations

from listing_studio.schemas.property import PropertySnapshot

MAX_TOKENS_ANALYSIS = 1024
MAX_TOKENS_SOCIAL = 2048
MAX_TOKENS_EMAIL = 2048
MAX_TOKENS_BRAND_VOICE = 2048

_LISTING_MAX_TOKENS = {
    "short": 1024,
    "medium": 2048,
    "long": 4096,
}


def max_tokens_for_listing(length: str) -> int:
    return _LISTING_MAX_TOKENS.get(length, 2048)


def format_price(price_cents: int) -> str:
    """Whole dollars with thousands separators: 95000000 -> "950,000"."""
    return f"{price_cents // 100:,}"


def format_baths(baths: float) -> str:
    return f"{baths:g}"


def or_na(value: object) -> str:
    return "N/A" if value is None or value == "" else str(value)


def property_type_label(snapshot: PropertySnapshot) -> str:
    return snapshot.property_type.replace("_", " ")


def location_line(snapshot: PropertySnapshot) -> str:
    return f"{snapshot.address}, {snapshot.city}, {snapshot.state} {snapshot.zip}"


def size_line(snapshot: PropertySnapshot) -> str:
    return f"{snapshot.beds} bed / {format_baths(snapshot.baths)} bath / {snapshot.sqft} sqft"
