from __future__ import annotations

from listing_studio.llm.prompts.common import (
    format_price,
    location_line,
    or_na,
    property_type_label,
    size_line,
)
from listing_studio.schemas.generation import AgentInfo, GenerationOptions
from listing_studio.schemas.property import PropertySnapshot

STYLE_INSTRUCTIONS = {
    "luxury": (
        "Write for affluent buyers who value exclusivity, craftsmanship, and lifestyle. "
        'Use sophisticated language: "bespoke", "curated", "impeccable", "artisan". '
        "Emphasize unique/custom elements, premium materials, and the lifestyle the home enables. "
        "Longer sentences, aspirational imagery."
    ),
    "family": (
        "Write for families prioritizing space, safety, schools, and community. "
        "Emphasize practical features: storage, yard space, bedroom count, school proximity, "
        'family-friendly neighborhood. Use warm, inviting language: "spacious", "sun-filled", '
        '"gathering", "grow". Focus on daily life and making memories.'
    ),
    "investment": (
        "Write for investors focused on ROI, rental potential, and appreciation. "
        "Lead with numbers and market position. Emphasize: rental income potential, "
        "neighborhood growth trajectory, low maintenance, strong tenant demand, proximity to "
        "employment centers. Practical, data-driven language."
    ),
    "first_time": (
        "Write for first-time buyers who are excited but cautious about affordability and "
        "maintenance. Emphasize move-in readiness, value, and low-effort living. Use encouraging "
        'language: "ideal starter", "turnkey", "manageable", "well-maintained". '
        "Address common concerns: condition, costs, neighborhood safety."
    ),
}
DEFAULT_STYLE_INSTRUCTIONS = "Write a professional, well-crafted listing description."

TONE_INSTRUCTIONS = {
    "professional": (
        "Authoritative and polished. Clean sentence structure, industry terminology used "
        "naturally, confident assertions. No exclamation marks. Measured enthusiasm."
    ),
    "warm": (
        "Conversational and inviting. Help readers picture themselves living there. "
        "Use sensory details (morning light, quiet streets, the sound of...). "
        "Occasional questions to engage. Balanced enthusiasm."
    ),
    "exciting": (
        "High energy, action-oriented. Dynamic verbs, vivid imagery, enthusiastic punctuation "
        "(sparingly). Create urgency through desirability, not pressure tactics. "
        "Paint an aspirational picture."
    ),
}
DEFAULT_TONE_INSTRUCTIONS = "Professional and engaging tone."

LENGTH_INSTRUCTIONS = {
    "short": (
        "100-150 words. One punchy paragraph. Best for: MLS systems with character limits "
        "(~500-750 chars), quick social media repurposing."
    ),
    "medium": (
        "200-300 words. 2-3 paragraphs. Best for: standard MLS listings, "
        "Zillow/Realtor.com descriptions."
    ),
    "long": (
        "400-500 words. 4-5 paragraphs with a narrative arc "
        "(hook -> features -> lifestyle -> neighborhood -> CTA). "
        "Best for: luxury listings, agent websites, marketing packages."
    ),
}
DEFAULT_LENGTH_INSTRUCTIONS = "200-300 words. 2-3 paragraphs."

BANNED_PHRASES = (
    '"welcome home", "must see", "won\'t last long", "priced to sell", "hidden gem"'
)


def build_listing_prompt(
    snapshot: PropertySnapshot,
    analysis_json: str,
    options: GenerationOptions,
    brand_voice_block: str | None,
    agent_info: AgentInfo,
) -> tuple[str, str]:
    """Stage-2 prompt for a listing description, conditioned on the analysis."""
    seo_keywords = (
        ", ".join(options.seo_keywords) if options.seo_keywords else "none specified"
    )
    agent_cta = (
        f"Agent: {agent_info.name} | {agent_info.phone} | "
        f"{agent_info.email} | {agent_info.brokerage}"
        if agent_info.name
        else ""
    )

    system = f"""You are an expert real estate copywriter who writes listing descriptions that drive showing requests. Your descriptions are specific, vivid, and never generic.

STYLE: {STYLE_INSTRUCTIONS.get(options.style, DEFAULT_STYLE_INSTRUCTIONS)}
TONE: {TONE_INSTRUCTIONS.get(options.tone, DEFAULT_TONE_INSTRUCTIONS)}
LENGTH: {LENGTH_INSTRUCTIONS.get(options.length, DEFAULT_LENGTH_INSTRUCTIONS)}

{brand_voice_block or ""}

RULES:
- NEVER fabricate features not provided in the property data
- NEVER use these overused phrases: {BANNED_PHRASES}
- NEVER reference protected classes (race, religion, national origin, familial status, disability, sex)
- DO use specific details from the property data: exact features, neighborhood names, school names
- DO front-load the most compelling information in the first sentence
- DO naturally incorporate these SEO keywords where they fit: {seo_keywords}
- DO end with a clear call to action including agent contact info if provided
- Write in second person ("you'll love") or third person ("this home features"), not first person

OUTPUT: Write ONLY the listing description. No titles, no labels, no markdown formatting."""

    user = f"""PROPERTY DATA:
Address: {location_line(snapshot)}
Type: {property_type_label(snapshot)} | Built: {or_na(snapshot.year_built)} | {size_line(snapshot)}
Price: ${format_price(snapshot.price)}
Lot: {or_na(snapshot.lot_size)} | Parking: {or_na(snapshot.parking)}
Key Features: {', '.join(snapshot.key_features)}
Neighborhood: {or_na(snapshot.neighborhood)}
Highlights: {', '.join(snapshot.neighborhood_highlights)}
Schools: {or_na(snapshot.school_district)}
Nearby: {', '.join(snapshot.nearby_amenities)}
{agent_cta}

MARKET ANALYSIS:
{analysis_json}

Write the listing description now."""

    return system, user
