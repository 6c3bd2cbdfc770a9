from __future__ import annotations

from listing_studio.llm.prompts.common import format_price, location_line, or_na, size_line
from listing_studio.schemas.generation import AgentInfo
from listing_studio.schemas.property import PropertySnapshot

PLATFORM_INSTRUCTIONS = {
    "instagram": (
        "Write 3 Instagram captions. CRITICAL: First 125 characters must be the hook "
        '(visible before "...more" cutoff). Total caption under 2,200 characters. '
        "Include 5-8 relevant hashtags at the end. Mix broad (#realestate #homesforsale) "
        "with specific ones. Use line breaks for readability. "
        "Emojis are acceptable but don't overdo it."
    ),
    "facebook": (
        "Write 3 Facebook posts. No character limit but keep to 100-200 words for engagement. "
        'Use a conversational tone. Include a strong CTA ("Comment below", "Send me a DM", '
        '"Link in comments"). One post should be a question format to drive engagement. '
        "No hashtags (they don't help on Facebook)."
    ),
    "linkedin": (
        "Write 3 LinkedIn posts. Professional tone, 150-250 words. Position the agent as a "
        "market expert, not just listing a property. Include 3-5 relevant hashtags. "
        "One post should include a market insight or educational angle. "
        "Focus on investment value and market positioning."
    ),
}
DEFAULT_PLATFORM_INSTRUCTIONS = "Write 3 social media posts optimized for engagement."


def build_social_prompt(
    snapshot: PropertySnapshot,
    analysis_json: str,
    platform: str,
    brand_voice_block: str | None,
    agent_info: AgentInfo,
) -> tuple[str, str]:
    instructions = PLATFORM_INSTRUCTIONS.get(platform, DEFAULT_PLATFORM_INSTRUCTIONS)
    agent_cta = (
        f"{agent_info.name}, {agent_info.phone} | {agent_info.email} | {agent_info.brokerage}"
        if agent_info.name
        else ""
    )

    system = f"""You are a social media marketing expert specializing in real estate. Create {platform}-optimized posts for this property listing.

{instructions}

{brand_voice_block or ""}

RULES:
- NEVER fabricate features not in the property data
- Each post should take a different angle (lifestyle, features, neighborhood, investment value, urgency)
- Include a clear CTA with agent contact info if provided: {agent_cta}
- Write the exact number of posts requested

OUTPUT FORMAT:
---POST 1---
{{post content including hashtags}}
---POST 2---
{{post content including hashtags}}
---POST 3---
{{post content including hashtags}}"""

    user = (
        f"Property: {location_line(snapshot)}\n"
        f"{size_line(snapshot)} | ${format_price(snapshot.price)}\n"
        f"Features: {', '.join(snapshot.key_features)}\n"
        f"Neighborhood: {or_na(snapshot.neighborhood)}\n\n"
        f"Analysis: {analysis_json}"
    )
    return system, user
