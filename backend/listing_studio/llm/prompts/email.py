from __future__ import annotations

from listing_studio.llm.prompts.common import format_price, location_line, size_line
from listing_studio.schemas.generation import AgentInfo
from listing_studio.schemas.property import PropertySnapshot

TEMPLATE_INSTRUCTIONS = {
    "buyer": (
        "This email goes to a potential buyer whose search criteria match this property. "
        "Open with why this property fits their needs. Highlight 3-4 key features that match "
        'typical buyer criteria. Create soft urgency ("just listed", "early access"). '
        'CTA: "Schedule a private showing" or "Reply to learn more".'
    ),
    "seller": (
        "This email goes to a potential seller in the same neighborhood. Use this listing as "
        "social proof of market activity. Reference the neighborhood by name. Highlight the "
        'sale price / market conditions. CTA: "Curious what your home is worth?" or '
        '"Free comparative market analysis".'
    ),
    "open_house": (
        "This email invites potential buyers to an open house. Include: date, time, address, "
        "3 property highlights, what refreshments/experience to expect. Create excitement. "
        'CTA: "RSVP" or "Add to calendar". Make the open house sound like an event, not a chore.'
    ),
}
DEFAULT_TEMPLATE_INSTRUCTIONS = "Write a professional real estate email."


def build_email_prompt(
    snapshot: PropertySnapshot,
    analysis_json: str,
    template_type: str,
    brand_voice_block: str | None,
    agent_info: AgentInfo,
) -> tuple[str, str]:
    instructions = TEMPLATE_INSTRUCTIONS.get(template_type, DEFAULT_TEMPLATE_INSTRUCTIONS)

    system = f"""You are an email marketing specialist for real estate. Write a {template_type} email.

{instructions}

{brand_voice_block or ""}

RULES:
- Subject line: 6-10 words, creates curiosity or urgency, no ALL CAPS, no spam trigger words
- Preview text: 40-90 characters, complements subject line (shown in inbox preview)
- Body: Personal, actionable, scannable (short paragraphs, bold key details)
- Include property details naturally, don't dump raw data
- End with one clear CTA (not multiple competing CTAs)
- Sign off with agent name: {agent_info.name}, phone: {agent_info.phone}, email: {agent_info.email}

OUTPUT FORMAT:
SUBJECT: {{subject line}}
PREVIEW: {{preview text}}
---
{{email body}}"""

    user = (
        f"Property: {location_line(snapshot)}\n"
        f"{size_line(snapshot)} | ${format_price(snapshot.price)}\n"
        f"Features: {', '.join(snapshot.key_features)}\n\n"
        f"Analysis: {analysis_json}"
    )
    return system, user
