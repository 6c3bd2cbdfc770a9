from __future__ import annotations

import json
from typing import Any

VOICE_EXTRACTION_SYSTEM_PROMPT = """You are a linguistic analyst specializing in writing style extraction. Analyze the following real estate listing descriptions written by the same agent and extract their unique writing voice.

OUTPUT: Respond with ONLY valid JSON matching this exact structure:
{
  "tone": "1-2 sentence description of overall tone",
  "vocabulary": ["array", "of", "10-15", "distinctive", "words/phrases"],
  "sentence_patterns": "Description of typical sentence structure, length, use of questions/exclamations",
  "themes": ["array", "of", "3-5", "recurring", "themes"],
  "signature_phrases": ["exact", "phrases", "they", "reuse"],
  "avoids": ["words", "or", "patterns", "they", "never", "use"],
  "formatting": "Description of how they structure descriptions"
}"""


def build_voice_extraction_prompt(sample_listings: list[str]) -> tuple[str, str]:
    user = "Analyze these listing descriptions by the same real estate agent:\n\n"
    for i, listing in enumerate(sample_listings, start=1):
        user += f"LISTING {i}:\n{listing}\n\n"
    return VOICE_EXTRACTION_SYSTEM_PROMPT, user


def _joined(style: dict[str, Any], key: str) -> str:
    values = style.get(key)
    if not isinstance(values, list):
        return ""
    return ", ".join(v for v in values if isinstance(v, str))


def _text(style: dict[str, Any], key: str) -> str:
    value = style.get(key)
    return value if isinstance(value, str) else ""


def build_voice_block(extracted_style_json: str) -> str | None:
    """Prompt block that injects a stored brand voice into a generation.

    Returns None when the stored style is not a JSON object, so generation
    proceeds without a voice rather than with a broken one.
    """
    try:
        style = json.loads(extracted_style_json)
    except json.JSONDecodeError:
        return None
    if not isinstance(style, dict):
        return None

    return (
        "BRAND VOICE: Match this writing style:\n"
        f"- Tone: {_text(style, 'tone')}\n"
        f"- Vocabulary preferences: {_joined(style, 'vocabulary')}\n"
        f"- Sentence patterns: {_text(style, 'sentence_patterns')}\n"
        f"- Signature themes: {_joined(style, 'themes')}\n"
        f"- Example phrases to emulate: {_joined(style, 'signature_phrases')}\n"
        "Maintain this voice while following all other instructions."
    )
