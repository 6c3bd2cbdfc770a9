from listing_studio.llm.prompts.analysis import build_analysis_prompt
from listing_studio.llm.prompts.brand_voice import (
    build_voice_block,
    build_voice_extraction_prompt,
)
from listing_studio.llm.prompts.common import (
    MAX_TOKENS_ANALYSIS,
    MAX_TOKENS_BRAND_VOICE,
    MAX_TOKENS_EMAIL,
    MAX_TOKENS_SOCIAL,
    format_price,
    max_tokens_for_listing,
)
from listing_studio.llm.prompts.email import build_email_prompt
from listing_studio.llm.prompts.listing import build_listing_prompt
from listing_studio.llm.prompts.social import build_social_prompt

__all__ = [
    "MAX_TOKENS_ANALYSIS",
    "MAX_TOKENS_BRAND_VOICE",
    "MAX_TOKENS_EMAIL",
    "MAX_TOKENS_SOCIAL",
    "build_analysis_prompt",
    "build_email_prompt",
    "build_listing_prompt",
    "build_social_prompt",
    "build_voice_block",
    "build_voice_extraction_prompt",
    "format_price",
    "max_tokens_for_listing",
]
