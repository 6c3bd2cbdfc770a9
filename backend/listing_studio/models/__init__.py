from listing_studio.models.brand_voice import BrandVoice
from listing_studio.models.generated_content import GeneratedContent
from listing_studio.models.generation_analytics import GenerationAnalytics
from listing_studio.models.property import Property

__all__ = [
    "Property",
    "GeneratedContent",
    "BrandVoice",
    "GenerationAnalytics",
]
