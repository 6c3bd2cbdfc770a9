from fastapi import APIRouter

from listing_studio.config import settings

router = APIRouter()


@router.get("/health")
def health_check() -> dict:
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "model": settings.anthropic_model,
        "api_key_configured": bool(settings.anthropic_api_key),
    }
