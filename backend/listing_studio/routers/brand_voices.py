from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from listing_studio.database import get_db
from listing_studio.llm.base import CompletionClient
from listing_studio.routers.dependencies import get_client
from listing_studio.schemas.brand_voice import BrandVoiceCreate, BrandVoiceResponse
from listing_studio.services import brand_voice_service
from listing_studio.utils.exceptions import (
    BrandVoiceNotFoundError,
    GenerationError,
    InputValidationError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/brand-voices")


@router.post("", response_model=BrandVoiceResponse, status_code=201)
async def create_brand_voice(
    body: BrandVoiceCreate,
    db: Session = Depends(get_db),
    client: CompletionClient = Depends(get_client),
) -> BrandVoiceResponse:
    try:
        voice = await brand_voice_service.create_brand_voice(
            db, client, body.name, body.description, body.sample_listings
        )
        return BrandVoiceResponse.model_validate(voice)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except GenerationError as e:
        logger.error("Brand voice extraction failed: %s", e)
        raise HTTPException(status_code=502, detail=str(e)) from e


@router.get("", response_model=list[BrandVoiceResponse])
def list_brand_voices(db: Session = Depends(get_db)) -> list[BrandVoiceResponse]:
    voices = brand_voice_service.list_brand_voices(db)
    return [BrandVoiceResponse.model_validate(v) for v in voices]


@router.get("/{voice_id}", response_model=BrandVoiceResponse)
def get_brand_voice(voice_id: int, db: Session = Depends(get_db)) -> BrandVoiceResponse:
    try:
        voice = brand_voice_service.get_brand_voice(db, voice_id)
        return BrandVoiceResponse.model_validate(voice)
    except BrandVoiceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.delete("/{voice_id}", status_code=204)
def delete_brand_voice(voice_id: int, db: Session = Depends(get_db)) -> None:
    try:
        brand_voice_service.delete_brand_voice(db, voice_id)
    except BrandVoiceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
