from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from listing_studio.database import get_db
from listing_studio.schemas.content import GeneratedContentResponse
from listing_studio.services import content_service
from listing_studio.utils.exceptions import ContentNotFoundError

router = APIRouter(prefix="/contents")


@router.post("/{content_id}/favorite", response_model=GeneratedContentResponse)
def toggle_favorite(
    content_id: int, db: Session = Depends(get_db)
) -> GeneratedContentResponse:
    try:
        content = content_service.toggle_favorite(db, content_id)
        return GeneratedContentResponse.model_validate(content)
    except ContentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.delete("/{content_id}", status_code=204)
def delete_content(content_id: int, db: Session = Depends(get_db)) -> None:
    try:
        content_service.delete_content(db, content_id)
    except ContentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
