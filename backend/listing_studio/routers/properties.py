from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from listing_studio.database import get_db
from listing_studio.schemas.content import GeneratedContentResponse
from listing_studio.schemas.property import PropertyCreate, PropertyResponse
from listing_studio.services import content_service, property_service
from listing_studio.utils.exceptions import PropertyNotFoundError

router = APIRouter(prefix="/properties")


@router.post("", response_model=PropertyResponse, status_code=201)
def create_property(
    body: PropertyCreate, db: Session = Depends(get_db)
) -> PropertyResponse:
    prop = property_service.create_property(db, body)
    return PropertyResponse.model_validate(prop)


@router.get("", response_model=list[PropertyResponse])
def list_properties(
    skip: int = 0, limit: int = 50, db: Session = Depends(get_db)
) -> list[PropertyResponse]:
    props = property_service.list_properties(db, skip, limit)
    return [PropertyResponse.model_validate(p) for p in props]


@router.get("/{property_id}", response_model=PropertyResponse)
def get_property(property_id: int, db: Session = Depends(get_db)) -> PropertyResponse:
    try:
        prop = property_service.get_property(db, property_id)
        return PropertyResponse.model_validate(prop)
    except PropertyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.delete("/{property_id}", status_code=204)
def delete_property(property_id: int, db: Session = Depends(get_db)) -> None:
    try:
        property_service.delete_property(db, property_id)
    except PropertyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.get("/{property_id}/contents", response_model=list[GeneratedContentResponse])
def list_property_contents(
    property_id: int, db: Session = Depends(get_db)
) -> list[GeneratedContentResponse]:
    try:
        property_service.get_property(db, property_id)
    except PropertyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    contents = content_service.list_by_property(db, property_id)
    return [GeneratedContentResponse.model_validate(c) for c in contents]
