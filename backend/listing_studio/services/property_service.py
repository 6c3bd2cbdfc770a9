from __future__ import annotations

import json
from typing import TYPE_CHECKING

from listing_studio.models.property import Property
from listing_studio.schemas.property import PropertySnapshot
from listing_studio.utils.exceptions import PropertyNotFoundError

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from listing_studio.schemas.property import PropertyCreate

_LIST_FIELDS = ("key_features", "neighborhood_highlights", "nearby_amenities")


def create_property(db: Session, data: PropertyCreate) -> Property:
    values = data.model_dump()
    for key in _LIST_FIELDS:
        values[key] = json.dumps(values[key])
    prop = Property(**values)
    db.add(prop)
    db.commit()
    db.refresh(prop)
    return prop


def get_property(db: Session, property_id: int) -> Property:
    prop = db.query(Property).filter(Property.id == property_id).first()
    if not prop:
        raise PropertyNotFoundError(f"Property {property_id} not found")
    return prop


def get_snapshot(db: Session, property_id: int) -> PropertySnapshot:
    return PropertySnapshot.model_validate(get_property(db, property_id))


def list_properties(db: Session, skip: int = 0, limit: int = 50) -> list[Property]:
    return (
        db.query(Property)
        .order_by(Property.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def delete_property(db: Session, property_id: int) -> None:
    prop = get_property(db, property_id)
    db.delete(prop)
    db.commit()
