from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from listing_studio.models.generated_content import GeneratedContent
from listing_studio.utils.exceptions import ContentNotFoundError

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from listing_studio.schemas.generation import GenerationResult

logger = logging.getLogger(__name__)


def save_result(
    db: Session,
    property_id: int,
    result: GenerationResult,
    generation_type: str,
    *,
    style: str | None = None,
    tone: str | None = None,
    length: str | None = None,
    seo_keywords: list[str] | None = None,
    brand_voice_id: int | None = None,
) -> GeneratedContent:
    content = GeneratedContent(
        property_id=property_id,
        content=result.full_text,
        generation_type=generation_type,
        style=style,
        tone=tone,
        length=length,
        seo_keywords=json.dumps(seo_keywords or []),
        brand_voice_id=brand_voice_id,
        tokens_used=result.input_tokens + result.output_tokens,
        generation_cost_cents=result.cost_cents,
        analysis_json=result.analysis_json,
    )
    db.add(content)
    db.commit()
    db.refresh(content)
    logger.info(
        "Saved %s content %d for property %d (%d tokens, %d cents)",
        generation_type,
        content.id,
        property_id,
        content.tokens_used,
        content.generation_cost_cents,
    )
    return content


def get_content(db: Session, content_id: int) -> GeneratedContent:
    content = db.query(GeneratedContent).filter(GeneratedContent.id == content_id).first()
    if not content:
        raise ContentNotFoundError(f"Generated content {content_id} not found")
    return content


def list_by_property(db: Session, property_id: int) -> list[GeneratedContent]:
    return (
        db.query(GeneratedContent)
        .filter(GeneratedContent.property_id == property_id)
        .order_by(GeneratedContent.created_at.desc(), GeneratedContent.id.desc())
        .all()
    )


def toggle_favorite(db: Session, content_id: int) -> GeneratedContent:
    content = get_content(db, content_id)
    content.is_favorite = not content.is_favorite
    db.commit()
    db.refresh(content)
    return content


def delete_content(db: Session, content_id: int) -> None:
    content = get_content(db, content_id)
    db.delete(content)
    db.commit()
