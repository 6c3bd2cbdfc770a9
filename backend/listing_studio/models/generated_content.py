from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from listing_studio.database import Base

if TYPE_CHECKING:
    from listing_studio.models.property import Property


class GeneratedContent(Base):
    """One finished generation: a listing, a set of social posts, or an email."""

    __tablename__ = "generated_contents"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    property_id: Mapped[int] = mapped_column(
        ForeignKey("properties.id"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # listing | social_<platform> | email_<template>
    generation_type: Mapped[str] = mapped_column(String(50), nullable=False)
    style: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    tone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    length: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    seo_keywords: Mapped[str] = mapped_column(Text, default="[]")
    brand_voice_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("brand_voices.id", ondelete="SET NULL"), nullable=True
    )
    tokens_used: Mapped[int] = mapped_column(Integer, default=0)
    generation_cost_cents: Mapped[int] = mapped_column(Integer, default=0)
    analysis_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_favorite: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())

    property: Mapped["Property"] = relationship(back_populates="contents")
