from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, Float, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from listing_studio.database import Base

if TYPE_CHECKING:
    from listing_studio.models.generated_content import GeneratedContent


class Property(Base):
    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    state: Mapped[str] = mapped_column(String(50), nullable=False)
    zip: Mapped[str] = mapped_column(String(20), nullable=False)
    beds: Mapped[int] = mapped_column(Integer, nullable=False)
    baths: Mapped[float] = mapped_column(Float, nullable=False)
    sqft: Mapped[int] = mapped_column(Integer, nullable=False)
    # Asking price in cents
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    property_type: Mapped[str] = mapped_column(String(100), nullable=False)
    year_built: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    lot_size: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    parking: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    key_features: Mapped[str] = mapped_column(Text, default="[]")
    neighborhood: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    neighborhood_highlights: Mapped[str] = mapped_column(Text, default="[]")
    school_district: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    nearby_amenities: Mapped[str] = mapped_column(Text, default="[]")
    agent_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=func.now(), onupdate=func.now()
    )

    contents: Mapped[list["GeneratedContent"]] = relationship(
        back_populates="property", cascade="all, delete-orphan"
    )
