"""Generation analytics: one row per streamed generation, plus aggregates.

Cost and latency aggregates only count successful generations; the success
rate counts every row.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import func, select

from listing_studio.models.generation_analytics import GenerationAnalytics
from listing_studio.schemas.analytics import AnalyticsSummary

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


def record_generation(
    db: Session,
    property_id: int,
    generation_type: str,
    model_used: str,
    *,
    input_tokens: int = 0,
    output_tokens: int = 0,
    cost_cents: int = 0,
    latency_ms: int = 0,
    success: bool,
    error_message: str | None = None,
) -> GenerationAnalytics:
    row = GenerationAnalytics(
        property_id=property_id,
        generation_type=generation_type,
        model_used=model_used,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        cost_cents=cost_cents,
        latency_ms=latency_ms,
        success=success,
        error_message=error_message,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info(
        "Recorded %s generation for property %d: success=%s latency_ms=%d",
        generation_type,
        property_id,
        success,
        latency_ms,
    )
    return row


def get_total_generations(db: Session) -> int:
    return db.scalar(select(func.count(GenerationAnalytics.id))) or 0


def get_total_cost(db: Session) -> int:
    total = db.scalar(
        select(func.coalesce(func.sum(GenerationAnalytics.cost_cents), 0)).where(
            GenerationAnalytics.success.is_(True)
        )
    )
    return int(total or 0)


def get_average_latency(db: Session) -> float:
    average = db.scalar(
        select(func.avg(GenerationAnalytics.latency_ms)).where(
            GenerationAnalytics.success.is_(True)
        )
    )
    return float(average) if average is not None else 0.0


def get_success_rate(db: Session) -> float:
    """Percentage of successful generations; 100.0 before any generation."""
    total = get_total_generations(db)
    if total == 0:
        return 100.0
    successful = db.scalar(
        select(func.count(GenerationAnalytics.id)).where(
            GenerationAnalytics.success.is_(True)
        )
    )
    return successful / total * 100.0


def get_summary(db: Session) -> AnalyticsSummary:
    return AnalyticsSummary(
        total_generations=get_total_generations(db),
        total_cost_cents=get_total_cost(db),
        average_latency_ms=get_average_latency(db),
        success_rate=get_success_rate(db),
    )
