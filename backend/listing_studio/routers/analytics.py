from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from listing_studio.database import get_db
from listing_studio.schemas.analytics import AnalyticsSummary
from listing_studio.services import analytics_service

router = APIRouter(prefix="/analytics")


@router.get("/summary", response_model=AnalyticsSummary)
def get_summary(db: Session = Depends(get_db)) -> AnalyticsSummary:
    return analytics_service.get_summary(db)
