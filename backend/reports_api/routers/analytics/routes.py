"""
Analytics router.
Dish performance, trend selectors and insights.
"""

from fastapi import APIRouter, Query

from shared.config.logging import analytics_logger as logger
from shared.config.settings import settings
from shared.utils.schemas import DishAnalyticsReport, ReportSnapshot, Timeframe
from reports_api.routers._common import resolve_now
from reports_api.services.domain import build_dish_analytics_report, logging_observer


router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.post("/dishes", response_model=DishAnalyticsReport)
def dish_performance(
    snapshot: ReportSnapshot,
    timeframe: Timeframe = Query(default="month"),
    limit: int | None = Query(default=None, ge=1, le=50),
) -> DishAnalyticsReport:
    """
    Per-dish performance for the window ending now.

    Includes every catalog dish, plus top earners, risers, decliners,
    underperformers and insight sentences.
    """
    return build_dish_analytics_report(
        snapshot.orders,
        snapshot.dishes,
        timeframe,
        now=resolve_now(snapshot),
        limit=limit or settings.analytics_default_limit,
        observer=logging_observer(logger),
    )
