"""
Dish performance analytics.

Counts and revenue per dish for a window (week, month or all time), the
trend against the preceding window of the same length, and a derived 1-5
star rating:

    order count share  0-2 points
    revenue share      0-2 points
    positive trend     0-1 point

Shares are relative to the best dish in the window. The sum is clamped to
[1, 5] so a dish with no activity still shows one star.
"""

from dataclasses import dataclass
from datetime import datetime

from shared.config.constants import (
    InsightThresholds,
    OrderStatus,
    RatingWeights,
    ReportEvents,
    Timeframe,
    TrendColors,
)
from shared.utils.schemas import Dish, DishAnalyticsReport, DishPerformance, Order
from reports_api.services.domain.date_ranges import (
    parse_timestamp,
    prior_period,
    start_of_day,
    window_start,
)
from reports_api.services.domain.observers import ReportObserver, notify


@dataclass
class DishMetrics:
    order_count: int = 0
    total_revenue: float = 0.0


def _accumulate(
    orders: list[Order],
    start: datetime,
    end: datetime | None,
    now: datetime,
    observer: ReportObserver | None,
) -> dict[str, DishMetrics]:
    """Per-dish metrics over approved orders created in [start, end)."""
    metrics: dict[str, DishMetrics] = {}
    for order in orders:
        if order.status != OrderStatus.APPROVED:
            continue
        created = parse_timestamp(order.created_at, now, observer, order_id=order.id, field="created_at")
        if created is None or created < start or (end is not None and created >= end):
            continue
        for item in order.items:
            entry = metrics.setdefault(item.dish.id, DishMetrics())
            entry.order_count += item.quantity
            entry.total_revenue += item.dish.price * item.quantity
    return metrics


def calculate_trend(current: int, previous: int) -> float:
    """Percent change in order count; a dish new to this window counts as +100%."""
    if previous > 0:
        return (current - previous) / previous * 100
    if current > 0:
        return InsightThresholds.NEW_DISH_TREND
    return 0.0


def calculate_rating(
    order_count: int,
    revenue: float,
    trend: float,
    max_orders: int,
    max_revenue: float,
) -> float:
    order_score = min(order_count / max_orders, 1) * RatingWeights.ORDER_COUNT if max_orders > 0 else 0.0
    revenue_score = min(revenue / max_revenue, 1) * RatingWeights.REVENUE if max_revenue > 0 else 0.0
    trend_score = min(max(trend, 0) / 100, 1) * RatingWeights.TREND
    rating = order_score + revenue_score + trend_score
    return round(min(RatingWeights.MAX_RATING, max(RatingWeights.MIN_RATING, rating)), 1)


def calculate_dish_performance(
    orders: list[Order],
    dishes: list[Dish],
    timeframe: str = Timeframe.MONTH,
    *,
    now: datetime,
    observer: ReportObserver | None = None,
) -> list[DishPerformance]:
    """One performance record per catalog dish, including dishes never ordered."""
    start = window_start(now, timeframe)
    current = _accumulate(orders, start, None, now, observer)

    previous_start = start_of_day(prior_period(start, timeframe))
    previous = _accumulate(orders, previous_start, start, now, observer)

    max_orders = max((m.order_count for m in current.values()), default=0)
    max_revenue = max((m.total_revenue for m in current.values()), default=0.0)

    performance = []
    for dish in dishes:
        metrics = current.get(dish.id, DishMetrics())
        previous_count = previous[dish.id].order_count if dish.id in previous else 0
        trend = calculate_trend(metrics.order_count, previous_count)

        performance.append(
            DishPerformance(
                dish_id=dish.id,
                dish_name=dish.name,
                dish_image=dish.image,
                dish_category=dish.category,
                dish_price=dish.price,
                order_count=metrics.order_count,
                total_revenue=metrics.total_revenue,
                average_rating=calculate_rating(
                    metrics.order_count, metrics.total_revenue, trend, max_orders, max_revenue
                ),
                trend_percentage=round(trend, 1),
                is_available=dish.available,
            )
        )

    notify(
        observer,
        ReportEvents.DISH_PERFORMANCE_CALCULATED,
        timeframe=timeframe,
        dishes=len(performance),
        dishes_ordered=len(current),
    )
    return performance


# =============================================================================
# Selectors
# =============================================================================


def get_top_revenue_generators(performance: list[DishPerformance], limit: int = 3) -> list[DishPerformance]:
    earning = [p for p in performance if p.total_revenue > 0]
    return sorted(earning, key=lambda p: p.total_revenue, reverse=True)[:limit]


def get_trending_up_dishes(performance: list[DishPerformance], limit: int = 3) -> list[DishPerformance]:
    rising = [p for p in performance if p.trend_percentage > 0 and p.order_count > 0]
    return sorted(rising, key=lambda p: p.trend_percentage, reverse=True)[:limit]


def get_trending_down_dishes(performance: list[DishPerformance], limit: int = 3) -> list[DishPerformance]:
    falling = [p for p in performance if p.trend_percentage < 0]
    return sorted(falling, key=lambda p: p.trend_percentage)[:limit]


def get_underperforming_dishes(performance: list[DishPerformance], limit: int = 3) -> list[DishPerformance]:
    """
    Available dishes with few orders or a steep decline.

    Ranked by order_count + trend/10, lowest first.
    """
    weak = [
        p
        for p in performance
        if p.is_available
        and (
            p.order_count < InsightThresholds.LOW_ORDER_COUNT
            or p.trend_percentage < -InsightThresholds.STRONG_TREND
        )
    ]
    return sorted(weak, key=lambda p: p.order_count + p.trend_percentage / 10)[:limit]


# =============================================================================
# Insights and Display Helpers
# =============================================================================


def get_performance_insights(performance: list[DishPerformance]) -> list[str]:
    """At most one sentence each for: top earner, riser, decliner, low seller."""
    insights = []

    top = get_top_revenue_generators(performance, 1)
    if top:
        total_revenue = sum(p.total_revenue for p in performance)
        share = top[0].total_revenue / total_revenue * 100
        insights.append(f"{top[0].dish_name} generates {share:.0f}% of total revenue")

    rising = get_trending_up_dishes(performance, 1)
    if rising and rising[0].trend_percentage > InsightThresholds.STRONG_TREND:
        insights.append(
            f"{rising[0].dish_name} is trending up {rising[0].trend_percentage:.0f}% - consider stocking more"
        )

    falling = get_trending_down_dishes(performance, 1)
    if falling and falling[0].trend_percentage < -InsightThresholds.STRONG_TREND:
        insights.append(
            f"{falling[0].dish_name} is declining {abs(falling[0].trend_percentage):.0f}% - investigate quality or pricing"
        )

    weak = get_underperforming_dishes(performance, 1)
    if weak and weak[0].order_count < InsightThresholds.LOW_ORDER_COUNT:
        insights.append(
            f"{weak[0].dish_name} has only {weak[0].order_count} orders - consider removal or promotion"
        )

    return insights


def get_star_rating(rating: float) -> tuple[int, int]:
    """(filled, empty) stars out of five."""
    filled = int(rating)
    return filled, 5 - filled


def format_trend(percentage: float) -> str:
    if percentage > 0:
        return f"+{percentage:.0f}%"
    if percentage < 0:
        return f"{percentage:.0f}%"
    return "0%"


def get_trend_color(percentage: float) -> str:
    if percentage > TrendColors.STRONG_THRESHOLD:
        return TrendColors.STRONG_UP
    if percentage > 0:
        return TrendColors.SLIGHT_UP
    if percentage == 0:
        return TrendColors.FLAT
    if percentage > -TrendColors.STRONG_THRESHOLD:
        return TrendColors.SLIGHT_DOWN
    return TrendColors.STRONG_DOWN


def build_dish_analytics_report(
    orders: list[Order],
    dishes: list[Dish],
    timeframe: str = Timeframe.MONTH,
    *,
    now: datetime,
    limit: int = 3,
    observer: ReportObserver | None = None,
) -> DishAnalyticsReport:
    """Performance plus the selectors and insights shown on the admin dashboard."""
    performance = calculate_dish_performance(orders, dishes, timeframe, now=now, observer=observer)
    return DishAnalyticsReport(
        timeframe=timeframe,
        performance=performance,
        top_revenue=get_top_revenue_generators(performance, limit),
        trending_up=get_trending_up_dishes(performance, limit),
        trending_down=get_trending_down_dishes(performance, limit),
        underperforming=get_underperforming_dishes(performance, limit),
        insights=get_performance_insights(performance),
    )
