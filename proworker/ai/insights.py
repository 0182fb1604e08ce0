"""
Prompt-side insights derived from a WorkerContext.

Pure helpers used by the assistant to pick a strategy (query intent) and to
pre-compute the comparisons the model is asked to talk about.
"""
import re
from typing import Any, Dict, List, Optional

from proworker.analytics.geo import grid_cell, round_half_up
from proworker.analytics.normalization import normalize_profession
from proworker.analytics.snapshot import WorkerContext


DEFAULT_PROFESSION_AVG_RATING = 4.0

# Checked in order; first match wins
INTENT_PATTERNS = [
    ("comparison", r"compare|vs|versus|against|better|worse|rank|ranking|position|where do i stand|how do i compare"),
    ("financial", r"rate|rating|earning|income|charge|pay|cost|money|profit|revenue|price"),
    ("planning", r"schedule|availability|slot|time|when|available|book"),
    ("performance", r"complete|order|cancel|reschedule|status|performance|feedback|quality|male|female|gender|profession|count"),
    ("coaching", r"improve|grow|learn|better|skill|training|develop|tip|advice|suggest|help|boost"),
]


def detect_query_intent(question: str) -> str:
    """
    Classify a question into comparison, financial, planning, performance,
    coaching or general. Substring matching, case-insensitive.
    """
    lowered = (question or "").lower()
    for intent, pattern in INTENT_PATTERNS:
        if re.search(pattern, lowered):
            return intent
    return "general"


def calculate_comparison(context: WorkerContext) -> Dict[str, Any]:
    """Rating, order and gender comparisons against the worker's peers."""
    analytics = context.analytics
    my_rating = float(context.profile.rating or 0)
    profession_avg = analytics.profession_stats.avg_rating or DEFAULT_PROFESSION_AVG_RATING
    my_profession = normalize_profession(context.profile.profession)

    my_profession_demand = next(
        (p.model_dump() for p in analytics.top_professions if p.profession == my_profession),
        None,
    )

    return {
        "rating_comparison": {
            "my_rating": my_rating,
            "profession_avg": profession_avg,
            "above_average": my_rating > profession_avg,
            "difference": round(my_rating - profession_avg, 2),
        },
        "order_comparison": {
            "my_total": context.order_summary.total,
            "profession_peers": analytics.profession_stats.total_peers,
            "rank": analytics.rank.by_orders,
            "total_workers": analytics.rank.total_workers,
        },
        "gender_distribution": analytics.gender_stats.distribution.model_dump(),
        "gender_rank": analytics.gender_stats.my_rank_in_gender,
        "top_professions": [p.model_dump() for p in analytics.top_professions[:3]],
        "my_profession_demand": my_profession_demand,
    }


def monthly_trend(context: WorkerContext) -> Optional[Dict[str, Any]]:
    """
    Compare the newest month with the one before it.

    Returns None when fewer than two months of history exist.
    """
    months = context.monthly_history[:2]
    if len(months) < 2:
        return None

    current = months[0].total_orders
    previous = months[1].total_orders
    change = current - previous
    if previous == 0:
        percent_change = 100 if current > 0 else 0
    else:
        percent_change = int(round_half_up(change / previous * 100))

    if current > previous:
        trend = "improving"
    elif current < previous:
        trend = "declining"
    else:
        trend = "stable"

    return {
        "current_month": months[0].month_name,
        "current_orders": current,
        "previous_orders": previous,
        "change": change,
        "percent_change": percent_change,
        "trend": trend,
    }


def completion_rate(context: WorkerContext) -> int:
    """Completed share of all orders as a whole percentage."""
    summary = context.order_summary
    if summary.total == 0:
        return 0
    return int(round_half_up(summary.completed / summary.total * 100))


def _recent_orders(context: WorkerContext, limit: int = 5) -> List[Dict[str, Any]]:
    return [
        {
            "date": order.date.isoformat() if order.date else None,
            "client": order.client_name,
            "status": order.status_name,
        }
        for order in context.orders[:limit]
    ]


def build_prompt_payload(context: WorkerContext) -> Dict[str, Any]:
    """
    JSON-ready view of the snapshot for the model.

    The worker's location is reduced to its grid cell before it leaves here.
    """
    profile = context.profile
    history = context.monthly_history
    avg_monthly_orders = (
        int(round_half_up(sum(m.total_orders for m in history) / len(history))) if history else 0
    )
    if len(history) >= 2:
        direction = "increasing" if history[0].total_orders >= history[1].total_orders else "decreasing"
    else:
        direction = "stable"

    area = None
    if context.location is not None:
        lat, lng = grid_cell(context.location.latitude, context.location.longitude)
        area = {"grid_latitude": lat, "grid_longitude": lng}

    summary = context.order_summary
    return {
        "my_profile": {
            "name": profile.name,
            "profession": profile.profession,
            "gender": profile.gender,
            "current_rating": profile.rating,
            "charges_perhour": profile.charges_perhour,
            "charges_pervisit": profile.charges_pervisit,
        },
        "settings": context.settings.model_dump() if context.settings else None,
        "area": area,
        "reviews": [
            {"client": review.name, "comment": review.comment}
            for review in context.reviews[:5]
        ],
        "week_schedule": [day.model_dump() for day in context.week_summary],
        "month_schedule": [note.model_dump(mode="json") for note in context.month_schedule],
        "analytics": context.analytics.model_dump(mode="json"),
        "peer_radius": context.peer_radius_analytics.model_dump(),
        "training": context.training_analytics.model_dump(mode="json"),
        "monthly_analytics": [m.model_dump() for m in history[:6]],
        "performance_metrics": {
            "total_orders": summary.total,
            "completed_orders": summary.completed,
            "cancelled_orders": summary.cancelled,
            "pending_orders": summary.pending,
            "rescheduled_orders": summary.rescheduled,
            "completion_rate": f"{completion_rate(context)}%",
            "avg_monthly_orders": avg_monthly_orders,
            "trend": direction,
        },
        "comparison_insights": {
            **calculate_comparison(context),
            "monthly_trend": monthly_trend(context),
        },
        "recent_orders": _recent_orders(context),
    }
