"""
Monthly history builder.

Buckets one worker's orders into calendar months: a zero-seeded trailing
window ending at the current month, plus on-demand buckets for any older (or
future-dated) month an order falls into.
"""
import calendar
from datetime import date as date_type
from typing import Dict, Iterable, List, Optional, Tuple, Union

from proworker.analytics.records import OrderRecord, OrderStatus
from proworker.analytics.snapshot import EnrichedOrder, MonthlyMetric
from proworker.lib.logging import get_logger

logger = get_logger(__name__)


def month_key(year: int, month_index: int) -> str:
    """Bucket key "YYYY-MM" for a 0-based month index."""
    return f"{year:04d}-{month_index + 1:02d}"


def trailing_months(today: date_type, count: int = 12) -> List[Tuple[int, int]]:
    """(year, 0-based month) pairs for `count` months ending at today's month, newest first."""
    months = []
    year, month_index = today.year, today.month - 1
    for _ in range(count):
        months.append((year, month_index))
        month_index -= 1
        if month_index < 0:
            month_index = 11
            year -= 1
    return months


def _empty_bucket(year: int, month_index: int) -> Dict:
    return {
        "month_name": f"{calendar.month_name[month_index + 1]} {year}",
        "year": year,
        "month": month_index,
        "total_orders": 0,
        "completed_orders": 0,
        "cancelled_orders": 0,
        "rescheduled_orders": 0,
        "estimated_earnings": 0.0,
    }


def build_monthly_history(
    orders: Iterable[Union[OrderRecord, EnrichedOrder]],
    today: date_type,
    charges_pervisit: Optional[float],
    months: int = 12,
) -> List[MonthlyMetric]:
    """
    Build the monthly order/earnings history, newest month first.

    Args:
        orders: All orders of one worker
        today: Current date; its month is the newest seeded bucket
        charges_pervisit: Earnings credited per completed order (None counts as 0)
        months: Length of the seeded trailing window

    Returns:
        One MonthlyMetric per distinct (year, month), sorted descending.
        The first element is the most recent bucket, which is the current
        month unless an order is dated in the future.
    """
    per_visit = float(charges_pervisit or 0)
    buckets: Dict[str, Dict] = {}

    for year, month_index in trailing_months(today, months):
        buckets[month_key(year, month_index)] = _empty_bucket(year, month_index)

    skipped = 0
    for order in orders:
        if order.date is None:
            skipped += 1
            continue

        key = month_key(order.date.year, order.date.month - 1)
        if key not in buckets:
            buckets[key] = _empty_bucket(order.date.year, order.date.month - 1)

        bucket = buckets[key]
        bucket["total_orders"] += 1

        if order.order_status == OrderStatus.COMPLETED:
            bucket["completed_orders"] += 1
            bucket["estimated_earnings"] += per_visit
        elif order.order_status == OrderStatus.CANCELLED:
            bucket["cancelled_orders"] += 1
        elif order.order_status == OrderStatus.RESCHEDULED:
            bucket["rescheduled_orders"] += 1

    if skipped:
        logger.debug(f"Skipped {skipped} undated orders in monthly history")

    ordered = sorted(buckets.values(), key=lambda b: (b["year"], b["month"]), reverse=True)
    return [MonthlyMetric(**bucket) for bucket in ordered]
