"""
Weekly schedule summarizer.
"""
from typing import List, Optional

from proworker.analytics.records import WeekScheduleRecord
from proworker.analytics.snapshot import DaySummary

HOLIDAY = "Holiday"

WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def build_week_summary(week: Optional[WeekScheduleRecord]) -> List[DaySummary]:
    """
    Turn a weekly schedule into seven Sunday-first day statuses.

    A day is "<start> to <end>" only when both times are present; a missing or
    partial pair reads as a holiday. No schedule at all gives an empty list.
    """
    if week is None:
        return []

    summary = []
    for day in WEEKDAYS:
        start = getattr(week, f"start_{day.lower()}")
        end = getattr(week, f"end_{day.lower()}")
        status = f"{start} to {end}" if start and end else HOLIDAY
        summary.append(DaySummary(day=day, status=status))
    return summary
