"""
Unit tests for the weekly schedule summarizer.
"""
import pytest

from proworker.analytics.records import WeekScheduleRecord
from proworker.analytics.schedule import HOLIDAY, WEEKDAYS, build_week_summary


@pytest.mark.unit
def test_sunday_only_schedule():
    week = WeekScheduleRecord(start_sunday="09:00", end_sunday="17:00")

    summary = build_week_summary(week)

    assert len(summary) == 7
    assert summary[0].day == "Sunday"
    assert summary[0].status == "09:00 to 17:00"
    assert all(day.status == HOLIDAY for day in summary[1:])


@pytest.mark.unit
def test_days_are_sunday_first():
    summary = build_week_summary(WeekScheduleRecord())
    assert [d.day for d in summary] == list(WEEKDAYS)
    assert WEEKDAYS[0] == "Sunday" and WEEKDAYS[-1] == "Saturday"


@pytest.mark.unit
def test_partial_pair_is_holiday():
    week = WeekScheduleRecord(start_monday="10:00", end_tuesday="18:00", start_friday="", end_friday="12:00")

    statuses = {d.day: d.status for d in build_week_summary(week)}

    assert statuses["Monday"] == HOLIDAY
    assert statuses["Tuesday"] == HOLIDAY
    assert statuses["Friday"] == HOLIDAY


@pytest.mark.unit
def test_missing_schedule_gives_empty_summary():
    assert build_week_summary(None) == []
