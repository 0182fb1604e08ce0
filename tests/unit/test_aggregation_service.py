"""
Unit tests for AggregationService against an in-memory repository.
"""
from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from proworker.analytics.records import (
    LocationRecord,
    MediaRecord,
    MonthScheduleRecord,
    OrderStatus,
    ReviewRecord,
    TrainingRecord,
    WeekScheduleRecord,
)
from proworker.lib.metrics import get_metrics_collector
from proworker.services.aggregation_service import (
    DEFAULT_CLIENT_NAME,
    NO_CANCELLATION_REASON,
    AggregationService,
    WorkerNotFoundError,
    enrich_order,
    summarize_orders,
)
from tests.factories import make_order, make_worker


DHAKA = LocationRecord(latitude=23.8103, longitude=90.4125)


@pytest.fixture
def service(repository, frozen_clock):
    return AggregationService(repository, clock=frozen_clock)


@pytest.fixture
def populated(repository):
    repository.add_worker(make_worker(1, charges_pervisit=50), DHAKA)
    repository.add_worker(
        make_worker(2, rating=4.8, gender="f"),
        LocationRecord(latitude=23.8203, longitude=90.4125),
    )
    repository.add_worker(make_worker(3, profession="Electrician", rating=3.5))
    repository.orders = [
        make_order(1, 1, OrderStatus.COMPLETED, date(2025, 3, 2), client_name="Rahim", client_gender="male"),
        make_order(2, 1, OrderStatus.COMPLETED, date(2025, 3, 9)),
        make_order(3, 1, OrderStatus.CANCELLED, date(2025, 2, 20)),
        make_order(4, 1, OrderStatus.PENDING, None),
        make_order(5, 1, OrderStatus.ACCEPTED, date(2025, 1, 4)),
        make_order(6, 2, OrderStatus.COMPLETED, date(2025, 3, 1)),
    ]
    repository.reviews[1] = [ReviewRecord(id=1, name="Rahim", comment="Quick and tidy")]
    repository.review_media[1] = [
        MediaRecord(type="image", createdat=datetime(2025, 1, 2, tzinfo=timezone.utc)),
        MediaRecord(type="video", createdat=datetime(2025, 2, 2, tzinfo=timezone.utc)),
    ]
    repository.portfolio[1] = [
        MediaRecord(name="clip", url="v.mp4", type="video", createdat=datetime(2025, 3, 1, tzinfo=timezone.utc)),
        MediaRecord(name="sink", url="a.jpg", type="image", createdat=datetime(2025, 2, 1, tzinfo=timezone.utc)),
    ]
    repository.training[1] = [
        TrainingRecord(id=1, status=True, createdat=datetime(2025, 1, 10, tzinfo=timezone.utc)),
        TrainingRecord(id=2, status=False),
    ]
    repository.catalog_size = 5
    repository.week[1] = WeekScheduleRecord(start_sunday="09:00", end_sunday="17:00")
    repository.month[1] = [MonthScheduleRecord(date=date(2025, 3, 20), note="Family event")]
    return repository


@pytest.mark.unit
def test_missing_worker_raises(service):
    with pytest.raises(WorkerNotFoundError) as exc_info:
        service.build_context(42)

    assert exc_info.value.worker_id == 42
    assert get_metrics_collector().get_counter_value(
        "worker_context_aggregations_total", {"outcome": "not_found"}
    ) == 1


@pytest.mark.unit
def test_bare_worker_degrades_to_empty(repository, service, frozen_clock):
    repository.add_worker(make_worker(1))

    context = service.build_context(1)

    assert context.settings is None
    assert context.location is None
    assert context.orders == ()
    assert context.reviews == ()
    assert context.week_summary == ()
    assert context.media == ()
    assert context.peer_radius_analytics.r50km == 0
    assert context.training_analytics.total == 0
    assert len(context.monthly_history) == 12
    assert context.current_month == context.monthly_history[0]
    assert context.generated_at == frozen_clock.now()
    assert context.analytics.rank.by_score == 1


@pytest.mark.unit
def test_full_context(populated, service):
    context = service.build_context(1)

    assert context.profile.id == 1
    assert context.settings.applanguage == "English"
    assert context.location == DHAKA

    assert context.current_month.completed_orders == 2
    assert context.current_month.estimated_earnings == 100
    assert context.monthly_history[1].cancelled_orders == 1

    assert context.week_summary[0].status == "09:00 to 17:00"
    assert context.month_schedule[0].note == "Family event"

    assert context.peer_radius_analytics.r5km == 1
    assert context.peer_radius_analytics.gender_in_radius == 0
    assert context.analytics.rank.total_workers == 3
    assert context.analytics.profession_stats.total_peers == 2
    assert context.analytics.top_professions[0].profession == "plumber"
    assert context.analytics.top_cities[0].order_count == 6
    assert context.benchmarks.total_workers == 3


@pytest.mark.unit
def test_orders_are_enriched_and_newest_first(populated, service):
    orders = service.build_context(1).orders

    assert [o.id for o in orders] == [2, 1, 3, 5, 4]
    assert orders[1].client_name == "Rahim"
    assert orders[0].client_name == DEFAULT_CLIENT_NAME
    assert orders[0].status_name == "Completed"

    cancelled = orders[2]
    assert cancelled.status_name == "Cancelled"
    assert cancelled.cancellation_reason == NO_CANCELLATION_REASON


@pytest.mark.unit
def test_order_summary_partition(populated, service):
    context = service.build_context(1)
    summary = context.order_summary

    assert summary.total == len(context.orders) == 5
    assert (summary.completed, summary.cancelled, summary.pending, summary.rescheduled) == (2, 1, 1, 0)
    assert summary.completed + summary.cancelled + summary.pending + summary.rescheduled <= summary.total


@pytest.mark.unit
def test_media_and_training_analytics(populated, service):
    context = service.build_context(1)

    assert [m.type for m in context.media] == ["image", "video"]
    assert context.portfolio_analytics.total_images == 1
    assert context.portfolio_analytics.total_videos == 1
    assert context.portfolio_analytics.last_upload == datetime(2025, 3, 1, tzinfo=timezone.utc)

    assert context.review_analytics.total_reviews == 1
    assert context.review_analytics.last_review_video == datetime(2025, 2, 2, tzinfo=timezone.utc)

    assert context.training_analytics.total == 5
    assert context.training_analytics.completed == 1
    assert context.training_analytics.pending == 4
    assert context.training.completed == 1


@pytest.mark.unit
def test_aggregation_is_idempotent(populated, service):
    first = service.build_context(1)
    second = service.build_context(1)

    assert first.model_dump_json() == second.model_dump_json()


@pytest.mark.unit
def test_context_is_immutable(populated, service):
    context = service.build_context(1)
    with pytest.raises(ValidationError):
        context.orders = ()


@pytest.mark.unit
def test_success_is_counted(populated, service):
    service.build_context(1)
    assert get_metrics_collector().get_counter_value(
        "worker_context_aggregations_total", {"outcome": "success"}
    ) == 1


@pytest.mark.unit
def test_unknown_status_has_no_label():
    enriched = enrich_order(make_order(1, 1, 9))
    assert enriched.status_name is None
    assert enriched.cancellation_reason is None


@pytest.mark.unit
def test_cancellation_reason_uses_comment():
    enriched = enrich_order(make_order(1, 1, OrderStatus.CANCELLED, reschedule_comment="Client travelling"))
    assert enriched.cancellation_reason == "Client travelling"


@pytest.mark.unit
def test_summarize_empty():
    assert summarize_orders([]).total == 0
