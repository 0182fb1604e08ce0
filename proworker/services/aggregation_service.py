"""
Aggregation Service - builds the WorkerContext snapshot for one worker.

Flow:
1. Fetch the worker profile (the only mandatory row)
2. Fetch every secondary resource; absent data degrades to empty/zero
3. Enrich orders with status labels and client fields
4. Run the analytics engine (schedule, monthly history, peer scoring,
   peer radius, demand rollups)
5. Assemble an immutable WorkerContext

Each call is independent: no state is shared between requests.
"""
from datetime import date as date_type, datetime
from typing import List, Optional, Sequence

from proworker.analytics.demand import top_cities, top_professions
from proworker.analytics.monthly_history import build_monthly_history
from proworker.analytics.peer_radius import compute_peer_radius
from proworker.analytics.peer_scoring import rank_worker
from proworker.analytics.records import (
    MediaRecord,
    OrderRecord,
    OrderStatus,
    TrainingRecord,
    status_label,
)
from proworker.analytics.schedule import build_week_summary
from proworker.analytics.snapshot import (
    AdvancedAnalytics,
    EnrichedOrder,
    OrderSummary,
    PortfolioAnalytics,
    ReviewAnalytics,
    TrainingAnalytics,
    TrainingSummary,
    WorkerContext,
)
from proworker.lib.clock import Clock, system_clock
from proworker.lib.config_flags import AnalyticsConfig, get_analytics_config
from proworker.lib.logging import get_logger
from proworker.lib.metrics import get_metrics_collector
from proworker.services.worker_repository import WorkerDataRepository

logger = get_logger(__name__)


DEFAULT_CLIENT_NAME = "Client"
NO_CANCELLATION_REASON = "No reason provided"


class WorkerNotFoundError(ValueError):
    """The core worker profile row does not exist."""

    def __init__(self, worker_id: int):
        self.worker_id = worker_id
        super().__init__(f"Worker {worker_id} not found")


def enrich_order(order: OrderRecord) -> EnrichedOrder:
    """Attach status label and denormalized client fields to an order."""
    cancellation_reason = None
    if order.order_status == OrderStatus.CANCELLED:
        cancellation_reason = order.reschedule_comment or NO_CANCELLATION_REASON

    return EnrichedOrder(
        id=order.id,
        client_id=order.client_id,
        order_status=order.order_status,
        status_name=status_label(order.order_status),
        date=order.date,
        time=order.time,
        reschedule_comment=order.reschedule_comment,
        cancellation_reason=cancellation_reason,
        client_name=order.client_name or DEFAULT_CLIENT_NAME,
        client_gender=order.client_gender,
    )


def summarize_orders(orders: Sequence[EnrichedOrder]) -> OrderSummary:
    """Totals per status bucket. Accepted orders count toward total only."""
    def count(status: OrderStatus) -> int:
        return sum(1 for o in orders if o.order_status == status)

    return OrderSummary(
        total=len(orders),
        completed=count(OrderStatus.COMPLETED),
        cancelled=count(OrderStatus.CANCELLED),
        pending=count(OrderStatus.PENDING),
        rescheduled=count(OrderStatus.RESCHEDULED),
    )


def _latest(values) -> Optional[datetime]:
    present = [v for v in values if v is not None]
    return max(present) if present else None


def _reverse_chronological(orders: List[EnrichedOrder]) -> List[EnrichedOrder]:
    # Undated orders sink to the end; ties keep fetch order
    return sorted(orders, key=lambda o: o.date or date_type.min, reverse=True)


class AggregationService:
    """
    Service composing raw worker data and the analytics engine into a snapshot.
    """

    def __init__(
        self,
        repository: WorkerDataRepository,
        clock: Optional[Clock] = None,
        config: Optional[AnalyticsConfig] = None,
    ):
        """
        Args:
            repository: Data source for worker and population rows
            clock: Time source for month seeding (defaults to the system clock)
            config: Analytics tuning (defaults to the global configuration)
        """
        self.repository = repository
        self.clock = clock or system_clock
        self.config = config or get_analytics_config()

    def build_context(self, worker_id: int) -> WorkerContext:
        """
        Aggregate everything known about a worker into a WorkerContext.

        Args:
            worker_id: Worker primary key

        Returns:
            A freshly built, immutable WorkerContext

        Raises:
            WorkerNotFoundError: If the worker profile row does not exist
        """
        logger.info(
            "Building worker context",
            extra={"worker_id": worker_id}
        )
        metrics = get_metrics_collector()
        repo = self.repository

        worker = repo.get_worker(worker_id)
        if worker is None:
            logger.warning(
                "Worker profile not found",
                extra={"worker_id": worker_id}
            )
            metrics.increment_aggregations(outcome="not_found")
            raise WorkerNotFoundError(worker_id)

        settings = repo.get_settings(worker_id)
        location = repo.get_location(settings.id) if settings else None

        orders = _reverse_chronological(
            [enrich_order(o) for o in repo.get_orders(worker_id) or []]
        )
        reviews = repo.get_reviews(worker_id) or []
        review_media = repo.get_review_media(worker_id) or []
        portfolio_media = repo.get_portfolio_media(worker_id) or []
        training_records = repo.get_training(worker_id) or []
        catalog_size = repo.count_training_catalog() or 0
        week_schedule = repo.get_week_schedule(worker_id)
        month_schedule = repo.get_month_schedule(worker_id) or []

        all_workers = repo.get_all_workers() or []
        all_orders = repo.get_all_orders() or []
        all_locations = repo.get_all_locations() or []

        now = self.clock.now()
        monthly_history = build_monthly_history(
            orders=orders,
            today=now.date(),
            charges_pervisit=worker.charges_pervisit,
            months=self.config.trailing_months,
        )

        ranking = rank_worker(worker, all_workers, all_orders, self.config)
        peer_radius = compute_peer_radius(
            worker, location, all_locations, all_workers, self.config
        )
        if all_workers:
            professions = top_professions(
                all_orders, all_workers, self.config.top_professions_limit
            )
            cities = top_cities(
                all_locations, all_orders, self.config.top_cities_limit, self.config
            )
        else:
            professions, cities = [], []

        context = WorkerContext(
            profile=worker,
            settings=settings,
            location=location,
            orders=orders,
            reviews=reviews,
            week_schedule=week_schedule,
            week_summary=build_week_summary(week_schedule),
            month_schedule=month_schedule,
            monthly_history=monthly_history,
            current_month=monthly_history[0],
            media=self._portfolio_listing(portfolio_media),
            portfolio_analytics=self._portfolio_analytics(portfolio_media),
            review_analytics=self._review_analytics(reviews, review_media),
            training_analytics=self._training_analytics(training_records, catalog_size),
            peer_radius_analytics=peer_radius,
            benchmarks=ranking.benchmarks,
            analytics=AdvancedAnalytics(
                scores=ranking.scores,
                rank=ranking.rank,
                top_cities=cities,
                top_professions=professions,
                gender_stats=ranking.gender_stats,
                profession_stats=ranking.profession_stats,
            ),
            order_summary=summarize_orders(orders),
            training=TrainingSummary(
                total=catalog_size,
                completed=sum(1 for t in training_records if t.status),
            ),
            generated_at=now,
        )

        metrics.increment_aggregations(outcome="success")
        logger.info(
            "Worker context built",
            extra={
                "worker_id": worker_id,
                "orders": len(orders),
                "population": len(all_workers),
                "rank_by_score": ranking.rank.by_score,
                "has_location": location is not None,
            }
        )
        return context

    @staticmethod
    def _portfolio_listing(media: Sequence[MediaRecord]) -> List[MediaRecord]:
        """Images first, then videos."""
        return (
            [m for m in media if m.type == "image"]
            + [m for m in media if m.type == "video"]
        )

    @staticmethod
    def _portfolio_analytics(media: Sequence[MediaRecord]) -> PortfolioAnalytics:
        return PortfolioAnalytics(
            total_images=sum(1 for m in media if m.type == "image"),
            total_videos=sum(1 for m in media if m.type == "video"),
            last_upload=_latest(m.createdat for m in media),
        )

    @staticmethod
    def _review_analytics(reviews, review_media: Sequence[MediaRecord]) -> ReviewAnalytics:
        images = [m for m in review_media if m.type == "image"]
        videos = [m for m in review_media if m.type == "video"]
        return ReviewAnalytics(
            total_reviews=len(reviews),
            total_review_images=len(images),
            total_review_videos=len(videos),
            last_review_image=_latest(m.createdat for m in images),
            last_review_video=_latest(m.createdat for m in videos),
        )

    @staticmethod
    def _training_analytics(
        records: Sequence[TrainingRecord],
        catalog_size: int,
    ) -> TrainingAnalytics:
        completed = [t for t in records if t.status]
        return TrainingAnalytics(
            total=catalog_size,
            completed=len(completed),
            pending=max(catalog_size - len(completed), 0),
            last_completed=_latest(t.createdat for t in completed),
        )
