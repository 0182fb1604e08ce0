"""
WorkerContext - the immutable analytics snapshot handed to the assistant.

Built fresh per request by AggregationService and serialized to JSON when it
crosses into the prompt layer. Unknown ranks are None, never a string sentinel.
"""
from datetime import date as date_type, datetime
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from proworker.analytics.records import (
    LocationRecord,
    MediaRecord,
    MonthScheduleRecord,
    ReviewRecord,
    WeekScheduleRecord,
    WorkerRecord,
    WorkerSettingsRecord,
)


class Snapshot(BaseModel):
    """Base for frozen snapshot parts."""

    model_config = ConfigDict(frozen=True)


class EnrichedOrder(Snapshot):
    """An order with its status label and client fields resolved."""
    id: int
    client_id: Optional[int] = None
    order_status: int
    status_name: Optional[str] = None
    date: Optional[date_type] = None
    time: Optional[str] = None
    reschedule_comment: Optional[str] = None
    cancellation_reason: Optional[str] = None
    client_name: str = "Client"
    client_gender: Optional[str] = None


class DaySummary(Snapshot):
    day: str
    status: str


class MonthlyMetric(Snapshot):
    month_name: str
    year: int
    month: int = Field(ge=0, le=11, description="0-based month index")
    total_orders: int = 0
    completed_orders: int = 0
    cancelled_orders: int = 0
    rescheduled_orders: int = 0
    estimated_earnings: float = 0.0


class OrderSummary(Snapshot):
    total: int = 0
    completed: int = 0
    cancelled: int = 0
    pending: int = 0
    rescheduled: int = 0


class PortfolioAnalytics(Snapshot):
    total_images: int = 0
    total_videos: int = 0
    last_upload: Optional[datetime] = None


class ReviewAnalytics(Snapshot):
    total_reviews: int = 0
    total_review_images: int = 0
    total_review_videos: int = 0
    last_review_image: Optional[datetime] = None
    last_review_video: Optional[datetime] = None


class TrainingAnalytics(Snapshot):
    total: int = 0
    completed: int = 0
    pending: int = 0
    last_completed: Optional[datetime] = None


class TrainingSummary(Snapshot):
    total: int = 0
    completed: int = 0


class PeerRadiusAnalytics(Snapshot):
    r1km: int = 0
    r5km: int = 0
    r10km: int = 0
    r50km: int = 0
    profession_in_radius: int = 0
    gender_in_radius: int = 0


class SystemBenchmarks(Snapshot):
    avg_rating: float = 0.0
    avg_hourly_rate: float = 0.0
    total_workers: int = 0


class FormulaScores(Snapshot):
    """The target worker's own scores from the peer scoring pass."""
    rating_quality: float = Field(default=0.0, ge=0)
    order_efficiency: float = Field(default=0.0, ge=0, le=100)
    overall_performance_score: float = Field(default=0.0, ge=0)
    percentile_rank: int = Field(default=0, ge=0, le=100)


class RankMetrics(Snapshot):
    by_score: Optional[int] = None
    by_orders: Optional[int] = None
    total_workers: int = 0


class GenderDistribution(Snapshot):
    Male: int = 0
    Female: int = 0
    Other: int = 0


class GenderStats(Snapshot):
    distribution: GenderDistribution = GenderDistribution()
    total_peers: int = 0
    my_rank_in_gender: Optional[int] = None
    total_gender_peers: int = 0


class ProfessionStats(Snapshot):
    avg_rating: float = 0.0
    total_peers: int = 0


class ProfessionDemand(Snapshot):
    profession: str
    order_count: int
    worker_count: int


class CityDemand(Snapshot):
    """Demand in one 0.1-degree grid cell. Coordinates are the cell, not a worker."""
    latitude: float
    longitude: float
    order_count: int = 0
    worker_count: int = 0


class AdvancedAnalytics(Snapshot):
    scores: FormulaScores = FormulaScores()
    rank: RankMetrics = RankMetrics()
    top_cities: Tuple[CityDemand, ...] = ()
    top_professions: Tuple[ProfessionDemand, ...] = ()
    gender_stats: GenderStats = GenderStats()
    profession_stats: ProfessionStats = ProfessionStats()


class WorkerContext(Snapshot):
    """Complete per-worker snapshot."""
    profile: WorkerRecord
    settings: Optional[WorkerSettingsRecord] = None
    location: Optional[LocationRecord] = None

    orders: Tuple[EnrichedOrder, ...] = ()
    reviews: Tuple[ReviewRecord, ...] = ()

    week_schedule: Optional[WeekScheduleRecord] = None
    week_summary: Tuple[DaySummary, ...] = ()
    month_schedule: Tuple[MonthScheduleRecord, ...] = ()

    monthly_history: Tuple[MonthlyMetric, ...]
    current_month: MonthlyMetric

    media: Tuple[MediaRecord, ...] = ()

    portfolio_analytics: PortfolioAnalytics = PortfolioAnalytics()
    review_analytics: ReviewAnalytics = ReviewAnalytics()
    training_analytics: TrainingAnalytics = TrainingAnalytics()
    peer_radius_analytics: PeerRadiusAnalytics = PeerRadiusAnalytics()

    benchmarks: SystemBenchmarks = SystemBenchmarks()
    analytics: AdvancedAnalytics = AdvancedAnalytics()

    order_summary: OrderSummary = OrderSummary()
    training: TrainingSummary = TrainingSummary()

    generated_at: datetime
