"""
Peer scoring engine.

Scores every worker in the population with a composite of rating and
completion efficiency, then places the target worker:

    rating_score     = clamp(rating / population_avg_rating * 100, 0, 130)
    efficiency_score = clamp((completed - non_completed) / total * 100, 0, 100)
                       (50 for workers without orders)
    composite        = 0.6 * rating_score + 0.4 * efficiency_score

Ranks are 1-based. Sorting is stable, so ties keep population order; the
repository fetches the population ordered by id to make that reproducible.
"""
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from proworker.analytics.geo import round_half_up
from proworker.analytics.normalization import Gender, normalize_gender, normalize_profession
from proworker.analytics.records import OrderRecord, OrderStatus, WorkerRecord
from proworker.analytics.snapshot import (
    FormulaScores,
    GenderDistribution,
    GenderStats,
    ProfessionStats,
    RankMetrics,
    SystemBenchmarks,
)
from proworker.lib.config_flags import AnalyticsConfig, get_analytics_config


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


@dataclass(frozen=True)
class PeerScore:
    """Transient per-worker score used only while ranking."""
    worker_id: int
    score: float
    rating_score: float
    efficiency_score: float
    order_count: int
    gender: Gender
    profession: str


@dataclass(frozen=True)
class PeerRanking:
    """Everything the orchestrator needs from the scoring pass."""
    scores: FormulaScores = field(default_factory=FormulaScores)
    rank: RankMetrics = field(default_factory=RankMetrics)
    gender_stats: GenderStats = field(default_factory=GenderStats)
    profession_stats: ProfessionStats = field(default_factory=ProfessionStats)
    benchmarks: SystemBenchmarks = field(default_factory=SystemBenchmarks)


def _rating(worker: WorkerRecord) -> float:
    return float(worker.rating or 0)


def score_population(
    workers: Sequence[WorkerRecord],
    orders: Sequence[OrderRecord],
    config: Optional[AnalyticsConfig] = None,
) -> List[PeerScore]:
    """Composite score for every population member, in population order."""
    if not workers:
        return []
    config = config or get_analytics_config()

    total_orders: Counter = Counter()
    completed_orders: Counter = Counter()
    for order in orders:
        total_orders[order.worker_id] += 1
        if order.order_status == OrderStatus.COMPLETED:
            completed_orders[order.worker_id] += 1

    avg_rating = sum(_rating(w) for w in workers) / len(workers)

    scores = []
    for worker in workers:
        if avg_rating > 0:
            rating_score = clamp(_rating(worker) / avg_rating * 100, 0, config.rating_score_max)
        else:
            rating_score = 0.0

        total = total_orders[worker.id]
        if total > 0:
            completed = completed_orders[worker.id]
            non_completed = total - completed
            efficiency_score = clamp(
                (completed - non_completed) / total * 100, 0, config.efficiency_score_max
            )
        else:
            efficiency_score = config.neutral_efficiency_score

        scores.append(PeerScore(
            worker_id=worker.id,
            score=config.rating_weight * rating_score + config.efficiency_weight * efficiency_score,
            rating_score=rating_score,
            efficiency_score=efficiency_score,
            order_count=total,
            gender=normalize_gender(worker.gender),
            profession=normalize_profession(worker.profession),
        ))
    return scores


def _position(ranked: Sequence[PeerScore], worker_id: int) -> Optional[int]:
    for index, entry in enumerate(ranked):
        if entry.worker_id == worker_id:
            return index + 1
    return None


def rank_worker(
    target: WorkerRecord,
    workers: Sequence[WorkerRecord],
    orders: Sequence[OrderRecord],
    config: Optional[AnalyticsConfig] = None,
) -> PeerRanking:
    """
    Place the target worker within the population.

    Args:
        target: The worker being profiled
        workers: Whole worker population (should include the target)
        orders: Orders of the whole population

    Returns:
        PeerRanking with ranks, percentile, profession/gender peer stats and
        system-wide benchmarks. An empty population yields the all-default
        ranking; a target missing from the population gets None ranks.
    """
    if not workers:
        return PeerRanking()

    population_size = len(workers)
    my_profession = normalize_profession(target.profession)
    my_gender = normalize_gender(target.gender)

    # Same-profession peers (target included)
    peers = [w for w in workers if normalize_profession(w.profession) == my_profession]
    distribution: Dict[str, int] = {g.value: 0 for g in Gender}
    for peer in peers:
        distribution[normalize_gender(peer.gender).value] += 1
    same_gender_peers = [p for p in peers if normalize_gender(p.gender) == my_gender]

    profession_avg = sum(_rating(p) for p in peers) / (len(peers) or 1)

    benchmarks = SystemBenchmarks(
        avg_rating=round(sum(_rating(w) for w in workers) / population_size, 2),
        avg_hourly_rate=round_half_up(
            sum(float(w.charges_perhour or 0) for w in workers) / population_size
        ),
        total_workers=population_size,
    )

    population_scores = score_population(workers, orders, config)
    by_score = sorted(population_scores, key=lambda s: s.score, reverse=True)
    by_orders = sorted(population_scores, key=lambda s: s.order_count, reverse=True)

    rank_by_score = _position(by_score, target.id)
    rank_by_orders = _position(by_orders, target.id)

    gender_group = [
        s for s in by_score if s.profession == my_profession and s.gender == my_gender
    ]
    rank_in_gender = _position(gender_group, target.id)

    percentile = 0
    own = None
    if rank_by_score is not None:
        percentile = int(clamp(
            round_half_up((population_size - rank_by_score) / population_size * 100), 0, 100
        ))
        own = by_score[rank_by_score - 1]

    scores = FormulaScores(
        rating_quality=round(own.rating_score, 2) if own else 0.0,
        order_efficiency=round(own.efficiency_score, 2) if own else 0.0,
        overall_performance_score=round(own.score, 2) if own else 0.0,
        percentile_rank=percentile,
    )

    return PeerRanking(
        scores=scores,
        rank=RankMetrics(
            by_score=rank_by_score,
            by_orders=rank_by_orders,
            total_workers=population_size,
        ),
        gender_stats=GenderStats(
            distribution=GenderDistribution(**distribution),
            total_peers=len(peers),
            my_rank_in_gender=rank_in_gender,
            total_gender_peers=len(same_gender_peers),
        ),
        profession_stats=ProfessionStats(
            avg_rating=round(profession_avg, 2),
            total_peers=len(peers),
        ),
        benchmarks=benchmarks,
    )
