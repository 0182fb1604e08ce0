"""
Analytics aggregation engine.

Pure, deterministic functions that turn one worker's records and the peer
population into the pieces of a WorkerContext snapshot.
"""
from proworker.analytics.demand import top_cities, top_professions
from proworker.analytics.geo import distance_km, grid_cell
from proworker.analytics.monthly_history import build_monthly_history
from proworker.analytics.normalization import Gender, normalize_gender, normalize_profession
from proworker.analytics.peer_radius import compute_peer_radius
from proworker.analytics.peer_scoring import rank_worker, score_population
from proworker.analytics.schedule import build_week_summary
from proworker.analytics.snapshot import WorkerContext

__all__ = [
    "Gender",
    "WorkerContext",
    "build_monthly_history",
    "build_week_summary",
    "compute_peer_radius",
    "distance_km",
    "grid_cell",
    "normalize_gender",
    "normalize_profession",
    "rank_worker",
    "score_population",
    "top_cities",
    "top_professions",
]
