"""
Demand rollups: which professions and which areas attract the most orders.
"""
from collections import Counter
from typing import Dict, List, Optional, Sequence, Set, Tuple

from proworker.analytics.geo import grid_cell
from proworker.analytics.normalization import normalize_profession
from proworker.analytics.records import OrderRecord, PeerLocation, WorkerRecord
from proworker.analytics.snapshot import CityDemand, ProfessionDemand
from proworker.lib.config_flags import AnalyticsConfig, get_analytics_config


def top_professions(
    orders: Sequence[OrderRecord],
    workers: Sequence[WorkerRecord],
    limit: Optional[int] = None,
) -> List[ProfessionDemand]:
    """
    Professions ranked by order volume (ties keep first-seen order).

    Orders whose worker is not in the population are ignored.
    """
    if limit is None:
        limit = get_analytics_config().top_professions_limit
    workers_by_id = {w.id: w for w in workers}

    order_counts: Dict[str, int] = {}
    worker_ids: Dict[str, Set[int]] = {}
    for order in orders:
        worker = workers_by_id.get(order.worker_id)
        if worker is None:
            continue
        profession = normalize_profession(worker.profession)
        order_counts[profession] = order_counts.get(profession, 0) + 1
        worker_ids.setdefault(profession, set()).add(worker.id)

    demand = [
        ProfessionDemand(
            profession=profession,
            order_count=count,
            worker_count=len(worker_ids[profession]),
        )
        for profession, count in order_counts.items()
    ]
    demand.sort(key=lambda d: d.order_count, reverse=True)
    return demand[:limit]


def top_cities(
    peer_locations: Sequence[PeerLocation],
    orders: Sequence[OrderRecord],
    limit: Optional[int] = None,
    config: Optional[AnalyticsConfig] = None,
) -> List[CityDemand]:
    """
    Grid cells ranked by the order volume of the workers located in them.

    Each location is snapped to its 0.1-degree cell; only cell coordinates
    are returned. Locations without an owning worker are ignored.
    """
    config = config or get_analytics_config()
    if limit is None:
        limit = config.top_cities_limit

    orders_per_worker: Counter = Counter(order.worker_id for order in orders)

    cells: Dict[Tuple[float, float], Dict[str, int]] = {}
    for location in peer_locations:
        if location.worker_id is None:
            continue
        key = grid_cell(location.latitude, location.longitude, config.grid_precision)
        cell = cells.setdefault(key, {"order_count": 0, "worker_count": 0})
        cell["worker_count"] += 1
        cell["order_count"] += orders_per_worker[location.worker_id]

    demand = [
        CityDemand(latitude=lat, longitude=lng, **counts)
        for (lat, lng), counts in cells.items()
    ]
    demand.sort(key=lambda d: d.order_count, reverse=True)
    return demand[:limit]
