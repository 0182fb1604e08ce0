"""
Peer radius engine: how many workers live around the target.
"""
from typing import Optional, Sequence

from proworker.analytics.geo import distance_km
from proworker.analytics.normalization import normalize_gender, normalize_profession
from proworker.analytics.records import LocationRecord, PeerLocation, WorkerRecord
from proworker.analytics.snapshot import PeerRadiusAnalytics
from proworker.lib.config_flags import AnalyticsConfig, get_analytics_config


def compute_peer_radius(
    target: WorkerRecord,
    target_location: Optional[LocationRecord],
    peer_locations: Sequence[PeerLocation],
    workers: Sequence[WorkerRecord],
    config: Optional[AnalyticsConfig] = None,
) -> PeerRadiusAnalytics:
    """
    Count peers inside each radius band around the target's location.

    Bands are independent thresholds on the same distance, so a peer 0.5 km
    away counts in every band and r1km <= r5km <= r10km <= r50km always holds.
    Inside the reference band (5 km) peers sharing the target's normalized
    profession or gender are counted too.

    Without a target location nothing is computed and all counts are 0.
    Locations without an owner, owned by the target, or whose owner has no
    worker record are skipped.
    """
    if target_location is None:
        return PeerRadiusAnalytics()

    config = config or get_analytics_config()
    band_1, band_5, band_10, band_50 = config.radius_bands_km
    workers_by_id = {w.id: w for w in workers}
    my_profession = normalize_profession(target.profession)
    my_gender = normalize_gender(target.gender)

    counts = dict(r1km=0, r5km=0, r10km=0, r50km=0, profession_in_radius=0, gender_in_radius=0)

    for location in peer_locations:
        if location.worker_id is None or location.worker_id == target.id:
            continue
        peer = workers_by_id.get(location.worker_id)
        if peer is None:
            continue

        distance = distance_km(
            target_location.latitude,
            target_location.longitude,
            location.latitude,
            location.longitude,
        )

        if distance <= band_1:
            counts["r1km"] += 1
        if distance <= band_5:
            counts["r5km"] += 1
        if distance <= band_10:
            counts["r10km"] += 1
        if distance <= band_50:
            counts["r50km"] += 1

        if distance <= config.reference_band_km:
            if normalize_profession(peer.profession) == my_profession:
                counts["profession_in_radius"] += 1
            if normalize_gender(peer.gender) == my_gender:
                counts["gender_in_radius"] += 1

    return PeerRadiusAnalytics(**counts)
