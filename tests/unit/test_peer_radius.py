"""
Unit tests for peer radius counts.
"""
import random

import pytest

from proworker.analytics.peer_radius import compute_peer_radius
from proworker.analytics.records import LocationRecord, PeerLocation
from proworker.analytics.snapshot import PeerRadiusAnalytics
from proworker.lib.config_flags import AnalyticsConfig
from tests.factories import make_worker


HOME = LocationRecord(latitude=23.8103, longitude=90.4125)


def _north_of_home(worker_id, degrees):
    return PeerLocation(worker_id=worker_id, latitude=HOME.latitude + degrees, longitude=HOME.longitude)


@pytest.fixture
def target():
    return make_worker(1, profession="Plumber", gender="male")


@pytest.fixture
def workers(target):
    return [
        target,
        make_worker(2, profession="plumber", gender="m"),
        make_worker(3, profession="Electrician", gender="female"),
        make_worker(4, profession="Plumber", gender="male"),
        make_worker(5, profession="Plumber", gender="male"),
        make_worker(6, profession="Plumber", gender="male"),
    ]


@pytest.mark.unit
def test_band_counts(target, workers):
    locations = [
        PeerLocation(worker_id=1, latitude=HOME.latitude, longitude=HOME.longitude),
        _north_of_home(2, 0.004),   # ~0.4 km
        _north_of_home(3, 0.03),    # ~3.3 km
        _north_of_home(4, 0.08),    # ~8.9 km
        _north_of_home(5, 0.3),     # ~33 km
        _north_of_home(6, 1.0),     # ~111 km
    ]

    result = compute_peer_radius(target, HOME, locations, workers)

    assert (result.r1km, result.r5km, result.r10km, result.r50km) == (1, 2, 3, 4)
    assert result.profession_in_radius == 1
    assert result.gender_in_radius == 1


@pytest.mark.unit
def test_unresolvable_peers_are_skipped(target, workers):
    locations = [
        PeerLocation(worker_id=None, latitude=HOME.latitude, longitude=HOME.longitude),
        PeerLocation(worker_id=404, latitude=HOME.latitude, longitude=HOME.longitude),
    ]
    assert compute_peer_radius(target, HOME, locations, workers) == PeerRadiusAnalytics()


@pytest.mark.unit
def test_missing_target_location_is_all_zero(target, workers):
    locations = [_north_of_home(2, 0.001)]
    assert compute_peer_radius(target, None, locations, workers) == PeerRadiusAnalytics()


@pytest.mark.unit
def test_custom_reference_band(target, workers):
    config = AnalyticsConfig(reference_band_km=10)
    locations = [_north_of_home(4, 0.08)]

    result = compute_peer_radius(target, HOME, locations, workers, config)

    assert result.r5km == 0
    assert result.profession_in_radius == 1


@pytest.mark.unit
def test_bands_are_monotonic_for_random_populations(target):
    rng = random.Random(11)
    for _ in range(20):
        workers = [target] + [make_worker(i) for i in range(2, 60)]
        locations = [
            PeerLocation(
                worker_id=w.id,
                latitude=HOME.latitude + rng.uniform(-0.6, 0.6),
                longitude=HOME.longitude + rng.uniform(-0.6, 0.6),
            )
            for w in workers[1:]
        ]

        r = compute_peer_radius(target, HOME, locations, workers)

        assert r.r1km <= r.r5km <= r.r10km <= r.r50km <= len(locations)
