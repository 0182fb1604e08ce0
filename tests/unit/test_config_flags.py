"""
Unit tests for config_flags module.
"""
import pytest
from pydantic import ValidationError

from proworker.lib.config_flags import (
    AnalyticsConfig,
    get_analytics_config,
    reset_all_configs,
    set_analytics_config,
)


@pytest.mark.unit
def test_analytics_config_defaults():
    """Defaults reproduce the production formulas."""
    config = AnalyticsConfig()

    assert config.radius_bands_km == (1.0, 5.0, 10.0, 50.0)
    assert config.reference_band_km == 5.0
    assert config.rating_weight == 0.6
    assert config.efficiency_weight == 0.4
    assert config.rating_score_max == 130
    assert config.neutral_efficiency_score == 50
    assert config.trailing_months == 12
    assert config.top_professions_limit == 5
    assert config.top_cities_limit == 10
    assert config.grid_precision == 1


@pytest.mark.unit
def test_bands_must_be_ascending():
    with pytest.raises(ValidationError):
        AnalyticsConfig(radius_bands_km=(5, 1, 10, 50))


@pytest.mark.unit
def test_range_validation():
    with pytest.raises(ValidationError):
        AnalyticsConfig(trailing_months=0)
    with pytest.raises(ValidationError):
        AnalyticsConfig(rating_weight=1.5)


@pytest.mark.unit
def test_get_returns_singleton():
    assert get_analytics_config() is get_analytics_config()


@pytest.mark.unit
def test_set_and_reset():
    custom = AnalyticsConfig(top_cities_limit=3)
    set_analytics_config(custom)
    assert get_analytics_config().top_cities_limit == 3

    reset_all_configs()
    assert get_analytics_config().top_cities_limit == 10


@pytest.mark.unit
def test_global_config_drives_demand_limits():
    from proworker.analytics.demand import top_professions
    from tests.factories import make_order, make_worker

    set_analytics_config(AnalyticsConfig(top_professions_limit=1))
    workers = [make_worker(1, profession="a"), make_worker(2, profession="b")]
    orders = [make_order(1, 1, 3), make_order(2, 2, 3)]

    assert len(top_professions(orders, workers)) == 1
