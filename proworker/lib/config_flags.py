"""
Configuration for the analytics engine.

Provides centralized, overridable tuning for:
- Peer radius bands (km) and the reference band for profession/gender matches
- Composite score weights and clamps
- Trailing window length for monthly history
- Top-N limits for demand rollups
"""
from typing import Optional, Tuple
from pydantic import BaseModel, Field, model_validator

from proworker.lib.logging import get_logger


logger = get_logger(__name__)


class AnalyticsConfig(BaseModel):
    """
    Tuning constants of the aggregation engine.

    Defaults reproduce the production formulas:
    - composite = 0.6 * rating score + 0.4 * efficiency score
    - rating score clamped to [0, 130], efficiency to [0, 100]
    - workers without orders get a neutral efficiency of 50
    """

    radius_bands_km: Tuple[float, float, float, float] = Field(
        default=(1.0, 5.0, 10.0, 50.0),
        description="Distance thresholds for r1km / r5km / r10km / r50km"
    )
    reference_band_km: float = Field(
        default=5.0,
        gt=0,
        description="Band inside which same-profession and same-gender peers are counted"
    )

    rating_weight: float = Field(default=0.6, ge=0, le=1)
    efficiency_weight: float = Field(default=0.4, ge=0, le=1)
    rating_score_max: float = Field(default=130.0, gt=0)
    efficiency_score_max: float = Field(default=100.0, gt=0)
    neutral_efficiency_score: float = Field(
        default=50.0,
        ge=0,
        le=100,
        description="Efficiency score assigned to workers with no orders"
    )

    trailing_months: int = Field(
        default=12,
        ge=1,
        le=60,
        description="Months pre-seeded in the monthly history, ending at the current month"
    )
    top_professions_limit: int = Field(default=5, ge=1, le=50)
    top_cities_limit: int = Field(default=10, ge=1, le=100)
    grid_precision: int = Field(
        default=1,
        ge=0,
        le=3,
        description="Decimal places of the lat/lng grid cell (1 = 0.1 degree)"
    )

    @model_validator(mode="after")
    def _check_bands(self) -> "AnalyticsConfig":
        if list(self.radius_bands_km) != sorted(self.radius_bands_km):
            raise ValueError("radius_bands_km must be ascending")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "radius_bands_km": [1, 5, 10, 50],
                "reference_band_km": 5,
                "rating_weight": 0.6,
                "efficiency_weight": 0.4,
                "trailing_months": 12,
                "top_professions_limit": 5,
                "top_cities_limit": 10,
            }
        }


# Global configuration instance (can be overridden)
_analytics_config: Optional[AnalyticsConfig] = None


def get_analytics_config() -> AnalyticsConfig:
    """
    Get analytics configuration.

    Returns:
        AnalyticsConfig instance with current settings
    """
    global _analytics_config
    if _analytics_config is None:
        _analytics_config = AnalyticsConfig()
        logger.info("Initialized default analytics configuration")
    return _analytics_config


def set_analytics_config(config: AnalyticsConfig) -> None:
    """Override analytics configuration."""
    global _analytics_config
    _analytics_config = config
    logger.info("Updated analytics configuration", extra={
        "radius_bands_km": list(config.radius_bands_km),
        "trailing_months": config.trailing_months,
    })


def reset_all_configs() -> None:
    """Reset all configurations to defaults (useful for testing)."""
    global _analytics_config
    _analytics_config = None
    logger.info("Reset all configurations to defaults")
