"""
Geographic helpers: great-circle distance and grid-cell snapping.
"""
import math
from decimal import Decimal, ROUND_HALF_DOWN, ROUND_HALF_UP
from typing import Tuple

EARTH_RADIUS_KM = 6371.0


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Haversine distance between two coordinates in kilometres.

    Symmetric and 0 for identical points. Inputs are realistic local
    coordinates, so antipodal precision is not a concern here.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def grid_cell(latitude: float, longitude: float, precision: int = 1) -> Tuple[float, float]:
    """
    Snap a coordinate to its grid cell (precision=1 gives 0.1-degree cells).

    Exact worker coordinates must not be reported past this point.
    """
    return round_half_up(latitude, precision), round_half_up(longitude, precision)


def round_half_up(value: float, precision: int = 0) -> float:
    """
    Round with halves going toward positive infinity (12.25 -> 12.3, -12.25 -> -12.2).

    round() rounds halves to even, which would split grid cells and shave
    a point off percentages landing on .5.
    """
    quantum = Decimal(1).scaleb(-precision)
    number = Decimal(repr(value))
    mode = ROUND_HALF_UP if number >= 0 else ROUND_HALF_DOWN
    return float(number.quantize(quantum, rounding=mode))
