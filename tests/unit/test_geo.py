"""
Unit tests for distance and grid-cell helpers.
"""
import pytest

from proworker.analytics.geo import EARTH_RADIUS_KM, distance_km, grid_cell, round_half_up


@pytest.mark.unit
def test_distance_identical_points_is_zero():
    assert distance_km(23.8103, 90.4125, 23.8103, 90.4125) == 0


@pytest.mark.unit
def test_distance_is_symmetric():
    a = (23.8103, 90.4125)
    b = (23.7509, 90.3935)
    assert distance_km(*a, *b) == pytest.approx(distance_km(*b, *a))


@pytest.mark.unit
def test_one_degree_of_latitude():
    """One degree along a meridian is R * pi / 180."""
    expected = EARTH_RADIUS_KM * 3.141592653589793 / 180
    assert distance_km(10.0, 45.0, 11.0, 45.0) == pytest.approx(expected, rel=1e-9)


@pytest.mark.unit
def test_short_distance_within_city():
    # Roughly 6.9 km between two Dhaka neighbourhoods
    d = distance_km(23.8103, 90.4125, 23.7509, 90.3935)
    assert 6.5 < d < 7.5


@pytest.mark.unit
def test_grid_cell_rounds_to_one_decimal():
    assert grid_cell(23.7612, 90.4381) == (23.8, 90.4)


@pytest.mark.unit
def test_grid_cell_rounds_half_up():
    assert grid_cell(12.25, 0.05) == (12.3, 0.1)


@pytest.mark.unit
def test_grid_cell_precision_argument():
    assert grid_cell(23.7612, 90.4381, precision=2) == (23.76, 90.44)


@pytest.mark.unit
def test_grid_cell_negative_halves_round_toward_positive():
    assert grid_cell(-12.25, -90.35) == (-12.2, -90.3)


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [(12.5, 13), (-12.5, -12), (2.5, 3), (0.49, 0)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected
