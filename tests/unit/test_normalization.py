"""
Unit tests for gender and profession normalization.
"""
import pytest

from proworker.analytics.normalization import (
    Gender,
    UNKNOWN_PROFESSION,
    normalize_gender,
    normalize_profession,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw,expected",
    [
        ("M", Gender.MALE),
        ("m", Gender.MALE),
        ("Male", Gender.MALE),
        ("MALE", Gender.MALE),
        (None, Gender.OTHER),
        ("", Gender.OTHER),
        ("f", Gender.FEMALE),
        (" Female ", Gender.FEMALE),
        ("non-binary", Gender.OTHER),
    ],
)
def test_normalize_gender(raw, expected):
    assert normalize_gender(raw) == expected


@pytest.mark.unit
def test_gender_values_are_display_labels():
    assert [g.value for g in Gender] == ["Male", "Female", "Other"]


@pytest.mark.unit
def test_normalize_profession_lowercases_and_trims():
    assert normalize_profession("  Plumber ") == "plumber"
    assert normalize_profession("ELECTRICIAN") == "electrician"


@pytest.mark.unit
@pytest.mark.parametrize("raw", [None, "", "   "])
def test_missing_profession_is_unknown(raw):
    assert normalize_profession(raw) == UNKNOWN_PROFESSION == "unknown"
