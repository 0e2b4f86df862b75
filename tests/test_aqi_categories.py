import pytest

from airaware.aqi_categories import classify
from airaware.domain import AQICategory


@pytest.mark.parametrize(
    "aqi,expected",
    [
        (0, AQICategory.GOOD),
        (50, AQICategory.GOOD),
        (51, AQICategory.MODERATE),
        (100, AQICategory.MODERATE),
        (101, AQICategory.UNHEALTHY_FOR_SENSITIVE),
        (150, AQICategory.UNHEALTHY_FOR_SENSITIVE),
        (151, AQICategory.UNHEALTHY),
        (200, AQICategory.UNHEALTHY),
        (201, AQICategory.VERY_UNHEALTHY),
        (300, AQICategory.VERY_UNHEALTHY),
        (301, AQICategory.HAZARDOUS),
        (500, AQICategory.HAZARDOUS),
        (750, AQICategory.HAZARDOUS),
    ],
)
def test_classify_threshold_boundaries(aqi, expected):
    assert classify(aqi) is expected


def test_categories_are_ordered_by_severity():
    severities = [classify(aqi).severity for aqi in range(0, 501)]
    assert severities == sorted(severities)
    assert AQICategory.GOOD.severity == 0
    assert AQICategory.HAZARDOUS.severity == 5


def test_upper_bounds_match_classifier():
    for category in AQICategory:
        if category.upper_bound is None:
            continue
        assert classify(category.upper_bound) is category
        assert classify(category.upper_bound + 1) is not category


def test_labels_and_descriptions():
    assert AQICategory.UNHEALTHY_FOR_SENSITIVE.label == "Unhealthy for Sensitive Groups"
    assert AQICategory.HAZARDOUS.description == "Health warning of emergency conditions"
    assert all(c.label and c.description for c in AQICategory)
