import pytest

from fitness_tracker.models import ActivityType, metric_labels


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("walking", ActivityType.WALKING),
        ("Weight Lifting", ActivityType.WEIGHT_LIFTING),
        ("weightlifting", ActivityType.WEIGHT_LIFTING),
        ("weight-lifting", ActivityType.WEIGHT_LIFTING),
        ("6", ActivityType.YOGA),
        (2, ActivityType.SWIMMING),
    ],
)
def test_activity_type_parse(raw, expected: ActivityType) -> None:
    assert ActivityType.parse(raw) == expected


def test_activity_type_parse_unknown() -> None:
    with pytest.raises(ValueError):
        ActivityType.parse("skiing")


def test_metric_labels() -> None:
    assert metric_labels(ActivityType.WALKING) == ("Steps", "Distance (km)", "Time (minutes)")
    assert metric_labels(ActivityType.YOGA)[2] == "Intensity (1-10)"
    assert metric_labels(42) == ("Metric 1", "Metric 2", "Metric 3")
