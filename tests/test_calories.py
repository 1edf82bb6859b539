import math

import pytest

from fitness_tracker.calories import (
    ASSUMED_WEIGHT_KG,
    CALCULATORS,
    calculate_calories,
    calculate_swimming,
    clamp,
)
from fitness_tracker.errors import InvalidMetricError
from fitness_tracker.models import ActivityType


@pytest.mark.parametrize(
    ("activity", "metrics", "expected"),
    [
        (ActivityType.WALKING, (10000, 5, 60), 245.0),
        (ActivityType.WALKING, (10000, 3, 60), 210.0),
        (ActivityType.WALKING, (20000, 7, 60), 525.0),
        (ActivityType.RUNNING, (10, 60, 160), 840.0),
        (ActivityType.RUNNING, (5, 60, 160), 560.0),
        (ActivityType.CYCLING, (20, 60, 140), 700.0),
        (ActivityType.CYCLING, (15, 60, 140), 420.0),
        (ActivityType.SWIMMING, (30, 60, 150), 420.0),
        (ActivityType.WEIGHT_LIFTING, (3, 50, 10), 67.5),
        (ActivityType.YOGA, (15, 30, 5), 105.0),
        (ActivityType.YOGA, (15, 30, 9), 175.0),
    ],
)
def test_calculate_calories_scenarios(activity: ActivityType, metrics: tuple, expected: float) -> None:
    assert calculate_calories(activity, *metrics) == pytest.approx(expected, rel=1e-9)


def test_every_activity_has_a_calculator() -> None:
    assert set(CALCULATORS) == set(ActivityType)


def test_accepts_plain_int_activity_type() -> None:
    assert calculate_calories(3, 10, 60, 160) == pytest.approx(840.0)


@pytest.mark.parametrize("activity_type", [0, 7, 99, -1])
def test_unknown_activity_type_yields_zero(activity_type: int) -> None:
    assert calculate_calories(activity_type, 10, 10, 10) == 0


@pytest.mark.parametrize(
    ("heart_rate", "expected"),
    [
        (0, 6.0 * 0.5 * 70),
        (75, 6.0 * 0.5 * 70),
        (150, 6.0 * 1.0 * 70),
        (300, 6.0 * 2.0 * 70),
        (1000, 6.0 * 2.0 * 70),
    ],
)
def test_swimming_heart_rate_clamp(heart_rate: float, expected: float) -> None:
    assert calculate_swimming(30, 60, heart_rate) == pytest.approx(expected)
    assert calculate_calories(ActivityType.SWIMMING, 30, 60, heart_rate) == pytest.approx(expected)


def test_swimming_lap_intensity_clamp() -> None:
    slow = calculate_calories(ActivityType.SWIMMING, 1, 60, 150)
    fast = calculate_calories(ActivityType.SWIMMING, 500, 60, 150)
    assert slow == pytest.approx(6.0 * 0.8 * 70)
    assert fast == pytest.approx(6.0 * 1.5 * 70)


def test_walking_few_steps_understates_output() -> None:
    assert calculate_calories(ActivityType.WALKING, 1, 10, 120) == pytest.approx(3.5 * 70 * 2 * 0.0001)


def test_weight_lifting_volume_multiplier_caps() -> None:
    # volume = 10 * 100 * 10 = 10000 -> multiplier capped at 2.0; 100/70 within clamp
    expected = 6.0 * (100 / 70) * 2.0 * 70 * 0.5
    assert calculate_calories(ActivityType.WEIGHT_LIFTING, 10, 100, 10) == pytest.approx(expected)


@pytest.mark.parametrize(
    ("activity", "heart_rate"),
    [(ActivityType.RUNNING, 160), (ActivityType.CYCLING, 140)],
)
def test_distance_increase_never_decreases_calories(activity: ActivityType, heart_rate: float) -> None:
    distances = [d / 2 for d in range(1, 81)]
    results = [calculate_calories(activity, d, 60, heart_rate) for d in distances]
    assert all(a <= b for a, b in zip(results, results[1:]))


def test_deterministic_and_non_negative() -> None:
    cases = [
        (ActivityType.WALKING, 8000, 4.2, 45),
        (ActivityType.SWIMMING, 20, 35, 135),
        (ActivityType.RUNNING, 7.3, 41, 171),
        (ActivityType.CYCLING, 33, 80, 128),
        (ActivityType.WEIGHT_LIFTING, 4, 62.5, 8),
        (ActivityType.YOGA, 22, 50, 7),
    ]
    for activity, m1, m2, m3 in cases:
        first = calculate_calories(activity, m1, m2, m3)
        assert first >= 0
        assert all(calculate_calories(activity, m1, m2, m3) == first for _ in range(5))


def test_custom_weight_scales_output() -> None:
    assert calculate_calories(ActivityType.RUNNING, 10, 60, 160, weight_kg=80) == pytest.approx(960.0)
    assert calculate_calories(ActivityType.RUNNING, 10, 60, 160) == pytest.approx(
        calculate_calories(ActivityType.RUNNING, 10, 60, 160, weight_kg=ASSUMED_WEIGHT_KG)
    )


@pytest.mark.parametrize(
    ("activity", "metrics", "field"),
    [
        (ActivityType.WALKING, (10000, 5, 0), "metric3"),
        (ActivityType.SWIMMING, (10, 0, 140), "metric2"),
        (ActivityType.RUNNING, (10, -5, 160), "metric2"),
        (ActivityType.CYCLING, (10, 0, 140), "metric2"),
        (ActivityType.YOGA, (10, 0, 5), "metric2"),
        (ActivityType.WALKING, (-1, 5, 60), "metric1"),
        (ActivityType.WEIGHT_LIFTING, (3, math.nan, 10), "metric2"),
        (ActivityType.WALKING, (0, 1, math.inf), "metric3"),
        (ActivityType.RUNNING, (10, math.inf, 160), "metric2"),
        (ActivityType.CYCLING, (math.inf, 60, 140), "metric1"),
        (ActivityType.SWIMMING, (10, 30, -math.inf), "metric3"),
    ],
)
def test_invalid_metrics_raise(activity: ActivityType, metrics: tuple, field: str) -> None:
    with pytest.raises(InvalidMetricError) as excinfo:
        calculate_calories(activity, *metrics)
    assert excinfo.value.field == field
    assert isinstance(excinfo.value, ValueError)


def test_clamp() -> None:
    assert clamp(0.2, 0.5, 2.0) == 0.5
    assert clamp(3.0, 0.5, 2.0) == 2.0
    assert clamp(1.2, 0.5, 2.0) == 1.2


@pytest.mark.parametrize(
    ("distance_km", "expected_mets"),
    [(7.99, 8.0), (8.0, 10.0), (9.99, 10.0), (10.0, 12.0), (11.99, 12.0), (12.0, 15.0)],
)
def test_running_speed_thresholds_are_exclusive(distance_km: float, expected_mets: float) -> None:
    # 60 minutes at hr 160 -> speed equals distance and the hr multiplier is 1.0
    assert calculate_calories(ActivityType.RUNNING, distance_km, 60, 160) == pytest.approx(expected_mets * 70)
