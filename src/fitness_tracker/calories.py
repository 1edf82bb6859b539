from __future__ import annotations

import logging
import math
from typing import Callable

from .errors import InvalidMetricError
from .models import ActivityType

logger = logging.getLogger(__name__)

# Body weight assumed for every user; the app does not record per-user weight.
ASSUMED_WEIGHT_KG = 70.0
# Resting metabolic rate multiplier, ml O2/kg/min. Not used by the current formulas.
MET_FACTOR = 3.5

Calculator = Callable[[float, float, float, float], float]


def clamp(value: float, lo: float, hi: float) -> float:
    """Constrain ``value`` to the closed range [lo, hi]."""
    return max(lo, min(value, hi))


def _speed_kmh(distance_km: float, time_minutes: float) -> float:
    return distance_km / (time_minutes / 60.0)


def calculate_walking(steps: float, distance_km: float, time_minutes: float, weight_kg: float = ASSUMED_WEIGHT_KG) -> float:
    speed = _speed_kmh(distance_km, time_minutes)
    if speed < 4.0:
        mets = 3.0
    elif speed < 5.5:
        mets = 3.5
    elif speed < 6.5:
        mets = 4.0
    else:
        mets = 5.0
    # Caps at 1.5 for 15k+ steps; few steps scale the result towards 0.
    step_efficiency = min(steps / 10000.0, 1.5)
    return mets * weight_kg * (time_minutes / 60.0) * step_efficiency


def calculate_swimming(laps: float, time_minutes: float, avg_heart_rate: float, weight_kg: float = ASSUMED_WEIGHT_KG) -> float:
    base_mets = 6.0
    intensity = clamp(avg_heart_rate / 150.0, 0.5, 2.0)
    # Baseline pace is 2 minutes per lap.
    lap_intensity = clamp(laps / (time_minutes / 2.0), 0.8, 1.5)
    return base_mets * intensity * lap_intensity * weight_kg * (time_minutes / 60.0)


def calculate_running(distance_km: float, time_minutes: float, avg_heart_rate: float, weight_kg: float = ASSUMED_WEIGHT_KG) -> float:
    speed = _speed_kmh(distance_km, time_minutes)
    if speed < 8.0:
        mets = 8.0
    elif speed < 10.0:
        mets = 10.0
    elif speed < 12.0:
        mets = 12.0
    else:
        mets = 15.0
    hr_multiplier = clamp(avg_heart_rate / 160.0, 0.8, 1.3)
    return mets * hr_multiplier * weight_kg * (time_minutes / 60.0)


def calculate_cycling(distance_km: float, time_minutes: float, avg_heart_rate: float, weight_kg: float = ASSUMED_WEIGHT_KG) -> float:
    speed = _speed_kmh(distance_km, time_minutes)
    if speed < 16.0:
        mets = 6.0
    elif speed < 20.0:
        mets = 8.0
    elif speed < 25.0:
        mets = 10.0
    else:
        mets = 12.0
    hr_multiplier = clamp(avg_heart_rate / 140.0, 0.7, 1.4)
    return mets * hr_multiplier * weight_kg * (time_minutes / 60.0)


def calculate_weight_lifting(sets: float, lifted_kg: float, reps: float, weight_kg: float = ASSUMED_WEIGHT_KG) -> float:
    base_mets = 6.0
    volume = sets * lifted_kg * reps
    intensity = clamp(lifted_kg / weight_kg, 0.5, 2.0)
    # 3 minutes per set, rest included.
    estimated_hours = (sets * 3.0) / 60.0
    volume_multiplier = min(volume / 1000.0, 2.0)
    return base_mets * intensity * volume_multiplier * weight_kg * estimated_hours


def calculate_yoga(poses: float, time_minutes: float, intensity: float, weight_kg: float = ASSUMED_WEIGHT_KG) -> float:
    if intensity <= 3:
        mets = 2.5
    elif intensity <= 6:
        mets = 3.0
    elif intensity <= 8:
        mets = 4.0
    else:
        mets = 5.0
    # Baseline is 2 minutes per pose.
    pose_complexity = clamp(poses / (time_minutes / 2.0), 0.8, 1.5)
    return mets * pose_complexity * weight_kg * (time_minutes / 60.0)


CALCULATORS: dict[ActivityType, Calculator] = {
    ActivityType.WALKING: calculate_walking,
    ActivityType.SWIMMING: calculate_swimming,
    ActivityType.RUNNING: calculate_running,
    ActivityType.CYCLING: calculate_cycling,
    ActivityType.WEIGHT_LIFTING: calculate_weight_lifting,
    ActivityType.YOGA: calculate_yoga,
}

# Which metric slot (1-based) holds the duration in minutes, for activities that have one.
DURATION_SLOT: dict[ActivityType, int] = {
    ActivityType.WALKING: 3,
    ActivityType.SWIMMING: 2,
    ActivityType.RUNNING: 2,
    ActivityType.CYCLING: 2,
    ActivityType.YOGA: 2,
}


def _check_metrics(activity_type: ActivityType, metrics: tuple[float, float, float]) -> None:
    for slot, value in enumerate(metrics, start=1):
        if not math.isfinite(value) or value < 0:
            raise InvalidMetricError(f"metric{slot} must be a finite number >= 0, got {value}", field=f"metric{slot}")
    slot = DURATION_SLOT.get(activity_type)
    if slot is not None and metrics[slot - 1] <= 0:
        raise InvalidMetricError(f"metric{slot} (time in minutes) must be > 0", field=f"metric{slot}")


def calculate_calories(
    activity_type: ActivityType | int,
    metric1: float,
    metric2: float,
    metric3: float,
    *,
    weight_kg: float = ASSUMED_WEIGHT_KG,
) -> float:
    """Estimate calories burned for one activity.

    The meaning of each metric depends on ``activity_type`` (see
    ``models.METRIC_LABELS``). The result is not rounded. An activity type
    outside the six known ones yields 0.0. Negative or non-finite metrics and a
    non-positive duration raise ``InvalidMetricError``.
    """
    try:
        kind = ActivityType(activity_type)
    except ValueError:
        logger.warning("Unknown activity type %r, returning 0 calories", activity_type)
        return 0.0

    metrics = (float(metric1), float(metric2), float(metric3))
    _check_metrics(kind, metrics)
    return CALCULATORS[kind](*metrics, weight_kg)
