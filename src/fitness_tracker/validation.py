from __future__ import annotations

import math
import re

from .errors import ValidationError
from .models import ActivityType, metric_labels

MIN_METRIC_VALUE = 0.1
HEART_RATE_RANGE = (50.0, 220.0)
YOGA_INTENSITY_RANGE = (1.0, 10.0)
CALORIE_GOAL_RANGE = (1, 10000)
USERNAME_MAX_LENGTH = 50
PASSWORD_LENGTH = 12

_USERNAME_RE = re.compile(r"^[a-zA-Z0-9]+$")
_HEART_RATE_ACTIVITIES = {ActivityType.SWIMMING, ActivityType.RUNNING, ActivityType.CYCLING}


def validate_metrics(activity_type: ActivityType, metric1: float, metric2: float, metric3: float) -> None:
    """Check form values before they reach the calorie engine."""
    labels = metric_labels(activity_type)
    for slot, value in enumerate((metric1, metric2, metric3), start=1):
        if not math.isfinite(value) or not value >= MIN_METRIC_VALUE:
            raise ValidationError(f"{labels[slot - 1]} must be greater than 0", field=f"metric{slot}")

    if activity_type in _HEART_RATE_ACTIVITIES:
        low, high = HEART_RATE_RANGE
        if metric3 < low or metric3 > high:
            raise ValidationError("Heart rate should be between 50 and 220 bpm", field="metric3")
    elif activity_type == ActivityType.YOGA:
        low, high = YOGA_INTENSITY_RANGE
        if metric3 < low or metric3 > high:
            raise ValidationError("Intensity should be between 1 and 10", field="metric3")


def validate_username(username: str) -> str:
    name = username.strip()
    if not name:
        raise ValidationError("Username is required", field="username")
    if len(name) > USERNAME_MAX_LENGTH:
        raise ValidationError(f"Username must be at most {USERNAME_MAX_LENGTH} characters", field="username")
    if not _USERNAME_RE.match(name):
        raise ValidationError("Username can only contain letters and numbers.", field="username")
    return name


def validate_password(password: str) -> None:
    if len(password) != PASSWORD_LENGTH:
        raise ValidationError("Password must be exactly 12 characters", field="password")
    if not any(ch.islower() for ch in password) or not any(ch.isupper() for ch in password):
        raise ValidationError(
            "Password must contain at least one uppercase and one lowercase letter.",
            field="password",
        )


def validate_calorie_goal(goal: int) -> int:
    low, high = CALORIE_GOAL_RANGE
    if isinstance(goal, bool) or int(goal) != goal or not low <= goal <= high:
        raise ValidationError("Calorie goal must be between 1 and 10,000", field="calorie_goal")
    return int(goal)
