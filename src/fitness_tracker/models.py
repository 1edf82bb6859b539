from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum


class ActivityType(IntEnum):
    """Supported activities. Values are the integers stored in the database."""

    WALKING = 1
    SWIMMING = 2
    RUNNING = 3
    CYCLING = 4
    WEIGHT_LIFTING = 5
    YOGA = 6

    @property
    def label(self) -> str:
        return ACTIVITY_NAMES[self]

    @classmethod
    def parse(cls, value: str | int) -> ActivityType:
        """Accept an enum value, its name ("weight_lifting") or display name ("Weight Lifting")."""
        if isinstance(value, int):
            return cls(value)
        text = value.strip()
        if text.isdigit():
            return cls(int(text))
        key = text.upper().replace(" ", "_").replace("-", "_")
        if key == "WEIGHTLIFTING":
            key = "WEIGHT_LIFTING"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"unknown activity type: {value!r}") from None


ACTIVITY_NAMES: dict[ActivityType, str] = {
    ActivityType.WALKING: "Walking",
    ActivityType.SWIMMING: "Swimming",
    ActivityType.RUNNING: "Running",
    ActivityType.CYCLING: "Cycling",
    ActivityType.WEIGHT_LIFTING: "Weight Lifting",
    ActivityType.YOGA: "Yoga",
}

# What metric1, metric2 and metric3 mean for each activity.
METRIC_LABELS: dict[ActivityType, tuple[str, str, str]] = {
    ActivityType.WALKING: ("Steps", "Distance (km)", "Time (minutes)"),
    ActivityType.SWIMMING: ("Laps", "Time (minutes)", "Avg Heart Rate"),
    ActivityType.RUNNING: ("Distance (km)", "Time (minutes)", "Avg Heart Rate"),
    ActivityType.CYCLING: ("Distance (km)", "Time (minutes)", "Avg Heart Rate"),
    ActivityType.WEIGHT_LIFTING: ("Sets", "Weight (kg)", "Reps"),
    ActivityType.YOGA: ("Poses", "Time (minutes)", "Intensity (1-10)"),
}


def metric_labels(activity_type: ActivityType | int) -> tuple[str, str, str]:
    try:
        return METRIC_LABELS[ActivityType(activity_type)]
    except ValueError:
        return ("Metric 1", "Metric 2", "Metric 3")


@dataclass(frozen=True)
class User:
    id: int
    username: str
    password_hash: str
    calorie_goal: int
    failed_login_attempts: int = 0
    is_locked: bool = False
    created_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class ActivityRecord:
    """One logged activity with the calories computed when it was saved."""

    id: int
    user_id: int
    activity_type: ActivityType
    metric1: float
    metric2: float
    metric3: float
    calories_burned: float
    recorded_at: datetime

    @property
    def labels(self) -> tuple[str, str, str]:
        return metric_labels(self.activity_type)
