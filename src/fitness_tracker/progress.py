from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from .models import ActivityRecord, ActivityType


@dataclass(frozen=True)
class DailySummary:
    """Calories burned on one day measured against the user's goal."""

    day: date
    calorie_goal: int
    activities: list[ActivityRecord] = field(default_factory=list)
    calories_by_activity: dict[ActivityType, float] = field(default_factory=dict)
    count_by_activity: dict[ActivityType, int] = field(default_factory=dict)

    @property
    def total_calories(self) -> float:
        return sum(record.calories_burned for record in self.activities)

    @property
    def is_goal_achieved(self) -> bool:
        return self.total_calories >= self.calorie_goal

    @property
    def remaining_calories(self) -> float:
        return max(0.0, self.calorie_goal - self.total_calories)

    @property
    def progress_percentage(self) -> float:
        if self.calorie_goal <= 0:
            return 0.0
        return min(100.0, self.total_calories / self.calorie_goal * 100.0)


def summarize_day(records: Iterable[ActivityRecord], calorie_goal: int, day: date) -> DailySummary:
    todays = sorted(
        (record for record in records if record.recorded_at.date() == day),
        key=lambda record: record.recorded_at,
        reverse=True,
    )
    by_activity: dict[ActivityType, float] = {}
    counts: dict[ActivityType, int] = {}
    for record in todays:
        by_activity[record.activity_type] = by_activity.get(record.activity_type, 0.0) + record.calories_burned
        counts[record.activity_type] = counts.get(record.activity_type, 0) + 1
    return DailySummary(
        day=day,
        calorie_goal=calorie_goal,
        activities=todays,
        calories_by_activity=by_activity,
        count_by_activity=counts,
    )
