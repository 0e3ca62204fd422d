"""Weekly plan records and calendar helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

# Sunday first, matching the weekday numbering used throughout the app.
WEEKDAYS = ("日", "月", "火", "水", "木", "金", "土")

REST_DAY_LABEL = "休息日"


def weekday_index(day: date) -> int:
    """0 for Sunday through 6 for Saturday."""
    return (day.weekday() + 1) % 7


def weekday_label(day: date) -> str:
    return WEEKDAYS[weekday_index(day)]


def format_date(day: date) -> str:
    return f"{day.month}/{day.day}"


def week_dates(today: date | None = None) -> list[date]:
    start = today or date.today()
    return [start + timedelta(days=offset) for offset in range(7)]


@dataclass(slots=True)
class UserProfileForAI:
    gender: str
    age: int
    height: float
    weight: float
    goal: str
    environment: str
    session_minutes: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserProfileForAI:
        return cls(
            gender=str(data.get("gender", "")),
            age=int(data.get("age", 0)),
            height=float(data.get("height", 0)),
            weight=float(data.get("weight", 0)),
            goal=str(data.get("goal", "")),
            environment=str(data.get("environment", "")),
            session_minutes=int(data.get("sessionMinutes", data.get("session_minutes", 0))),
        )


@dataclass(slots=True)
class TrainingDayPlan:
    day_of_week: str
    date: str
    body_part: str
    total_minutes: int | float
    is_rest_day: bool
    exercises: list[dict[str, Any]] | None = None
    difficulty: str | None = None

    @classmethod
    def rest_day(cls, day: date) -> TrainingDayPlan:
        return cls(
            day_of_week=weekday_label(day),
            date=format_date(day),
            body_part=REST_DAY_LABEL,
            total_minutes=0,
            is_rest_day=True,
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "dayOfWeek": self.day_of_week,
            "date": self.date,
            "bodyPart": self.body_part,
            "totalMinutes": self.total_minutes,
            "isRestDay": self.is_rest_day,
        }
        if self.exercises is not None:
            payload["exercises"] = self.exercises
        if self.difficulty is not None:
            payload["difficulty"] = self.difficulty
        return payload
