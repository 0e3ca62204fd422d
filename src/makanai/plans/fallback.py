"""Deterministic weekly plan used when AI generation is unavailable."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Literal

from makanai.client.ai import AIClient, GenerateOptions
from makanai.errors import MakanaiError
from makanai.plans.models import (
    REST_DAY_LABEL,
    TrainingDayPlan,
    UserProfileForAI,
    format_date,
    week_dates,
    weekday_index,
    weekday_label,
)
from makanai.plans.training import generate_training_plan

logger = logging.getLogger(__name__)

GYM_ENVIRONMENT = "ジム（マシンあり）"
HOME_ENVIRONMENT = "自宅（自重）"
GOAL_HYPERTROPHY = "筋肥大"
GOAL_STAMINA = "体力向上"
GOAL_MAINTENANCE = "体型維持"

DEFAULT_AGE = 30
DEFAULT_SESSION_MINUTES = 40

# Sunday and Tuesday, by weekday index.
REST_WEEKDAYS = frozenset({0, 2})

_GYM_PARTS = {1: "胸・三頭筋", 3: "脚・臀部", 4: "背中・二頭筋", 5: "肩・腹筋", 6: "全身"}
_HOME_PARTS = {1: "プッシュ系", 3: "脚・体幹", 4: "プル系", 5: "全身HIIT", 6: "コア強化"}

_DIFFICULTIES = {
    GOAL_HYPERTROPHY: ("normal", "hard", "normal", "hard", "normal", "easy", "hard"),
    GOAL_STAMINA: ("hard", "normal", "hard", "normal", "hard", "easy", "normal"),
}
_DEFAULT_DIFFICULTIES = ("easy", "normal", "easy", "normal", "easy", "easy", "normal")
_SOFTENED = {"hard": "normal", "normal": "easy", "easy": "easy"}


def body_part_for_weekday(weekday: int, environment: str) -> str:
    parts = _GYM_PARTS if environment == GYM_ENVIRONMENT else _HOME_PARTS
    return parts.get(weekday, "全身")


def difficulties_for(age: int, goal: str) -> tuple[str, ...]:
    base = _DIFFICULTIES.get(goal, _DEFAULT_DIFFICULTIES)
    if age >= 40:
        return tuple(_SOFTENED[level] for level in base)
    return base


def generate_weekly_plan(
    profile: UserProfileForAI | None, today: date | None = None
) -> list[TrainingDayPlan]:
    age = (profile.age if profile else 0) or DEFAULT_AGE
    goal = (profile.goal if profile else "") or GOAL_MAINTENANCE
    environment = (profile.environment if profile else "") or HOME_ENVIRONMENT
    minutes = (profile.session_minutes if profile else 0) or DEFAULT_SESSION_MINUTES
    difficulties = difficulties_for(age, goal)

    plans: list[TrainingDayPlan] = []
    for offset, day in enumerate(week_dates(today)):
        weekday = weekday_index(day)
        is_rest_day = weekday in REST_WEEKDAYS
        plans.append(
            TrainingDayPlan(
                day_of_week=weekday_label(day),
                date=format_date(day),
                body_part=(
                    REST_DAY_LABEL if is_rest_day else body_part_for_weekday(weekday, environment)
                ),
                total_minutes=0 if is_rest_day else minutes,
                is_rest_day=is_rest_day,
                difficulty="easy" if is_rest_day else difficulties[offset],
            )
        )
    return plans


@dataclass(slots=True)
class WeeklyPlanResult:
    plans: list[TrainingDayPlan]
    source: Literal["ai", "fallback"]
    error: str | None = None


async def plan_week(
    client: AIClient,
    profile: UserProfileForAI,
    options: GenerateOptions | None = None,
    today: date | None = None,
) -> WeeklyPlanResult:
    """Generate with the model, substituting the fixed plan if that fails."""
    today = today or date.today()
    try:
        plans = await generate_training_plan(client, profile, options, today)
    except MakanaiError as exc:
        logger.warning("AI plan generation failed, using fallback plan: %s", exc)
        return WeeklyPlanResult(
            plans=generate_weekly_plan(profile, today), source="fallback", error=str(exc)
        )
    return WeeklyPlanResult(plans=plans, source="ai")
