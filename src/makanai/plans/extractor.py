"""Recover a 7-day training plan from free-form model output.

The model is asked for bare JSON but may wrap it in commentary or a code fence,
and long answers can be cut off at the token limit. Dates and weekdays always
come from the caller's calendar, never from the model.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import date
from typing import Any

from makanai.errors import PlanExtractionError
from makanai.plans.models import (
    REST_DAY_LABEL,
    TrainingDayPlan,
    format_date,
    week_dates,
    weekday_label,
)

logger = logging.getLogger(__name__)

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")
_TRAILING_FRAGMENT = re.compile(r",\s*[^}\]]*$")


def repair_truncated_json(text: str) -> str:
    """Close collections left open by a truncated answer.

    Single pass: drop an unfinished trailing ``,...`` fragment, then append the
    missing ``]`` and ``}`` (brackets first). Braces inside string values are
    counted too, and damage anywhere but the tail is not repairable.
    """
    if text.count("[") <= text.count("]") and text.count("{") <= text.count("}"):
        return text
    repaired = _TRAILING_FRAGMENT.sub("", text, count=1)
    missing_brackets = repaired.count("[") - repaired.count("]")
    missing_braces = repaired.count("{") - repaired.count("}")
    logger.debug(
        "Repairing truncated JSON (missing %d brackets, %d braces)",
        max(0, missing_brackets),
        max(0, missing_braces),
    )
    return repaired + "]" * max(0, missing_brackets) + "}" * max(0, missing_braces)


def json_candidate(raw_text: str) -> str:
    """Fenced content if present, narrowed to the outermost ``{...}`` span."""
    text = raw_text.strip()
    fenced = _FENCED_BLOCK.search(raw_text)
    if fenced:
        text = fenced.group(1).strip()
    match = _JSON_OBJECT.search(text)
    if match is None:
        raise PlanExtractionError("Failed to parse AI response as JSON")
    return match.group(0)


def _day_from_model(entry: Any, day: date) -> TrainingDayPlan:
    if not isinstance(entry, dict):
        return TrainingDayPlan.rest_day(day)
    body_part = entry.get("bodyPart")
    total_minutes = entry.get("totalMinutes")
    exercises = entry.get("exercises")
    return TrainingDayPlan(
        day_of_week=weekday_label(day),
        date=format_date(day),
        body_part=body_part if isinstance(body_part, str) and body_part else REST_DAY_LABEL,
        total_minutes=(
            total_minutes
            if isinstance(total_minutes, int | float) and not isinstance(total_minutes, bool)
            else 0
        ),
        is_rest_day=entry.get("isRestDay") is True,
        exercises=exercises if isinstance(exercises, list) else None,
    )


def extract_plan(raw_text: str, today: date | None = None) -> list[TrainingDayPlan]:
    if not raw_text or not raw_text.strip():
        raise PlanExtractionError("AI returned empty response")

    candidate = repair_truncated_json(json_candidate(raw_text))
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        logger.warning("Plan JSON still invalid after repair (tail=%r)", candidate[-200:])
        raise PlanExtractionError(f"JSON parse error: {exc}") from exc

    plans = parsed.get("plans") if isinstance(parsed, dict) else None
    if not isinstance(plans, list):
        raise PlanExtractionError('AI response missing "plans" array')
    if len(plans) < 7:
        logger.info("Model returned %d of 7 days; padding with rest days", len(plans))

    return [
        _day_from_model(plans[offset] if offset < len(plans) else None, day)
        for offset, day in enumerate(week_dates(today))
    ]
