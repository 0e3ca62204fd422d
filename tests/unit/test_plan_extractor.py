from datetime import date

import pytest

from makanai.errors import PlanExtractionError
from makanai.plans.extractor import extract_plan, json_candidate, repair_truncated_json

# A Monday.
TODAY = date(2026, 10, 19)

FULL_WEEK = (
    '{"plans":['
    '{"dayOfWeek":"月","date":"1/1","bodyPart":"胸","totalMinutes":30,"isRestDay":false,'
    '"exercises":[{"name":"ベンチプレス","sets":3,"reps":10,"rest":90}]},'
    '{"dayOfWeek":"火","bodyPart":"休息日","totalMinutes":0,"isRestDay":true},'
    '{"dayOfWeek":"水","bodyPart":"脚","totalMinutes":45,"isRestDay":false},'
    '{"dayOfWeek":"木","bodyPart":"背中","totalMinutes":30,"isRestDay":false},'
    '{"dayOfWeek":"金","bodyPart":"肩","totalMinutes":30,"isRestDay":false},'
    '{"dayOfWeek":"土","bodyPart":"全身","totalMinutes":40,"isRestDay":false},'
    '{"dayOfWeek":"日","bodyPart":"休息日","totalMinutes":0,"isRestDay":true}'
    "]}"
)


def test_extracts_full_week_with_computed_dates() -> None:
    plans = extract_plan(FULL_WEEK, TODAY)
    assert len(plans) == 7
    assert [p.date for p in plans] == [
        "10/19", "10/20", "10/21", "10/22", "10/23", "10/24", "10/25"
    ]
    assert [p.day_of_week for p in plans] == ["月", "火", "水", "木", "金", "土", "日"]
    assert plans[0].body_part == "胸"
    assert plans[0].exercises == [{"name": "ベンチプレス", "sets": 3, "reps": 10, "rest": 90}]
    assert plans[1].is_rest_day is True
    assert plans[2].total_minutes == 45


def test_model_dates_are_ignored_across_month_boundary() -> None:
    plans = extract_plan(FULL_WEEK, date(2026, 12, 29))
    assert [p.date for p in plans] == ["12/29", "12/30", "12/31", "1/1", "1/2", "1/3", "1/4"]
    assert plans[0].day_of_week == "火"


def test_is_idempotent() -> None:
    assert extract_plan(FULL_WEEK, TODAY) == extract_plan(FULL_WEEK, TODAY)


def test_fenced_block_with_commentary() -> None:
    raw = f"はい、プランです！\n```json\n{FULL_WEEK}\n```\n頑張ってください。"
    plans = extract_plan(raw, TODAY)
    assert plans[3].body_part == "背中"


def test_commentary_without_fence() -> None:
    raw = f"Here is the plan: {FULL_WEEK} Let me know!"
    assert extract_plan(raw, TODAY)[5].body_part == "全身"


def test_truncated_trailing_entry_is_dropped() -> None:
    raw = (
        '{"plans":[{"dayOfWeek":"月","bodyPart":"胸","totalMinutes":30,"isRestDay":false},'
        '{"dayOfWeek":"土","bodyPart":"休息日"'
    )
    plans = extract_plan(raw, TODAY)
    assert len(plans) == 7
    assert plans[0].body_part == "胸"
    assert plans[0].total_minutes == 30
    assert all(p.is_rest_day for p in plans[1:])


def test_truncated_inside_unclosed_fence() -> None:
    raw = '```json\n{"plans":[{"bodyPart":"脚","totalMinutes":20},{"bodyPart":"背'
    plans = extract_plan(raw, TODAY)
    assert plans[0].body_part == "脚"
    assert plans[1].is_rest_day is True


def test_short_plan_is_padded_with_rest_days() -> None:
    plans = extract_plan('{"plans":[{"bodyPart":"胸","totalMinutes":30}]}', TODAY)
    assert len(plans) == 7
    assert plans[0].is_rest_day is False
    for day in plans[1:]:
        assert day.body_part == "休息日"
        assert day.total_minutes == 0
        assert day.is_rest_day is True
        assert day.exercises is None


def test_missing_fields_take_defaults() -> None:
    plans = extract_plan('{"plans":[{}, {"isRestDay":"true", "totalMinutes":null}]}', TODAY)
    assert plans[0].body_part == "休息日"
    assert plans[0].total_minutes == 0
    assert plans[0].is_rest_day is False
    assert plans[1].is_rest_day is False


def test_total_minutes_keeps_numbers_and_zeroes_everything_else() -> None:
    plans = extract_plan(
        '{"plans":[{"totalMinutes":30.5},{"totalMinutes":"30"},{"totalMinutes":true},'
        '{"totalMinutes":45}]}',
        TODAY,
    )
    assert [p.total_minutes for p in plans[:4]] == [30.5, 0, 0, 45]
    assert plans[0].to_dict()["totalMinutes"] == 30.5


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "   ",
        "I cannot help with that.",
        '{"days": []}',
        '{"plans": {"monday": "chest"}}',
        '{"plans": [ {"bodyPart": "胸" "x"} ]}',
    ],
)
def test_hard_failures(raw: str) -> None:
    with pytest.raises(PlanExtractionError):
        extract_plan(raw, TODAY)


def test_repair_closes_brackets_before_braces() -> None:
    assert repair_truncated_json('{"plans":[{"a":1}') == '{"plans":[{"a":1}]}'


def test_repair_strips_incomplete_trailing_fragment() -> None:
    assert repair_truncated_json('{"plans":[{"a":1},{"b":2') == '{"plans":[{"a":1}]}'


def test_repair_leaves_balanced_json_alone() -> None:
    assert repair_truncated_json('{"plans":[]}') == '{"plans":[]}'


def test_json_candidate_is_greedy() -> None:
    assert json_candidate('noise {"a":{"b":1}} trailing } end') == '{"a":{"b":1}} trailing }'
