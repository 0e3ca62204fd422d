"""Personalized weekly training plan generation via the AI proxy."""

from __future__ import annotations

import logging
from datetime import date

from makanai.client.ai import AIClient, GenerateOptions
from makanai.plans.extractor import extract_plan
from makanai.plans.models import TrainingDayPlan, UserProfileForAI, format_date, weekday_label

logger = logging.getLogger(__name__)

PLAN_TEMPERATURE = 0.5
PLAN_MAX_TOKENS = 2048

TRAINING_SYSTEM_PROMPT = """あなたはパーソナルトレーナーです。JSONのみ返してください。

ルール：
- 7日分のプラン
- 休息日は週2日（日・火推奨）
- 水曜は脚の日
- 環境に合った種目
- 各トレーニング日は2-4種目

回答形式（JSONのみ、説明不要）：
{"plans":[{"dayOfWeek":"月","bodyPart":"胸","totalMinutes":30,"isRestDay":false},\
{"dayOfWeek":"火","bodyPart":"休息日","totalMinutes":0,"isRestDay":true}]}"""


def build_training_prompt(profile: UserProfileForAI, today: date) -> str:
    return f"""以下のプロフィールのユーザーに最適な1週間のトレーニングプランを作成してください。

プロフィール：
- 性別: {profile.gender}
- 年齢: {profile.age}歳
- 身長: {profile.height:g}cm
- 体重: {profile.weight:g}kg
- 目標: {profile.goal}
- 環境: {profile.environment}
- 1回のトレーニング時間: {profile.session_minutes}分

今日は{weekday_label(today)}曜日（{format_date(today)}）です。
今日から7日間のプランを作成してください。"""


async def generate_training_plan(
    client: AIClient,
    profile: UserProfileForAI,
    options: GenerateOptions | None = None,
    today: date | None = None,
) -> list[TrainingDayPlan]:
    """Ask the model for a plan and extract it; failures propagate to the caller."""
    today = today or date.today()
    request_options = (options or GenerateOptions()).merged(
        temperature=PLAN_TEMPERATURE, max_tokens=PLAN_MAX_TOKENS
    )
    text = await client.ask(
        build_training_prompt(profile, today), TRAINING_SYSTEM_PROMPT, request_options
    )
    logger.debug("Plan generation returned %d characters", len(text))
    return extract_plan(text, today)
