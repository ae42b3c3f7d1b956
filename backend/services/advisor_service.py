
from __future__ import annotations
import logging
from typing import Any, Mapping, Optional

from backend.utils.gateway import GatewayResult, chat_completion

logger = logging.getLogger(__name__)

ADVISOR_PREAMBLE = "You are a helpful nutrition and fitness advisor. "
ADVISOR_FRAMING = " Provide personalized diet and workout advice. Keep responses concise and actionable."

# (필드, 문구 템플릿) 순서 고정
PROFILE_CLAUSES = (
    ("height", "Height: {}cm, "),
    ("weight", "Weight: {}kg, "),
    ("age", "Age: {}, "),
    ("gender", "Gender: {}, "),
    ("activity_level", "Activity level: {}, "),
    ("daily_calorie_goal", "Daily calorie goal: {} kcal, "),
    ("weekly_workout_days", "Weekly workout days: {} days/week"),
)


def _fmt(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_profile_context(profile: Optional[Mapping[str, Any]]) -> str:
    """
    프로필 스냅샷 → 시스템 컨텍스트 문자열.
    값이 없는 필드의 문구는 생략.
    """
    context = ADVISOR_PREAMBLE
    if profile is None:
        return context

    context += "User profile: "
    for field, template in PROFILE_CLAUSES:
        value = profile.get(field)
        if value is None or value == "":
            continue
        context += template.format(_fmt(value))
    return context


def ask_advisor(message: str, profile: Optional[Mapping[str, Any]] = None) -> GatewayResult:
    """성공 시 result.data = 조언 텍스트"""
    context = build_profile_context(profile)
    logger.info("Sending advisor request (context %d chars)", len(context))
    result = chat_completion([
        {"role": "system", "content": context + ADVISOR_FRAMING},
        {"role": "user", "content": message},
    ])
    if result.ok:
        logger.info("AI response generated successfully")
    return result
