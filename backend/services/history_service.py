
from __future__ import annotations
from collections import Counter, defaultdict
from datetime import datetime, timedelta
from typing import Callable, Dict, List

from sqlalchemy.orm import Session

from backend.schemas.responses import HistoryDay, HistoryMeal, HistoryResponse, WeeklyInsights
from backend.services.dashboard_service import day_range
from backend.services.meal_service import list_meals
from backend.services.profile_service import daily_calorie_goal

ON_TARGET_TOLERANCE = 0.10


def _clock_label(ts: datetime) -> str:
    return ts.strftime("%I:%M %p").lstrip("0")


def build_history(
    db: Session,
    user_id: int,
    days: int = 7,
    clock: Callable[[], datetime] = datetime.now,
) -> HistoryResponse:
    """
    오늘 포함 최근 N일 일자별 기록 (최신 날짜가 앞)
    - calorie_change: 오늘 - 어제 (N=1 이어도 어제는 따로 집계)
    - insights: 기록된 날 기준 평균, 목표 ±10% 달성일, 가장 많이 먹은 메뉴
    """
    today = clock().date()
    span = max(days, 2)
    start, _ = day_range(today - timedelta(days=span - 1))
    _, end = day_range(today)
    goal = daily_calorie_goal(db, user_id)

    by_day: Dict = defaultdict(list)
    for meal in list_meals(db, user_id, start, end):
        by_day[meal.created_at.date()].append(meal)

    out: List[HistoryDay] = []
    for offset in range(days):
        d = today - timedelta(days=offset)
        meals = sorted(by_day.get(d, []), key=lambda m: m.created_at)
        out.append(HistoryDay(
            date=d,
            total_calories=int(sum(m.calories or 0 for m in meals)),
            goal=goal,
            meal_count=len(meals),
            meals=[HistoryMeal(name=m.name, calories=int(m.calories or 0), time=_clock_label(m.created_at))
                   for m in meals],
        ))

    today_total = sum(m.calories or 0 for m in by_day.get(today, []))
    yesterday_total = sum(m.calories or 0 for m in by_day.get(today - timedelta(days=1), []))

    logged = [d for d in out if d.meal_count]
    on_target = [d for d in logged if abs(d.total_calories - goal) <= goal * ON_TARGET_TOLERANCE]
    names = Counter(m.name for d in out for m in d.meals)

    return HistoryResponse(
        days=out,
        calorie_change=int(today_total - yesterday_total),
        insights=WeeklyInsights(
            average_calories=round(sum(d.total_calories for d in logged) / len(logged), 1) if logged else 0.0,
            days_on_target=len(on_target),
            days_logged=len(logged),
            top_meal=names.most_common(1)[0][0] if names else None,
        ),
    )
