
from __future__ import annotations
from datetime import date, datetime, timedelta
from typing import Callable, Iterable, Tuple

from sqlalchemy.orm import Session

from backend.schemas.responses import DashboardResponse, DashboardMacros, MacroProgress, MealOut
from backend.services.meal_service import list_meals
from backend.services.profile_service import daily_calorie_goal

# 고정 매크로 목표 (g), 사용자 칼로리 목표와 무관
MACRO_GOALS = {"protein": 150.0, "carbs": 250.0, "fats": 65.0}

RECENT_MEALS = 3


def day_range(d: date) -> Tuple[datetime, datetime]:
    """[당일 00:00, 다음날 00:00)"""
    start = datetime(d.year, d.month, d.day)
    return start, start + timedelta(days=1)


def summarize(meals: Iterable, daily_goal: int, on: date) -> DashboardResponse:
    meals = list(meals)
    consumed = int(sum(m.calories or 0 for m in meals))
    protein = float(sum(m.protein or 0 for m in meals))
    carbs = float(sum(m.carbs or 0 for m in meals))
    fats = float(sum(m.fat or 0 for m in meals))

    return DashboardResponse(
        date=on.isoformat(),
        daily_goal=daily_goal,
        consumed=consumed,
        remaining=daily_goal - consumed,
        progress_percent=(consumed / daily_goal * 100) if daily_goal else 0.0,
        macros=DashboardMacros(
            protein=MacroProgress(current=protein, goal=MACRO_GOALS["protein"]),
            carbs=MacroProgress(current=carbs, goal=MACRO_GOALS["carbs"]),
            fats=MacroProgress(current=fats, goal=MACRO_GOALS["fats"]),
        ),
        meal_count=len(meals),
        recent_meals=[MealOut.model_validate(m) for m in meals[:RECENT_MEALS]],
    )


def get_dashboard(db: Session, user_id: int, clock: Callable[[], datetime] = datetime.now) -> DashboardResponse:
    today = clock().date()
    start, end = day_range(today)
    meals = list_meals(db, user_id, start, end)
    return summarize(meals, daily_calorie_goal(db, user_id), today)
