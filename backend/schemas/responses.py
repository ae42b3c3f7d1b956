
import datetime as dt
from typing import List, Optional
from pydantic import BaseModel, ConfigDict

from backend.schemas.analysis_schema import AnalysisResult


class MealCreate(BaseModel):
    analysis: AnalysisResult
    image: Optional[str] = None   # data URI

class MealOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    calories: int
    protein: float
    carbs: float
    fat: float
    fiber: float
    serving_size: Optional[str] = None
    image_url: Optional[str] = None
    created_at: dt.datetime

class MacroProgress(BaseModel):
    current: float
    goal: float

class DashboardMacros(BaseModel):
    protein: MacroProgress
    carbs: MacroProgress
    fats: MacroProgress

class DashboardResponse(BaseModel):
    date: str
    daily_goal: int
    consumed: int
    remaining: int
    progress_percent: float
    macros: DashboardMacros
    meal_count: int
    recent_meals: List[MealOut]

class HistoryMeal(BaseModel):
    name: str
    calories: int
    time: str

class HistoryDay(BaseModel):
    date: dt.date
    total_calories: int
    goal: int
    meal_count: int
    meals: List[HistoryMeal]

class WeeklyInsights(BaseModel):
    average_calories: float
    days_on_target: int
    days_logged: int
    top_meal: Optional[str] = None

class HistoryResponse(BaseModel):
    days: List[HistoryDay]
    calorie_change: int   # 오늘 - 어제
    insights: WeeklyInsights
