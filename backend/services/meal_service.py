
from __future__ import annotations
import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.models.meal import Meal
from backend.schemas.analysis_schema import AnalysisResult

logger = logging.getLogger(__name__)


class MealSaveError(RuntimeError):
    pass


def meal_record_from_analysis(analysis: AnalysisResult, image_url: str = "") -> Dict:
    """AnalysisResult → meals 테이블 레코드 (user_id 제외)"""
    return {
        "name": analysis.name,
        "calories": int(analysis.calories),
        "protein": float(analysis.macros.protein.amount),
        "carbs": float(analysis.macros.carbs.amount),
        "fat": float(analysis.macros.fats.amount),
        "fiber": float(analysis.fiber_grams()),
        "serving_size": analysis.serving_size,
        "image_url": image_url or "",
    }


def create_meal(
    db: Session,
    user_id: int,
    analysis: AnalysisResult,
    image_url: str = "",
    clock: Callable[[], datetime] = datetime.now,
) -> Meal:
    meal = Meal(user_id=user_id, created_at=clock(), **meal_record_from_analysis(analysis, image_url))
    try:
        db.add(meal)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to save meal for user %s: %s", user_id, e)
        raise MealSaveError("Failed to save meal to your diary.") from e
    db.refresh(meal)
    logger.info("Meal saved: user=%s meal=%s kcal=%s", user_id, meal.id, meal.calories)
    return meal


def list_meals(
    db: Session,
    user_id: int,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[Meal]:
    """start <= created_at < end, 최신순"""
    q = db.query(Meal).filter(Meal.user_id == user_id)
    if start is not None:
        q = q.filter(Meal.created_at >= start)
    if end is not None:
        q = q.filter(Meal.created_at < end)
    return q.order_by(Meal.created_at.desc(), Meal.id.desc()).all()
