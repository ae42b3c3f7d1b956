
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from backend.database import get_db
from backend.models.user import User
from backend.routes.auth import get_current_user
from backend.schemas.responses import MealCreate, MealOut
from backend.services.meal_service import MealSaveError, create_meal, list_meals
from backend.utils.images import ImageError, store_data_uri

router = APIRouter(prefix="/meals", tags=["Meals"])

@router.post("", response_model=MealOut, status_code=201)
def save_meal(payload: MealCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    image_url = ""
    if payload.image:
        try:
            image_url = store_data_uri(payload.image)
        except ImageError as e:
            raise HTTPException(status_code=e.status_code, detail=str(e))
    try:
        return create_meal(db, user.id, payload.analysis, image_url)
    except MealSaveError as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("", response_model=List[MealOut])
def get_meals(
    start: Optional[datetime] = Query(None, description="포함 (>=)"),
    end: Optional[datetime] = Query(None, description="미포함 (<)"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if start and end and end <= start:
        raise HTTPException(status_code=422, detail="end must be after start.")
    return list_meals(db, user.id, start, end)
