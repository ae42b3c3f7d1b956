from datetime import date
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

Gender = Literal["male", "female", "other"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]

class ProfileIn(BaseModel):
    height: Optional[float] = Field(None, gt=0, description="cm")
    weight: Optional[float] = Field(None, gt=0, description="kg")
    age: Optional[int] = Field(None, gt=0)
    gender: Optional[Gender] = None
    activity_level: Optional[ActivityLevel] = None
    daily_calorie_goal: Optional[int] = Field(None, gt=0)

class ProfileOut(ProfileIn):
    model_config = ConfigDict(from_attributes=True)

    daily_calorie_goal: int = 2000

class GoalIn(BaseModel):
    target_weight: Optional[float] = Field(None, gt=0, description="kg")
    target_date: Optional[date] = None
    weekly_workout_days: Optional[int] = Field(None, ge=1, le=7)

class GoalOut(GoalIn):
    model_config = ConfigDict(from_attributes=True)

    weekly_workout_days: int = 3

class ProfileUpdate(BaseModel):
    profile: Optional[ProfileIn] = None
    goal: Optional[GoalIn] = None

class ProfileBundle(BaseModel):
    profile: Optional[ProfileOut] = None
    goal: Optional[GoalOut] = None
    complete: bool = False
