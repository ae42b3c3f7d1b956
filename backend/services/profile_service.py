
from __future__ import annotations
import logging
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from backend.models.profile import Profile, UserGoal, DEFAULT_CALORIE_GOAL, DEFAULT_WORKOUT_DAYS
from backend.schemas.profile_schema import ProfileBundle, ProfileOut, GoalOut, ProfileUpdate

logger = logging.getLogger(__name__)


def profile_is_complete(profile: Optional[Any]) -> bool:
    """키와 몸무게가 모두 있어야 채팅 가능"""
    if profile is None:
        return False
    if isinstance(profile, Mapping):
        height, weight = profile.get("height"), profile.get("weight")
    else:
        height, weight = getattr(profile, "height", None), getattr(profile, "weight", None)
    return height not in (None, "") and weight not in (None, "")


def get_profile(db: Session, user_id: int) -> Optional[Profile]:
    return db.get(Profile, user_id)


def get_goal(db: Session, user_id: int) -> Optional[UserGoal]:
    return db.get(UserGoal, user_id)


def daily_calorie_goal(db: Session, user_id: int) -> int:
    profile = get_profile(db, user_id)
    if profile is None or not profile.daily_calorie_goal:
        return DEFAULT_CALORIE_GOAL
    return int(profile.daily_calorie_goal)


def get_bundle(db: Session, user_id: int) -> ProfileBundle:
    profile = get_profile(db, user_id)
    goal = get_goal(db, user_id)
    return ProfileBundle(
        profile=ProfileOut.model_validate(profile) if profile else None,
        goal=GoalOut.model_validate(goal) if goal else None,
        complete=profile_is_complete(profile),
    )


def upsert_bundle(db: Session, user_id: int, payload: ProfileUpdate) -> ProfileBundle:
    # 요청에 들어온 필드만 덮어씀 (나머지는 저장값 유지)
    if payload.profile is not None:
        profile = get_profile(db, user_id) or Profile(user_id=user_id)
        for field, value in payload.profile.model_dump(exclude_unset=True).items():
            setattr(profile, field, value)
        if profile.daily_calorie_goal is None:
            profile.daily_calorie_goal = DEFAULT_CALORIE_GOAL
        db.add(profile)

    if payload.goal is not None:
        goal = get_goal(db, user_id) or UserGoal(user_id=user_id)
        for field, value in payload.goal.model_dump(exclude_unset=True).items():
            setattr(goal, field, value)
        if goal.weekly_workout_days is None:
            goal.weekly_workout_days = DEFAULT_WORKOUT_DAYS
        db.add(goal)

    db.commit()
    logger.info("Profile updated for user %s", user_id)
    return get_bundle(db, user_id)
