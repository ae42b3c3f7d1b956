from sqlalchemy import Column, Integer, Float, String, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from backend.database import Base

DEFAULT_CALORIE_GOAL = 2000
DEFAULT_WORKOUT_DAYS = 3

class Profile(Base):
    __tablename__ = "profiles"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    height = Column(Float, nullable=True)          # cm
    weight = Column(Float, nullable=True)          # kg
    age = Column(Integer, nullable=True)
    gender = Column(String(10), nullable=True)
    activity_level = Column(String(20), nullable=True)
    daily_calorie_goal = Column(Integer, nullable=False, default=DEFAULT_CALORIE_GOAL)
    updated_at = Column(DateTime(timezone=False), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="profile")


class UserGoal(Base):
    __tablename__ = "user_goals"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    target_weight = Column(Float, nullable=True)   # kg
    target_date = Column(Date, nullable=True)
    weekly_workout_days = Column(Integer, nullable=False, default=DEFAULT_WORKOUT_DAYS)
    updated_at = Column(DateTime(timezone=False), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="goal")
