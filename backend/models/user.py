from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from backend.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    password = Column(String(200), nullable=False)

    profile = relationship("Profile", back_populates="user", uselist=False, cascade="all, delete-orphan")
    goal = relationship("UserGoal", back_populates="user", uselist=False, cascade="all, delete-orphan")
    meals = relationship(
        "Meal",
        back_populates="user",
        cascade="all, delete-orphan"
    )
