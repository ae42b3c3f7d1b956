from sqlalchemy import Column, Integer, Float, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from backend.database import Base

class Meal(Base):
    __tablename__ = "meals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    calories = Column(Integer, nullable=False, default=0)
    protein = Column(Float, nullable=False, default=0.0)   # g
    carbs = Column(Float, nullable=False, default=0.0)     # g
    fat = Column(Float, nullable=False, default=0.0)       # g
    fiber = Column(Float, nullable=False, default=0.0)     # g
    serving_size = Column(String(100))
    image_url = Column(String(255))
    # 일자 집계 기준
    created_at = Column(DateTime(timezone=False), server_default=func.now(), nullable=False, index=True)

    user = relationship("User", back_populates="meals")
