from sqlalchemy import Column, DateTime, Integer, String, Text

from ..database import Base
from ..utils import new_id, utcnow


TRAINING_CATEGORIES = ("adult", "junior", "nordic", "prep_20km")


class TrainingSession(Base):
    __tablename__ = "training_sessions"

    id = Column(String(36), primary_key=True, default=new_id)
    category = Column(String(20), index=True, nullable=False)
    title = Column(String(255), nullable=False)
    day_of_week = Column(String(20), nullable=False)
    start_time = Column(String(10), nullable=False)
    end_time = Column(String(10), nullable=True)
    location = Column(String(255), nullable=True)
    level = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    target_audience = Column(String(255), nullable=True)
    order_index = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
