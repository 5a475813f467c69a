from sqlalchemy import Column, DateTime, String, Text

from ..database import Base
from ..utils import new_id, utcnow


class PracticalInfo(Base):
    """Enregistrement unique : accès, parking, infrastructures."""

    __tablename__ = "practical_info"

    id = Column(String(36), primary_key=True, default=new_id)
    address = Column(String(500), nullable=True)
    google_maps_url = Column(String(1000), nullable=True)
    train_info = Column(Text, nullable=True)
    car_info = Column(Text, nullable=True)
    parking_info = Column(Text, nullable=True)
    facilities = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
