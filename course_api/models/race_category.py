from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..database import Base
from ..utils import new_id, utcnow


RACE_TYPES = ("adult", "junior", "walking", "villageoise")


class RaceCategory(Base):
    __tablename__ = "race_categories"

    id = Column(String(36), primary_key=True, default=new_id)
    edition_id = Column(String(36), ForeignKey("editions.id", ondelete="CASCADE"), index=True, nullable=False)
    name = Column(String(200), nullable=False)
    slug = Column(String(200), nullable=False)
    distance_km = Column(Float, nullable=False)
    type = Column(String(20), nullable=False)
    start_time = Column(String(10), nullable=False)
    start_location = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    min_age = Column(Integer, nullable=True)
    max_age = Column(Integer, nullable=True)
    price = Column(Float, nullable=True)
    registration_online = Column(Boolean, nullable=True)
    registration_onsite = Column(Boolean, nullable=True)
    onsite_supplement = Column(Float, nullable=True)
    refreshments = Column(String(500), nullable=True)
    facilities = Column(String(500), nullable=True)
    souvenir = Column(String(500), nullable=True)
    # Chemin dans le stockage d'images ou URL absolue
    route_map_image_id = Column(String(500), nullable=True)
    route_gpx_url = Column(String(500), nullable=True)
    elevation_gain = Column(Integer, nullable=True)
    order_index = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    edition = relationship("Edition", back_populates="races")
