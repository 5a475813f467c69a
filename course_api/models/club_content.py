from sqlalchemy import Column, DateTime, Integer, String, Text

from ..database import Base
from ..utils import new_id, utcnow


class ClubContent(Base):
    """Enregistrement unique : textes de présentation du club."""

    __tablename__ = "club_content"

    id = Column(String(36), primary_key=True, default=new_id)
    club_intro = Column(Text, nullable=True)
    club_history = Column(Text, nullable=True)
    club_spirit = Column(Text, nullable=True)
    members_count = Column(Integer, nullable=True)
    founded_year = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
