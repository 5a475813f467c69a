from sqlalchemy import Column, Date, DateTime, Index, Integer, String, text
from sqlalchemy.orm import relationship

from ..database import Base
from ..utils import new_id, utcnow


EDITION_STATUSES = ("draft", "published", "archived")


class Edition(Base):
    __tablename__ = "editions"

    id = Column(String(36), primary_key=True, default=new_id)
    slug = Column(String(100), unique=True, index=True, nullable=False)
    year = Column(Integer, index=True, nullable=False)
    edition_number = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)
    title = Column(String(255), nullable=False)
    hero_subtitle = Column(String(500), nullable=True)
    # draft / published / archived
    status = Column(String(20), nullable=False, default="draft")
    registration_online_url = Column(String(500), nullable=True)
    results_url = Column(String(500), nullable=True)
    photos_album_url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    races = relationship(
        "RaceCategory",
        back_populates="edition",
        cascade="all, delete-orphan",
    )
    program_items = relationship(
        "ProgramItem",
        back_populates="edition",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        # Une seule édition publiée à la fois
        Index(
            "uq_editions_single_published",
            "status",
            unique=True,
            sqlite_where=text("status = 'published'"),
            postgresql_where=text("status = 'published'"),
        ),
    )
