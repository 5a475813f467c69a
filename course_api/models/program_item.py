from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..database import Base
from ..utils import new_id, utcnow


class ProgramItem(Base):
    __tablename__ = "program_items"

    id = Column(String(36), primary_key=True, default=new_id)
    edition_id = Column(String(36), ForeignKey("editions.id", ondelete="CASCADE"), index=True, nullable=False)
    time = Column(String(10), nullable=False)
    label = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    order_index = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    edition = relationship("Edition", back_populates="program_items")
