from sqlalchemy import Column, DateTime, Integer, String, Text

from ..database import Base
from ..utils import new_id, utcnow


class FaqItem(Base):
    __tablename__ = "faq_items"

    id = Column(String(36), primary_key=True, default=new_id)
    question = Column(String(500), nullable=False)
    answer = Column(Text, nullable=False)
    category = Column(String(100), nullable=True)
    order_index = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
