from sqlalchemy import Column, DateTime, String, Text

from ..database import Base
from ..utils import new_id, utcnow


CONTACT_STATUSES = ("new", "read", "archived")


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(20), index=True, nullable=False, default="new")
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True, nullable=False)
