from sqlalchemy import Column, Date, DateTime, String, Text

from ..database import Base
from ..utils import new_id, utcnow


MEMBERSHIP_STATUSES = ("new", "in_progress", "done")


class MembershipRequest(Base):
    __tablename__ = "membership_requests"

    id = Column(String(36), primary_key=True, default=new_id)
    first_name = Column(String(120), nullable=False)
    last_name = Column(String(120), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    birth_date = Column(Date, nullable=True)
    address = Column(String(255), nullable=True)
    city = Column(String(120), nullable=True)
    postal_code = Column(String(20), nullable=True)
    # adult / junior / nordic / prep_20km
    membership_type = Column(String(50), nullable=False)
    message = Column(Text, nullable=True)
    status = Column(String(20), index=True, nullable=False, default="new")
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True, nullable=False)
