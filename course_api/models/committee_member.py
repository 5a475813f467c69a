from sqlalchemy import Column, DateTime, Integer, String

from ..database import Base
from ..utils import new_id, utcnow


class CommitteeMember(Base):
    __tablename__ = "committee_members"

    id = Column(String(36), primary_key=True, default=new_id)
    first_name = Column(String(120), nullable=False)
    last_name = Column(String(120), nullable=False)
    role = Column(String(120), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    # Chemin dans le stockage d'images ou URL absolue
    photo_asset_id = Column(String(500), nullable=True)
    order_index = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
