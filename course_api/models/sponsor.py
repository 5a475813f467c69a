from sqlalchemy import Boolean, Column, DateTime, Integer, String

from ..database import Base
from ..utils import new_id, utcnow


SPONSOR_CATEGORIES = ("principal", "secondary")


class Sponsor(Base):
    __tablename__ = "sponsors"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    category = Column(String(20), index=True, nullable=False, default="secondary")
    # Chemin dans le stockage d'images ou URL absolue
    logo_asset_id = Column(String(500), nullable=True)
    website_url = Column(String(500), nullable=True)
    order_index = Column(Integer, nullable=False, default=0)
    # Masque le sponsor sans le supprimer
    is_visible = Column(Boolean, nullable=False, default=True)
    # Masque toute la section sponsors du site dès qu'une ligne est à False
    section_visible = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
