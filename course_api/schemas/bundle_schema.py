from typing import List, Optional

from pydantic import BaseModel, Field

from .club_schema import ClubContentOut
from .edition_schema import EditionOut
from .form_schema import ContactMessageOut
from .practical_schema import PracticalInfoOut
from .race_schema import ProgramItemOut, RaceCategoryOut
from .sponsor_schema import SponsorOut


class HomeDataOut(BaseModel):
    edition: EditionOut
    featured_races: List[RaceCategoryOut]
    club_excerpt: Optional[ClubContentOut] = None
    main_sponsors: List[SponsorOut]
    practical_info_excerpt: Optional[PracticalInfoOut] = None


class EditionFullOut(BaseModel):
    edition: EditionOut
    races: List[RaceCategoryOut]
    program: List[ProgramItemOut]


class DashboardOut(BaseModel):
    active_edition: Optional[EditionOut] = None
    new_messages_count: int
    new_memberships_count: int
    recent_messages: List[ContactMessageOut]


class ReorderRequest(BaseModel):
    """
    ids : la liste telle qu'affichée (déjà filtrée et triée).
    from_index / to_index : déplacement glisser-déposer à appliquer avant la renumérotation.
    """

    ids: List[str] = Field(..., min_length=1)
    from_index: Optional[int] = Field(default=None, ge=0)
    to_index: Optional[int] = Field(default=None, ge=0)
