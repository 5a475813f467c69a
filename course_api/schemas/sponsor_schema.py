from typing import List, Literal, Optional

from pydantic import BaseModel, Field


SponsorCategory = Literal["principal", "secondary"]


class SponsorBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    category: SponsorCategory = "secondary"
    logo_asset_id: Optional[str] = None
    website_url: Optional[str] = None
    order_index: int = 0
    is_visible: bool = True


class SponsorCreate(SponsorBase):
    pass


class SponsorUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[SponsorCategory] = None
    logo_asset_id: Optional[str] = None
    website_url: Optional[str] = None
    order_index: Optional[int] = None
    is_visible: Optional[bool] = None


class SponsorOut(SponsorBase):
    id: str
    section_visible: bool = True
    logo_url: Optional[str] = None

    model_config = {"from_attributes": True}


class SponsorsPageOut(BaseModel):
    section_visible: bool
    sponsors: List[SponsorOut]


class SponsorStatsOut(BaseModel):
    total: int
    principal: int
    secondary: int


class SectionVisibilityIn(BaseModel):
    visible: bool
