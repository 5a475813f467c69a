from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


RaceType = Literal["adult", "junior", "walking", "villageoise"]


class RaceCategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    slug: Optional[str] = None
    distance_km: float = Field(..., ge=0)
    type: RaceType
    start_time: str = Field(..., min_length=1, max_length=10)
    start_location: Optional[str] = None
    description: Optional[str] = None
    min_age: Optional[int] = Field(default=None, ge=0)
    max_age: Optional[int] = Field(default=None, ge=0)
    price: Optional[float] = Field(default=None, ge=0)
    registration_online: Optional[bool] = None
    registration_onsite: Optional[bool] = None
    onsite_supplement: Optional[float] = Field(default=None, ge=0)
    refreshments: Optional[str] = None
    facilities: Optional[str] = None
    souvenir: Optional[str] = None
    route_map_image_id: Optional[str] = None
    route_gpx_url: Optional[str] = None
    elevation_gain: Optional[int] = None
    order_index: int = 0

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom de la course est obligatoire")
        return v.strip()


class RaceCategoryCreate(RaceCategoryBase):
    pass


class RaceCategoryUpdate(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    distance_km: Optional[float] = Field(default=None, ge=0)
    type: Optional[RaceType] = None
    start_time: Optional[str] = None
    start_location: Optional[str] = None
    description: Optional[str] = None
    min_age: Optional[int] = Field(default=None, ge=0)
    max_age: Optional[int] = Field(default=None, ge=0)
    price: Optional[float] = Field(default=None, ge=0)
    registration_online: Optional[bool] = None
    registration_onsite: Optional[bool] = None
    onsite_supplement: Optional[float] = Field(default=None, ge=0)
    refreshments: Optional[str] = None
    facilities: Optional[str] = None
    souvenir: Optional[str] = None
    route_map_image_id: Optional[str] = None
    route_gpx_url: Optional[str] = None
    elevation_gain: Optional[int] = None
    order_index: Optional[int] = None


class RaceCategoryOut(RaceCategoryBase):
    id: str
    edition_id: str
    slug: str
    route_map_url: Optional[str] = None

    model_config = {"from_attributes": True}


class ProgramItemBase(BaseModel):
    time: str = Field(..., min_length=1, max_length=10)
    label: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    order_index: int = 0


class ProgramItemCreate(ProgramItemBase):
    pass


class ProgramItemUpdate(BaseModel):
    time: Optional[str] = None
    label: Optional[str] = None
    description: Optional[str] = None
    order_index: Optional[int] = None


class ProgramItemOut(ProgramItemBase):
    id: str
    edition_id: str
    created_at: datetime

    model_config = {"from_attributes": True}
