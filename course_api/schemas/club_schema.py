from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field


TrainingCategory = Literal["adult", "junior", "nordic", "prep_20km"]


class ClubContentUpdate(BaseModel):
    club_intro: Optional[str] = None
    club_history: Optional[str] = None
    club_spirit: Optional[str] = None
    members_count: Optional[int] = Field(default=None, ge=0)
    founded_year: Optional[int] = Field(default=None, ge=1800, le=2200)


class ClubContentOut(ClubContentUpdate):
    id: str

    model_config = {"from_attributes": True}


class TrainingSessionBase(BaseModel):
    category: TrainingCategory
    title: str = Field(..., min_length=1, max_length=255)
    day_of_week: str = Field(..., min_length=1, max_length=20)
    start_time: str = Field(..., min_length=1, max_length=10)
    end_time: Optional[str] = None
    location: Optional[str] = None
    level: Optional[str] = None
    description: Optional[str] = None
    target_audience: Optional[str] = None
    order_index: int = 0


class TrainingSessionCreate(TrainingSessionBase):
    pass


class TrainingSessionUpdate(BaseModel):
    category: Optional[TrainingCategory] = None
    title: Optional[str] = None
    day_of_week: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    level: Optional[str] = None
    description: Optional[str] = None
    target_audience: Optional[str] = None
    order_index: Optional[int] = None


class TrainingSessionOut(TrainingSessionBase):
    id: str

    model_config = {"from_attributes": True}


class CommitteeMemberBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=120)
    last_name: str = Field(..., min_length=1, max_length=120)
    role: str = Field(..., min_length=1, max_length=120)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    photo_asset_id: Optional[str] = None
    order_index: int = 0


class CommitteeMemberCreate(CommitteeMemberBase):
    pass


class CommitteeMemberUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    photo_asset_id: Optional[str] = None
    order_index: Optional[int] = None


class CommitteeMemberOut(CommitteeMemberBase):
    id: str
    email: Optional[str] = None
    photo_url: Optional[str] = None

    model_config = {"from_attributes": True}


class ClubDataOut(BaseModel):
    content: Optional[ClubContentOut] = None
    training_sessions: List[TrainingSessionOut]
    committee_members: List[CommitteeMemberOut]
