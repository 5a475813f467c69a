import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


ContactStatus = Literal["new", "read", "archived"]
MembershipStatus = Literal["new", "in_progress", "done"]


class ContactForm(BaseModel):
    name: str = Field(..., max_length=200)
    email: EmailStr
    subject: str = Field(..., max_length=255)
    message: str = Field(..., max_length=5000)

    @field_validator("name", "subject", "message")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Ce champ est obligatoire")
        return v.strip()


class MembershipForm(BaseModel):
    first_name: str = Field(..., max_length=120)
    last_name: str = Field(..., max_length=120)
    email: EmailStr
    phone: Optional[str] = None
    birth_date: Optional[dt.date] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    membership_type: str = Field(..., max_length=50)
    message: Optional[str] = None

    @field_validator("first_name", "last_name", "membership_type")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Ce champ est obligatoire")
        return v.strip()


class SubmissionOut(BaseModel):
    success: bool
    message: str


class ContactMessageOut(BaseModel):
    id: str
    name: str
    email: str
    subject: str
    message: str
    status: str
    created_at: dt.datetime

    model_config = {"from_attributes": True}


class MembershipRequestOut(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    birth_date: Optional[dt.date] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    membership_type: str
    message: Optional[str] = None
    status: str
    created_at: dt.datetime

    model_config = {"from_attributes": True}


class ContactStatusUpdate(BaseModel):
    status: ContactStatus


class MembershipStatusUpdate(BaseModel):
    status: MembershipStatus
