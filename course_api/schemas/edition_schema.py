import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..utils import slugify


EditionStatus = Literal["draft", "published", "archived"]


def _strip_required(value: str, label: str) -> str:
    if value is None or not value.strip():
        raise ValueError(f"{label} est obligatoire")
    return value.strip()


RESERVED_SLUGS = {"active"}


def _edition_slug(value: str) -> str:
    """Le slug sert de segment d'URL : minuscules, chiffres et tirets uniquement."""
    slug = _strip_required(value, "Le slug")
    if slugify(slug) != slug:
        raise ValueError("Le slug ne peut contenir que des minuscules, des chiffres et des tirets")
    if slug in RESERVED_SLUGS:
        raise ValueError(f"Le slug « {slug} » est réservé")
    return slug


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class EditionBase(BaseModel):
    year: int = Field(..., ge=1900, le=2200)
    edition_number: int = Field(..., ge=1)
    date: dt.date
    title: str
    slug: str
    hero_subtitle: Optional[str] = None
    registration_online_url: Optional[str] = None
    results_url: Optional[str] = None
    photos_album_url: Optional[str] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _strip_required(v, "Le titre")

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        return _edition_slug(v)

    @field_validator("hero_subtitle", "registration_online_url", "results_url", "photos_album_url")
    @classmethod
    def blank_optional(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)


class EditionCreate(EditionBase):
    """Une nouvelle édition est toujours créée en brouillon."""


class EditionUpdate(BaseModel):
    year: Optional[int] = Field(default=None, ge=1900, le=2200)
    edition_number: Optional[int] = Field(default=None, ge=1)
    date: Optional[dt.date] = None
    title: Optional[str] = None
    slug: Optional[str] = None
    hero_subtitle: Optional[str] = None
    status: Optional[EditionStatus] = None
    registration_online_url: Optional[str] = None
    results_url: Optional[str] = None
    photos_album_url: Optional[str] = None

    @field_validator("title")
    @classmethod
    def validate_required_text(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _strip_required(v, "Ce champ")

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _edition_slug(v)


class EditionOut(BaseModel):
    id: str
    slug: str
    year: int
    edition_number: int
    date: dt.date
    title: str
    hero_subtitle: Optional[str] = None
    status: EditionStatus
    registration_online_url: Optional[str] = None
    results_url: Optional[str] = None
    photos_album_url: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = {"from_attributes": True}


class DuplicateEditionIn(BaseModel):
    # Par défaut : année de la source + 1
    year: Optional[int] = Field(default=None, ge=1900, le=2200)


class EditionDefaultsOut(BaseModel):
    year: int
    edition_number: int
    date: dt.date
    title: str
    slug: str
    based_on_edition_id: Optional[str] = None
