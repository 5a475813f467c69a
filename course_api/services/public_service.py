"""
Façade de lecture publique : un bundle par page du site.
"""
import logging

from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..errors import FormValidationError, NotFoundError
from ..models import (
    ClubContent,
    CommitteeMember,
    ContactMessage,
    Edition,
    FaqItem,
    MembershipRequest,
    PracticalInfo,
    ProgramItem,
    RaceCategory,
    Sponsor,
    TrainingSession,
)
from ..schemas.bundle_schema import EditionFullOut, HomeDataOut
from ..schemas.club_schema import ClubContentOut, ClubDataOut, CommitteeMemberOut, TrainingSessionOut
from ..schemas.edition_schema import EditionOut
from ..schemas.form_schema import ContactForm, MembershipForm
from ..schemas.practical_schema import FaqItemOut, PracticalInfoOut
from ..schemas.race_schema import ProgramItemOut, RaceCategoryOut
from ..schemas.sponsor_schema import SponsorOut, SponsorsPageOut
from . import cloudinary_service
from .asset_refs import resolve_asset_url
from .content_repository import ContentRepository

logger = logging.getLogger(__name__)

FEATURED_RACES_LIMIT = 6
MAIN_SPONSORS_LIMIT = 6


def race_out(race: RaceCategory) -> RaceCategoryOut:
    out = RaceCategoryOut.model_validate(race)
    out.route_map_url = resolve_asset_url(race.route_map_image_id, cloudinary_service.ROUTE_MAPS_BUCKET)
    return out


def sponsor_out(sponsor: Sponsor) -> SponsorOut:
    out = SponsorOut.model_validate(sponsor)
    out.logo_url = resolve_asset_url(sponsor.logo_asset_id, cloudinary_service.SPONSOR_LOGOS_BUCKET)
    return out


def committee_member_out(member: CommitteeMember) -> CommitteeMemberOut:
    out = CommitteeMemberOut.model_validate(member)
    out.photo_url = resolve_asset_url(member.photo_asset_id, cloudinary_service.COMMITTEE_PHOTOS_BUCKET)
    return out


def find_published_edition(db: Session) -> Edition | None:
    return ContentRepository(db, Edition, "Édition").first(
        filters={"status": "published"}, order=("-date",)
    )


def get_active_edition(db: Session) -> Edition:
    edition = find_published_edition(db)
    if edition is None:
        raise NotFoundError("Aucune édition active")
    return edition


def get_edition_by_slug(db: Session, slug: str) -> Edition:
    edition = ContentRepository(db, Edition, "Édition").first(filters={"slug": slug})
    if edition is None:
        raise NotFoundError(f"Édition '{slug}' introuvable")
    return edition


def sponsors_section_visible(db: Session) -> bool:
    """La section est masquée dès qu'une ligne sponsor porte section_visible=False."""
    return ContentRepository(db, Sponsor).count(filters={"section_visible": False}) == 0


def get_home_data(db: Session) -> HomeDataOut:
    edition = get_active_edition(db)

    races = ContentRepository(db, RaceCategory).select(
        filters={"edition_id": edition.id}, limit=FEATURED_RACES_LIMIT
    )
    club = ContentRepository(db, ClubContent).first()
    info = ContentRepository(db, PracticalInfo).first()

    sponsors = []
    if sponsors_section_visible(db):
        sponsors = ContentRepository(db, Sponsor).select(
            filters={"category": "principal", "is_visible": True}, limit=MAIN_SPONSORS_LIMIT
        )

    return HomeDataOut(
        edition=EditionOut.model_validate(edition),
        featured_races=[race_out(r) for r in races],
        club_excerpt=ClubContentOut.model_validate(club) if club else None,
        main_sponsors=[sponsor_out(s) for s in sponsors],
        practical_info_excerpt=PracticalInfoOut.model_validate(info) if info else None,
    )


def get_edition_full(db: Session, slug: str) -> EditionFullOut:
    edition = get_edition_by_slug(db, slug)
    races = ContentRepository(db, RaceCategory).select(filters={"edition_id": edition.id})
    program = ContentRepository(db, ProgramItem).select(filters={"edition_id": edition.id})
    return EditionFullOut(
        edition=EditionOut.model_validate(edition),
        races=[race_out(r) for r in races],
        program=[ProgramItemOut.model_validate(p) for p in program],
    )


def get_club_data(db: Session) -> ClubDataOut:
    content = ContentRepository(db, ClubContent).first()
    sessions = ContentRepository(db, TrainingSession).select()
    members = ContentRepository(db, CommitteeMember).select()
    return ClubDataOut(
        content=ClubContentOut.model_validate(content) if content else None,
        training_sessions=[TrainingSessionOut.model_validate(s) for s in sessions],
        committee_members=[committee_member_out(m) for m in members],
    )


def get_practical_info(db: Session) -> PracticalInfoOut | None:
    info = ContentRepository(db, PracticalInfo).first()
    return PracticalInfoOut.model_validate(info) if info else None


def get_faq(db: Session) -> list[FaqItemOut]:
    return [FaqItemOut.model_validate(item) for item in ContentRepository(db, FaqItem).select()]


def get_sponsors(db: Session) -> SponsorsPageOut:
    section_visible = sponsors_section_visible(db)
    sponsors = []
    if section_visible:
        sponsors = ContentRepository(db, Sponsor).select(filters={"is_visible": True})
    return SponsorsPageOut(
        section_visible=section_visible,
        sponsors=[sponsor_out(s) for s in sponsors],
    )


def validate_form(schema, data):
    """
    Valide un formulaire public avant tout accès à la base.

    Accepte un dict brut ou un schéma déjà validé.
    """
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise FormValidationError(f"Champs invalides ou manquants : {fields}") from e


def submit_contact(db: Session, data: ContactForm | dict) -> ContactMessage:
    form = validate_form(ContactForm, data)
    message = ContentRepository(db, ContactMessage, "Message").insert(
        {
            "name": form.name,
            "email": str(form.email),
            "subject": form.subject,
            "message": form.message,
            "status": "new",
        }
    )
    logger.info(f"Nouveau message de contact {message.id}")
    return message


def submit_membership(db: Session, data: MembershipForm | dict) -> MembershipRequest:
    form = validate_form(MembershipForm, data)
    request = ContentRepository(db, MembershipRequest, "Demande d'adhésion").insert(
        {
            "first_name": form.first_name,
            "last_name": form.last_name,
            "email": str(form.email),
            "phone": form.phone,
            "birth_date": form.birth_date,
            "address": form.address,
            "city": form.city,
            "postal_code": form.postal_code,
            "membership_type": form.membership_type,
            "message": form.message,
            "status": "new",
        }
    )
    logger.info(f"Nouvelle demande d'adhésion {request.id}")
    return request
