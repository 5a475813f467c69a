"""
Façade d'administration : cycle de vie des éditions, CRUD générique,
enregistrements uniques, tableau de bord, boîte de réception, réordonnancement
et images.

Les opérations qui touchent plusieurs lignes (activation, duplication,
réordonnancement) passent par une seule transaction via atomic().
"""
import logging
from datetime import date
from typing import Any

from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..errors import FormValidationError, NotFoundError
from ..models import (
    CommitteeMember,
    ContactMessage,
    Edition,
    FaqItem,
    MembershipRequest,
    ProgramItem,
    RaceCategory,
    Sponsor,
    TrainingSession,
)
from ..models.contact_message import CONTACT_STATUSES
from ..models.membership_request import MEMBERSHIP_STATUSES
from ..schemas.bundle_schema import DashboardOut, ReorderRequest
from ..schemas.edition_schema import EditionCreate, EditionDefaultsOut, EditionOut, EditionUpdate
from ..schemas.form_schema import ContactMessageOut
from ..schemas.sponsor_schema import SponsorStatsOut
from ..utils import slugify
from . import cloudinary_service
from .asset_refs import StoredAsset, parse_asset_ref
from .content_repository import ContentRepository, atomic
from .list_filters import filter_items, move_item, renumber, sort_by_order_index
from .public_service import find_published_edition

logger = logging.getLogger(__name__)

EDITION_TITLE_PREFIX = "Course des Traîne-Savates"
# Date proposée pour une édition dupliquée : 14 juin
DUPLICATE_MONTH, DUPLICATE_DAY = 6, 14
RECENT_MESSAGES_LIMIT = 5

LABELS = {
    Edition: "Édition",
    RaceCategory: "Course",
    ProgramItem: "Élément du programme",
    TrainingSession: "Entraînement",
    CommitteeMember: "Membre du comité",
    Sponsor: "Sponsor",
    FaqItem: "Question FAQ",
    ContactMessage: "Message",
    MembershipRequest: "Demande d'adhésion",
}

SEARCH_FIELDS = {
    Edition: ("title", "year", "slug", "hero_subtitle"),
    RaceCategory: ("name", "type", "start_location", "description"),
    ProgramItem: ("time", "label", "description"),
    TrainingSession: ("title", "day_of_week", "location", "level", "description"),
    CommitteeMember: ("first_name", "last_name", "role", "email"),
    Sponsor: ("name", "category", "website_url"),
    FaqItem: ("question", "answer", "category"),
    ContactMessage: ("name", "email", "subject", "message"),
    MembershipRequest: ("first_name", "last_name", "email", "city", "membership_type"),
}

# Type d'image -> (bucket, dossier logique)
UPLOAD_TARGETS = {
    "sponsor-logo": (cloudinary_service.SPONSOR_LOGOS_BUCKET, "sponsors"),
    "committee-photo": (cloudinary_service.COMMITTEE_PHOTOS_BUCKET, "committee"),
    "route-map": (cloudinary_service.ROUTE_MAPS_BUCKET, "routes"),
}


def repository(db: Session, model) -> ContentRepository:
    return ContentRepository(db, model, LABELS.get(model))


def _payload_values(payload: BaseModel | dict, exclude_unset: bool = False) -> dict[str, Any]:
    if isinstance(payload, BaseModel):
        return payload.model_dump(exclude_unset=exclude_unset)
    return dict(payload)


def _copy_columns(row, exclude: set[str]) -> dict[str, Any]:
    return {c.key: getattr(row, c.key) for c in row.__table__.columns if c.key not in exclude}


# ---------------------------------------------------------------------------
# Éditions
# ---------------------------------------------------------------------------

def list_editions(
    db: Session,
    status: str | None = None,
    year: int | None = None,
    search: str | None = None,
) -> list[Edition]:
    editions = repository(db, Edition).select(order=("-date",))
    return filter_items(editions, search=search, search_fields=SEARCH_FIELDS[Edition], status=status, year=year)


def get_edition(db: Session, edition_id: str) -> Edition:
    return repository(db, Edition).get(edition_id)


def create_edition(db: Session, payload: EditionCreate) -> Edition:
    values = _payload_values(payload)
    values["status"] = "draft"
    edition = repository(db, Edition).insert(values)
    logger.info(f"Édition {edition.slug} créée en brouillon")
    return edition


def update_edition(db: Session, edition_id: str, payload: EditionUpdate) -> Edition:
    values = _payload_values(payload, exclude_unset=True)
    status = values.pop("status", None)
    repo = repository(db, Edition)
    edition = repo.update(edition_id, values) if values else repo.get(edition_id)

    if status == "published":
        return activate_edition(db, edition_id)
    if status is not None and status != edition.status:
        edition = repo.update(edition_id, {"status": status})
    return edition


def activate_edition(db: Session, edition_id: str) -> Edition:
    """
    Publie l'édition cible et archive toutes les autres, en une transaction.

    L'existence de la cible est vérifiée avant toute écriture.
    """
    target = repository(db, Edition).get(edition_id)
    with atomic(db, LABELS[Edition]):
        db.query(Edition).filter(Edition.id != edition_id).update(
            {Edition.status: "archived"}, synchronize_session="fetch"
        )
        target.status = "published"
    db.refresh(target)
    logger.info(f"Édition {target.slug} activée")
    return target


def duplicate_edition(db: Session, source_id: str, year: int | None = None) -> Edition:
    """
    Copie une édition avec ses courses et son programme, en brouillon.

    Tout ou rien : si une copie échoue, rien n'est conservé.
    """
    source = repository(db, Edition).get(source_id)
    year = year or source.year + 1

    races = repository(db, RaceCategory).select(filters={"edition_id": source.id})
    program = repository(db, ProgramItem).select(filters={"edition_id": source.id})

    with atomic(db, LABELS[Edition]):
        values = _copy_columns(source, exclude={"id", "created_at", "updated_at"})
        values.update(
            slug=str(year),
            year=year,
            edition_number=source.edition_number + 1,
            date=date(year, DUPLICATE_MONTH, DUPLICATE_DAY),
            status="draft",
            registration_online_url=None,
            results_url=None,
            photos_album_url=None,
        )
        copy = Edition(**values)
        db.add(copy)
        db.flush()

        for race in races:
            db.add(RaceCategory(**_copy_columns(race, {"id", "edition_id", "created_at"}), edition_id=copy.id))
        for item in program:
            db.add(ProgramItem(**_copy_columns(item, {"id", "edition_id", "created_at"}), edition_id=copy.id))

    db.refresh(copy)
    logger.info(
        f"Édition {source.slug} dupliquée vers {copy.slug} "
        f"({len(races)} courses, {len(program)} éléments de programme)"
    )
    return copy


def _same_day(year: int, model: date) -> date:
    try:
        return model.replace(year=year)
    except ValueError:
        # 29 février vers une année non bissextile
        return date(year, model.month, 28)


def next_edition_defaults(db: Session, today: date | None = None) -> EditionDefaultsOut:
    """Propose les valeurs de la prochaine édition à partir de la plus récente."""
    today = today or date.today()
    latest = repository(db, Edition).first(order=("-date",))

    if latest is None:
        year = today.year
        return EditionDefaultsOut(
            year=year,
            edition_number=1,
            date=date(year, DUPLICATE_MONTH, DUPLICATE_DAY),
            title=f"{EDITION_TITLE_PREFIX} {year}",
            slug=str(year),
        )

    year = max(latest.year + 1, today.year)
    return EditionDefaultsOut(
        year=year,
        edition_number=latest.edition_number + 1,
        date=_same_day(year, latest.date),
        title=f"{EDITION_TITLE_PREFIX} {year}",
        slug=str(year),
        based_on_edition_id=latest.id,
    )


# ---------------------------------------------------------------------------
# CRUD générique
# ---------------------------------------------------------------------------

def list_rows(
    db: Session,
    model,
    search: str | None = None,
    descending: bool = False,
    scope: dict[str, Any] | None = None,
    **equals: Any,
) -> list:
    rows = repository(db, model).select(filters=scope)
    rows = filter_items(rows, search=search, search_fields=SEARCH_FIELDS.get(model, ()), **equals)
    return sort_by_order_index(rows, descending=descending)


def create_row(db: Session, model, payload: BaseModel | dict, **extra: Any):
    values = _payload_values(payload)
    values.update(extra)
    return repository(db, model).insert(values)


def update_row(db: Session, model, row_id: str, payload: BaseModel | dict):
    return repository(db, model).update(row_id, _payload_values(payload, exclude_unset=True))


def delete_row(db: Session, model, row_id: str) -> None:
    repository(db, model).delete(row_id)
    logger.info(f"{LABELS.get(model, model.__tablename__)} {row_id} supprimé(e)")


def create_race(db: Session, edition_id: str, payload) -> RaceCategory:
    get_edition(db, edition_id)
    values = _payload_values(payload)
    if not values.get("slug"):
        values["slug"] = slugify(values["name"])
    return create_row(db, RaceCategory, values, edition_id=edition_id)


def create_program_item(db: Session, edition_id: str, payload) -> ProgramItem:
    get_edition(db, edition_id)
    return create_row(db, ProgramItem, payload, edition_id=edition_id)


# ---------------------------------------------------------------------------
# Enregistrements uniques (contenu du club, infos pratiques)
# ---------------------------------------------------------------------------

def get_singleton(db: Session, model):
    row = ContentRepository(db, model).first()
    if row is None:
        raise NotFoundError(f"Aucun enregistrement {model.__tablename__}")
    return row


def upsert_singleton(db: Session, model, payload: BaseModel | dict):
    """Met à jour la première ligne si elle existe, sinon l'insère."""
    repo = ContentRepository(db, model)
    values = _payload_values(payload, exclude_unset=True)
    existing = repo.first()
    if existing is not None:
        return repo.update(existing.id, values)
    return repo.insert(values)


# ---------------------------------------------------------------------------
# Tableau de bord et boîte de réception
# ---------------------------------------------------------------------------

def get_dashboard(db: Session) -> DashboardOut:
    edition = find_published_edition(db)
    messages = repository(db, ContactMessage)
    recent = messages.select(order=("-created_at",), limit=RECENT_MESSAGES_LIMIT)
    return DashboardOut(
        active_edition=EditionOut.model_validate(edition) if edition else None,
        new_messages_count=messages.count(filters={"status": "new"}),
        new_memberships_count=repository(db, MembershipRequest).count(filters={"status": "new"}),
        recent_messages=[ContactMessageOut.model_validate(m) for m in recent],
    )


def list_inbox(db: Session, model, status: str | None = None, search: str | None = None) -> list:
    rows = repository(db, model).select(order=("-created_at",))
    return filter_items(rows, search=search, search_fields=SEARCH_FIELDS[model], status=status)


def update_contact_status(db: Session, message_id: str, status: str) -> ContactMessage:
    if status not in CONTACT_STATUSES:
        raise FormValidationError(f"Statut de message invalide : {status}")
    return repository(db, ContactMessage).update(message_id, {"status": status})


def update_membership_status(db: Session, request_id: str, status: str) -> MembershipRequest:
    if status not in MEMBERSHIP_STATUSES:
        raise FormValidationError(f"Statut de demande invalide : {status}")
    return repository(db, MembershipRequest).update(request_id, {"status": status})


# ---------------------------------------------------------------------------
# Réordonnancement
# ---------------------------------------------------------------------------

def reorder_rows(db: Session, model, request: ReorderRequest, scope: dict[str, Any] | None = None) -> list:
    """
    Applique le déplacement demandé à la liste affichée puis renumérote 1..N.

    Seules les lignes de la liste sont touchées ; l'écriture est atomique.
    """
    ids = list(request.ids)
    if (request.from_index is None) != (request.to_index is None):
        raise FormValidationError("from_index et to_index vont ensemble")
    if request.from_index is not None:
        try:
            ids = move_item(ids, request.from_index, request.to_index)
        except IndexError as e:
            raise FormValidationError(str(e)) from e
    if len(set(ids)) != len(ids):
        raise FormValidationError("Identifiants en double dans la liste")

    rows = {row.id: row for row in db.query(model).filter(model.id.in_(ids)).all()}
    missing = [row_id for row_id in ids if row_id not in rows]
    if missing:
        raise NotFoundError(f"{LABELS.get(model, model.__tablename__)} introuvable : {', '.join(missing)}")
    for field, value in (scope or {}).items():
        if any(getattr(row, field) != value for row in rows.values()):
            raise FormValidationError("Tous les éléments doivent appartenir à la même liste")

    ordered = [rows[row_id] for row_id in ids]
    with atomic(db, LABELS.get(model, model.__tablename__)):
        for row, position in renumber(ordered):
            row.order_index = position
    for row in ordered:
        db.refresh(row)
    return ordered


# ---------------------------------------------------------------------------
# Sponsors
# ---------------------------------------------------------------------------

def faq_categories(db: Session) -> list[str]:
    categories = {item.category for item in repository(db, FaqItem).select() if item.category}
    return sorted(categories)


def get_sponsor_stats(db: Session) -> SponsorStatsOut:
    repo = repository(db, Sponsor)
    return SponsorStatsOut(
        total=repo.count(),
        principal=repo.count(filters={"category": "principal"}),
        secondary=repo.count(filters={"category": "secondary"}),
    )


def set_sponsors_section_visible(db: Session, visible: bool) -> bool:
    """Le drapeau de section est porté par chaque ligne sponsor : on les met toutes à jour."""
    with atomic(db, LABELS[Sponsor]):
        updated = db.query(Sponsor).update({Sponsor.section_visible: visible}, synchronize_session="fetch")
    logger.info(f"Section sponsors {'affichée' if visible else 'masquée'} ({updated} lignes)")
    return visible


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

def ensure_image(content_type: str | None) -> None:
    """Refuse tout fichier dont le type MIME n'est pas image/*."""
    if not content_type or not content_type.startswith("image/"):
        raise FormValidationError("Le fichier doit être une image")


def upload_image(kind: str, filename: str | None, contents: bytes) -> dict[str, str]:
    """Envoie une image au stockage et renvoie son chemin et son URL publique."""
    if kind not in UPLOAD_TARGETS:
        raise FormValidationError(f"Type d'image inconnu : {kind}")
    if not contents:
        raise FormValidationError("Fichier vide")
    bucket, folder = UPLOAD_TARGETS[kind]
    path = cloudinary_service.generate_asset_path(folder, filename)
    cloudinary_service.upload(bucket, path, contents, upsert=True)
    return {"path": path, "url": cloudinary_service.get_public_url(bucket, path)}


def attach_image(db: Session, model, row_id: str, field: str, kind: str, filename: str | None, contents: bytes):
    """
    Envoie l'image puis enregistre son chemin sur la ligne (vérifiée au préalable).
    L'ancienne image est supprimée du stockage si elle y était ; une URL externe est laissée telle quelle.
    """
    repo = repository(db, model)
    previous = parse_asset_ref(getattr(repo.get(row_id), field))
    uploaded = upload_image(kind, filename, contents)
    row = repo.update(row_id, {field: uploaded["path"]})
    if isinstance(previous, StoredAsset) and previous.path != uploaded["path"]:
        bucket, _ = UPLOAD_TARGETS[kind]
        if not cloudinary_service.delete(bucket, previous.path):
            logger.warning(f"Ancienne image non supprimée : {bucket}/{previous.path}")
    return row

