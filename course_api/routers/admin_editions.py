from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import ProgramItem, RaceCategory
from ..schemas.bundle_schema import ReorderRequest
from ..schemas.edition_schema import (
    DuplicateEditionIn,
    EditionCreate,
    EditionDefaultsOut,
    EditionOut,
    EditionStatus,
    EditionUpdate,
)
from ..schemas.race_schema import (
    ProgramItemCreate,
    ProgramItemOut,
    ProgramItemUpdate,
    RaceCategoryCreate,
    RaceCategoryOut,
    RaceCategoryUpdate,
    RaceType,
)
from ..services import admin_service
from ..services.public_service import race_out
from ..services.revalidation_service import revalidate_editions
from ..services.security import require_admin

router = APIRouter(prefix="/admin", tags=["admin-editions"], dependencies=[Depends(require_admin)])


def _edition_slug(db: Session, edition_id: str) -> str:
    return admin_service.get_edition(db, edition_id).slug


# ---------------------------------------------------------------------------
# Éditions
# ---------------------------------------------------------------------------

@router.get("/editions", response_model=List[EditionOut])
def list_editions(
    status: Optional[EditionStatus] = Query(default=None),
    year: Optional[int] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Recherche dans titre, année, slug et sous-titre"),
    db: Session = Depends(get_db),
):
    """Éditions de la plus récente à la plus ancienne."""
    return admin_service.list_editions(db, status=status, year=year, search=search)


@router.get("/editions/next-defaults", response_model=EditionDefaultsOut)
def get_next_edition_defaults(db: Session = Depends(get_db)):
    return admin_service.next_edition_defaults(db)


@router.get("/editions/{edition_id}", response_model=EditionOut)
def get_edition(edition_id: str, db: Session = Depends(get_db)):
    return admin_service.get_edition(db, edition_id)


@router.post("/editions", response_model=EditionOut, status_code=201)
def create_edition(payload: EditionCreate, db: Session = Depends(get_db)):
    """Crée une édition, toujours en brouillon."""
    return admin_service.create_edition(db, payload)


@router.put("/editions/{edition_id}", response_model=EditionOut)
def update_edition(
    edition_id: str,
    payload: EditionUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    """
    Mise à jour partielle.
    Passer le statut à "published" revient à activer l'édition (les autres sont archivées).
    """
    edition = admin_service.update_edition(db, edition_id, payload)
    background_tasks.add_task(revalidate_editions, edition.slug)
    return edition


@router.post("/editions/{edition_id}/activate", response_model=EditionOut)
def activate_edition(edition_id: str, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    edition = admin_service.activate_edition(db, edition_id)
    background_tasks.add_task(revalidate_editions, edition.slug)
    return edition


@router.post("/editions/{edition_id}/duplicate", response_model=EditionOut, status_code=201)
def duplicate_edition(
    edition_id: str,
    payload: Optional[DuplicateEditionIn] = None,
    db: Session = Depends(get_db),
):
    """Copie l'édition, ses courses et son programme vers une nouvelle année (brouillon)."""
    year = payload.year if payload else None
    return admin_service.duplicate_edition(db, edition_id, year)


# ---------------------------------------------------------------------------
# Courses
# ---------------------------------------------------------------------------

@router.get("/editions/{edition_id}/races", response_model=List[RaceCategoryOut])
def list_races(
    edition_id: str,
    type: Optional[RaceType] = Query(default=None),
    search: Optional[str] = Query(default=None),
    descending: bool = Query(default=False),
    db: Session = Depends(get_db),
):
    admin_service.get_edition(db, edition_id)
    races = admin_service.list_rows(
        db, RaceCategory, search=search, descending=descending, scope={"edition_id": edition_id}, type=type
    )
    return [race_out(r) for r in races]


@router.post("/editions/{edition_id}/races", response_model=RaceCategoryOut, status_code=201)
def create_race(
    edition_id: str,
    payload: RaceCategoryCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    race = admin_service.create_race(db, edition_id, payload)
    background_tasks.add_task(revalidate_editions, race.edition.slug)
    return race_out(race)


@router.post("/editions/{edition_id}/races/reorder", response_model=List[RaceCategoryOut])
def reorder_races(
    edition_id: str,
    payload: ReorderRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    races = admin_service.reorder_rows(db, RaceCategory, payload, scope={"edition_id": edition_id})
    background_tasks.add_task(revalidate_editions, _edition_slug(db, edition_id))
    return [race_out(r) for r in races]


@router.put("/races/{race_id}", response_model=RaceCategoryOut)
def update_race(
    race_id: str,
    payload: RaceCategoryUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    race = admin_service.update_row(db, RaceCategory, race_id, payload)
    background_tasks.add_task(revalidate_editions, race.edition.slug)
    return race_out(race)


@router.delete("/races/{race_id}", status_code=204)
def delete_race(race_id: str, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    slug = admin_service.repository(db, RaceCategory).get(race_id).edition.slug
    admin_service.delete_row(db, RaceCategory, race_id)
    background_tasks.add_task(revalidate_editions, slug)
    return None


@router.post("/races/{race_id}/route-map", response_model=RaceCategoryOut)
async def upload_route_map(
    race_id: str,
    background_tasks: BackgroundTasks,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
):
    """Envoie la carte du parcours et enregistre son chemin sur la course."""
    admin_service.ensure_image(file.content_type)
    contents = await file.read()
    race = admin_service.attach_image(
        db, RaceCategory, race_id, "route_map_image_id", "route-map", file.filename, contents
    )
    background_tasks.add_task(revalidate_editions, race.edition.slug)
    return race_out(race)


# ---------------------------------------------------------------------------
# Programme
# ---------------------------------------------------------------------------

@router.get("/editions/{edition_id}/program", response_model=List[ProgramItemOut])
def list_program(
    edition_id: str,
    search: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
):
    admin_service.get_edition(db, edition_id)
    return admin_service.list_rows(db, ProgramItem, search=search, scope={"edition_id": edition_id})


@router.post("/editions/{edition_id}/program", response_model=ProgramItemOut, status_code=201)
def create_program_item(
    edition_id: str,
    payload: ProgramItemCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    item = admin_service.create_program_item(db, edition_id, payload)
    background_tasks.add_task(revalidate_editions, item.edition.slug)
    return item


@router.post("/editions/{edition_id}/program/reorder", response_model=List[ProgramItemOut])
def reorder_program(
    edition_id: str,
    payload: ReorderRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    items = admin_service.reorder_rows(db, ProgramItem, payload, scope={"edition_id": edition_id})
    background_tasks.add_task(revalidate_editions, _edition_slug(db, edition_id))
    return items


@router.put("/program/{item_id}", response_model=ProgramItemOut)
def update_program_item(
    item_id: str,
    payload: ProgramItemUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    item = admin_service.update_row(db, ProgramItem, item_id, payload)
    background_tasks.add_task(revalidate_editions, item.edition.slug)
    return item


@router.delete("/program/{item_id}", status_code=204)
def delete_program_item(item_id: str, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    slug = admin_service.repository(db, ProgramItem).get(item_id).edition.slug
    admin_service.delete_row(db, ProgramItem, item_id)
    background_tasks.add_task(revalidate_editions, slug)
    return None
