from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Sponsor
from ..schemas.bundle_schema import ReorderRequest
from ..schemas.sponsor_schema import (
    SectionVisibilityIn,
    SponsorCategory,
    SponsorCreate,
    SponsorOut,
    SponsorStatsOut,
    SponsorUpdate,
)
from ..services import admin_service
from ..services.public_service import sponsor_out, sponsors_section_visible
from ..services.revalidation_service import revalidate_sponsors
from ..services.security import require_admin

router = APIRouter(prefix="/admin/sponsors", tags=["admin-sponsors"], dependencies=[Depends(require_admin)])


@router.get("", response_model=List[SponsorOut])
def list_sponsors(
    category: Optional[SponsorCategory] = Query(default=None),
    search: Optional[str] = Query(default=None),
    descending: bool = Query(default=False),
    db: Session = Depends(get_db),
):
    """
    Tous les sponsors, visibles ou non.
    Filtres catégorie et recherche combinés, tri par order_index.
    """
    sponsors = admin_service.list_rows(db, Sponsor, search=search, descending=descending, category=category)
    return [sponsor_out(s) for s in sponsors]


@router.get("/stats", response_model=SponsorStatsOut)
def get_sponsor_stats(db: Session = Depends(get_db)):
    return admin_service.get_sponsor_stats(db)


@router.get("/section-visibility", response_model=SectionVisibilityIn)
def get_section_visibility(db: Session = Depends(get_db)):
    return SectionVisibilityIn(visible=sponsors_section_visible(db))


@router.put("/section-visibility", response_model=SectionVisibilityIn)
def set_section_visibility(
    payload: SectionVisibilityIn, background_tasks: BackgroundTasks, db: Session = Depends(get_db)
):
    """Affiche ou masque toute la section sponsors du site public."""
    visible = admin_service.set_sponsors_section_visible(db, payload.visible)
    background_tasks.add_task(revalidate_sponsors)
    return SectionVisibilityIn(visible=visible)


@router.post("", response_model=SponsorOut, status_code=201)
def create_sponsor(payload: SponsorCreate, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    sponsor = admin_service.create_row(db, Sponsor, payload)
    background_tasks.add_task(revalidate_sponsors)
    return sponsor_out(sponsor)


@router.post("/reorder", response_model=List[SponsorOut])
def reorder_sponsors(payload: ReorderRequest, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    sponsors = admin_service.reorder_rows(db, Sponsor, payload)
    background_tasks.add_task(revalidate_sponsors)
    return [sponsor_out(s) for s in sponsors]


@router.put("/{sponsor_id}", response_model=SponsorOut)
def update_sponsor(
    sponsor_id: str, payload: SponsorUpdate, background_tasks: BackgroundTasks, db: Session = Depends(get_db)
):
    sponsor = admin_service.update_row(db, Sponsor, sponsor_id, payload)
    background_tasks.add_task(revalidate_sponsors)
    return sponsor_out(sponsor)


@router.delete("/{sponsor_id}", status_code=204)
def delete_sponsor(sponsor_id: str, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    admin_service.delete_row(db, Sponsor, sponsor_id)
    background_tasks.add_task(revalidate_sponsors)
    return None


@router.post("/{sponsor_id}/logo", response_model=SponsorOut)
async def upload_sponsor_logo(
    sponsor_id: str,
    background_tasks: BackgroundTasks,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
):
    admin_service.ensure_image(file.content_type)
    contents = await file.read()
    sponsor = admin_service.attach_image(
        db, Sponsor, sponsor_id, "logo_asset_id", "sponsor-logo", file.filename, contents
    )
    background_tasks.add_task(revalidate_sponsors)
    return sponsor_out(sponsor)
