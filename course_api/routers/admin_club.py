from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import ClubContent, CommitteeMember, TrainingSession
from ..schemas.bundle_schema import ReorderRequest
from ..schemas.club_schema import (
    ClubContentOut,
    ClubContentUpdate,
    CommitteeMemberCreate,
    CommitteeMemberOut,
    CommitteeMemberUpdate,
    TrainingCategory,
    TrainingSessionCreate,
    TrainingSessionOut,
    TrainingSessionUpdate,
)
from ..services import admin_service
from ..services.public_service import committee_member_out
from ..services.revalidation_service import revalidate_club
from ..services.security import require_admin

router = APIRouter(prefix="/admin", tags=["admin-club"], dependencies=[Depends(require_admin)])


@router.get("/club-content", response_model=ClubContentOut)
def get_club_content(db: Session = Depends(get_db)):
    return admin_service.get_singleton(db, ClubContent)


@router.put("/club-content", response_model=ClubContentOut)
def save_club_content(payload: ClubContentUpdate, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    """Met à jour la fiche du club, ou la crée si elle n'existe pas encore."""
    content = admin_service.upsert_singleton(db, ClubContent, payload)
    background_tasks.add_task(revalidate_club)
    return content


# ---------------------------------------------------------------------------
# Entraînements
# ---------------------------------------------------------------------------

@router.get("/training-sessions", response_model=List[TrainingSessionOut])
def list_training_sessions(
    category: Optional[TrainingCategory] = Query(default=None),
    search: Optional[str] = Query(default=None),
    descending: bool = Query(default=False),
    db: Session = Depends(get_db),
):
    return admin_service.list_rows(db, TrainingSession, search=search, descending=descending, category=category)


@router.post("/training-sessions", response_model=TrainingSessionOut, status_code=201)
def create_training_session(
    payload: TrainingSessionCreate, background_tasks: BackgroundTasks, db: Session = Depends(get_db)
):
    session = admin_service.create_row(db, TrainingSession, payload)
    background_tasks.add_task(revalidate_club)
    return session


@router.post("/training-sessions/reorder", response_model=List[TrainingSessionOut])
def reorder_training_sessions(payload: ReorderRequest, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    sessions = admin_service.reorder_rows(db, TrainingSession, payload)
    background_tasks.add_task(revalidate_club)
    return sessions


@router.put("/training-sessions/{session_id}", response_model=TrainingSessionOut)
def update_training_session(
    session_id: str,
    payload: TrainingSessionUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    session = admin_service.update_row(db, TrainingSession, session_id, payload)
    background_tasks.add_task(revalidate_club)
    return session


@router.delete("/training-sessions/{session_id}", status_code=204)
def delete_training_session(session_id: str, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    admin_service.delete_row(db, TrainingSession, session_id)
    background_tasks.add_task(revalidate_club)
    return None


# ---------------------------------------------------------------------------
# Comité
# ---------------------------------------------------------------------------

@router.get("/committee-members", response_model=List[CommitteeMemberOut])
def list_committee_members(
    search: Optional[str] = Query(default=None),
    descending: bool = Query(default=False),
    db: Session = Depends(get_db),
):
    members = admin_service.list_rows(db, CommitteeMember, search=search, descending=descending)
    return [committee_member_out(m) for m in members]


@router.post("/committee-members", response_model=CommitteeMemberOut, status_code=201)
def create_committee_member(
    payload: CommitteeMemberCreate, background_tasks: BackgroundTasks, db: Session = Depends(get_db)
):
    member = admin_service.create_row(db, CommitteeMember, payload)
    background_tasks.add_task(revalidate_club)
    return committee_member_out(member)


@router.post("/committee-members/reorder", response_model=List[CommitteeMemberOut])
def reorder_committee_members(payload: ReorderRequest, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    members = admin_service.reorder_rows(db, CommitteeMember, payload)
    background_tasks.add_task(revalidate_club)
    return [committee_member_out(m) for m in members]


@router.put("/committee-members/{member_id}", response_model=CommitteeMemberOut)
def update_committee_member(
    member_id: str,
    payload: CommitteeMemberUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    member = admin_service.update_row(db, CommitteeMember, member_id, payload)
    background_tasks.add_task(revalidate_club)
    return committee_member_out(member)


@router.delete("/committee-members/{member_id}", status_code=204)
def delete_committee_member(member_id: str, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    admin_service.delete_row(db, CommitteeMember, member_id)
    background_tasks.add_task(revalidate_club)
    return None


@router.post("/committee-members/{member_id}/photo", response_model=CommitteeMemberOut)
async def upload_committee_photo(
    member_id: str,
    background_tasks: BackgroundTasks,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
):
    admin_service.ensure_image(file.content_type)
    contents = await file.read()
    member = admin_service.attach_image(
        db, CommitteeMember, member_id, "photo_asset_id", "committee-photo", file.filename, contents
    )
    background_tasks.add_task(revalidate_club)
    return committee_member_out(member)
