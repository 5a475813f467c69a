from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import ContactMessage, MembershipRequest
from ..schemas.form_schema import (
    ContactMessageOut,
    ContactStatus,
    ContactStatusUpdate,
    MembershipRequestOut,
    MembershipStatus,
    MembershipStatusUpdate,
)
from ..services import admin_service
from ..services.security import require_admin

router = APIRouter(prefix="/admin", tags=["admin-inbox"], dependencies=[Depends(require_admin)])


@router.get("/contact-messages", response_model=List[ContactMessageOut])
def list_contact_messages(
    status: Optional[ContactStatus] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Recherche dans nom, email, sujet et message"),
    db: Session = Depends(get_db),
):
    """Messages reçus, du plus récent au plus ancien."""
    return admin_service.list_inbox(db, ContactMessage, status=status, search=search)


@router.patch("/contact-messages/{message_id}/status", response_model=ContactMessageOut)
def update_contact_status(message_id: str, payload: ContactStatusUpdate, db: Session = Depends(get_db)):
    return admin_service.update_contact_status(db, message_id, payload.status)


@router.get("/membership-requests", response_model=List[MembershipRequestOut])
def list_membership_requests(
    status: Optional[MembershipStatus] = Query(default=None),
    search: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
):
    return admin_service.list_inbox(db, MembershipRequest, status=status, search=search)


@router.patch("/membership-requests/{request_id}/status", response_model=MembershipRequestOut)
def update_membership_status(request_id: str, payload: MembershipStatusUpdate, db: Session = Depends(get_db)):
    return admin_service.update_membership_status(db, request_id, payload.status)
