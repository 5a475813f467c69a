from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.form_schema import ContactForm, MembershipForm, SubmissionOut
from ..services import public_service
from ..services.email_service import send_contact_notification, send_membership_notification

router = APIRouter(tags=["forms"])


@router.post("/contact", response_model=SubmissionOut, status_code=201)
def submit_contact(form: ContactForm, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    """
    Enregistre un message de contact (statut "new") puis prévient le comité par email.
    L'email part en tâche de fond : son échec ne fait pas échouer l'envoi du formulaire.
    """
    message = public_service.submit_contact(db, form)
    background_tasks.add_task(send_contact_notification, message)
    return SubmissionOut(success=True, message="Message envoyé")


@router.post("/membership", response_model=SubmissionOut, status_code=201)
def submit_membership(form: MembershipForm, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    request = public_service.submit_membership(db, form)
    background_tasks.add_task(send_membership_notification, request)
    return SubmissionOut(success=True, message="Demande d'adhésion envoyée")
