from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.bundle_schema import DashboardOut
from ..services import admin_service
from ..services.security import require_admin

router = APIRouter(prefix="/admin", tags=["admin-dashboard"], dependencies=[Depends(require_admin)])


@router.get("/dashboard", response_model=DashboardOut)
def get_dashboard(db: Session = Depends(get_db)):
    """Édition active, compteurs des formulaires non traités et cinq derniers messages."""
    return admin_service.get_dashboard(db)


@router.post("/uploads/{kind}")
async def upload_image(kind: str, file: UploadFile = File(...)):
    """
    Envoie une image avant la création de la fiche (sponsor-logo, committee-photo, route-map).
    Renvoie le chemin à enregistrer et l'URL publique.
    """
    admin_service.ensure_image(file.content_type)
    contents = await file.read()
    return admin_service.upload_image(kind, file.filename, contents)
