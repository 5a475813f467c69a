from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.bundle_schema import EditionFullOut, HomeDataOut
from ..schemas.club_schema import ClubDataOut
from ..schemas.edition_schema import EditionOut
from ..schemas.practical_schema import FaqItemOut, PracticalInfoOut
from ..schemas.sponsor_schema import SponsorsPageOut
from ..services import public_service

router = APIRouter(tags=["public"])


@router.get("/home", response_model=HomeDataOut)
def get_home(db: Session = Depends(get_db)):
    """
    Données de la page d'accueil : édition publiée, six premières courses,
    extrait du club, sponsors principaux et infos pratiques.
    """
    return public_service.get_home_data(db)


@router.get("/editions/active", response_model=EditionOut)
def get_active_edition(db: Session = Depends(get_db)):
    return public_service.get_active_edition(db)


@router.get("/editions/{slug}", response_model=EditionFullOut)
def get_edition(slug: str, db: Session = Depends(get_db)):
    """Édition par slug avec ses courses et son programme."""
    return public_service.get_edition_full(db, slug)


@router.get("/club", response_model=ClubDataOut)
def get_club(db: Session = Depends(get_db)):
    return public_service.get_club_data(db)


@router.get("/practical-info", response_model=Optional[PracticalInfoOut])
def get_practical_info(db: Session = Depends(get_db)):
    return public_service.get_practical_info(db)


@router.get("/faq", response_model=List[FaqItemOut])
def get_faq(db: Session = Depends(get_db)):
    return public_service.get_faq(db)


@router.get("/sponsors", response_model=SponsorsPageOut)
def get_sponsors(db: Session = Depends(get_db)):
    return public_service.get_sponsors(db)
