from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import FaqItem, PracticalInfo
from ..schemas.bundle_schema import ReorderRequest
from ..schemas.practical_schema import (
    FaqItemCreate,
    FaqItemOut,
    FaqItemUpdate,
    PracticalInfoOut,
    PracticalInfoUpdate,
)
from ..services import admin_service
from ..services.revalidation_service import revalidate_practical
from ..services.security import require_admin

router = APIRouter(prefix="/admin", tags=["admin-practical"], dependencies=[Depends(require_admin)])


@router.get("/practical-info", response_model=PracticalInfoOut)
def get_practical_info(db: Session = Depends(get_db)):
    return admin_service.get_singleton(db, PracticalInfo)


@router.put("/practical-info", response_model=PracticalInfoOut)
def save_practical_info(
    payload: PracticalInfoUpdate, background_tasks: BackgroundTasks, db: Session = Depends(get_db)
):
    info = admin_service.upsert_singleton(db, PracticalInfo, payload)
    background_tasks.add_task(revalidate_practical)
    return info


@router.get("/faq", response_model=List[FaqItemOut])
def list_faq(
    category: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    descending: bool = Query(default=False),
    db: Session = Depends(get_db),
):
    return admin_service.list_rows(db, FaqItem, search=search, descending=descending, category=category)


@router.get("/faq/categories", response_model=List[str])
def list_faq_categories(db: Session = Depends(get_db)):
    return admin_service.faq_categories(db)


@router.post("/faq", response_model=FaqItemOut, status_code=201)
def create_faq_item(payload: FaqItemCreate, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    item = admin_service.create_row(db, FaqItem, payload)
    background_tasks.add_task(revalidate_practical)
    return item


@router.post("/faq/reorder", response_model=List[FaqItemOut])
def reorder_faq(payload: ReorderRequest, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    items = admin_service.reorder_rows(db, FaqItem, payload)
    background_tasks.add_task(revalidate_practical)
    return items


@router.put("/faq/{item_id}", response_model=FaqItemOut)
def update_faq_item(
    item_id: str, payload: FaqItemUpdate, background_tasks: BackgroundTasks, db: Session = Depends(get_db)
):
    item = admin_service.update_row(db, FaqItem, item_id, payload)
    background_tasks.add_task(revalidate_practical)
    return item


@router.delete("/faq/{item_id}", status_code=204)
def delete_faq_item(item_id: str, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    admin_service.delete_row(db, FaqItem, item_id)
    background_tasks.add_task(revalidate_practical)
    return None
