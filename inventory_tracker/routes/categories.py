# inventory_tracker/routes/categories.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from inventory_tracker.database import get_db
from inventory_tracker.models.users import User
from inventory_tracker.services.catalog import CatalogManager
from inventory_tracker.utils.tokenJWT import get_current_user
from inventory_tracker.utils.audit import write_log, client_ip
from inventory_tracker.schemas.category import CategoryCreate, CategoryUpdate, CategoryOut

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=List[CategoryOut])
def list_categories(
    search: Optional[str] = Query(None),
    status: Optional[str] = Query(None, description="Active / Inactive"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return CatalogManager(db).list_categories(search=search, status=status)


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return CatalogManager(db).get_category(category_id)


@router.post("", response_model=CategoryOut, status_code=201)
def create_category(
    payload: CategoryCreate, request: Request,
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user),
):
    category = CatalogManager(db).create_category(payload, actor=current_user.full_name)
    write_log(db, user_id=current_user.id, action="CATEGORY_CREATE", resource="categories",
              status="SUCCESS", ip=client_ip(request), meta={"id": category.id, "name": category.name})
    return category


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: int, payload: CategoryUpdate, request: Request,
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user),
):
    category = CatalogManager(db).update_category(category_id, payload, actor=current_user.full_name)
    write_log(db, user_id=current_user.id, action="CATEGORY_UPDATE", resource="categories",
              status="SUCCESS", ip=client_ip(request), meta={"id": category.id})
    return category


@router.post("/{category_id}/toggle-status", response_model=CategoryOut)
def toggle_category_status(
    category_id: int, request: Request,
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user),
):
    category = CatalogManager(db).toggle_category(category_id, actor=current_user.full_name)
    write_log(db, user_id=current_user.id, action="CATEGORY_TOGGLE", resource="categories",
              status="SUCCESS", ip=client_ip(request), meta={"id": category.id, "is_active": category.is_active})
    return category
