# inventory_tracker/routes/suppliers.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from inventory_tracker.database import get_db
from inventory_tracker.models.users import User
from inventory_tracker.services.catalog import CatalogManager
from inventory_tracker.utils.tokenJWT import get_current_user
from inventory_tracker.utils.audit import write_log, client_ip
from inventory_tracker.schemas.supplier import SupplierCreate, SupplierUpdate, SupplierOut

router = APIRouter(prefix="/suppliers", tags=["Suppliers"])


@router.get("", response_model=List[SupplierOut])
def list_suppliers(
    search: Optional[str] = Query(None),
    status: Optional[str] = Query(None, description="Active / Inactive"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return CatalogManager(db).list_suppliers(search=search, status=status)


@router.get("/{supplier_id}", response_model=SupplierOut)
def get_supplier(supplier_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return CatalogManager(db).get_supplier(supplier_id)


# Create a supplier together with its address and contact persons
@router.post("", response_model=SupplierOut, status_code=201)
def create_supplier(
    payload: SupplierCreate, request: Request,
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user),
):
    supplier = CatalogManager(db).create_supplier(payload, actor=current_user.full_name)
    write_log(db, user_id=current_user.id, action="SUPPLIER_CREATE", resource="suppliers",
              status="SUCCESS", ip=client_ip(request), meta={"id": supplier.id, "name": supplier.name})
    return supplier


@router.put("/{supplier_id}", response_model=SupplierOut)
def update_supplier(
    supplier_id: int, payload: SupplierUpdate, request: Request,
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user),
):
    supplier = CatalogManager(db).update_supplier(supplier_id, payload, actor=current_user.full_name)
    write_log(db, user_id=current_user.id, action="SUPPLIER_UPDATE", resource="suppliers",
              status="SUCCESS", ip=client_ip(request), meta={"id": supplier.id})
    return supplier


# Suppliers are never deleted, only deactivated
@router.post("/{supplier_id}/toggle-status", response_model=SupplierOut)
def toggle_supplier_status(
    supplier_id: int, request: Request,
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user),
):
    supplier = CatalogManager(db).toggle_supplier(supplier_id, actor=current_user.full_name)
    write_log(db, user_id=current_user.id, action="SUPPLIER_TOGGLE", resource="suppliers",
              status="SUCCESS", ip=client_ip(request), meta={"id": supplier.id, "is_active": supplier.is_active})
    return supplier
