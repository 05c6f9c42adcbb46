# inventory_tracker/routes/products.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from inventory_tracker.database import get_db
from inventory_tracker.utils.tokenJWT import get_current_user
from inventory_tracker.utils.audit import write_log, client_ip
from inventory_tracker.models.users import User
from inventory_tracker.models.product import Product
from inventory_tracker.services.catalog import CatalogManager
import inventory_tracker.schemas.product as product_schemas

router = APIRouter(tags=["Products"])


def _product_out(p: Product) -> product_schemas.ProductOut:
    # Dangling category/supplier references are tolerated and shown without a name
    return product_schemas.ProductOut(
        id=p.id, name=p.name, quantity=p.quantity, price=p.price,
        category_id=p.category_id, category_name=p.category.name if p.category else None,
        supplier_id=p.supplier_id, supplier_name=p.supplier.name if p.supplier else None,
        is_active=p.is_active,
        created_at=p.created_at, created_by=p.created_by,
        last_modified_at=p.last_modified_at, last_modified_by=p.last_modified_by,
    )


# =========================
# LISTA PRODUKTÓW
# =========================
@router.get("/products", response_model=product_schemas.ProductListPage)
def list_products(
    search: Optional[str] = Query(None, description="Name contains (case-insensitive)"),
    status: Optional[str] = Query(None, description="Active / Inactive"),
    category_id: Optional[int] = Query(None),
    supplier_id: Optional[int] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    items, total = CatalogManager(db).list_products(
        search=search, status=status, category_id=category_id, supplier_id=supplier_id,
        page=page, page_size=page_size,
    )
    return {"items": [_product_out(p) for p in items], "total": total, "page": page, "page_size": page_size}


# =========================
# POJEDYNCZY PRODUKT
# =========================
@router.get("/products/{product_id}", response_model=product_schemas.ProductOut)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _product_out(CatalogManager(db).get_product(product_id))


# =========================
# DODAWANIE PRODUKTU
# =========================
@router.post("/products", response_model=product_schemas.ProductOut, status_code=201)
def add_product(
    payload: product_schemas.ProductCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    product = CatalogManager(db).create_product(payload, actor=current_user.full_name)

    write_log(
        db, user_id=current_user.id, action="PRODUCT_CREATE", resource="products",
        status="SUCCESS", ip=client_ip(request),
        meta={"id": product.id, "name": product.name, "quantity": product.quantity},
    )
    return _product_out(product)


# =========================
# EDYCJA PRODUKTU
# =========================
@router.put("/products/{product_id}", response_model=product_schemas.ProductOut)
def update_product(
    product_id: int,
    payload: product_schemas.ProductUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    product = CatalogManager(db).update_product(product_id, payload, actor=current_user.full_name)

    write_log(
        db, user_id=current_user.id, action="PRODUCT_UPDATE", resource="products",
        status="SUCCESS", ip=client_ip(request), meta={"id": product.id},
    )
    return _product_out(product)


# =========================
# AKTYWACJA / DEZAKTYWACJA
# =========================
@router.post("/products/{product_id}/toggle-status", response_model=product_schemas.ProductOut)
def toggle_product_status(
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    product = CatalogManager(db).toggle_product(product_id, actor=current_user.full_name)

    write_log(
        db, user_id=current_user.id, action="PRODUCT_TOGGLE", resource="products",
        status="SUCCESS", ip=client_ip(request), meta={"id": product.id, "is_active": product.is_active},
    )
    return _product_out(product)
