# inventory_tracker/schemas/product.py
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Optional, List

from inventory_tracker.schemas.common import ORMBase, AuditOut


# Schema for creating a new product; the initial quantity seeds the stock ledger
class ProductCreate(BaseModel):
    name: str
    quantity: int = Field(default=0, ge=0)
    price: Decimal = Field(gt=0, decimal_places=2)
    category_id: int
    supplier_id: int


# Schema for editing a product. Quantity only changes through stock in/out.
class ProductUpdate(BaseModel):
    name: str
    price: Decimal = Field(gt=0, decimal_places=2)
    category_id: int
    supplier_id: int
    is_active: Optional[bool] = None


# Full product representation with resolved category/supplier names
class ProductOut(AuditOut):
    id: int
    name: str
    quantity: int
    price: Decimal
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    supplier_id: Optional[int] = None
    supplier_name: Optional[str] = None
    is_active: bool


# Paginated response for product listings
class ProductListPage(ORMBase):
    items: List[ProductOut]
    total: int
    page: int
    page_size: int
