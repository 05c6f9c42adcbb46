# inventory_tracker/schemas/category.py
from pydantic import BaseModel
from typing import Optional

from inventory_tracker.schemas.common import AuditOut


class CategoryCreate(BaseModel):
    name: str
    description: Optional[str] = None


class CategoryUpdate(CategoryCreate):
    is_active: Optional[bool] = None


class CategoryOut(AuditOut):
    id: int
    name: str
    description: Optional[str] = None
    is_active: bool
