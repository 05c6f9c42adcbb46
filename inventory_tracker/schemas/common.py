# inventory_tracker/schemas/common.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Audit quad shared by products, categories and suppliers
class AuditOut(ORMBase):
    created_at: datetime
    created_by: Optional[str] = None
    last_modified_at: datetime
    last_modified_by: Optional[str] = None
