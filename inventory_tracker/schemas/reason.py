# inventory_tracker/schemas/reason.py
from pydantic import BaseModel
from typing import Optional

from inventory_tracker.schemas.common import ORMBase


class ReasonCreate(BaseModel):
    name: str
    description: Optional[str] = None
    # "In", "Out", "Both" or empty
    type: Optional[str] = None


class ReasonUpdate(ReasonCreate):
    pass


class ReasonOut(ORMBase):
    id: int
    name: str
    description: Optional[str] = None
    type: Optional[str] = None
