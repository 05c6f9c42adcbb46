# inventory_tracker/schemas/stock.py
from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional, Literal

from inventory_tracker.schemas.common import ORMBase

Direction = Literal["In", "Out"]


# Body of a stock-in / stock-out request. Quantity is checked by the ledger.
class StockRequest(BaseModel):
    product_id: int
    reason_id: Optional[int] = None
    quantity: int
    remarks: Optional[str] = None


# Single ledger entry with its resolved reason
class StockMovementOut(ORMBase):
    id: int
    product_id: int
    reason_id: Optional[int] = None
    reason_name: str
    quantity_change: int
    remarks: Optional[str] = None
    timestamp: datetime
    user_name: Optional[str] = None


# Result of a stock-in / stock-out
class StockResult(BaseModel):
    message: str
    product_id: int
    quantity: int
    movement: StockMovementOut


class StockHistory(BaseModel):
    product_id: int
    product_name: str
    quantity: int
    items: List[StockMovementOut]


# Cached quantity vs. sum of the ledger for one product
class ReconciliationOut(BaseModel):
    product_id: int
    product_name: str
    cached_quantity: int
    ledger_quantity: int
    consistent: bool
    corrected: bool = False
