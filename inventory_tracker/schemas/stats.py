# inventory_tracker/schemas/stats.py
from decimal import Decimal
from typing import List
from pydantic import BaseModel


# Top selling products chart
class TopProduct(BaseModel):
    product_id: int
    product_name: str
    total_quantity: int


# Stock-out reasons chart
class ReasonCount(BaseModel):
    reason: str
    count: int


class DashboardOut(BaseModel):
    total_products: int
    # Number of Category rows
    category_count: int
    # Number of distinct categories referenced by products
    categories_in_use: int
    supplier_count: int
    low_stock_count: int
    low_stock_threshold: int
    total_stock_out_this_month: int
    estimated_inventory_value: Decimal
    top_products: List[TopProduct]
    reason_breakdown: List[ReasonCount]
