# inventory_tracker/services/analytics.py
"""Dashboard figures, computed fresh from products and stock movements on every call."""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from inventory_tracker.config import settings
from inventory_tracker.models.category import Category
from inventory_tracker.models.product import Product
from inventory_tracker.models.reason import Reason
from inventory_tracker.models.stock import StockMovement
from inventory_tracker.models.supplier import Supplier
from inventory_tracker.services.ledger import UNCATEGORIZED
from inventory_tracker.utils.clock import month_bounds, utcnow

logger = logging.getLogger(__name__)

# Stock-out reasons that count as a sale for the top products chart
SALE_REASONS = {"sale", "stock out"}
UNKNOWN_PRODUCT = "Unknown Product"


@dataclass
class DashboardSnapshot:
    total_products: int = 0
    category_count: int = 0
    categories_in_use: int = 0
    supplier_count: int = 0
    low_stock_count: int = 0
    low_stock_threshold: int = 0
    total_stock_out_this_month: int = 0
    estimated_inventory_value: Decimal = Decimal("0.00")
    # (product_id, product_name, total_quantity)
    top_products: List[Tuple[int, str, int]] = field(default_factory=list)
    # (reason_name, count)
    reason_breakdown: List[Tuple[str, int]] = field(default_factory=list)


def _rank(totals: Dict, limit: Optional[int] = None) -> List:
    # sorted() is stable, so equal totals keep first-seen order
    ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    return ranked[:limit] if limit is not None else ranked


class AnalyticsAggregator:
    def __init__(self, db: Session, clock: Callable = utcnow,
                 low_stock_threshold: Optional[int] = None, top_limit: Optional[int] = None):
        self.db = db
        self.clock = clock
        self.low_stock_threshold = settings.LOW_STOCK_THRESHOLD if low_stock_threshold is None else low_stock_threshold
        self.top_limit = settings.TOP_PRODUCTS_LIMIT if top_limit is None else top_limit

    def snapshot(self) -> DashboardSnapshot:
        db = self.db
        snap = DashboardSnapshot(low_stock_threshold=self.low_stock_threshold)

        snap.total_products = db.query(Product).count()
        snap.category_count = db.query(Category).count()
        snap.categories_in_use = (
            db.query(func.count(func.distinct(Product.category_id)))
            .filter(Product.category_id.isnot(None))
            .scalar()
        ) or 0
        snap.supplier_count = db.query(Supplier).count()
        snap.low_stock_count = db.query(Product).filter(Product.quantity < self.low_stock_threshold).count()

        value = db.query(func.sum(Product.price * Product.quantity)).scalar()
        snap.estimated_inventory_value = Decimal(value or 0).quantize(Decimal("0.01"))

        start, end = month_bounds(self.clock())
        month_out = (
            db.query(func.sum(StockMovement.quantity_change))
            .filter(
                StockMovement.quantity_change < 0,
                StockMovement.timestamp >= start,
                StockMovement.timestamp < end,
            )
            .scalar()
        )
        snap.total_stock_out_this_month = abs(int(month_out or 0))

        snap.top_products, snap.reason_breakdown = self._outflow_charts()
        return snap

    def _outflow_charts(self):
        outflows = (
            self.db.query(StockMovement.product_id, StockMovement.reason_id, StockMovement.quantity_change)
            .filter(StockMovement.quantity_change < 0)
            .order_by(StockMovement.id)
            .all()
        )
        reason_names = dict(self.db.query(Reason.id, Reason.name).all())

        sold: Dict[int, int] = {}
        by_reason: Dict[str, int] = {}
        for product_id, reason_id, change in outflows:
            reason_name = reason_names.get(reason_id) if reason_id is not None else None
            label = reason_name or UNCATEGORIZED
            by_reason[label] = by_reason.get(label, 0) + 1

            if reason_name and reason_name.strip().lower() in SALE_REASONS:
                sold[product_id] = sold.get(product_id, 0) + abs(change)

        top = _rank(sold, self.top_limit)
        names = {}
        if top:
            ids = [product_id for product_id, _ in top]
            names = dict(self.db.query(Product.id, Product.name).filter(Product.id.in_(ids)).all())

        top_products = [(pid, names.get(pid, UNKNOWN_PRODUCT), total) for pid, total in top]
        return top_products, _rank(by_reason)
