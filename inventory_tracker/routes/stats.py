# inventory_tracker/routes/stats.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from inventory_tracker.database import get_db
from inventory_tracker.utils.tokenJWT import get_current_user
from inventory_tracker.models.users import User
from inventory_tracker.services.analytics import AnalyticsAggregator
from inventory_tracker.schemas.stats import DashboardOut, TopProduct, ReasonCount

router = APIRouter(tags=["Dashboard"])


# === Dashboard snapshot, recomputed on every request ===

@router.get("/dashboard", response_model=DashboardOut)
def get_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    snap = AnalyticsAggregator(db).snapshot()

    return DashboardOut(
        total_products=snap.total_products,
        category_count=snap.category_count,
        categories_in_use=snap.categories_in_use,
        supplier_count=snap.supplier_count,
        low_stock_count=snap.low_stock_count,
        low_stock_threshold=snap.low_stock_threshold,
        total_stock_out_this_month=snap.total_stock_out_this_month,
        estimated_inventory_value=snap.estimated_inventory_value,
        top_products=[
            TopProduct(product_id=pid, product_name=name, total_quantity=total)
            for pid, name, total in snap.top_products
        ],
        reason_breakdown=[ReasonCount(reason=label, count=count) for label, count in snap.reason_breakdown],
    )
