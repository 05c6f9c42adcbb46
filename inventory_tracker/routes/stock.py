# inventory_tracker/routes/stock.py
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import List

from inventory_tracker.database import get_db
from inventory_tracker.models.users import User
from inventory_tracker.services.ledger import StockLedger, HistoryEntry, Reconciliation
from inventory_tracker.utils.tokenJWT import get_current_user
from inventory_tracker.utils.audit import write_log, client_ip
from inventory_tracker.schemas.reason import ReasonOut
import inventory_tracker.schemas.stock as stock_schemas

router = APIRouter(tags=["Stock"])


def _movement_out(entry: HistoryEntry) -> stock_schemas.StockMovementOut:
    m = entry.movement
    return stock_schemas.StockMovementOut(
        id=m.id, product_id=m.product_id, reason_id=m.reason_id, reason_name=entry.reason_name,
        quantity_change=m.quantity_change, remarks=m.remarks,
        timestamp=m.timestamp, user_name=m.user_name,
    )


def _reconciliation_out(r: Reconciliation) -> stock_schemas.ReconciliationOut:
    return stock_schemas.ReconciliationOut(
        product_id=r.product.id, product_name=r.product.name,
        cached_quantity=r.cached_quantity, ledger_quantity=r.ledger_quantity,
        consistent=r.consistent, corrected=r.corrected,
    )


# Add stock to a product
@router.post("/in", response_model=stock_schemas.StockResult)
def stock_in(
    payload: stock_schemas.StockRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ledger = StockLedger(db)
    product, movement = ledger.stock_in(
        payload.product_id, payload.reason_id, payload.quantity, payload.remarks,
        actor=current_user.full_name,
    )
    result = stock_schemas.StockResult(
        message=f"Successfully added {payload.quantity} of {product.name} to stock.",
        product_id=product.id,
        quantity=product.quantity,
        movement=_movement_out(ledger.entry(movement)),
    )
    write_log(db, user_id=current_user.id, action="STOCK_IN", resource="stock", status="SUCCESS",
              ip=client_ip(request), meta={"product_id": product.id, "movement_id": movement.id, "qty": payload.quantity})
    return result


# Remove stock from a product; fails when there is not enough on hand
@router.post("/out", response_model=stock_schemas.StockResult)
def stock_out(
    payload: stock_schemas.StockRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ledger = StockLedger(db)
    product, movement = ledger.stock_out(
        payload.product_id, payload.reason_id, payload.quantity, payload.remarks,
        actor=current_user.full_name,
    )
    result = stock_schemas.StockResult(
        message=f"Successfully removed {payload.quantity} of {product.name} from stock.",
        product_id=product.id,
        quantity=product.quantity,
        movement=_movement_out(ledger.entry(movement)),
    )
    write_log(db, user_id=current_user.id, action="STOCK_OUT", resource="stock", status="SUCCESS",
              ip=client_ip(request), meta={"product_id": product.id, "movement_id": movement.id, "qty": payload.quantity})
    return result


# Ledger entries of a product, newest first
@router.get("/history/{product_id}", response_model=stock_schemas.StockHistory)
def stock_history(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    product, entries = StockLedger(db).history(product_id)
    return stock_schemas.StockHistory(
        product_id=product.id,
        product_name=product.name,
        quantity=product.quantity,
        items=[_movement_out(e) for e in entries],
    )


# Reasons offered in the stock-in / stock-out dropdown
@router.get("/reasons", response_model=List[ReasonOut])
def reasons_for_direction(
    direction: stock_schemas.Direction = Query(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return StockLedger(db).reasons_for(direction)


# Integrity audit: cached quantity vs. ledger sum for every product
@router.get("/reconcile", response_model=List[stock_schemas.ReconciliationOut])
def reconcile_all(
    only_mismatched: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    results = StockLedger(db).reconcile_all()
    if only_mismatched:
        results = [r for r in results if not r.consistent]
    return [_reconciliation_out(r) for r in results]


@router.post("/reconcile/{product_id}", response_model=stock_schemas.ReconciliationOut)
def reconcile_product(
    product_id: int,
    request: Request,
    apply: bool = Query(False, description="Overwrite the cached quantity with the ledger sum"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    result = StockLedger(db).reconcile(product_id, apply=apply, actor=current_user.full_name)
    out = _reconciliation_out(result)
    if result.corrected:
        write_log(db, user_id=current_user.id, action="STOCK_RECONCILE", resource="stock", status="SUCCESS",
                  ip=client_ip(request),
                  meta={"product_id": out.product_id, "from": out.cached_quantity, "to": out.ledger_quantity})
    return out
