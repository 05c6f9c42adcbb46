# inventory_tracker/services/ledger.py
"""
Stock ledger: the only writer of stock movements and, once a product exists,
the only code allowed to change Product.quantity.

Each stock-in/stock-out updates the product and appends its movement in one
transaction. Products carry a version counter (SQLAlchemy ``version_id_col``)
so a concurrent write makes our UPDATE match zero rows; we roll back and redo
the whole read-check-write with fresh data, a bounded number of times.

Product.quantity is a cached sum of the product's movements. ``reconcile``
recomputes that sum for integrity audits.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from inventory_tracker.config import settings
from inventory_tracker.exceptions import (
    ConcurrencyConflictError,
    InsufficientStockError,
    InvalidQuantityError,
    ProductNotFoundError,
    ValidationError,
)
from inventory_tracker.models.product import Product
from inventory_tracker.models.reason import Reason, ReasonType
from inventory_tracker.models.stock import StockMovement
from inventory_tracker.utils.clock import next_stamp, utcnow
from inventory_tracker.utils.validation import trim_optional

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"

DIRECTION_IN = ReasonType.IN.value
DIRECTION_OUT = ReasonType.OUT.value


@dataclass
class HistoryEntry:
    movement: StockMovement
    reason: Optional[Reason]

    @property
    def reason_name(self) -> str:
        return self.reason.name if self.reason is not None else UNCATEGORIZED


@dataclass
class Reconciliation:
    product: Product
    cached_quantity: int
    ledger_quantity: int
    corrected: bool = False

    @property
    def consistent(self) -> bool:
        return self.cached_quantity == self.ledger_quantity


def reason_allowed(reason_type: Optional[str], direction: str) -> bool:
    # Untagged reasons predate the In/Out split and stay usable both ways
    return reason_type in (None, "", direction, ReasonType.BOTH.value)


class StockLedger:
    def __init__(self, db: Session, clock: Callable = utcnow, max_attempts: Optional[int] = None):
        self.db = db
        self.clock = clock
        self.max_attempts = settings.STOCK_UPDATE_MAX_ATTEMPTS if max_attempts is None else max_attempts

    def stock_in(self, product_id: int, reason_id: Optional[int], quantity: int,
                 remarks: Optional[str], actor: str) -> Tuple[Product, StockMovement]:
        return self._record(product_id, reason_id, quantity, remarks, actor, DIRECTION_IN)

    def stock_out(self, product_id: int, reason_id: Optional[int], quantity: int,
                  remarks: Optional[str], actor: str) -> Tuple[Product, StockMovement]:
        return self._record(product_id, reason_id, quantity, remarks, actor, DIRECTION_OUT)

    def _check_reason(self, reason_id: Optional[int], direction: str) -> None:
        if reason_id is None:
            return
        reason = self.db.query(Reason).filter(Reason.id == reason_id).first()
        if reason is None:
            raise ValidationError.single("reason_id", "Reason not found.")
        if not reason_allowed(reason.type, direction):
            raise ValidationError.single(
                "reason_id", f"Reason '{reason.name}' cannot be used for stock {direction.lower()}."
            )

    def _record(self, product_id, reason_id, quantity, remarks, actor, direction):
        if quantity is None or quantity <= 0:
            raise InvalidQuantityError(quantity)
        if self.db.query(Product.id).filter(Product.id == product_id).first() is None:
            raise ProductNotFoundError(product_id)
        self._check_reason(reason_id, direction)
        remarks = trim_optional(remarks)
        delta = quantity if direction == DIRECTION_IN else -quantity

        for attempt in range(1, self.max_attempts + 1):
            product = (
                self.db.query(Product)
                .filter(Product.id == product_id)
                .populate_existing()
                .first()
            )
            if product is None:
                raise ProductNotFoundError(product_id)
            if delta < 0 and product.quantity < quantity:
                raise InsufficientStockError(product.id, product.quantity, quantity)

            now = next_stamp(self.clock(), product.last_modified_at)
            product.quantity += delta
            product.last_modified_at = now
            product.last_modified_by = actor

            movement = StockMovement(
                product_id=product.id,
                reason_id=reason_id,
                quantity_change=delta,
                remarks=remarks,
                timestamp=now,
                user_name=actor,
            )
            self.db.add(movement)

            try:
                self.db.commit()
            except StaleDataError:
                self.db.rollback()
                logger.warning(
                    f"Stock {direction.lower()} on product {product_id} hit a concurrent update "
                    f"(attempt {attempt}/{self.max_attempts})"
                )
                continue

            self.db.refresh(product)
            self.db.refresh(movement)
            logger.info(
                f"Stock {direction.lower()}: product {product.id} {delta:+d} -> {product.quantity} (by {actor})"
            )
            return product, movement

        raise ConcurrencyConflictError(product_id, self.max_attempts)

    def entry(self, movement: StockMovement) -> HistoryEntry:
        reason = None
        if movement.reason_id is not None:
            reason = self.db.query(Reason).filter(Reason.id == movement.reason_id).first()
        return HistoryEntry(movement, reason)

    def history(self, product_id: int) -> Tuple[Product, List[HistoryEntry]]:
        product = self.db.query(Product).filter(Product.id == product_id).first()
        if product is None:
            raise ProductNotFoundError(product_id)

        movements = (
            self.db.query(StockMovement)
            .filter(StockMovement.product_id == product_id)
            .order_by(StockMovement.timestamp.desc(), StockMovement.id.desc())
            .all()
        )
        reason_ids = {m.reason_id for m in movements if m.reason_id is not None}
        reasons = {}
        if reason_ids:
            reasons = {r.id: r for r in self.db.query(Reason).filter(Reason.id.in_(reason_ids)).all()}

        return product, [HistoryEntry(m, reasons.get(m.reason_id)) for m in movements]

    def reasons_for(self, direction: str) -> List[Reason]:
        """Reasons offered in the stock-in or stock-out dropdown."""
        return (
            self.db.query(Reason)
            .filter(or_(
                Reason.type == direction,
                Reason.type == ReasonType.BOTH.value,
                Reason.type.is_(None),
            ))
            .order_by(Reason.name)
            .all()
        )

    def _ledger_sum(self, product_id: int) -> int:
        total = (
            self.db.query(func.coalesce(func.sum(StockMovement.quantity_change), 0))
            .filter(StockMovement.product_id == product_id)
            .scalar()
        )
        return int(total)

    def reconcile(self, product_id: int, apply: bool = False, actor: Optional[str] = None) -> Reconciliation:
        product = self.db.query(Product).filter(Product.id == product_id).first()
        if product is None:
            raise ProductNotFoundError(product_id)

        result = Reconciliation(product, product.quantity, self._ledger_sum(product_id))
        if result.consistent:
            return result

        logger.warning(
            f"Product {product.id} quantity {result.cached_quantity} "
            f"!= ledger sum {result.ledger_quantity}"
        )
        if apply:
            if result.ledger_quantity < 0:
                raise ValidationError.single(
                    "quantity", f"Ledger sum {result.ledger_quantity} is negative; fix the ledger first."
                )
            product.quantity = result.ledger_quantity
            product.last_modified_at = next_stamp(self.clock(), product.last_modified_at)
            product.last_modified_by = actor
            self.db.commit()
            self.db.refresh(product)
            result.corrected = True
        return result

    def reconcile_all(self) -> List[Reconciliation]:
        sums = dict(
            self.db.query(StockMovement.product_id, func.sum(StockMovement.quantity_change))
            .group_by(StockMovement.product_id)
            .all()
        )
        return [
            Reconciliation(p, p.quantity, int(sums.get(p.id) or 0))
            for p in self.db.query(Product).order_by(Product.id).all()
        ]
