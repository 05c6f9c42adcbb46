# inventory_tracker/models/stock.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from inventory_tracker.database import Base
from inventory_tracker.utils.clock import utcnow

# Immutable ledger entry: one signed change of a product's quantity and its cause.
class StockMovement(Base):
    __tablename__ = "stock_movements"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)

    # Weak reference, reasons can be deleted without touching the ledger
    reason_id = Column(Integer, nullable=True, index=True)

    # Positive = stock-in, negative = stock-out
    quantity_change = Column(Integer, nullable=False)

    remarks = Column(String, nullable=True)
    timestamp = Column(DateTime, nullable=False, default=utcnow, index=True)
    user_name = Column(String, nullable=True)

    product = relationship("Product")
