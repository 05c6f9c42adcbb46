# inventory_tracker/models/product.py
from sqlalchemy import Column, Integer, String, Boolean, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from inventory_tracker.database import Base
from inventory_tracker.models.audit import AuditMixin

# Model Product
# Represents a single stocked item. `quantity` is a cached aggregate of the
# product's stock movements and is only changed by the stock ledger after creation.
# `version` is bumped on every write and checked on update (optimistic locking).
class Product(AuditMixin, Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)

    quantity = Column(Integer, CheckConstraint("quantity >= 0"), nullable=False, default=0)
    price = Column(Numeric(12, 2), CheckConstraint("price > 0"), nullable=False)

    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True, index=True)

    is_active = Column(Boolean, nullable=False, default=True)

    version = Column(Integer, nullable=False)

    category = relationship("Category")
    supplier = relationship("Supplier")

    __mapper_args__ = {"version_id_col": version}
