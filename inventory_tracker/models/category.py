# inventory_tracker/models/category.py
from sqlalchemy import Column, Integer, String, Boolean
from inventory_tracker.database import Base
from inventory_tracker.models.audit import AuditMixin


class Category(AuditMixin, Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
