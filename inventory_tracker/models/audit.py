# inventory_tracker/models/audit.py
from sqlalchemy import Column, String, DateTime


# Audit quad shared by every mutable catalog entity
class AuditMixin:
    created_at = Column(DateTime, nullable=False)
    created_by = Column(String, nullable=True)
    last_modified_at = Column(DateTime, nullable=False)
    last_modified_by = Column(String, nullable=True)
