# inventory_tracker/models/supplier.py
from sqlalchemy import Column, Integer, String, Boolean, JSON
from inventory_tracker.database import Base
from inventory_tracker.models.audit import AuditMixin

# Represents a supplier company. The address and the ordered list of contact
# persons are embedded documents kept in JSON columns.
class Supplier(AuditMixin, Base):
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    company_contact_num = Column(String, nullable=True)

    # {"region", "province", "city", "barangay", "street_address", "postal_code"}
    address = Column(JSON, nullable=False, default=dict)
    # [{"name", "email", "phone"}, ...]
    contact_persons = Column(JSON, nullable=False, default=list)

    is_active = Column(Boolean, nullable=False, default=True)
