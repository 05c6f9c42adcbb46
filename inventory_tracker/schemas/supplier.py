# inventory_tracker/schemas/supplier.py
from pydantic import BaseModel, Field
from typing import List, Optional

from inventory_tracker.schemas.common import AuditOut


# Region/province/city/barangay come from the location dropdowns
class Address(BaseModel):
    region: Optional[str] = None
    province: Optional[str] = None
    city: Optional[str] = None
    barangay: Optional[str] = None
    street_address: Optional[str] = None
    postal_code: Optional[str] = None


# A single contact at the supplier; validated by the catalog, not here,
# so that every bad row is reported at once
class ContactPerson(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class SupplierCreate(BaseModel):
    name: str
    company_contact_num: Optional[str] = None
    address: Address = Field(default_factory=Address)
    contact_persons: List[ContactPerson] = Field(default_factory=list)


class SupplierUpdate(SupplierCreate):
    is_active: Optional[bool] = None


class SupplierOut(AuditOut):
    id: int
    name: str
    company_contact_num: Optional[str] = None
    address: Address
    contact_persons: List[ContactPerson]
    is_active: bool
