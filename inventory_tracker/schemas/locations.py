# inventory_tracker/schemas/locations.py
from typing import Optional
from inventory_tracker.schemas.common import ORMBase


class RegionOut(ORMBase):
    region_id: int
    name: str
    description: Optional[str] = None


class ProvinceOut(ORMBase):
    province_id: int
    region_id: int
    name: str


class MunicipalityOut(ORMBase):
    municipality_id: int
    province_id: int
    name: str


class BarangayOut(ORMBase):
    barangay_id: int
    municipality_id: int
    name: str
