# inventory_tracker/routes/locations.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from inventory_tracker.database import get_db
from inventory_tracker.models.locations import Region, Province, Municipality, Barangay
from inventory_tracker.schemas.locations import RegionOut, ProvinceOut, MunicipalityOut, BarangayOut

# Read-only address dropdown data; public so the supplier form can cascade selections
router = APIRouter(prefix="/api/locations", tags=["Locations"])


def _code(value: str, label: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {label} Code")


@router.get("/regions", response_model=List[RegionOut])
def get_regions(db: Session = Depends(get_db)):
    return db.query(Region).order_by(Region.name).all()


@router.get("/provinces/{region_code}", response_model=List[ProvinceOut])
def get_provinces(region_code: str, db: Session = Depends(get_db)):
    region_id = _code(region_code, "Region")
    return db.query(Province).filter(Province.region_id == region_id).order_by(Province.name).all()


@router.get("/municipalities/{province_code}", response_model=List[MunicipalityOut])
def get_municipalities(province_code: str, db: Session = Depends(get_db)):
    province_id = _code(province_code, "Province")
    return db.query(Municipality).filter(Municipality.province_id == province_id).order_by(Municipality.name).all()


@router.get("/barangays/{city_code}", response_model=List[BarangayOut])
def get_barangays(city_code: str, db: Session = Depends(get_db)):
    city_id = _code(city_code, "City")
    return db.query(Barangay).filter(Barangay.municipality_id == city_id).order_by(Barangay.name).all()
