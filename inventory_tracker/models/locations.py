# inventory_tracker/models/locations.py
from sqlalchemy import Column, Integer, String
from inventory_tracker.database import Base

# Static Region -> Province -> Municipality -> Barangay reference hierarchy.
# Rows are keyed by small integer codes and linked through the parent code.

class Region(Base):
    __tablename__ = "regions"

    id = Column(Integer, primary_key=True)
    region_id = Column(Integer, unique=True, nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)


class Province(Base):
    __tablename__ = "provinces"

    id = Column(Integer, primary_key=True)
    province_id = Column(Integer, unique=True, nullable=False, index=True)
    region_id = Column(Integer, nullable=False, index=True)
    name = Column(String, nullable=False)


class Municipality(Base):
    __tablename__ = "municipalities"

    id = Column(Integer, primary_key=True)
    municipality_id = Column(Integer, unique=True, nullable=False, index=True)
    province_id = Column(Integer, nullable=False, index=True)
    name = Column(String, nullable=False)


class Barangay(Base):
    __tablename__ = "barangays"

    id = Column(Integer, primary_key=True)
    barangay_id = Column(Integer, unique=True, nullable=False, index=True)
    municipality_id = Column(Integer, nullable=False, index=True)
    name = Column(String, nullable=False)
