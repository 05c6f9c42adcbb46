# inventory_tracker/models/reason.py
import enum
from sqlalchemy import Column, Integer, String
from inventory_tracker.database import Base

# Direction tag of a reason; a reason without a tag is usable both ways
class ReasonType(str, enum.Enum):
    IN = "In"
    OUT = "Out"
    BOTH = "Both"

# User-extensible classification of why stock moved
class Reason(Base):
    __tablename__ = "reasons"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(String, nullable=True)
    type = Column(String, nullable=True)
