# inventory_tracker/models/users.py
from sqlalchemy import Column, Integer, String, DateTime
from inventory_tracker.database import Base
from inventory_tracker.utils.clock import utcnow

# Represents a staff account; the full name is what gets stamped on audited records
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
