# inventory_tracker/utils/seed.py
import logging
from sqlalchemy.orm import Session

from inventory_tracker.config import settings
from inventory_tracker.models.users import User
from inventory_tracker.utils.hashing import get_password_hash

logger = logging.getLogger(__name__)


def ensure_default_admin(db: Session) -> bool:
    """Create the default staff account on an empty install. Returns True when a user was added."""
    username = settings.DEFAULT_ADMIN_USERNAME
    if db.query(User).filter(User.username == username).first():
        return False

    db.add(User(
        username=username,
        first_name="Default",
        last_name="Admin",
        password_hash=get_password_hash(settings.DEFAULT_ADMIN_PASSWORD),
    ))
    db.commit()
    logger.warning(f"Created default account '{username}'; change its password")
    return True
