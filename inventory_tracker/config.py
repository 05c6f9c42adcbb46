# inventory_tracker/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./inventory_tracker.db"

    # JWT
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Extra CORS origin for the web frontend
    FRONTEND_URL: Optional[str] = None

    # Dashboard
    LOW_STOCK_THRESHOLD: int = 10
    TOP_PRODUCTS_LIMIT: int = 5

    # Optimistic locking on product quantity
    STOCK_UPDATE_MAX_ATTEMPTS: int = 3

    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Default account created on first start
    SEED_DEFAULT_ADMIN: bool = True
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "password123"

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
