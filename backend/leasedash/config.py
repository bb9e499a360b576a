"""
Configuration settings for the occupancy analytics backend.
"""
import os
from pathlib import Path
from typing import Dict
from pydantic_settings import BaseSettings
from functools import lru_cache

# Database directory: mounted volume in production, local in dev
_volume = os.environ.get("LEASEDASH_DB_DIR")
DEFAULT_DB_DIR = Path(_volume) if _volume else Path(__file__).parent / "db" / "data"


class Settings(BaseSettings):
    # SQLite store
    database_path: Path = DEFAULT_DB_DIR / "leasedash.db"

    # JWT auth
    jwt_secret: str = "leasedash-jwt-secret-change-me"
    jwt_algorithm: str = "HS256"
    jwt_expiration_seconds: int = 86400  # 24 hours

    # Login accounts, JSON: {"<username>": {"password_hash": "<bcrypt>", "display_name": "..."}}
    users: Dict[str, Dict[str, str]] = {}

    # Revenue math
    days_per_month: int = 30
    vacancy_loss_method: str = "aggregate"  # "aggregate" | "per_unit"

    log_level: str = "INFO"

    # Extra CORS origin (deployed frontend)
    frontend_url: str = ""

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "LEASEDASH_"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
