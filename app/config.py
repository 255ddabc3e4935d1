"""
Application configuration
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Settings from environment variables"""

    # Storage
    DATABASE_PATH: str = os.getenv("DATABASE_PATH", "crease_live.db")

    # Comma-separated origins added to the local dev defaults
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "")

    # Innings length used when a match is scheduled without one
    DEFAULT_MAX_OVERS: int = int(os.getenv("DEFAULT_MAX_OVERS", "20"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
