# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration — all env-driven, zero hardcode.
Single source of truth for every tunable parameter.
"""

import os


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "presenter-rotation")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "3001"))

    # "sql" (SQLAlchemy engine on DATABASE_URL) or "memory"
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "sql").lower()
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL", "sqlite:///./presenter_rotation.db"
    )
    DB_ECHO: bool = os.getenv("DB_ECHO", "false").lower() == "true"

    UPCOMING_WEEKS: int = int(os.getenv("UPCOMING_WEEKS", "5"))
    MAX_SCHEDULE_WEEKS: int = int(os.getenv("MAX_SCHEDULE_WEEKS", "52"))

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
