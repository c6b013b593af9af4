"""
Application Settings
Load from environment variables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings from environment"""

    # ======================
    # Application
    # ======================
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # ======================
    # Timezone
    # ======================
    TIMEZONE: str = "Europe/Istanbul"

    # ======================
    # Legal calendar
    # ======================
    # Path to a YAML holiday / judicial recess table.
    # Unset -> config/legal_calendar.yml if present, else built-in table.
    LEGAL_CALENDAR_FILE: Optional[str] = None

    # ======================
    # Saved deadlines (session agenda)
    # ======================
    MAX_SAVED_DEADLINES_PER_SESSION: int = 200

    # ======================
    # Pydantic v2 config
    # ======================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="forbid",
    )


settings = Settings()
