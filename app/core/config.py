import os
import logging
from dotenv import load_dotenv
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings
from typing import Optional

# Load environment variables from .env file
load_dotenv(".env", override=False)
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Class to store all the settings of the campus report service."""

    # ------------------------------
    # Database
    # ------------------------------
    DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./campus_reports.db")
    DATABASE_ECHO: bool = Field(default=False)

    # "database" stores the collections in the kv_entries table,
    # "memory" keeps them in process only
    STORAGE_BACKEND: str = Field(default="database")
    SEED_ON_EMPTY: bool = Field(default=True)

    # ------------------------------
    # Auth
    # ------------------------------
    SECRET_KEY: str = Field(default="dev-secret-key-change-me")
    ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=480)

    # Reserved admin account
    ADMIN_IDENTIFIER: str = Field(default="admin1")
    ADMIN_PASSWORD: str = Field(default="123456")
    ADMIN_NAME: str = Field(default="Admin Fasilkom")

    # ------------------------------
    # Rate limiting
    # ------------------------------
    RATE_LIMIT_ENABLED: bool = Field(default=True)
    AUTH_RATE_LIMIT: str = Field(default="10/minute")

    # ------------------------------
    # Reports
    # ------------------------------
    MAX_PHOTOS: int = Field(default=3)
    MAX_PHOTO_SIZE_MB: int = Field(default=2)
    COMMENT_PREVIEW_LENGTH: int = Field(default=30)

    # ------------------------------
    # URLs & Environment
    # ------------------------------
    FRONTEND_URL: str = Field(default="http://localhost:3000")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # ------------------------------
    # Computed Fields
    # ------------------------------
    @computed_field
    @property
    def COOKIE_DOMAIN(self) -> Optional[str]:
        """Computed field for cookie domain based on environment."""
        return os.getenv("COOKIE_DOMAIN") if self.ENVIRONMENT == "production" else None

    class Config:
        """Configuration for the settings class."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instantiate the settings
settings = Settings()
