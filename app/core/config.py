"""
Application configuration.
"""

from pathlib import Path
from typing import Any, Optional

from pydantic import Field, PostgresDsn, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    # Core Settings
    PROJECT_NAME: str = "Affiliate Categories"
    PROJECT_DESCRIPTION: str = "Category management API for the affiliate backend"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # API Settings
    API_PREFIX: str = "/api"
    CATEGORIES_PREFIX: str = "/api/categories"
    CORS_ORIGINS_STR: str = "*"

    # Database Settings
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "affiliate"
    POSTGRES_PORT: str = "5432"
    DATABASE_URI: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("DATABASE_URI", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> Any:
        if isinstance(v, str) and v:
            return v

        data = info.data
        if not data:
            raise ValueError("Missing data for DATABASE_URI")

        return str(
            PostgresDsn.build(
                scheme="postgresql+asyncpg",
                username=data.get("POSTGRES_USER"),
                password=data.get("POSTGRES_PASSWORD"),
                host=data.get("POSTGRES_SERVER"),
                port=int(data.get("POSTGRES_PORT", 5432)),
                path=f"{data.get('POSTGRES_DB') or ''}",
            )
        )

    # Upload Settings
    UPLOAD_ROOT: Path = Path("uploads")
    UPLOAD_URL: str = "/uploads"
    CATEGORY_IMAGE_DIR: str = "method-icons"

    @field_validator("UPLOAD_URL", mode="before")
    @classmethod
    def strip_upload_url(cls, v: Any) -> Any:
        if isinstance(v, str):
            return "/" + v.strip("/")
        return v

    @property
    def category_image_path(self) -> Path:
        """Filesystem directory holding category images."""
        return self.UPLOAD_ROOT / self.CATEGORY_IMAGE_DIR

    @property
    def category_image_url(self) -> str:
        """Web prefix under which category images are served."""
        return f"{self.UPLOAD_URL}/{self.CATEGORY_IMAGE_DIR}"

    # Sentry Settings
    SENTRY_DSN: Optional[str] = None
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    # Prometheus Metrics
    ENABLE_METRICS: bool = True

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    # Tracing Settings
    ENABLE_TRACING: bool = False
    OTLP_ENDPOINT: Optional[str] = None

    @field_validator("ENABLE_METRICS", "ENABLE_TRACING", "JSON_LOGS", mode="before")
    @classmethod
    def parse_flag(cls, v: Any) -> bool:
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.strip().lower() not in ("false", "0", "no", "off", "")
        return bool(v)


settings = Settings()
