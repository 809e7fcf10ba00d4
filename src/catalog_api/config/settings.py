# src/catalog_api/config/settings.py
from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

STORAGE_BACKENDS = ("json-file", "postgres")


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from catalog_api.config.settings import get_settings
        settings = get_settings()
        bucket_name = settings.s3_bucket_name
    """

    # Application Settings
    app_name: str = Field(
        default="catalog-api",
        description="Application name"
    )

    host: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP server binds to"
    )

    port: int = Field(
        default=3000,
        validation_alias=AliasChoices("PORT", "port"),
        description="Port the HTTP server listens on"
    )

    # Persistence
    storage_backend: str = Field(
        default="json-file",
        description="Record store: json-file or postgres"
    )

    data_file: str = Field(
        default="catalog.json",
        description="Path of the JSON data file for the json-file backend"
    )

    database_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "database_url"),
        description="PostgreSQL connection string for the postgres backend"
    )

    database_ssl: bool = Field(
        default=True,
        description="Connect to PostgreSQL over TLS"
    )

    database_ssl_reject_unauthorized: bool = Field(
        default=False,
        description="Verify the PostgreSQL server certificate (off = encrypted but unverified)"
    )

    # AWS / S3
    aws_region: str = Field(
        default="us-east-1",
        validation_alias=AliasChoices("AWS_REGION", "AWS_DEFAULT_REGION", "aws_region"),
    )

    aws_access_key_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AWS_ACCESS_KEY_ID", "aws_access_key_id"),
    )

    aws_secret_access_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AWS_SECRET_ACCESS_KEY", "aws_secret_access_key"),
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AWS_ENDPOINT_URL", "aws_endpoint_url"),
        description="Custom S3 endpoint, e.g. LocalStack or MinIO"
    )

    s3_bucket_name: str = Field(
        default="catalog-images",
        validation_alias=AliasChoices("AWS_S3_BUCKET_NAME", "S3_BUCKET_NAME", "s3_bucket_name"),
        description="S3 bucket for uploaded images"
    )

    # Rate limiting
    rate_limit_max: int = Field(
        default=100,
        ge=1,
        description="Requests allowed per client address in each window"
    )

    rate_limit_window_minutes: int = Field(
        default=15,
        ge=1,
        description="Length of the fixed rate limit window"
    )

    rate_limit_message: str = Field(
        default="Too many requests from this IP, please try again later.",
    )

    # CORS
    cors_allow_origins: List[str] = Field(
        default=["*"],
        description="Origins allowed by CORS"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator("storage_backend", mode="before")
    @classmethod
    def normalize_storage_backend(cls, v):
        """Accept a few spellings of the backend names."""
        if isinstance(v, str):
            v = v.strip().lower().replace("_", "-")
            aliases = {"json": "json-file", "file": "json-file", "postgresql": "postgres", "pg": "postgres"}
            v = aliases.get(v, v)
            if v not in STORAGE_BACKENDS:
                raise ValueError(f"Invalid storage_backend: {v}. Must be one of {list(STORAGE_BACKENDS)}")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            v = v.strip().upper()
            if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
                raise ValueError(f"Invalid log_level: {v}")
        return v

    @model_validator(mode="after")
    def check_database_url_for_postgres(self):
        if self.storage_backend == "postgres" and not self.database_url:
            raise ValueError("DATABASE_URL must be set when storage_backend is postgres")
        return self

    @property
    def rate_limit(self) -> str:
        """Limit string in the notation understood by the `limits` package."""
        return f"{self.rate_limit_max} per {self.rate_limit_window_minutes} minute"

    def public_summary(self) -> dict:
        """Effective configuration without credentials, for logs and the CLI."""
        return {
            "storage_backend": self.storage_backend,
            "data_file": self.data_file if self.storage_backend == "json-file" else None,
            "database_configured": bool(self.database_url),
            "database_ssl": self.database_ssl,
            "database_ssl_reject_unauthorized": self.database_ssl_reject_unauthorized,
            "aws_region": self.aws_region,
            "aws_endpoint_url": self.aws_endpoint_url,
            "s3_bucket_name": self.s3_bucket_name,
            "rate_limit": self.rate_limit,
            "cors_allow_origins": self.cors_allow_origins,
            "port": self.port,
            "log_level": self.log_level,
        }

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
