"""
Travel Sample API — Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the store facade, the application factory and the query layer.
When:  Loaded once at module import time; validated before app starts.

Environment variables consumed by the store facade:
    DB_CONN_STR     Couchbase connection string
    DB_USERNAME     Cluster user
    DB_PASSWORD     Cluster password
    DB_BUCKET_NAME  Bucket holding the travel inventory

All four default to values that match a local development cluster loaded
with the travel-sample bucket.
"""

from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Index definition shipped next to the package sources
DEFAULT_SEARCH_INDEX_FILE = str(Path(__file__).parent / "hotel_search_index.json")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern for readability.
    """

    # ── Couchbase ─────────────────────────────────────────────────────────
    db_conn_str: str = Field(
        default="couchbase://localhost",
        description="Couchbase connection string",
    )
    db_username: str = Field(default="Administrator")
    db_password: str = Field(default="password")
    db_bucket_name: str = Field(default="travel-sample")

    # What: Scope inside the bucket that holds airline/airport/route/hotel
    db_scope_name: str = Field(default="inventory")

    # What: SDK configuration profile applied to the cluster options
    # Empty string disables the profile (use SDK defaults)
    db_config_profile: str = Field(default="wan_development")

    # What: Seconds to wait for the cluster to become ready on first use
    db_connect_timeout: int = Field(default=10, ge=1, le=120)

    # ── Full-Text Search ──────────────────────────────────────────────────
    search_index_name: str = Field(default="hotel_search")
    search_index_file: str = Field(default=DEFAULT_SEARCH_INDEX_FILE)

    # What: Create the hotel search index on startup if it is missing
    provision_search_index: bool = Field(default=True)

    # ── Pagination ────────────────────────────────────────────────────────
    default_page_limit: int = Field(default=10, ge=1, le=1000)
    default_page_offset: int = Field(default=0, ge=0)

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8080, ge=1024, le=65535)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DB_CONN_STR and db_conn_str both work
        "extra": "ignore",
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that every connection setting is non-empty.
        When:  Called during app startup (lifespan).
        Why:   An empty value would only surface later as an opaque connect failure.
        """
        errors = []
        required = {
            "DB_CONN_STR": self.db_conn_str,
            "DB_USERNAME": self.db_username,
            "DB_PASSWORD": self.db_password,
            "DB_BUCKET_NAME": self.db_bucket_name,
        }
        for name, value in required.items():
            if not value or not value.strip():
                errors.append(f"{name} is not set. Define it in the environment or .env file")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance: imported throughout the application
settings = Settings()
