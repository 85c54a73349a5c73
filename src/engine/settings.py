"""
Environment-driven configuration for the scanner adapter.

Values are read from ``SCANNER_``-prefixed environment variables or a local
``.env`` file, e.g. ``SCANNER_REDIS_URL`` or ``SCANNER_SCAN_JOB_TTL=PT2H``.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from api.schemas import Scanner


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SCANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Redis store
    REDIS_URL: str = "redis://localhost:6379/0"
    STORE_NAMESPACE: str = "harbor.scanner.trivy:store"
    SCAN_JOB_TTL: timedelta = timedelta(hours=1)
    STORE_OPERATION_TIMEOUT: Optional[float] = Field(None, gt=0)
    STORE_MAX_UPDATE_RETRIES: int = Field(5, ge=1)

    # Metadata reported to Harbor
    ENGINE_NAME: str = "Trivy"
    ENGINE_VENDOR: str = "Aqua Security"
    ENGINE_VERSION: str = "Unknown"

    LOG_LEVEL: str = "INFO"

    @field_validator("SCAN_JOB_TTL")
    def _check_ttl(cls, value: timedelta) -> timedelta:
        # Redis expiries are whole seconds
        if value < timedelta(seconds=1):
            raise ValueError("SCAN_JOB_TTL must be at least one second")
        return value

    def scanner_metadata(self) -> Scanner:
        return Scanner(name=self.ENGINE_NAME, vendor=self.ENGINE_VENDOR, version=self.ENGINE_VERSION)


@lru_cache()
def get_settings() -> Settings:
    """Return a cached `Settings` instance."""

    return Settings()
