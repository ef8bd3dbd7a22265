from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings sourced from environment variables (or ``.env``)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Literal["dev", "test", "staging", "prod"] = Field(default="dev")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    diagnostic_config_path: Optional[Path] = Field(
        default=None,
        description="YAML file overriding the packaged weights, thresholds and limits",
    )
    instrumentation_enabled: bool = Field(default=True, description="Record timings and call counters in-process")

    @field_validator("diagnostic_config_path", mode="before")
    @classmethod
    def _normalize_blank_path(cls, value: object) -> Optional[str | Path]:
        if value in (None, "", b""):
            return None
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        if isinstance(value, str):
            stripped = value.strip()
            return stripped or None
        if isinstance(value, Path):
            return value
        raise TypeError("DIAGNOSTIC_CONFIG_PATH must be a filesystem path string")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
