from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Classification oracle; empty base URL runs the built-in demo response
    oracle_base_url: str = Field(default="", alias="ORACLE_BASE_URL")
    oracle_api_key: str = Field(default="", alias="ORACLE_API_KEY")
    oracle_model: str = Field(default="gpt-4o-mini", alias="ORACLE_MODEL")
    oracle_timeout_seconds: float = Field(default=30.0, alias="ORACLE_TIMEOUT_SECONDS")

    max_image_bytes: int = Field(default=8_000_000, alias="MAX_IMAGE_BYTES")
    max_batch_size: int = Field(default=500, alias="MAX_BATCH_SIZE")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")
