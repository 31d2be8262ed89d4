from __future__ import annotations

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", populate_by_name=True)

    app_name: str = "BRL Converter"
    environment: str = "local"
    host: str = "0.0.0.0"
    port: int = 8123
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    quote_api_url: str = Field(
        default="https://economia.awesomeapi.com.br/last/USD-BRL,EUR-BRL",
        alias="QUOTE_API_URL",
    )
    upstream_timeout_seconds: float = Field(default=5.0, alias="UPSTREAM_TIMEOUT_SECONDS")

    enable_cache: bool = Field(default=True, alias="ENABLE_CACHE")
    cache_ttl_seconds: int = Field(default=60, alias="CACHE_TTL_SECONDS")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
