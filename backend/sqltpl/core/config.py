"""
Settings for the query builder, loaded from environment (or ``.env``).
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # LRU size for compiled templates; 0 disables the cache
    SQL_TEMPLATE_CACHE_SIZE: int = Field(default=512, ge=0)
    SQL_LOG_QUERIES: bool = False
    # Truncation for template/query previews in logs
    SQL_LOG_PREVIEW_CHARS: int = Field(default=500, ge=0)


settings = Settings()  # type: ignore
