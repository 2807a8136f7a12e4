"""Settings for CrossQuery engine."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class CrossQuerySettings(BaseSettings):
    """CrossQuery configuration settings."""

    # Paging
    DEFAULT_PAGE_SIZE: int = 10
    MIN_PAGE_SIZE: int = 1
    MAX_PAGE_SIZE: int = 100

    # Relational joins: inner join unless a criterion says otherwise
    REQUIRED_JOINS: bool = True

    # Document aggregation
    AGGREGATE_ALLOW_DISK_USE: bool = True

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = CrossQuerySettings()
