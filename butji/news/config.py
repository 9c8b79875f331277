"""Configuration for news ingestion and listing.

All settings can be overridden via ``NEWS_*`` environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NewsConfig(BaseSettings):
    """Settings for feed fetching and the public article list."""

    model_config = SettingsConfigDict(
        env_prefix="NEWS_",
        case_sensitive=False,
        extra="ignore",
    )

    fetch_timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        description="HTTP timeout for a single feed fetch",
    )
    user_agent: str = Field(
        default="ButjiNews/1.0 (RSS Reader)",
        description="User-Agent header sent to feed hosts",
    )
    article_list_limit: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Number of articles returned by the public news list",
    )
