"""Moderation workflow configuration.

All settings can be overridden via ``MODERATION_*`` environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ModerationConfig(BaseSettings):
    """Defaults applied when an admin action omits optional fields."""

    model_config = SettingsConfigDict(
        env_prefix="MODERATION_",
        case_sensitive=False,
        extra="ignore",
    )

    default_reviewer: str = Field(
        default="Admin",
        description="Reviewer recorded when the request names none",
    )
    default_rejection_reason: str = Field(
        default="No reason provided",
        description="Reason recorded when a rejection names none",
    )
