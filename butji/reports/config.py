"""Configuration for report intake.

All settings can be overridden via ``REPORTS_*`` environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReportsConfig(BaseSettings):
    """Length caps applied by the report sanitizer."""

    model_config = SettingsConfigDict(
        env_prefix="REPORTS_",
        case_sensitive=False,
        extra="ignore",
    )

    target_id_max_length: int = Field(default=100, ge=1)
    field_max_length: int = Field(default=500, ge=1)
    new_value_max_length: int = Field(default=5000, ge=1)
    message_max_length: int = Field(default=10000, ge=1)
    admin_notes_max_length: int = Field(default=10000, ge=1)
    email_max_length: int = Field(default=255, ge=1)
    url_max_length: int = Field(default=2048, ge=1)
