"""Library configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``CARTKERNEL_*`` environment variables."""

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=False, description="Render log lines as JSON")

    # History
    history_limit: int | None = Field(
        default=None,
        ge=1,
        description="Maximum undo depth per cart; unbounded when unset",
    )

    model_config = SettingsConfigDict(
        env_prefix="CARTKERNEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
