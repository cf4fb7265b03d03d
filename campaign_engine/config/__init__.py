"""
Campaign chart configuration settings.

Loaded from environment variables prefixed with CAMPAIGN_CHARTS_
(or a local .env file). Read once at startup.
"""

import logging
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- CHART DEFAULTS ---
DEFAULT_RENDER_TYPE = "bar"
DEFAULT_CHART_HEIGHT = 300
DASHBOARD_TITLE = "Campaign Analytics Dashboard"

_RENDER_TYPES = ("bar", "pie", "line")


class Settings(BaseSettings):
    """Chart engine settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="CAMPAIGN_CHARTS_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Chart defaults (used when a route does not override them)
    DEFAULT_RENDER_TYPE: str = DEFAULT_RENDER_TYPE
    DEFAULT_CHART_HEIGHT: int = Field(DEFAULT_CHART_HEIGHT, gt=0)

    # Overrides the declared active flags when set, e.g. '["overview", "temporal"]'
    ENABLED_CATEGORIES: Optional[List[str]] = None

    DASHBOARD_TITLE: str = DASHBOARD_TITLE

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("DEFAULT_RENDER_TYPE")
    @classmethod
    def _known_render_type(cls, v: str) -> str:
        if v not in _RENDER_TYPES:
            raise ValueError(f"DEFAULT_RENDER_TYPE must be one of {', '.join(_RENDER_TYPES)}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def _known_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level


# Create settings instance
settings = Settings()


def configure_logging(config: Optional[Settings] = None) -> None:
    """Apply LOG_LEVEL to the root logger. Call from the host application."""
    config = config or settings
    logging.basicConfig(level=config.LOG_LEVEL)
    logging.getLogger("campaign_engine").setLevel(config.LOG_LEVEL)
