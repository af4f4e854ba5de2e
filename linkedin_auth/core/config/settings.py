"""Environment-driven settings.

Uses Pydantic Settings for automatic env var loading. Strategy options stay
immutable per instance; these objects only feed their defaults.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide settings for logging and outbound HTTP."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    LOG_LEVEL: str = Field("INFO", description="Root level for the linkedin_auth logger")
    LOG_JSON: bool = Field(False, description="Emit one JSON object per log line")
    HTTP_TIMEOUT_SECONDS: float = Field(
        30.0, gt=0, description="Timeout applied to every signed request to the provider"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Accept lower-case level names from the environment."""
        return value.upper()


class LinkedInSettings(BaseSettings):
    """LinkedIn consumer credentials and strategy defaults.

    Env vars use the LINKEDIN_ prefix:
        LINKEDIN_CONSUMER_KEY=...
        LINKEDIN_PROFILE_FIELDS='["id", "name", "emails"]'
    """

    model_config = SettingsConfigDict(
        env_prefix="LINKEDIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    consumer_key: Optional[str] = Field(None, description="Identifies the client to LinkedIn")
    consumer_secret: Optional[str] = Field(
        None, description="Secret used to establish ownership of the consumer key"
    )
    callback_url: Optional[str] = Field(
        None, description="Where LinkedIn redirects the user after authorization"
    )
    session_key: str = Field("oauth:linkedin", description="Session key for the request token")
    profile_fields: Optional[List[str]] = Field(
        None, description="Abstract profile fields to request instead of the default selector"
    )
