"""Configuration module for linkedin_auth.

Usage:
    from linkedin_auth.core.config import settings

    if settings.LOG_JSON:
        ...
"""

from linkedin_auth.core.config.settings import LinkedInSettings, Settings

__all__ = [
    "LinkedInSettings",
    "Settings",
    "settings",
]

# Singleton settings instance
settings = Settings()
