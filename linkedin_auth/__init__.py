"""LinkedIn authentication strategy for OAuth 1.0a login flows."""

from linkedin_auth.core.exceptions import (
    InternalOAuthError,
    LinkedInAuthException,
    OAuthConfigurationError,
    OAuthTransportError,
    ProfileParseError,
    SessionStateError,
)
from linkedin_auth.domains.linkedin.fields import build_field_selector
from linkedin_auth.domains.linkedin.profile import Profile, normalize
from linkedin_auth.domains.linkedin.strategy import LinkedInStrategy, LinkedInStrategyOptions
from linkedin_auth.domains.oauth.types import AuthResult, AuthStatus

__version__ = "0.3.0"

__all__ = [
    "AuthResult",
    "AuthStatus",
    "InternalOAuthError",
    "LinkedInAuthException",
    "LinkedInStrategy",
    "LinkedInStrategyOptions",
    "OAuthConfigurationError",
    "OAuthTransportError",
    "Profile",
    "ProfileParseError",
    "SessionStateError",
    "build_field_selector",
    "normalize",
]
