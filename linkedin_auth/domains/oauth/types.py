"""Value types for the OAuth domain.

These live in a separate module to avoid circular imports between
service implementations and protocol definitions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

# (url, body_params) -> (url, body_params), applied before a request is signed.
UrlAugmenter = Callable[[str, Dict[str, str]], Tuple[str, Dict[str, str]]]


class OAuth1TokenResponse:
    """Response from OAuth1 token exchange."""

    def __init__(self, oauth_token: str, oauth_token_secret: str, **kwargs: str) -> None:
        """Initialize with token, secret, and any additional provider params."""
        self.oauth_token = oauth_token
        self.oauth_token_secret = oauth_token_secret
        self.additional_params = kwargs


class AuthStatus(str, Enum):
    """Outcome kinds of a single authenticate() call."""

    SUCCESS = "success"
    FAIL = "fail"
    REDIRECT = "redirect"
    ERROR = "error"


@dataclass(slots=True)
class AuthResult:
    """What the host should do with the request that was authenticated.

    - SUCCESS: ``user`` (and optional ``info``) came back from the verify callback.
    - FAIL: authentication was refused (user denial or verify returned no user).
    - REDIRECT: send the user agent to ``redirect_url``.
    - ERROR: ``error`` holds the exception that stopped the flow.
    """

    status: AuthStatus
    user: Any = None
    info: Any = None
    redirect_url: Optional[str] = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, user: Any, info: Any = None) -> "AuthResult":
        return cls(status=AuthStatus.SUCCESS, user=user, info=info)

    @classmethod
    def fail(cls, info: Any = None) -> "AuthResult":
        return cls(status=AuthStatus.FAIL, info=info)

    @classmethod
    def redirect(cls, url: str) -> "AuthResult":
        return cls(status=AuthStatus.REDIRECT, redirect_url=url)

    @classmethod
    def from_error(cls, error: BaseException) -> "AuthResult":
        return cls(status=AuthStatus.ERROR, error=error)

    @property
    def ok(self) -> bool:
        return self.status == AuthStatus.SUCCESS
