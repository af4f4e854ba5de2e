"""Protocols for OAuth domain dependencies."""

from typing import Any, Awaitable, Dict, Optional, Protocol, Union

from fastapi import Request

from linkedin_auth.core.logging import ContextualLogger
from linkedin_auth.domains.oauth.types import OAuth1TokenResponse, UrlAugmenter


class OAuth1ServiceProtocol(Protocol):
    """OAuth1 signed-transport capability."""

    async def get_request_token(
        self,
        *,
        request_token_url: str,
        consumer_key: str,
        consumer_secret: str,
        callback_url: Optional[str],
        logger: ContextualLogger,
        extra_params: Optional[Dict[str, str]] = None,
        url_augmenter: Optional[UrlAugmenter] = None,
    ) -> OAuth1TokenResponse:
        """Obtain temporary credentials (request token).

        ``extra_params`` are sent in the signed form body. ``url_augmenter``, when
        given, may move parameters from the body onto the URL before signing.
        """
        ...

    async def exchange_token(
        self,
        *,
        access_token_url: str,
        consumer_key: str,
        consumer_secret: str,
        oauth_token: str,
        oauth_token_secret: str,
        oauth_verifier: Optional[str],
        logger: ContextualLogger,
    ) -> OAuth1TokenResponse:
        """Exchange temporary credentials for access token credentials."""
        ...

    async def get(
        self,
        *,
        url: str,
        consumer_key: str,
        consumer_secret: str,
        oauth_token: str,
        oauth_token_secret: str,
        logger: ContextualLogger,
    ) -> str:
        """Issue a signed GET and return the response body."""
        ...

    def build_authorization_url(
        self,
        *,
        authorization_url: str,
        oauth_token: str,
        params: Optional[Dict[str, str]] = None,
    ) -> str:
        """Build the authorization URL for user consent."""
        ...


class VerifyCallback(Protocol):
    """Host callback deciding which user a set of access credentials belongs to.

    Returns the user, ``None``/``False`` to reject, or a ``(user, info)`` tuple.
    Raising signals an error. Plain functions and coroutine functions are both
    accepted.
    """

    def __call__(
        self, token: str, token_secret: str, profile: Any
    ) -> Union[Any, Awaitable[Any]]:
        ...


class DenialCheck(Protocol):
    """Returns the provider's denial reason for a callback request, or None."""

    def __call__(self, request: Request) -> Optional[str]:
        ...


class ParamsHook(Protocol):
    """Derives provider parameters from the options passed to authenticate()."""

    def __call__(self, options: Dict[str, Any]) -> Dict[str, str]:
        ...


class ProfileLoader(Protocol):
    """Fetches and normalizes the user profile for an access token pair."""

    def __call__(
        self, token: str, token_secret: str, params: Dict[str, str]
    ) -> Awaitable[Any]:
        ...
