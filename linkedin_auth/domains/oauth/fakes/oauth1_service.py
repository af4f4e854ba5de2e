"""Fake OAuth1 service for testing."""

from typing import Any, Dict, Optional
from urllib.parse import urlencode

from linkedin_auth.core.exceptions import OAuthTransportError
from linkedin_auth.core.logging import ContextualLogger
from linkedin_auth.domains.oauth.types import OAuth1TokenResponse, UrlAugmenter


class FakeOAuth1Service:
    """In-memory fake for OAuth1ServiceProtocol.

    Seed token and GET responses, then inspect recorded calls for assertions.
    A URL augmenter passed to get_request_token is applied, so the recorded
    call shows the URL and body params the real transport would have signed.
    """

    def __init__(self) -> None:
        self._request_token: Optional[OAuth1TokenResponse] = None
        self._access_token: Optional[OAuth1TokenResponse] = None
        self._get_responses: Dict[str, str] = {}
        self._errors: Dict[str, Exception] = {}
        self._calls: list[tuple[Any, ...]] = []

    # -- seeding helpers --

    def seed_request_token(self, oauth_token: str, oauth_token_secret: str, **extra: str) -> None:
        self._request_token = OAuth1TokenResponse(oauth_token, oauth_token_secret, **extra)

    def seed_access_token(self, oauth_token: str, oauth_token_secret: str, **extra: str) -> None:
        self._access_token = OAuth1TokenResponse(oauth_token, oauth_token_secret, **extra)

    def seed_get(self, url: str, body: str) -> None:
        self._get_responses[url] = body

    def set_error(self, method: str, error: Exception) -> None:
        self._errors[method] = error

    def clear_errors(self) -> None:
        self._errors.clear()

    @property
    def calls(self) -> list[tuple[Any, ...]]:
        return list(self._calls)

    def calls_for(self, method: str) -> list[tuple[Any, ...]]:
        return [c for c in self._calls if c[0] == method]

    # -- public methods matching OAuth1ServiceProtocol --

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
        body_params = dict(extra_params or {})
        if url_augmenter is not None:
            request_token_url, body_params = url_augmenter(request_token_url, body_params)
        self._calls.append(("get_request_token", request_token_url, body_params, callback_url))
        if "get_request_token" in self._errors:
            raise self._errors["get_request_token"]
        if self._request_token is None:
            raise ValueError("No seeded request token")
        return self._request_token

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
        self._calls.append(
            ("exchange_token", access_token_url, oauth_token, oauth_token_secret, oauth_verifier)
        )
        if "exchange_token" in self._errors:
            raise self._errors["exchange_token"]
        if self._access_token is None:
            raise ValueError("No seeded access token")
        return self._access_token

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
        self._calls.append(("get", url, oauth_token, oauth_token_secret))
        if "get" in self._errors:
            raise self._errors["get"]
        if url not in self._get_responses:
            raise OAuthTransportError(f"No seeded response for {url}", status_code=404)
        return self._get_responses[url]

    def build_authorization_url(
        self,
        *,
        authorization_url: str,
        oauth_token: str,
        params: Optional[Dict[str, str]] = None,
    ) -> str:
        query: Dict[str, str] = {"oauth_token": oauth_token, **(params or {})}
        self._calls.append(("build_authorization_url", authorization_url, oauth_token, params))
        return f"{authorization_url}?{urlencode(query)}"
