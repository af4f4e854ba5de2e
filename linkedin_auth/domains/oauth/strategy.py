"""Generic OAuth 1.0a authentication strategy.

Drives the 3-legged exchange for one incoming request:

- no ``oauth_token`` in the query: obtain a request token, remember it in the
  session and redirect the user to the provider for authorization.
- ``oauth_token`` in the query (provider callback): exchange the request token
  for an access token, load the user profile and ask the host's verify
  callback which user the credentials belong to.

Provider specifics are plugged in as hooks (denial check, request-token
params, user-authorization params, URL augmenter, profile loader) instead of
subclassing.
"""

import inspect
from typing import Any, Dict, MutableMapping, Optional
from urllib.parse import urljoin, urlsplit

from fastapi import Request
from pydantic import BaseModel, ConfigDict

from linkedin_auth.core.exceptions import (
    InternalOAuthError,
    LinkedInAuthException,
    OAuthConfigurationError,
    OAuthTransportError,
    SessionStateError,
)
from linkedin_auth.core.logging import ContextualLogger, logger
from linkedin_auth.domains.oauth.oauth1_service import OAuth1Service
from linkedin_auth.domains.oauth.protocols import (
    DenialCheck,
    OAuth1ServiceProtocol,
    ParamsHook,
    ProfileLoader,
    VerifyCallback,
)
from linkedin_auth.domains.oauth.types import AuthResult, UrlAugmenter


class OAuth1StrategyOptions(BaseModel):
    """Immutable configuration for an OAuth1 strategy."""

    model_config = ConfigDict(frozen=True)

    consumer_key: Optional[str] = None
    consumer_secret: Optional[str] = None
    request_token_url: str
    access_token_url: str
    user_authorization_url: str
    callback_url: Optional[str] = None
    session_key: str
    skip_user_profile: bool = False


class OAuth1Strategy:
    """Provider-agnostic OAuth 1.0a exchange.

    Runtime failures never escape ``authenticate``; they come back as an
    ``AuthResult`` with status ERROR. Only construction raises.
    """

    def __init__(
        self,
        *,
        name: str,
        options: OAuth1StrategyOptions,
        verify: VerifyCallback,
        oauth1_service: Optional[OAuth1ServiceProtocol] = None,
        check_denied: Optional[DenialCheck] = None,
        request_token_params: Optional[ParamsHook] = None,
        user_authorization_params: Optional[ParamsHook] = None,
        url_augmenter: Optional[UrlAugmenter] = None,
        user_profile: Optional[ProfileLoader] = None,
        log: Optional[ContextualLogger] = None,
    ) -> None:
        """Validate credentials and store hooks.

        Raises:
            OAuthConfigurationError: If consumer key or secret is missing, or no
                verify callback was given.
        """
        if not options.consumer_key:
            raise OAuthConfigurationError("OAuth1Strategy requires a consumer_key option")
        if not options.consumer_secret:
            raise OAuthConfigurationError("OAuth1Strategy requires a consumer_secret option")
        if verify is None:
            raise OAuthConfigurationError("OAuth1Strategy requires a verify callback")

        self.name = name
        self.options = options
        self._verify = verify
        self._oauth1_service = oauth1_service or OAuth1Service()
        self._check_denied = check_denied
        self._request_token_params = request_token_params
        self._user_authorization_params = user_authorization_params
        self._url_augmenter = url_augmenter
        self._user_profile = user_profile
        self._logger = (log or logger).with_context(strategy=name)

    async def authenticate(self, request: Request, **options: Any) -> AuthResult:
        """Authenticate ``request``, returning what the host should do next.

        Recognized options: ``callback_url`` (overrides the configured one) plus
        anything the request-token and user-authorization hooks understand.
        """
        if self._check_denied is not None:
            reason = self._check_denied(request)
            if reason:
                self._logger.info(f"Authorization denied at provider: {reason}")
                return AuthResult.fail({"message": reason})

        if "session" not in request.scope:
            self._logger.error("No session available on the request")
            return AuthResult.from_error(
                SessionStateError("OAuth authentication requires session support")
            )

        if request.query_params.get("oauth_token"):
            return await self._complete_authorization(request)
        return await self._begin_authorization(request, options)

    # ------------------------------------------------------------------
    # Step 1: request token + redirect
    # ------------------------------------------------------------------

    def _resolve_callback_url(self, request: Request, callback_url: Optional[str]) -> Optional[str]:
        if callback_url and not urlsplit(callback_url).scheme:
            return urljoin(str(request.url), callback_url)
        return callback_url

    async def _begin_authorization(self, request: Request, options: Dict[str, Any]) -> AuthResult:
        params = self._request_token_params(options) if self._request_token_params else {}
        callback_url = self._resolve_callback_url(
            request, options.get("callback_url") or self.options.callback_url
        )

        try:
            request_token = await self._oauth1_service.get_request_token(
                request_token_url=self.options.request_token_url,
                consumer_key=self.options.consumer_key,
                consumer_secret=self.options.consumer_secret,
                callback_url=callback_url,
                logger=self._logger,
                extra_params=params,
                url_augmenter=self._url_augmenter,
            )
        except OAuthTransportError as e:
            return AuthResult.from_error(InternalOAuthError("failed to obtain request token", e))

        stored = request.session.setdefault(self.options.session_key, {})
        if not isinstance(stored, MutableMapping):
            self._logger.error(f"Session key {self.options.session_key} holds foreign data")
            return AuthResult.from_error(
                SessionStateError(f"session key {self.options.session_key} is already in use")
            )
        stored["oauth_token"] = request_token.oauth_token
        stored["oauth_token_secret"] = request_token.oauth_token_secret

        authorization_params = (
            self._user_authorization_params(options) if self._user_authorization_params else {}
        )
        location = self._oauth1_service.build_authorization_url(
            authorization_url=self.options.user_authorization_url,
            oauth_token=request_token.oauth_token,
            params=authorization_params,
        )
        self._logger.debug("Redirecting user to provider for authorization")
        return AuthResult.redirect(location)

    # ------------------------------------------------------------------
    # Step 3: access token, profile, verify
    # ------------------------------------------------------------------

    async def _complete_authorization(self, request: Request) -> AuthResult:
        stored = request.session.get(self.options.session_key)
        if not stored or not isinstance(stored, MutableMapping):
            self._logger.warning("Provider callback without a request token in the session")
            return AuthResult.from_error(SessionStateError())

        try:
            access_token = await self._oauth1_service.exchange_token(
                access_token_url=self.options.access_token_url,
                consumer_key=self.options.consumer_key,
                consumer_secret=self.options.consumer_secret,
                oauth_token=request.query_params["oauth_token"],
                oauth_token_secret=stored.get("oauth_token_secret", ""),
                oauth_verifier=request.query_params.get("oauth_verifier"),
                logger=self._logger,
            )
        except OAuthTransportError as e:
            return AuthResult.from_error(InternalOAuthError("failed to obtain access token", e))

        # The request token is single use.
        stored.pop("oauth_token", None)
        stored.pop("oauth_token_secret", None)
        if not stored:
            del request.session[self.options.session_key]

        profile = None
        if self._user_profile is not None and not self.options.skip_user_profile:
            try:
                profile = await self._user_profile(
                    access_token.oauth_token,
                    access_token.oauth_token_secret,
                    access_token.additional_params,
                )
            except LinkedInAuthException as e:
                self._logger.error(f"Failed to load user profile: {e}")
                return AuthResult.from_error(e)

        return await self._run_verify(
            access_token.oauth_token, access_token.oauth_token_secret, profile
        )

    async def _run_verify(self, token: str, token_secret: str, profile: Any) -> AuthResult:
        try:
            outcome = self._verify(token, token_secret, profile)
            if inspect.isawaitable(outcome):
                outcome = await outcome
        except Exception as e:
            self._logger.error(f"Verify callback raised {type(e).__name__}: {e}")
            return AuthResult.from_error(e)

        if isinstance(outcome, tuple) and len(outcome) == 2:
            user, info = outcome
        else:
            user, info = outcome, None
        if not user:
            return AuthResult.fail(info)
        return AuthResult.success(user, info)
