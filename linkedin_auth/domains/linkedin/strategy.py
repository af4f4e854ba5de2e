"""LinkedIn authentication strategy.

Authenticates requests by delegating to LinkedIn using OAuth 1.0a.

Applications supply a ``verify`` callback which receives the access token,
token secret and normalized ``Profile`` and returns the matching user, or
``None``/``False`` if the credentials are not valid. Raising from ``verify``
reports an error.

Example:

    strategy = LinkedInStrategy(
        {
            "consumer_key": "123-456-789",
            "consumer_secret": "shhh-its-a-secret",
            "callback_url": "https://www.example.net/auth/linkedin/callback",
        },
        verify=find_or_create_user,
    )
    result = await strategy.authenticate(request, scope=["r_basicprofile", "r_emailaddress"])
"""

from typing import Any, Dict, Mapping, Optional, Tuple, Union

from fastapi import Request

from linkedin_auth.core.config import LinkedInSettings
from linkedin_auth.core.exceptions import InternalOAuthError, OAuthTransportError
from linkedin_auth.core.logging import ContextualLogger, logger
from linkedin_auth.domains.linkedin.fields import build_field_selector
from linkedin_auth.domains.linkedin.profile import PROVIDER, Profile, normalize
from linkedin_auth.domains.oauth.oauth1_service import OAuth1Service
from linkedin_auth.domains.oauth.protocols import OAuth1ServiceProtocol, VerifyCallback
from linkedin_auth.domains.oauth.strategy import OAuth1Strategy, OAuth1StrategyOptions
from linkedin_auth.domains.oauth.types import AuthResult

REQUEST_TOKEN_URL = "https://api.linkedin.com/uas/oauth/requestToken"
ACCESS_TOKEN_URL = "https://api.linkedin.com/uas/oauth/accessToken"
USER_AUTHORIZATION_URL = "https://www.linkedin.com/uas/oauth/authenticate"
PROFILE_URL_TEMPLATE = "https://api.linkedin.com/v1/people/~:({selector})?format=json"
DEFAULT_PROFILE_SELECTOR = "id,first-name,last-name"
DEFAULT_SESSION_KEY = "oauth:linkedin"

# Query parameter LinkedIn adds to the callback when the user refuses access,
# e.g. /auth/linkedin/callback?oauth_problem=user_refused
DENIAL_PARAM = "oauth_problem"


class LinkedInStrategyOptions(OAuth1StrategyOptions):
    """OAuth1 options with LinkedIn's endpoints as defaults."""

    request_token_url: str = REQUEST_TOKEN_URL
    access_token_url: str = ACCESS_TOKEN_URL
    user_authorization_url: str = USER_AUTHORIZATION_URL
    session_key: str = DEFAULT_SESSION_KEY
    profile_fields: Optional[Tuple[str, ...]] = None


def request_token_params(options: Mapping[str, Any]) -> Dict[str, str]:
    """Return LinkedIn's extra request-token parameters.

    A list of scopes is joined with a literal ``+``, which is how LinkedIn
    expects several scopes to be encoded.
    """
    params: Dict[str, str] = {}
    scope = options.get("scope")
    if scope:
        if not isinstance(scope, str):
            scope = "+".join(scope)
        params["scope"] = scope
    return params


def append_scope_to_url(url: str, params: Dict[str, str]) -> Tuple[str, Dict[str, str]]:
    """Move ``scope`` from the signed body onto the request-token URL.

    LinkedIn only honours ``scope`` on the query string. The value is appended
    as is so that ``+`` separators survive.
    """
    if "scope" not in params:
        return url, params
    params = dict(params)
    scope = params.pop("scope")
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}scope={scope}", params


def denial_reason(request: Request) -> Optional[str]:
    """Return LinkedIn's ``oauth_problem`` value for a refused authorization."""
    return request.query_params.get(DENIAL_PARAM) or None


class LinkedInStrategy:
    """Authenticates requests by delegating to LinkedIn using OAuth 1.0a."""

    name = PROVIDER

    def __init__(
        self,
        options: Union[LinkedInStrategyOptions, Mapping[str, Any]],
        verify: VerifyCallback,
        *,
        oauth1_service: Optional[OAuth1ServiceProtocol] = None,
        log: Optional[ContextualLogger] = None,
    ) -> None:
        """Build the strategy.

        ``options`` may be a ``LinkedInStrategyOptions`` or a mapping of the same
        fields; ``None`` values fall back to the defaults.

        Raises:
            OAuthConfigurationError: If consumer key or secret is missing.
        """
        if not isinstance(options, LinkedInStrategyOptions):
            options = LinkedInStrategyOptions(
                **{k: v for k, v in options.items() if v is not None}
            )
        self.options = options
        self._logger = (log or logger).with_prefix("LinkedIn: ")
        self._oauth1_service = oauth1_service or OAuth1Service()
        self._oauth = OAuth1Strategy(
            name=self.name,
            options=options,
            verify=verify,
            oauth1_service=self._oauth1_service,
            check_denied=denial_reason,
            request_token_params=request_token_params,
            url_augmenter=append_scope_to_url,
            user_profile=self.user_profile,
            log=self._logger,
        )

    @classmethod
    def from_settings(
        cls,
        verify: VerifyCallback,
        linkedin_settings: Optional[LinkedInSettings] = None,
        **kwargs: Any,
    ) -> "LinkedInStrategy":
        """Build a strategy from LINKEDIN_* environment settings."""
        linkedin_settings = linkedin_settings or LinkedInSettings()
        return cls(linkedin_settings.model_dump(), verify, **kwargs)

    @property
    def profile_url(self) -> str:
        """The people API URL for the configured (or default) profile fields."""
        if self.options.profile_fields:
            selector = build_field_selector(self.options.profile_fields)
        else:
            selector = DEFAULT_PROFILE_SELECTOR
        return PROFILE_URL_TEMPLATE.format(selector=selector)

    def request_token_params(self, options: Mapping[str, Any]) -> Dict[str, str]:
        """Extra parameters for the request-token call, see ``request_token_params``."""
        return request_token_params(options)

    async def authenticate(
        self,
        request: Request,
        *,
        scope: Optional[Union[str, list, tuple]] = None,
        callback_url: Optional[str] = None,
    ) -> AuthResult:
        """Authenticate ``request`` against LinkedIn.

        A callback carrying ``oauth_problem`` fails straight away: no token
        exchange, no profile fetch and no verify call.
        """
        return await self._oauth.authenticate(request, scope=scope, callback_url=callback_url)

    async def user_profile(
        self, token: str, token_secret: str, params: Optional[Dict[str, str]] = None
    ) -> Profile:
        """Retrieve and normalize the user's LinkedIn profile.

        Raises:
            InternalOAuthError: If the signed GET fails.
            ProfileParseError: If LinkedIn's response is not a JSON object.
        """
        try:
            body = await self._oauth1_service.get(
                url=self.profile_url,
                consumer_key=self.options.consumer_key,
                consumer_secret=self.options.consumer_secret,
                oauth_token=token,
                oauth_token_secret=token_secret,
                logger=self._logger,
            )
        except OAuthTransportError as e:
            raise InternalOAuthError("failed to fetch user profile", e) from e

        profile = normalize(body)
        self._logger.debug(f"Loaded profile {profile.id}")
        return profile
