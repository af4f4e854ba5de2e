"""OAuth1 transport service for providers that use the OAuth 1.0a protocol.

Signs and sends the requests of the 3-legged flow:
1. Obtain temporary credentials (request token)
2. Redirect user for authorization
3. Exchange for access token

plus signed GETs against protected resources with the resulting access token.

Reference: RFC 5849 - The OAuth 1.0 Protocol
"""

import base64
import hashlib
import hmac
import secrets
import time
from typing import Dict, Optional, Tuple
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

import httpx

from linkedin_auth.core.config import settings
from linkedin_auth.core.exceptions import OAuthTransportError
from linkedin_auth.core.logging import ContextualLogger
from linkedin_auth.domains.oauth.protocols import OAuth1ServiceProtocol
from linkedin_auth.domains.oauth.types import OAuth1TokenResponse, UrlAugmenter

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class OAuth1Service(OAuth1ServiceProtocol):
    """Service for signing and sending OAuth1 requests."""

    def __init__(self, timeout: Optional[float] = None) -> None:
        """Use ``timeout`` seconds per request, defaulting to HTTP_TIMEOUT_SECONDS."""
        self._timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS

    def _generate_nonce(self) -> str:
        """Generate a cryptographically secure random nonce."""
        return secrets.token_urlsafe(32)

    def _get_timestamp(self) -> str:
        """Get current Unix timestamp as string."""
        return str(int(time.time()))

    def _percent_encode(self, value: str) -> str:
        """Percent-encode a value according to RFC 3986.

        Encodes all characters except unreserved: A-Z, a-z, 0-9, -, ., _, ~
        """
        return quote(str(value), safe="~")

    def _split_url(self, url: str) -> Tuple[str, Dict[str, str]]:
        """Split a URL into its signature base URI and its query parameters.

        The base URI drops the query and fragment and lower-cases scheme and
        host (RFC 5849 section 3.4.1.2). Query parameters take part in the
        signature even though they are sent on the URL.
        """
        parts = urlsplit(url)
        base_url = urlunsplit((parts.scheme.lower(), parts.netloc.lower(), parts.path, "", ""))
        return base_url, dict(parse_qsl(parts.query, keep_blank_values=True))

    def _build_signature_base_string(self, method: str, url: str, params: dict) -> str:
        """Build the signature base string per RFC 5849.

        Format: HTTP_METHOD&URL&NORMALIZED_PARAMS
        """
        sorted_params = sorted(params.items())
        param_str = "&".join(
            f"{self._percent_encode(k)}={self._percent_encode(v)}" for k, v in sorted_params
        )

        parts = [
            method.upper(),
            self._percent_encode(url),
            self._percent_encode(param_str),
        ]
        return "&".join(parts)

    def _sign_hmac_sha1(
        self, base_string: str, consumer_secret: str, token_secret: str = ""
    ) -> str:
        """Sign the base string using HMAC-SHA1.

        Signing key: percent_encode(consumer_secret)&percent_encode(token_secret)
        """
        encoded_consumer = self._percent_encode(consumer_secret)
        encoded_token = self._percent_encode(token_secret)
        key = f"{encoded_consumer}&{encoded_token}"
        key_bytes = key.encode("utf-8")
        base_bytes = base_string.encode("utf-8")

        signature_bytes = hmac.new(key_bytes, base_bytes, hashlib.sha1).digest()
        return base64.b64encode(signature_bytes).decode("utf-8")

    def _build_authorization_header(self, params: dict) -> str:
        """Build OAuth1 Authorization header.

        Format: OAuth oauth_consumer_key="...", oauth_nonce="...", ...
        """
        sorted_items = sorted(params.items())
        param_strings = [
            f'{self._percent_encode(k)}="{self._percent_encode(v)}"' for k, v in sorted_items
        ]
        return "OAuth " + ", ".join(param_strings)

    def _sign(
        self,
        *,
        method: str,
        url: str,
        oauth_params: Dict[str, str],
        body_params: Dict[str, str],
        consumer_secret: str,
        token_secret: str,
    ) -> str:
        """Sign a request and return its Authorization header.

        The signature covers the oauth_* params, the URL's query params and the
        form body params.
        """
        base_url, query_params = self._split_url(url)
        signed_params = {**query_params, **body_params, **oauth_params}
        base_string = self._build_signature_base_string(method, base_url, signed_params)
        oauth_params = {
            **oauth_params,
            "oauth_signature": self._sign_hmac_sha1(base_string, consumer_secret, token_secret),
        }
        return self._build_authorization_header(oauth_params)

    def _oauth_params(self, consumer_key: str, **extra: str) -> Dict[str, str]:
        params = {
            "oauth_consumer_key": consumer_key,
            "oauth_signature_method": "HMAC-SHA1",
            "oauth_timestamp": self._get_timestamp(),
            "oauth_nonce": self._generate_nonce(),
            "oauth_version": "1.0",
        }
        params.update(extra)
        return params

    def _parse_token_response(self, text: str, logger: ContextualLogger) -> OAuth1TokenResponse:
        response_params = dict(parse_qsl(text))

        if "oauth_token" not in response_params or "oauth_token_secret" not in response_params:
            logger.error(
                f"Invalid token response from OAuth1 provider, got keys {sorted(response_params)}"
            )
            raise OAuthTransportError("Invalid token response from OAuth1 provider", body=text)

        return OAuth1TokenResponse(
            oauth_token=response_params["oauth_token"],
            oauth_token_secret=response_params["oauth_token_secret"],
            **{
                k: v
                for k, v in response_params.items()
                if k not in ["oauth_token", "oauth_token_secret"]
            },
        )

    async def _post_for_token(
        self,
        *,
        url: str,
        oauth_params: Dict[str, str],
        body_params: Dict[str, str],
        consumer_secret: str,
        token_secret: str,
        action: str,
        logger: ContextualLogger,
    ) -> OAuth1TokenResponse:
        auth_header = self._sign(
            method="POST",
            url=url,
            oauth_params=oauth_params,
            body_params=body_params,
            consumer_secret=consumer_secret,
            token_secret=token_secret,
        )

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    url,
                    headers={
                        "Authorization": auth_header,
                        "Content-Type": FORM_CONTENT_TYPE,
                    },
                    content=urlencode(body_params),
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"HTTP error trying to {action}: {e.response.status_code} - {e.response.text}"
            )
            raise OAuthTransportError(
                f"Failed to {action}",
                status_code=e.response.status_code,
                body=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Unexpected error trying to {action}: {str(e)}")
            raise OAuthTransportError(f"Failed to {action}: {str(e)}") from e

        return self._parse_token_response(response.text, logger)

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
        """Obtain temporary credentials (request token) from OAuth1 provider.

        Args:
            request_token_url: Provider's request token endpoint
            consumer_key: Client identifier (API key)
            consumer_secret: Client secret
            callback_url: Callback URL for OAuth flow, "oob" when None
            logger: Logger for debugging
            extra_params: Provider parameters sent in the signed form body
            url_augmenter: Optional hook that rewrites (url, body params) before signing

        Returns:
            OAuth1TokenResponse with temporary credentials

        Raises:
            OAuthTransportError: If request token retrieval fails
        """
        body_params = dict(extra_params or {})
        if url_augmenter is not None:
            request_token_url, body_params = url_augmenter(request_token_url, body_params)

        oauth_params = self._oauth_params(consumer_key, oauth_callback=callback_url or "oob")

        logger.info(f"Requesting OAuth1 temporary credentials from {request_token_url}")

        token = await self._post_for_token(
            url=request_token_url,
            oauth_params=oauth_params,
            body_params=body_params,
            consumer_secret=consumer_secret,
            token_secret="",
            action="obtain request token",
            logger=logger,
        )

        logger.info("Successfully obtained OAuth1 temporary credentials")
        return token

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
        """Exchange temporary credentials for access token credentials.

        Args:
            access_token_url: Provider's access token endpoint
            consumer_key: Client identifier (API key)
            consumer_secret: Client secret
            oauth_token: Temporary token from step 1
            oauth_token_secret: Temporary token secret from step 1
            oauth_verifier: Verification code from user authorization, if any
            logger: Logger for debugging

        Returns:
            OAuth1TokenResponse with access token credentials

        Raises:
            OAuthTransportError: If token exchange fails
        """
        extra = {"oauth_token": oauth_token}
        if oauth_verifier:
            extra["oauth_verifier"] = oauth_verifier
        oauth_params = self._oauth_params(consumer_key, **extra)

        logger.info(
            f"Exchanging OAuth1 temporary credentials for access token at {access_token_url}"
        )

        token = await self._post_for_token(
            url=access_token_url,
            oauth_params=oauth_params,
            body_params={},
            consumer_secret=consumer_secret,
            token_secret=oauth_token_secret,
            action="exchange OAuth1 token",
            logger=logger,
        )

        logger.info("Successfully obtained OAuth1 access token")
        return token

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
        """Issue a signed GET against a protected resource.

        Returns:
            The response body as text

        Raises:
            OAuthTransportError: If the request fails or the provider answers non-2xx
        """
        auth_header = self._sign(
            method="GET",
            url=url,
            oauth_params=self._oauth_params(consumer_key, oauth_token=oauth_token),
            body_params={},
            consumer_secret=consumer_secret,
            token_secret=oauth_token_secret,
        )

        logger.debug(f"Signed GET {url}")

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url, headers={"Authorization": auth_header})
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"HTTP error on signed GET: {e.response.status_code} - {e.response.text}"
            )
            raise OAuthTransportError(
                f"Signed GET failed with status {e.response.status_code}",
                status_code=e.response.status_code,
                body=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Unexpected error on signed GET: {str(e)}")
            raise OAuthTransportError(f"Signed GET failed: {str(e)}") from e

        return response.text

    def build_authorization_url(
        self,
        *,
        authorization_url: str,
        oauth_token: str,
        params: Optional[Dict[str, str]] = None,
    ) -> str:
        """Build the authorization URL for user consent (step 2 of OAuth1 flow).

        Query parameters already present on ``authorization_url`` are kept;
        ``oauth_token`` and ``params`` are merged on top.

        Args:
            authorization_url: Provider's authorization endpoint
            oauth_token: Temporary token from step 1
            params: Optional provider-specific parameters

        Returns:
            Complete authorization URL for user redirect
        """
        parts = urlsplit(authorization_url)
        query = dict(parse_qsl(parts.query, keep_blank_values=True))
        query["oauth_token"] = oauth_token
        query.update(params or {})

        return urlunsplit(
            (parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment)
        )
