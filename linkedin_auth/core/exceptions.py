"""Shared exceptions module."""

from typing import Optional


class LinkedInAuthException(Exception):
    """Base exception for linkedin_auth."""

    pass


class OAuthConfigurationError(LinkedInAuthException):
    """Exception raised when a strategy is constructed without required options."""

    def __init__(self, message: Optional[str] = "OAuth strategy is misconfigured"):
        """Create a new OAuthConfigurationError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class OAuthTransportError(LinkedInAuthException):
    """Exception raised when a signed request to the provider fails.

    Carries the HTTP status and body when the provider answered, or neither when
    the request never completed (connection error, timeout).
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        """Create a new OAuthTransportError instance.

        Args:
        ----
            message (str): The error message.
            status_code (int, optional): HTTP status returned by the provider.
            body (str, optional): Response body returned by the provider.

        """
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(self.message)


class InternalOAuthError(LinkedInAuthException):
    """Wraps a transport failure that happened while talking to the provider.

    The underlying error is kept on ``oauth_error`` and chained as ``__cause__``
    so callers never have to handle raw transport exceptions.
    """

    def __init__(self, message: str, oauth_error: Optional[BaseException] = None):
        """Create a new InternalOAuthError instance.

        Args:
        ----
            message (str): The error message.
            oauth_error (BaseException, optional): The wrapped transport error.

        """
        self.message = message
        self.oauth_error = oauth_error
        super().__init__(self.message)
        self.__cause__ = oauth_error

    def __str__(self) -> str:
        """Render the message followed by the wrapped error, if any."""
        if self.oauth_error is None:
            return self.message
        return f"{self.message}: {self.oauth_error}"


class ProfileParseError(LinkedInAuthException):
    """Exception raised when a profile response body is not a JSON object."""

    def __init__(self, message: str, raw: str):
        """Create a new ProfileParseError instance.

        Args:
        ----
            message (str): The error message.
            raw (str): The unparsed response body, kept for diagnostics.

        """
        self.message = message
        self.raw = raw
        super().__init__(self.message)


class SessionStateError(LinkedInAuthException):
    """Raised when a callback arrives without a request token in the session."""

    def __init__(self, message: Optional[str] = "failed to find request token in session"):
        """Create a new SessionStateError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)
