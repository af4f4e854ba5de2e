"""Unit tests for the exception hierarchy."""

import pytest

from linkedin_auth.core.exceptions import (
    InternalOAuthError,
    LinkedInAuthException,
    OAuthConfigurationError,
    OAuthTransportError,
    ProfileParseError,
    SessionStateError,
)


@pytest.mark.parametrize(
    "error",
    [
        OAuthConfigurationError(),
        OAuthTransportError("Failed to obtain request token", status_code=401),
        InternalOAuthError("failed to obtain access token"),
        ProfileParseError("bad body", raw="<html>"),
        SessionStateError(),
    ],
    ids=lambda e: type(e).__name__,
)
def test_all_errors_share_base(error):
    assert isinstance(error, LinkedInAuthException)


def test_internal_oauth_error_chains_cause():
    cause = OAuthTransportError("Signed GET failed with status 500", status_code=500, body="oops")
    error = InternalOAuthError("failed to fetch user profile", cause)

    assert error.oauth_error is cause
    assert error.__cause__ is cause
    assert str(error) == "failed to fetch user profile: Signed GET failed with status 500"


def test_internal_oauth_error_without_cause():
    error = InternalOAuthError("failed to obtain request token")

    assert error.__cause__ is None
    assert str(error) == "failed to obtain request token"


def test_transport_error_keeps_response_details():
    error = OAuthTransportError("Failed", status_code=401, body="oauth_problem=signature_invalid")

    assert error.status_code == 401
    assert error.body == "oauth_problem=signature_invalid"


def test_default_messages():
    assert str(SessionStateError()) == "failed to find request token in session"
    assert OAuthConfigurationError().message == "OAuth strategy is misconfigured"
