"""Root conftest for pytest configuration and shared fixtures.

This conftest is loaded before both testpaths (tests/ and linkedin_auth/domains/),
making its fixtures available to centralized tests AND colocated domain tests.
"""

import os

import pytest

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables: must be set before any linkedin_auth module import
# Uses setdefault so real env vars (CI) are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("HTTP_TIMEOUT_SECONDS", "5")


# ---------------------------------------------------------------------------
# Shared fake fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_oauth1_service():
    """Fake OAuth1 transport that records calls and serves seeded responses."""
    from linkedin_auth.domains.oauth.fakes.oauth1_service import FakeOAuth1Service

    return FakeOAuth1Service()


@pytest.fixture
def make_request():
    """Factory for FastAPI requests with a query string and, by default, a session dict."""
    from fastapi import Request

    def _make(
        query: str = "",
        session=None,
        path: str = "/auth/linkedin/callback",
        with_session: bool = True,
    ) -> Request:
        scope = {
            "type": "http",
            "method": "GET",
            "scheme": "https",
            "server": ("www.example.net", 443),
            "path": path,
            "root_path": "",
            "query_string": query.encode(),
            "headers": [(b"host", b"www.example.net")],
        }
        if with_session:
            scope["session"] = {} if session is None else session
        return Request(scope)

    return _make
