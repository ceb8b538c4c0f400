"""Tests for bearer token authenticators."""

import time
from urllib.parse import parse_qs

import httpx
import pytest

from addondeploy.catalog.auth import IamAuthenticator, StaticTokenAuthenticator
from addondeploy.exceptions import CatalogAPIError


class TokenServer:
    """MockTransport handler issuing numbered tokens."""

    def __init__(self, lifetime=3600, status_code=200):
        self.lifetime = lifetime
        self.status_code = status_code
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, text="invalid api key")
        return httpx.Response(
            200,
            json={
                "access_token": f"token-{len(self.requests)}",
                "expiration": int(time.time()) + self.lifetime,
            },
        )


class TestStaticTokenAuthenticator:
    """Test StaticTokenAuthenticator."""

    def test_returns_token(self):
        """Test the given token is returned."""
        assert StaticTokenAuthenticator("abc").get_token() == "abc"


class TestIamAuthenticator:
    """Test IAM API key exchange."""

    def test_requires_api_key(self):
        """Test an empty API key is rejected."""
        with pytest.raises(ValueError):
            IamAuthenticator("")

    def test_token_request(self):
        """Test the grant request sent to IAM."""
        server = TokenServer()
        authenticator = IamAuthenticator("my-key", iam_url="https://iam.test/", transport=httpx.MockTransport(server))

        assert authenticator.get_token() == "token-1"

        request = server.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://iam.test/identity/token"
        form = parse_qs(request.content.decode())
        assert form["grant_type"] == ["urn:ibm:params:oauth:grant-type:apikey"]
        assert form["apikey"] == ["my-key"]

    def test_token_cached(self):
        """Test a valid token is reused."""
        server = TokenServer(lifetime=3600)
        authenticator = IamAuthenticator("my-key", transport=httpx.MockTransport(server))

        assert authenticator.get_token() == "token-1"
        assert authenticator.get_token() == "token-1"
        assert len(server.requests) == 1

    def test_token_refreshed_near_expiry(self):
        """Test a token inside the refresh margin is replaced."""
        server = TokenServer(lifetime=30)
        authenticator = IamAuthenticator("my-key", transport=httpx.MockTransport(server))

        assert authenticator.get_token() == "token-1"
        assert authenticator.get_token() == "token-2"

    def test_rejected_key(self):
        """Test a failed exchange raises with status and body."""
        server = TokenServer(status_code=400)
        authenticator = IamAuthenticator("bad-key", transport=httpx.MockTransport(server))

        with pytest.raises(CatalogAPIError) as exc_info:
            authenticator.get_token()

        assert exc_info.value.status_code == 400
        assert exc_info.value.body == "invalid api key"

    def test_malformed_token_response(self):
        """Test a reply that is not JSON is reported as an API error."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>maintenance</html>"))
        authenticator = IamAuthenticator("my-key", transport=transport)

        with pytest.raises(CatalogAPIError) as exc_info:
            authenticator.get_token()

        assert "Invalid IAM token response" in str(exc_info.value)
        assert exc_info.value.body == "<html>maintenance</html>"

    def test_token_response_without_access_token(self):
        """Test a JSON reply missing the token is reported as an API error."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"expires_in": 3600}))
        authenticator = IamAuthenticator("my-key", transport=transport)

        with pytest.raises(CatalogAPIError) as exc_info:
            authenticator.get_token()

        assert "access_token" in str(exc_info.value)
