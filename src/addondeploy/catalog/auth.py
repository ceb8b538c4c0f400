"""Bearer token authenticators for catalog API calls."""

import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from addondeploy.exceptions import CatalogAPIError


logger = logging.getLogger(__name__)

# Refresh tokens this many seconds before they expire
TOKEN_REFRESH_MARGIN = 60


class Authenticator(ABC):
    """Supplies bearer tokens."""

    @abstractmethod
    def get_token(self) -> str:
        """Return a valid bearer token."""
        pass


class StaticTokenAuthenticator(Authenticator):
    """Uses a pre-issued token as-is."""

    def __init__(self, token: str):
        self.token = token

    def get_token(self) -> str:
        return self.token


class IamAuthenticator(Authenticator):
    """Exchanges an API key for an IAM access token and caches it until near expiry."""

    GRANT_TYPE = "urn:ibm:params:oauth:grant-type:apikey"

    def __init__(
        self,
        api_key: str,
        iam_url: str = "https://iam.cloud.ibm.com",
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize IAM authenticator."""
        if not api_key:
            raise ValueError("An API key is required for IAM authentication")
        self.api_key = api_key
        self.iam_url = iam_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self._token: Optional[str] = None
        self._expires_at = 0.0
        self._lock = threading.Lock()

    def get_token(self) -> str:
        """Return the cached token, requesting a new one when it is about to expire."""
        with self._lock:
            if self._token and time.time() < self._expires_at - TOKEN_REFRESH_MARGIN:
                return self._token
            self._request_token()
            return self._token

    def _request_token(self):
        logger.debug(f"Requesting IAM token from {self.iam_url}")
        try:
            with httpx.Client(transport=self.transport, timeout=self.timeout) as client:
                response = client.post(
                    f"{self.iam_url}/identity/token",
                    data={"grant_type": self.GRANT_TYPE, "apikey": self.api_key},
                    headers={"Accept": "application/json"},
                )
        except httpx.RequestError as e:
            raise CatalogAPIError(f"IAM token request failed: {e}") from e

        if response.status_code != 200:
            raise CatalogAPIError("IAM token request failed", response.status_code, response.text)

        try:
            data = response.json()
            token = data["access_token"]
            expires_at = float(data.get("expiration") or time.time() + data.get("expires_in", 3600))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise CatalogAPIError(f"Invalid IAM token response: {e!r}", response.status_code, response.text) from e
        self._token = token
        self._expires_at = expires_at
