# src/auth/token_manager.py

"""OAuth client-credentials token with in-process expiry tracking."""

import base64
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.exceptions import MissingConfigError, ResponseParseError, TokenError

logger = logging.getLogger("ebay_feed.auth")


@dataclass
class TokenCache:
    """A bearer token and the epoch second it expires at."""

    token: str = ""
    expires_at: float = 0.0


class TokenManager:
    """Issue and cache an application token for the Browse API.

    One instance is owned by the service; the cached token lives as long
    as the instance does.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        token_url: str,
        session: Any = None,
        margin: float = Settings.TOKEN_EXPIRY_MARGIN,
        scope: str = Settings.OAUTH_SCOPE,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url
        self.session = session or curl_requests.Session()
        self.margin = margin
        self.scope = scope
        self._clock = clock
        self._cache = TokenCache()

    @property
    def cache(self) -> TokenCache:
        return self._cache

    def _basic_auth(self) -> str:
        raw = f"{self.client_id}:{self.client_secret}".encode()
        return "Basic " + base64.b64encode(raw).decode("ascii")

    def is_valid(self) -> bool:
        """True if the cached token outlives the safety margin."""
        return bool(self._cache.token) and (
            self._clock() < self._cache.expires_at - self.margin
        )

    def invalidate(self) -> None:
        """Forget the cached token."""
        self._cache = TokenCache()

    def get_access_token(self) -> str:
        """Return a bearer token, exchanging credentials when needed.

        Raises ``TokenError`` on a non-2xx answer from the token
        endpoint; there is no retry.
        """
        if self.is_valid():
            return self._cache.token

        if not (self.client_id and self.client_secret):
            raise MissingConfigError(
                "Missing EBAY_CLIENT_ID / EBAY_CLIENT_SECRET env vars"
            )

        now = self._clock()
        resp = self.session.post(
            self.token_url,
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "Authorization": self._basic_auth(),
            },
            data={
                "grant_type": "client_credentials",
                "scope": self.scope,
            },
            timeout=Settings.REQUEST_TIMEOUT,
        )
        if not 200 <= resp.status_code < 300:
            logger.error(
                "Token request failed with HTTP %d", resp.status_code
            )
            raise TokenError(resp.status_code, resp.text)

        try:
            payload = resp.json()
            token = str(payload["access_token"])
        except (ValueError, KeyError, TypeError) as exc:
            raise ResponseParseError(
                f"Token response missing access_token: {exc}"
            ) from exc

        expires_in = int(payload.get("expires_in", 7200))
        self._cache = TokenCache(token=token, expires_at=now + expires_in)
        logger.info("Obtained application token (expires in %ds)", expires_in)
        return token
