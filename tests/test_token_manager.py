# tests/test_token_manager.py

"""Tests for the OAuth client-credentials token cache."""

import base64
import unittest
from unittest.mock import MagicMock

from ebay_fixtures import make_response

from src.auth.token_manager import TokenManager
from src.exceptions import MissingConfigError, ResponseParseError, TokenError

TOKEN_URL = "https://api.ebay.com/identity/v1/oauth2/token"


class _Clock:
    """Settable stand-in for ``time.time``."""

    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestTokenManager(unittest.TestCase):
    """TokenManager unit tests."""

    def setUp(self) -> None:
        self.session = MagicMock()
        self.session.post.return_value = make_response(
            json_data={"access_token": "tok-1", "expires_in": 7200}
        )
        self.clock = _Clock()
        self.manager = TokenManager(
            "client-id", "client-secret", TOKEN_URL,
            session=self.session, clock=self.clock,
        )

    def test_first_call_exchanges_credentials(self) -> None:
        self.assertEqual(self.manager.get_access_token(), "tok-1")

        self.session.post.assert_called_once()
        args, kwargs = self.session.post.call_args
        self.assertEqual(args[0], TOKEN_URL)
        expected = base64.b64encode(b"client-id:client-secret").decode()
        self.assertEqual(
            kwargs["headers"]["Authorization"], f"Basic {expected}"
        )
        self.assertEqual(
            kwargs["headers"]["Content-Type"],
            "application/x-www-form-urlencoded",
        )
        self.assertEqual(kwargs["data"]["grant_type"], "client_credentials")
        self.assertEqual(
            kwargs["data"]["scope"], "https://api.ebay.com/oauth/api_scope"
        )

    def test_token_reused_while_valid(self) -> None:
        self.manager.get_access_token()
        self.clock.now += 3600
        self.assertEqual(self.manager.get_access_token(), "tok-1")
        self.session.post.assert_called_once()
        self.assertEqual(
            self.manager.cache.expires_at, 1_000_000.0 + 7200
        )

    def test_refreshed_inside_margin(self) -> None:
        """A token 30s from expiry is treated as expired (60s margin)."""
        self.manager.get_access_token()
        self.session.post.return_value = make_response(
            json_data={"access_token": "tok-2", "expires_in": 7200}
        )
        self.clock.now += 7200 - 30

        self.assertEqual(self.manager.get_access_token(), "tok-2")
        self.assertEqual(self.session.post.call_count, 2)

    def test_invalidate_forces_new_exchange(self) -> None:
        self.manager.get_access_token()
        self.manager.invalidate()
        self.assertFalse(self.manager.is_valid())
        self.manager.get_access_token()
        self.assertEqual(self.session.post.call_count, 2)

    def test_default_expiry(self) -> None:
        self.session.post.return_value = make_response(
            json_data={"access_token": "tok-3"}
        )
        self.manager.get_access_token()
        self.assertEqual(self.manager.cache.expires_at, 1_000_000.0 + 7200)

    def test_non_2xx_raises_token_error(self) -> None:
        self.session.post.return_value = make_response(
            status_code=401, text='{"error":"invalid_client"}'
        )
        with self.assertRaises(TokenError) as ctx:
            self.manager.get_access_token()
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertIn("invalid_client", str(ctx.exception))
        self.assertEqual(self.manager.cache.token, "")

    def test_missing_access_token_raises(self) -> None:
        self.session.post.return_value = make_response(
            json_data={"token_type": "Application Access Token"}
        )
        with self.assertRaises(ResponseParseError):
            self.manager.get_access_token()

    def test_missing_credentials(self) -> None:
        manager = TokenManager("", "", TOKEN_URL, session=self.session)
        with self.assertRaises(MissingConfigError):
            manager.get_access_token()
        self.session.post.assert_not_called()


if __name__ == "__main__":
    unittest.main()
