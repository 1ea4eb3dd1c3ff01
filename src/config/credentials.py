# src/config/credentials.py

"""Resolve eBay credentials and the listing API strategy from the environment."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from src.config.settings import Settings
from src.exceptions import MissingConfigError

logger = logging.getLogger("ebay_feed.config")


class ApiStrategy(Enum):
    """Upstream API used to fetch active listings."""

    TRADING = "trading"
    BROWSE = "browse"
    FINDING = "finding"


def _first(env: Mapping[str, str], *names: str) -> str:
    """Return the first non-empty value among *names*."""
    for name in names:
        value = env.get(name, "").strip()
        if value:
            return value
    return ""


@dataclass(frozen=True)
class EbayConfig:
    """Credentials and identity for one process lifetime."""

    app_id: str = ""
    cert_id: str = ""
    dev_id: str = ""
    user_token: str = ""
    client_id: str = ""
    client_secret: str = ""
    seller: str = ""
    site_id: str = "0"
    marketplace_id: str = "EBAY_US"
    global_id: str = "EBAY-US"
    environment: str = "production"
    feedback_type: str = Settings.FEEDBACK_TYPE
    category_ids: str = ""
    strategy_override: str = ""

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None
    ) -> "EbayConfig":
        """Build a config from ``os.environ`` (or the given mapping).

        Several variable names are accepted for the same value so that
        older deployments keep working (``EBAY_AUTH_TOKEN`` for the user
        token, ``EBAY_APP_ID`` for the OAuth client id, and so on).
        """
        env = os.environ if environ is None else environ
        environment = _first(env, "EBAY_ENV").lower() or "production"
        if environment not in Settings.ENDPOINTS:
            raise MissingConfigError(
                f"EBAY_ENV must be one of "
                f"{', '.join(sorted(Settings.ENDPOINTS))}, "
                f"got '{environment}'"
            )
        return cls(
            app_id=_first(env, "EBAY_APP_ID", "EBAY_CLIENT_ID"),
            cert_id=_first(env, "EBAY_CERT_ID"),
            dev_id=_first(env, "EBAY_DEV_ID"),
            user_token=_first(env, "EBAY_USER_TOKEN", "EBAY_AUTH_TOKEN"),
            client_id=_first(env, "EBAY_CLIENT_ID", "EBAY_APP_ID"),
            client_secret=_first(
                env, "EBAY_CLIENT_SECRET", "EBAY_CERT_ID"
            ),
            seller=_first(env, "EBAY_SELLER", "EBAY_SELLER_USERNAME"),
            site_id=_first(env, "EBAY_SITE_ID") or "0",
            marketplace_id=(
                _first(env, "EBAY_MARKETPLACE_ID") or "EBAY_US"
            ),
            global_id=_first(env, "EBAY_GLOBAL_ID") or "EBAY-US",
            environment=environment,
            feedback_type=(
                _first(env, "EBAY_FEEDBACK_TYPE")
                or Settings.FEEDBACK_TYPE
            ),
            category_ids=_first(env, "EBAY_CATEGORY_IDS"),
            strategy_override=_first(env, "EBAY_API_STRATEGY").lower(),
        )

    def endpoint(self, name: str) -> str:
        """Return the URL of the named endpoint for this environment."""
        return Settings.ENDPOINTS[self.environment][name]

    def resolve_strategy(self) -> ApiStrategy:
        """Pick the listing API from the credentials that are present.

        Preference order: Trading (user token), Browse (client id and
        secret), Finding (app id only). ``EBAY_API_STRATEGY`` overrides
        the detection but must still have its credentials.
        """
        if self.strategy_override:
            try:
                strategy = ApiStrategy(self.strategy_override)
            except ValueError:
                valid = ", ".join(s.value for s in ApiStrategy)
                raise MissingConfigError(
                    f"Unknown EBAY_API_STRATEGY "
                    f"'{self.strategy_override}' (valid: {valid})"
                ) from None
            self.require(strategy)
            return strategy

        if self.user_token:
            strategy = ApiStrategy.TRADING
        elif self.client_id and self.client_secret:
            strategy = ApiStrategy.BROWSE
        elif self.app_id:
            strategy = ApiStrategy.FINDING
        else:
            raise MissingConfigError(
                "No eBay credentials configured: set EBAY_USER_TOKEN "
                "(Trading), EBAY_CLIENT_ID + EBAY_CLIENT_SECRET (Browse) "
                "or EBAY_APP_ID (Finding)"
            )
        logger.info("Resolved listing strategy: %s", strategy.value)
        return strategy

    def require(self, strategy: ApiStrategy) -> None:
        """Raise ``MissingConfigError`` if *strategy* lacks credentials."""
        if strategy is ApiStrategy.TRADING and not self.user_token:
            raise MissingConfigError(
                "Missing EBAY_USER_TOKEN (or EBAY_AUTH_TOKEN) env var"
            )
        if strategy is ApiStrategy.BROWSE and not (
            self.client_id and self.client_secret
        ):
            raise MissingConfigError(
                "Missing EBAY_CLIENT_ID / EBAY_CLIENT_SECRET env vars"
            )
        if strategy is ApiStrategy.FINDING and not self.app_id:
            raise MissingConfigError("Missing EBAY_APP_ID env var")
