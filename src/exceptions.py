# src/exceptions.py

"""Exception hierarchy for eBay fetch failures."""

from src.config.settings import Settings


class EbayFeedError(Exception):
    """Base class for all ebay_feed errors."""


class MissingConfigError(EbayFeedError):
    """A required credential or setting is absent."""


class UpstreamHTTPError(EbayFeedError):
    """eBay answered with a non-2xx status code."""

    def __init__(
        self, status_code: int, body: str = "", api: str = "eBay"
    ) -> None:
        self.status_code = status_code
        self.body = (body or "")[: Settings.ERROR_BODY_LIMIT]
        message = f"{api} API HTTP {status_code}"
        if self.body:
            message = f"{message}: {self.body}"
        super().__init__(message)


class TokenError(UpstreamHTTPError):
    """The OAuth client-credentials exchange failed."""

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(status_code, body, api="OAuth token")


class UpstreamAPIError(EbayFeedError):
    """eBay returned 200 but reported a failure in the payload."""


class ResponseParseError(EbayFeedError):
    """The upstream payload could not be decoded at all."""
