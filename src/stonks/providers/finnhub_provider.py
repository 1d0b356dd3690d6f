"""Finnhub realtime quote provider (https://finnhub.io/docs/api/quote)."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import httpx

from stonks.core.exceptions import ExternalFetchError
from stonks.domain.views import ProviderQuote

logger = logging.getLogger(__name__)


def _decimal(payload: dict[str, Any], key: str) -> Decimal:
    value = payload.get(key)
    if value is None:
        raise ExternalFetchError("Finnhub", f"quote payload missing '{key}'")
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ExternalFetchError("Finnhub", f"bad number for '{key}': {value!r}") from exc


class FinnhubQuoteProvider:
    """
    Quote provider backed by Finnhub's REST API.

    Authenticated by a caller-supplied token. Finnhub answers
    ``{c, h, l, o, pc, t}`` (current, high, low, open, previous close,
    unix timestamp).
    """

    DEFAULT_BASE_URL = "https://finnhub.io/api/v1"

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        if not api_key:
            raise ValueError("Finnhub API key required")
        self._api_key = api_key
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def fetch_quote(self, symbol: str) -> ProviderQuote:
        try:
            response = self._client.get(
                "/quote",
                params={"symbol": symbol, "token": self._api_key},
            )
        except httpx.HTTPError as exc:
            raise ExternalFetchError("Finnhub", f"request for {symbol} failed: {exc}") from exc

        if response.status_code != 200:
            raise ExternalFetchError(
                "Finnhub",
                f"{response.status_code} {response.reason_phrase} for {symbol}",
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ExternalFetchError("Finnhub", f"invalid JSON for {symbol}") from exc
        if not isinstance(payload, dict):
            raise ExternalFetchError("Finnhub", f"unexpected payload for {symbol}")

        return ProviderQuote(
            current=_decimal(payload, "c"),
            high=_decimal(payload, "h"),
            low=_decimal(payload, "l"),
            open=_decimal(payload, "o"),
            previous_close=_decimal(payload, "pc"),
            timestamp=int(payload.get("t") or 0),
        )

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()
