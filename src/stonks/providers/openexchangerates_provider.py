"""OpenExchangeRates FX provider (https://docs.openexchangerates.org)."""

from decimal import Decimal
from typing import Optional

import httpx

from stonks.core.exceptions import ExternalFetchError


class OpenExchangeRatesProvider:
    """Latest rates relative to a fixed base currency (USD on the free plan)."""

    DEFAULT_BASE_URL = "https://openexchangerates.org/api"

    def __init__(
        self,
        app_id: str,
        base_currency: str = "USD",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        if not app_id:
            raise ValueError("OpenExchangeRates app id required")
        self._app_id = app_id
        self.base_currency = base_currency
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def fetch_rates(self, currencies: list[str]) -> dict[str, Decimal]:
        try:
            response = self._client.get(
                "/latest.json",
                params={
                    "app_id": self._app_id,
                    "symbols": ",".join(currencies),
                    "base": self.base_currency,
                },
            )
        except httpx.HTTPError as exc:
            raise ExternalFetchError("OpenExchangeRates", f"request failed: {exc}") from exc

        if response.status_code != 200:
            raise ExternalFetchError(
                "OpenExchangeRates",
                f"{response.status_code} {response.reason_phrase}",
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ExternalFetchError("OpenExchangeRates", "invalid JSON") from exc

        rates = payload.get("rates") if isinstance(payload, dict) else None
        if not rates:
            raise ExternalFetchError("OpenExchangeRates", "response has no rates")

        return {currency: Decimal(str(rate)) for currency, rate in rates.items()}

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()
