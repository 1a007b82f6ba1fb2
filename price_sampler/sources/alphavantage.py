"""Alpha Vantage GLOBAL_QUOTE source for equities and index ETFs."""
from __future__ import annotations

from pathlib import Path
from typing import Any

from ..errors import ConversionError, ParseError
from .base import Clock, QuoteSource

ALPHAVANTAGE_URL = "https://www.alphavantage.co/query"

QUOTE_KEY = "Global Quote"
PRICE_KEY = "05. price"

# Keys Alpha Vantage uses to explain an empty quote (throttling, bad key, ...)
_NOTICE_KEYS = ("Note", "Information", "Error Message")


class AlphaVantageSource(QuoteSource):
    """Fetch ``{"Global Quote": {"05. price": "<number>"}}`` from Alpha Vantage."""

    def __init__(
        self,
        name: str,
        symbol: str,
        api_key: str,
        sink_path: str | Path,
        endpoint: str = ALPHAVANTAGE_URL,
        function: str = "GLOBAL_QUOTE",
        request_timeout: float = 30.0,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(name, endpoint or ALPHAVANTAGE_URL, sink_path, request_timeout, clock)
        self.symbol = symbol
        self.api_key = api_key
        self.function = function

    def _request_params(self) -> dict[str, str]:
        return {"function": self.function, "symbol": self.symbol, "apikey": self.api_key}

    def _extract_price(self, data: Any) -> float:
        if not isinstance(data, dict):
            raise ParseError(self.name, f"Unexpected response body: {data!r}")

        quote = data.get(QUOTE_KEY)
        raw = quote.get(PRICE_KEY) if isinstance(quote, dict) else None
        if raw is None:
            notice = next((data[k] for k in _NOTICE_KEYS if k in data), "")
            detail = f" ({notice})" if notice else ""
            raise ParseError(
                self.name, f"Missing '{QUOTE_KEY}.{PRICE_KEY}' for {self.symbol}{detail}"
            )

        try:
            return float(raw)
        except (TypeError, ValueError) as e:
            raise ConversionError(
                self.name, f"Cannot convert price {raw!r} to float"
            ) from e
