"""CoinGecko simple-price source for cryptocurrencies."""
from __future__ import annotations

from pathlib import Path
from typing import Any

from ..errors import ParseError
from .base import Clock, QuoteSource

COINGECKO_URL = "https://api.coingecko.com/api/v3/simple/price"


class CoinGeckoSource(QuoteSource):
    """Fetch ``{"<coin_id>": {"<vs_currency>": <number>}}`` from CoinGecko."""

    def __init__(
        self,
        name: str,
        coin_id: str,
        sink_path: str | Path,
        vs_currency: str = "usd",
        endpoint: str = COINGECKO_URL,
        request_timeout: float = 30.0,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(name, endpoint or COINGECKO_URL, sink_path, request_timeout, clock)
        self.coin_id = coin_id
        self.vs_currency = vs_currency

    def _request_params(self) -> dict[str, str]:
        return {"ids": self.coin_id, "vs_currencies": self.vs_currency}

    def _extract_price(self, data: Any) -> float:
        coin = data.get(self.coin_id) if isinstance(data, dict) else None
        if not isinstance(coin, dict):
            raise ParseError(self.name, f"Response has no entry for '{self.coin_id}'")

        price = coin.get(self.vs_currency)
        # bool is an int subclass; reject it explicitly
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise ParseError(
                self.name,
                f"'{self.coin_id}.{self.vs_currency}' is not a number: {price!r}",
            )
        return float(price)
