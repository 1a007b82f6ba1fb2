"""Quote source implementations."""
from .alphavantage import AlphaVantageSource
from .base import QuoteSource, local_now
from .coingecko import CoinGeckoSource

__all__ = ["AlphaVantageSource", "CoinGeckoSource", "QuoteSource", "local_now"]
