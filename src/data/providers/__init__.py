"""Quote providers for fetching market data from remote sources."""

from src.data.providers.base import DataProviderError, FetchFailure, QuoteProvider
from src.data.providers.yahoo_provider import YahooProvider

__all__ = [
    "DataProviderError",
    "FetchFailure",
    "QuoteProvider",
    "YahooProvider",
]
