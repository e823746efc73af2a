"""Abstract base class for quote providers."""

from abc import ABC, abstractmethod

from src.data.models import QuoteSnapshot


class QuoteProvider(ABC):
    """Abstract base class for quote providers.

    A provider turns a ticker into a complete ``QuoteSnapshot``. It never
    returns a partial snapshot: network errors, malformed responses and
    missing fields all raise ``FetchFailure``. Providers do not retry.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name (e.g., 'yahoo')."""
        pass

    @abstractmethod
    def fetch(self, ticker: str) -> QuoteSnapshot:
        """Fetch a full quote snapshot.

        Args:
            ticker: Non-empty ticker symbol (e.g., 'AAPL', '^DJI').

        Returns:
            QuoteSnapshot covering every attribute.

        Raises:
            FetchFailure: If the quote could not be fetched completely.
        """
        pass

    def normalize_symbol(self, symbol: str) -> str:
        """Normalize symbol format for this provider.

        Override in subclass if provider uses different format.

        Args:
            symbol: Ticker symbol in any format.

        Returns:
            Symbol in provider-specific format.
        """
        return symbol.upper()


class DataProviderError(Exception):
    """Base exception for data provider errors."""

    pass


class FetchFailure(DataProviderError):
    """A single ticker could not be fetched."""

    def __init__(self, ticker: str, reason: str) -> None:
        super().__init__(f"{ticker}: {reason}")
        self.ticker = ticker
        self.reason = reason
