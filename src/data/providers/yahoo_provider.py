"""Yahoo Finance quote provider implementation."""

import logging
import math
import time
from datetime import datetime
from typing import Any

import yfinance as yf

from src.data.models import Attribute, QuoteSnapshot
from src.data.providers.base import FetchFailure, QuoteProvider

logger = logging.getLogger(__name__)

# Mapping from our Attribute to yfinance ``info`` keys
INFO_FIELD_MAP = {
    Attribute.LAST: "regularMarketPrice",
    Attribute.CHANGE: "regularMarketChange",
    Attribute.CHANGE_PERCENT: "regularMarketChangePercent",
    Attribute.OPEN: "regularMarketOpen",
    Attribute.HIGH: "regularMarketDayHigh",
    Attribute.LOW: "regularMarketDayLow",
    Attribute.HIGH_52: "fiftyTwoWeekHigh",
    Attribute.LOW_52: "fiftyTwoWeekLow",
    Attribute.EPS: "trailingEps",
    Attribute.PE: "trailingPE",
    Attribute.DIVIDEND: "dividendRate",
    Attribute.YIELD: "dividendYield",
    Attribute.SHARES: "sharesOutstanding",
    Attribute.VOLUME: "regularMarketVolume",
    Attribute.AVG_VOLUME: "averageVolume",
}

# Missing required fields fail the fetch; any other missing field reads 0.0
REQUIRED_FIELDS = (Attribute.LAST, Attribute.CHANGE, Attribute.CHANGE_PERCENT)


def _to_float(value: Any) -> float | None:
    """Parse a Yahoo numeric field, returning None if unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).replace(",", "")) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


class YahooProvider(QuoteProvider):
    """Yahoo Finance quote provider.

    Provides quotes through the yfinance library.
    No authentication required, but has rate limits.
    """

    def __init__(self, rate_limit: float = 0.5) -> None:
        """Initialize Yahoo Finance provider.

        Args:
            rate_limit: Minimum seconds between requests (default 0.5).
        """
        self._rate_limit = rate_limit
        self._last_request_time = 0.0

    @property
    def name(self) -> str:
        """Provider name."""
        return "yahoo"

    def _check_rate_limit(self) -> None:
        """Enforce rate limiting between requests."""
        current_time = time.time()
        elapsed = current_time - self._last_request_time

        if elapsed < self._rate_limit:
            sleep_time = self._rate_limit - elapsed
            time.sleep(sleep_time)

        self._last_request_time = time.time()

    def fetch(self, ticker: str) -> QuoteSnapshot:
        """Fetch a full quote snapshot from ``Ticker.info``."""
        if not ticker or not ticker.strip():
            raise FetchFailure(ticker, "empty ticker")

        self._check_rate_limit()
        symbol = self.normalize_symbol(ticker.strip())

        try:
            info = yf.Ticker(symbol).info
        except Exception as e:
            raise FetchFailure(symbol, f"request failed: {e}") from e

        if not isinstance(info, dict) or not info:
            raise FetchFailure(symbol, "empty response")

        return self._parse_info(symbol, info)

    def _parse_info(self, symbol: str, info: dict[str, Any]) -> QuoteSnapshot:
        """Convert a yfinance ``info`` dict into a snapshot.

        Args:
            symbol: Normalized ticker symbol.
            info: Raw ``info`` dict.

        Returns:
            Complete QuoteSnapshot.

        Raises:
            FetchFailure: If a required field is missing or malformed.
        """
        values: dict[Attribute, float | str] = {}

        for attribute, key in INFO_FIELD_MAP.items():
            number = _to_float(info.get(key))
            if number is None:
                if attribute in REQUIRED_FIELDS:
                    raise FetchFailure(symbol, f"missing field {key}")
                number = 0.0
            values[attribute] = number

        values[Attribute.NAME] = str(info.get("longName") or info.get("shortName") or symbol)
        values[Attribute.EXCHANGE] = str(info.get("fullExchangeName") or info.get("exchange") or "")

        logger.debug(
            f"{symbol}: last={values[Attribute.LAST]:.2f} "
            f"chg={values[Attribute.CHANGE]:.2f} pct={values[Attribute.CHANGE_PERCENT]:.2f}"
        )

        try:
            return QuoteSnapshot(
                symbol=symbol,
                values=values,
                timestamp=datetime.now(),
                source=self.name,
            )
        except ValueError as e:
            raise FetchFailure(symbol, str(e)) from e
