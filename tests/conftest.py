"""
Pytest fixtures shared by the dashboard tests.

Provides snapshot builders, a scripted quote provider and a recording
terminal so no test needs the network or a real TTY.
"""

from typing import Callable, Iterable, Optional

import pytest

from src.business.cli.dashboard.terminal import Terminal
from src.business.cli.dashboard.threshold_checker import Color
from src.data.models import Attribute, QuoteSnapshot
from src.data.providers.base import FetchFailure, QuoteProvider


# ============================================================================
# Sample Data Generation
# ============================================================================


def build_snapshot(symbol: str, change_percent: float = 0.0, **overrides: float | str) -> QuoteSnapshot:
    """Build a complete snapshot with deterministic values.

    Args:
        symbol: Ticker symbol
        change_percent: CHANGE_PERCENT value
        **overrides: Attribute values keyed by ``Attribute.value``

    Returns:
        QuoteSnapshot covering every attribute
    """
    values: dict[Attribute, float | str] = {
        Attribute.NAME: f"{symbol} Inc.",
        Attribute.EXCHANGE: "NMS",
        Attribute.LAST: 100.0,
        Attribute.CHANGE: change_percent,
        Attribute.CHANGE_PERCENT: change_percent,
        Attribute.OPEN: 99.5,
        Attribute.HIGH: 101.0,
        Attribute.LOW: 98.0,
        Attribute.HIGH_52: 150.0,
        Attribute.LOW_52: 80.0,
        Attribute.EPS: 5.0,
        Attribute.PE: 20.0,
        Attribute.DIVIDEND: 1.0,
        Attribute.YIELD: 0.01,
        Attribute.SHARES: 1_000_000.0,
        Attribute.VOLUME: 2_500_000.0,
        Attribute.AVG_VOLUME: 3_000_000.0,
    }
    for key, value in overrides.items():
        values[Attribute(key)] = value
    return QuoteSnapshot(symbol=symbol, values=values, source="test")


class ScriptedProvider(QuoteProvider):
    """Quote provider answering from a dict; missing tickers fail."""

    def __init__(self, quotes: Optional[dict[str, float]] = None, failing: Iterable[str] = ()) -> None:
        self.quotes = dict(quotes or {})
        self.failing = set(failing)
        self.calls: list[str] = []

    @property
    def name(self) -> str:
        return "scripted"

    def fetch(self, ticker: str) -> QuoteSnapshot:
        self.calls.append(ticker)
        if ticker in self.failing or ticker not in self.quotes:
            raise FetchFailure(ticker, "scripted failure")
        return build_snapshot(ticker, self.quotes[ticker])


class RecordingTerminal(Terminal):
    """In-memory terminal that records writes and replays scripted keys."""

    def __init__(self, keys: Iterable[Optional[int]] = (), width: int = 120) -> None:
        self.keys = list(keys)
        self._width = width
        self.pending: dict[int, list[tuple[int, str, Color]]] = {}
        self.presented: list[dict[int, list[tuple[int, str, Color]]]] = []
        self.timeouts: list[float] = []
        self.opened = False
        self.closed = False
        self.clears = 0

    def open(self) -> None:
        self.opened = True

    def close(self) -> None:
        self.closed = True

    def clear(self) -> None:
        self.clears += 1
        self.pending = {}

    def write(self, x, y, text, fg=Color.DEFAULT, bg=Color.DEFAULT) -> None:
        self.pending.setdefault(y, []).append((x, text, fg))

    def present(self) -> None:
        self.presented.append(self.pending)
        self.pending = {}

    def poll_event(self, timeout: float) -> Optional[int]:
        self.timeouts.append(timeout)
        if not self.keys:
            return ord("q")
        return self.keys.pop(0)

    @property
    def width(self) -> int:
        return self._width

    @property
    def last_frame(self) -> dict[int, list[tuple[int, str, Color]]]:
        return self.presented[-1]


@pytest.fixture
def snapshot_factory() -> Callable[..., QuoteSnapshot]:
    """Factory building complete snapshots."""
    return build_snapshot


@pytest.fixture
def provider_factory() -> Callable[..., ScriptedProvider]:
    """Factory building scripted providers."""
    return ScriptedProvider


@pytest.fixture
def terminal_factory() -> Callable[..., RecordingTerminal]:
    """Factory building recording terminals."""
    return RecordingTerminal
