"""
Snapshot Store - 共享行情快照

Holds the two fixed instrument groups (exchanges and tracked tickers) behind
one re-entrant lock. A refresh cycle holds ``exclusive()`` for its whole
duration, so the render step never sees a group that mixes two cycles.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Mapping, Sequence

from src.data.models import Instrument, InstrumentGroup, QuoteSnapshot

logger = logging.getLogger(__name__)


class UnknownTicker(KeyError):
    """A ticker is not a member of the group it was addressed in.

    Group membership is fixed at startup, so this means a broken invariant.
    """

    def __init__(self, group: InstrumentGroup, ticker: str) -> None:
        super().__init__(f"{ticker!r} is not in group {group.value}")
        self.group = group
        self.ticker = ticker


class SnapshotStore:
    """Lock-guarded owner of both instrument groups."""

    def __init__(
        self,
        exchanges: Mapping[str, str],
        tracked: Sequence[str],
    ) -> None:
        """Create all instruments once, in insertion order.

        Args:
            exchanges: Display label -> ticker for the summary line
            tracked: Tickers for the ranked table
        """
        self._lock = threading.RLock()
        self._groups: dict[InstrumentGroup, dict[str, Instrument]] = {
            InstrumentGroup.EXCHANGES: {},
            InstrumentGroup.TRACKED: {},
        }

        for label, ticker in exchanges.items():
            self._add(InstrumentGroup.EXCHANGES, Instrument(ticker=ticker, label=label))
        for ticker in tracked:
            self._add(InstrumentGroup.TRACKED, Instrument(ticker=ticker))

        logger.debug(
            f"SnapshotStore: {len(self._groups[InstrumentGroup.EXCHANGES])} exchanges, "
            f"{len(self._groups[InstrumentGroup.TRACKED])} tracked"
        )

    def _add(self, group: InstrumentGroup, instrument: Instrument) -> None:
        members = self._groups[group]
        if instrument.ticker in members:
            raise ValueError(f"duplicate ticker {instrument.ticker!r} in {group.value}")
        members[instrument.ticker] = instrument

    def _get(self, group: InstrumentGroup, ticker: str) -> Instrument:
        try:
            return self._groups[group][ticker]
        except KeyError:
            raise UnknownTicker(group, ticker) from None

    @contextmanager
    def exclusive(self) -> Iterator["SnapshotStore"]:
        """Hold the store's lock; store methods re-enter it."""
        with self._lock:
            yield self

    def tickers(self, group: InstrumentGroup) -> list[str]:
        """Tickers of a group in insertion order."""
        with self._lock:
            return list(self._groups[group])

    def update_instrument(
        self,
        group: InstrumentGroup,
        ticker: str,
        snapshot: QuoteSnapshot,
    ) -> None:
        """Replace an instrument's attributes and mark it valid.

        Raises:
            UnknownTicker: If ticker is not in group
        """
        with self._lock:
            self._get(group, ticker).apply(snapshot)

    def update_instrument_failed(self, group: InstrumentGroup, ticker: str) -> None:
        """Record a failed fetch; prior attributes and validity stay as they are.

        Raises:
            UnknownTicker: If ticker is not in group
        """
        with self._lock:
            instrument = self._get(group, ticker)
            if not instrument.valid:
                logger.debug(f"{ticker} still has no data")

    def snapshot_all(self, group: InstrumentGroup) -> list[Instrument]:
        """Consistent copy of a whole group, in insertion order."""
        with self._lock:
            return [instrument.copy() for instrument in self._groups[group].values()]
