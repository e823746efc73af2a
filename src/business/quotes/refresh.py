"""
Refresh Cycle - 行情刷新周期

One full poll-and-redraw pass:
1. Fetch every exchange, in insertion order
2. Build the exchange summary segments
3. Fetch every tracked ticker, in insertion order
4. Rank the tracked group
5. Redraw the whole frame

The store's exclusive section is held from step 1 through step 5. Fetch
failures are logged and tolerated; the affected instrument keeps its last
values (or its no-data fallback).

使用方式：
    cycle = RefreshCycle(store, provider, ranker, renderer, terminal)
    report = cycle.run()
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from src.business.cli.dashboard.renderer import DashboardRenderer, ExchangeSegment, Frame
from src.business.cli.dashboard.terminal import Terminal
from src.business.quotes.store import SnapshotStore
from src.data.models import InstrumentGroup
from src.data.providers.base import FetchFailure, QuoteProvider
from src.engine.ranking import DisplayRanker

logger = logging.getLogger(__name__)


@dataclass
class CycleReport:
    """Outcome of one refresh cycle."""

    started_at: datetime = field(default_factory=datetime.now)
    succeeded: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    frame: Frame | None = None

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)


class RefreshCycle:
    """Fetch → rank → render orchestration over a shared SnapshotStore."""

    def __init__(
        self,
        store: SnapshotStore,
        provider: QuoteProvider,
        ranker: DisplayRanker,
        renderer: DashboardRenderer,
        terminal: Terminal | None = None,
    ) -> None:
        """Initialize refresh cycle.

        Args:
            store: Shared snapshot store
            provider: Quote provider, called once per ticker per cycle
            ranker: Display ranker, read on every cycle
            renderer: Frame builder
            terminal: Grid writer; when None frames are built but not drawn
        """
        self.store = store
        self.provider = provider
        self.ranker = ranker
        self.renderer = renderer
        self.terminal = terminal

    def run(self) -> CycleReport:
        """Run one full refresh cycle.

        Returns:
            CycleReport with per-ticker outcomes and the rendered frame

        Raises:
            UnknownTicker: If the store's membership invariant is broken
        """
        report = CycleReport()

        with self.store.exclusive():
            self._fetch_group(InstrumentGroup.EXCHANGES, report)
            segments = self._exchange_segments()
            self._fetch_group(InstrumentGroup.TRACKED, report)
            report.frame = self._render(segments)

        elapsed = (datetime.now() - report.started_at).total_seconds()
        if report.failed:
            logger.info(
                f"Refresh done in {elapsed:.1f}s: {len(report.succeeded)}/{report.total} ok, "
                f"failed: {', '.join(report.failed)}"
            )
        else:
            logger.info(f"Refresh done in {elapsed:.1f}s: {report.total} ok")
        return report

    def redraw(self) -> Frame:
        """Redraw from current store contents without fetching."""
        with self.store.exclusive():
            return self._render(self._exchange_segments())

    def _fetch_group(self, group: InstrumentGroup, report: CycleReport) -> None:
        """Fetch every ticker of a group; one failure never stops the rest."""
        for ticker in self.store.tickers(group):
            try:
                snapshot = self.provider.fetch(ticker)
            except FetchFailure as e:
                logger.warning(f"Fetch failed for {ticker}: {e.reason}")
                self.store.update_instrument_failed(group, ticker)
                report.failed.append(ticker)
                continue
            except Exception:
                logger.exception(f"Provider {self.provider.name} raised for {ticker}")
                self.store.update_instrument_failed(group, ticker)
                report.failed.append(ticker)
                continue

            self.store.update_instrument(group, ticker, snapshot)
            report.succeeded.append(ticker)

    def _exchange_segments(self) -> list[ExchangeSegment]:
        return [
            self.renderer.exchange_segment(instrument)
            for instrument in self.store.snapshot_all(InstrumentGroup.EXCHANGES)
        ]

    def _render(self, segments: list[ExchangeSegment]) -> Frame:
        ranked = self.ranker.rank(self.store.snapshot_all(InstrumentGroup.TRACKED))
        frame = self.renderer.build_frame(segments, ranked)
        if self.terminal is not None:
            self.renderer.draw(self.terminal, frame)
        return frame
