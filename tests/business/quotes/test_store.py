"""Tests for the lock-guarded snapshot store."""

import threading

import pytest

from src.business.quotes.store import SnapshotStore, UnknownTicker
from src.data.models import Attribute, InstrumentGroup

EXCHANGES = {"Dow": "^DJI", "S&P500": "^GSPC", "NASDAQ": "^IXIC"}
TRACKED = ["EA", "GOOGL", "TSLA", "AMZN", "SPY", "IBM"]


@pytest.fixture
def store():
    return SnapshotStore(EXCHANGES, TRACKED)


class TestSnapshotStore:
    """Tests for SnapshotStore membership and updates."""

    def test_groups_keep_insertion_order(self, store):
        assert store.tickers(InstrumentGroup.TRACKED) == TRACKED
        assert store.tickers(InstrumentGroup.EXCHANGES) == ["^DJI", "^GSPC", "^IXIC"]

    def test_exchange_labels(self, store):
        labels = [i.label for i in store.snapshot_all(InstrumentGroup.EXCHANGES)]
        assert labels == ["Dow", "S&P500", "NASDAQ"]

    def test_all_start_invalid(self, store):
        for group in InstrumentGroup:
            assert not any(i.valid for i in store.snapshot_all(group))

    def test_duplicate_ticker_rejected(self):
        with pytest.raises(ValueError, match="duplicate"):
            SnapshotStore({}, ["EA", "EA"])

    def test_update_instrument(self, store, snapshot_factory):
        store.update_instrument(InstrumentGroup.TRACKED, "EA", snapshot_factory("EA", 0.8))

        ea = store.snapshot_all(InstrumentGroup.TRACKED)[0]
        assert ea.valid is True
        assert ea.number(Attribute.CHANGE_PERCENT) == 0.8

    def test_update_unknown_ticker(self, store, snapshot_factory):
        with pytest.raises(UnknownTicker) as exc_info:
            store.update_instrument(InstrumentGroup.TRACKED, "MSFT", snapshot_factory("MSFT"))
        assert exc_info.value.ticker == "MSFT"
        assert exc_info.value.group is InstrumentGroup.TRACKED

    def test_groups_are_disjoint_namespaces(self, store, snapshot_factory):
        with pytest.raises(UnknownTicker):
            store.update_instrument(InstrumentGroup.EXCHANGES, "EA", snapshot_factory("EA"))
        with pytest.raises(UnknownTicker):
            store.update_instrument_failed(InstrumentGroup.TRACKED, "^DJI")

    def test_failed_update_keeps_prior_data(self, store, snapshot_factory):
        snap = snapshot_factory("EA", 0.8)
        store.update_instrument(InstrumentGroup.TRACKED, "EA", snap)

        store.update_instrument_failed(InstrumentGroup.TRACKED, "EA")

        ea = store.snapshot_all(InstrumentGroup.TRACKED)[0]
        assert ea.valid is True
        assert ea.snapshot is snap

    def test_failed_update_leaves_invalid(self, store):
        store.update_instrument_failed(InstrumentGroup.TRACKED, "EA")
        assert store.snapshot_all(InstrumentGroup.TRACKED)[0].valid is False

    @pytest.mark.parametrize(
        "outcomes",
        [
            [False, True, False, False],
            [True, True, False, True],
            [False, False, False, True, False],
        ],
    )
    def test_valid_is_monotonic(self, store, snapshot_factory, outcomes):
        seen_valid = False
        for ok in outcomes:
            if ok:
                store.update_instrument(InstrumentGroup.TRACKED, "EA", snapshot_factory("EA"))
            else:
                store.update_instrument_failed(InstrumentGroup.TRACKED, "EA")
            valid = store.snapshot_all(InstrumentGroup.TRACKED)[0].valid
            seen_valid = seen_valid or ok
            assert valid is seen_valid

    def test_snapshot_all_returns_copies(self, store, snapshot_factory):
        before = store.snapshot_all(InstrumentGroup.TRACKED)
        store.update_instrument(InstrumentGroup.TRACKED, "EA", snapshot_factory("EA", 2.0))

        assert before[0].valid is False
        assert store.snapshot_all(InstrumentGroup.TRACKED)[0].valid is True


class TestExclusiveSection:
    """Tests for the store's exclusive section."""

    def test_reentrant_within_section(self, store, snapshot_factory):
        with store.exclusive():
            store.update_instrument(InstrumentGroup.TRACKED, "EA", snapshot_factory("EA"))
            assert store.snapshot_all(InstrumentGroup.TRACKED)[0].valid

    def test_reader_blocked_until_section_ends(self, store, snapshot_factory):
        observed = []
        started = threading.Event()

        def reader():
            started.set()
            observed.extend(i.valid for i in store.snapshot_all(InstrumentGroup.TRACKED))

        with store.exclusive():
            thread = threading.Thread(target=reader)
            thread.start()
            started.wait(timeout=1.0)
            for ticker in TRACKED:
                store.update_instrument(InstrumentGroup.TRACKED, ticker, snapshot_factory(ticker))
            # Reader cannot have read anything yet
            assert observed == []

        thread.join(timeout=1.0)
        assert observed == [True] * len(TRACKED)
