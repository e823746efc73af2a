"""Display ranking for tracked instruments.

The ranker owns a single sort key chosen from a fixed, finite cycle of
attribute kinds. ``toggle`` advances to the next key and wraps around.

Ordering rules:
- Numeric keys sort descending by value (invalid instruments rank with the
  ``0.0`` fallback).
- ``Attribute.NAME`` sorts ascending by ticker, which is what the table's
  Name column displays.
- Ties keep their incoming relative order.
"""

from typing import Iterable, Sequence

from src.data.models import Attribute, Instrument

DEFAULT_SORT_KEYS: tuple[Attribute, ...] = (Attribute.CHANGE_PERCENT, Attribute.NAME)


class DisplayRanker:
    """Orders tracked instruments by a toggleable sort key."""

    def __init__(self, sort_keys: Sequence[Attribute] = DEFAULT_SORT_KEYS) -> None:
        """Initialize ranker.

        Args:
            sort_keys: Cycle of keys; the first one is active initially.

        Raises:
            ValueError: If the cycle is empty, repeats a key, or contains a
                text attribute other than NAME.
        """
        keys = tuple(sort_keys)
        if not keys:
            raise ValueError("sort_keys must not be empty")
        if len(set(keys)) != len(keys):
            raise ValueError("sort_keys must not repeat a key")
        for key in keys:
            if key.is_text and key is not Attribute.NAME:
                raise ValueError(f"cannot sort by {key.value}")

        self._keys = keys
        self._index = 0

    @property
    def sort_keys(self) -> tuple[Attribute, ...]:
        return self._keys

    @property
    def current(self) -> Attribute:
        """Currently active sort key."""
        return self._keys[self._index]

    def toggle(self) -> Attribute:
        """Advance to the next sort key, wrapping at the end.

        Returns:
            The newly active key.
        """
        self._index = (self._index + 1) % len(self._keys)
        return self.current

    def rank(self, instruments: Iterable[Instrument]) -> list[Instrument]:
        """Stable-sort instruments by the current key.

        Args:
            instruments: Instruments in their prior order.

        Returns:
            New list in display order.
        """
        key = self.current
        if key is Attribute.NAME:
            return sorted(instruments, key=lambda i: i.ticker)
        # sorted() stays stable with reverse=True
        return sorted(instruments, key=lambda i: i.number(key), reverse=True)
