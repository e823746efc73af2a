"""Attribute kind and instrument group enumerations."""

from enum import Enum


class Attribute(Enum):
    """Quote attribute kinds carried by every snapshot."""

    NAME = "name"
    EXCHANGE = "exchange"
    LAST = "last"
    CHANGE = "change"
    CHANGE_PERCENT = "change_percent"
    OPEN = "open"
    HIGH = "high"  # Day high
    LOW = "low"  # Day low
    HIGH_52 = "high_52"
    LOW_52 = "low_52"
    EPS = "eps"
    PE = "pe"
    DIVIDEND = "dividend"
    YIELD = "yield"
    SHARES = "shares"
    VOLUME = "volume"
    AVG_VOLUME = "avg_volume"

    @property
    def is_text(self) -> bool:
        """Whether the attribute holds a string rather than a number."""
        return self in TEXT_ATTRIBUTES


TEXT_ATTRIBUTES = frozenset({Attribute.NAME, Attribute.EXCHANGE})
NUMERIC_ATTRIBUTES = tuple(a for a in Attribute if a not in TEXT_ATTRIBUTES)


class InstrumentGroup(Enum):
    """The two fixed instrument groups shown on the dashboard."""

    EXCHANGES = "exchanges"  # Index summary line
    TRACKED = "tracked"  # Ranked table rows
