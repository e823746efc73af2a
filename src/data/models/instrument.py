"""Instrument and quote snapshot data models."""

import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping

from src.data.models.enums import NUMERIC_ATTRIBUTES, TEXT_ATTRIBUTES, Attribute

AttributeValue = float | str


@dataclass(frozen=True)
class QuoteSnapshot:
    """Complete set of attribute values for one instrument at one point in time.

    A snapshot always covers every ``Attribute``. Construction fails with
    ``ValueError`` if a value is missing, if a numeric attribute is not a
    finite number, or if a text attribute is not a string.
    """

    symbol: str
    values: Mapping[Attribute, AttributeValue]
    timestamp: datetime = field(default_factory=datetime.now)
    source: str = "unknown"

    def __post_init__(self) -> None:
        missing = [a.value for a in Attribute if a not in self.values]
        if missing:
            raise ValueError(f"Snapshot for {self.symbol} missing: {', '.join(missing)}")

        normalized: dict[Attribute, AttributeValue] = {}
        for attribute in TEXT_ATTRIBUTES:
            value = self.values[attribute]
            if not isinstance(value, str):
                raise ValueError(f"{attribute.value} must be a string, got {value!r}")
            normalized[attribute] = value
        for attribute in NUMERIC_ATTRIBUTES:
            value = self.values[attribute]
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{attribute.value} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ValueError(f"{attribute.value} must be finite, got {value!r}")
            normalized[attribute] = float(value)

        # Detach from the caller's dict so the snapshot cannot change later
        object.__setattr__(self, "values", MappingProxyType(normalized))

    def get(self, attribute: Attribute) -> AttributeValue:
        """Get the value of one attribute."""
        return self.values[attribute]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "symbol": self.symbol,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source,
            **{a.value: v for a, v in self.values.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuoteSnapshot":
        """Create instance from dictionary."""
        timestamp = data.get("timestamp")
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        return cls(
            symbol=data["symbol"],
            values={a: data[a.value] for a in Attribute if a.value in data},
            timestamp=timestamp or datetime.now(),
            source=data.get("source", "unknown"),
        )


@dataclass
class Instrument:
    """A ticker plus its most recently fetched snapshot.

    ``valid`` stays False until the first successful fetch and never goes
    back to False. While invalid, ``get`` returns the no-data fallback
    (``0.0`` for numbers, ``""`` for text) instead of stale or undefined
    values.
    """

    ticker: str
    label: str = ""
    snapshot: QuoteSnapshot | None = None
    valid: bool = False

    def __post_init__(self) -> None:
        if not self.ticker:
            raise ValueError("Instrument ticker must be non-empty")
        if not self.label:
            self.label = self.ticker

    def apply(self, snapshot: QuoteSnapshot) -> None:
        """Replace all attributes with a freshly fetched snapshot."""
        self.snapshot = snapshot
        self.valid = True

    def get(self, attribute: Attribute) -> AttributeValue:
        """Get an attribute value, or the no-data fallback while invalid."""
        if not self.valid or self.snapshot is None:
            return "" if attribute.is_text else 0.0
        return self.snapshot.get(attribute)

    def number(self, attribute: Attribute) -> float:
        """Get a numeric attribute value."""
        if attribute.is_text:
            raise TypeError(f"{attribute.value} is not a numeric attribute")
        return float(self.get(attribute))

    def copy(self) -> "Instrument":
        """Copy for readers outside the store's lock; the snapshot is shared."""
        return replace(self)
