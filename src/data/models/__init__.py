"""Data models for market data."""

from src.data.models.enums import (
    NUMERIC_ATTRIBUTES,
    TEXT_ATTRIBUTES,
    Attribute,
    InstrumentGroup,
)
from src.data.models.instrument import Instrument, QuoteSnapshot

__all__ = [
    "Attribute",
    "InstrumentGroup",
    "NUMERIC_ATTRIBUTES",
    "TEXT_ATTRIBUTES",
    "Instrument",
    "QuoteSnapshot",
]
