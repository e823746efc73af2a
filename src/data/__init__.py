"""Data layer module for fetching market quotes."""

from src.data.models import Attribute, Instrument, InstrumentGroup, QuoteSnapshot

__all__ = [
    "Attribute",
    "Instrument",
    "InstrumentGroup",
    "QuoteSnapshot",
]
