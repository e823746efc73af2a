"""Calculation Engine Layer.

Pure calculations over data-layer models, used by the business layer.

- ranking: display order of tracked instruments by a toggleable key
"""

from src.engine.ranking import DEFAULT_SORT_KEYS, DisplayRanker

__all__ = [
    "DEFAULT_SORT_KEYS",
    "DisplayRanker",
]
