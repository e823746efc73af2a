"""Threshold checker for dashboard rows.

Determines the display Color of table rows and exchange summary segments.
"""

from enum import Enum
from typing import Optional

from src.business.config.dashboard_config import ColorConfig
from src.data.models import Attribute, Instrument


class Color(str, Enum):
    """Terminal colors used by the dashboard."""

    DEFAULT = "default"
    YELLOW = "yellow"
    GREEN = "green"
    RED = "red"


POSITIVE_COLOR = Color.GREEN
NEGATIVE_COLOR = Color.RED
NEUTRAL_COLOR = Color.YELLOW
INFO_COLOR = Color.YELLOW


class ThresholdChecker:
    """Threshold checker - determines Color for rows and exchanges.

    Table rows use a symmetric, strictly exclusive threshold on a single
    configured attribute:
    - value > threshold   -> positive (green)
    - value < -threshold  -> negative (red)
    - otherwise           -> neutral (yellow), including both boundaries

    Exchange segments ignore the threshold: green when change-percent is
    above zero, red otherwise (zero is red).
    """

    def __init__(self, config: Optional[ColorConfig] = None):
        """Initialize threshold checker.

        Args:
            config: Color configuration, uses defaults if None
        """
        self.config = config or ColorConfig()

    def check_value(self, value: float) -> Color:
        """Classify a raw attribute value.

        Args:
            value: Value of the configured color attribute

        Returns:
            Row color
        """
        threshold = self.config.threshold
        if value > threshold:
            return POSITIVE_COLOR
        if value < -threshold:
            return NEGATIVE_COLOR
        return NEUTRAL_COLOR

    def check_row(self, instrument: Instrument) -> Color:
        """Color for a tracked instrument's table row.

        Invalid instruments read the 0.0 fallback and come out neutral.
        """
        return self.check_value(instrument.number(self.config.attribute))

    def check_exchange(self, instrument: Instrument) -> Color:
        """Color for one exchange segment of the summary line."""
        if instrument.number(Attribute.CHANGE_PERCENT) > 0.0:
            return Color.GREEN
        return Color.RED
