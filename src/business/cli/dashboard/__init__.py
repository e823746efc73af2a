"""Dashboard module for the terminal quote board.

This module provides a live-updating, color-coded quote table drawn
through a grid-cell terminal writer.
"""

from src.business.cli.dashboard.renderer import DashboardRenderer, ExchangeSegment, Frame
from src.business.cli.dashboard.terminal import CursesTerminal, DisplayInitFailure, Terminal
from src.business.cli.dashboard.threshold_checker import Color, ThresholdChecker

__all__ = [
    "Color",
    "CursesTerminal",
    "DashboardRenderer",
    "DisplayInitFailure",
    "ExchangeSegment",
    "Frame",
    "Terminal",
    "ThresholdChecker",
]
