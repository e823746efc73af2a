"""Dashboard event loop.

Waits on the terminal for either a key press or the next refresh deadline:
- deadline reached  -> run a refresh cycle, re-arm the timer
- refresh key       -> run a refresh cycle now, re-arm the timer
- toggle-sort key   -> advance the ranker's key (visible on the next cycle)
- resize            -> redraw current data without fetching
- quit key          -> leave the loop
- anything else     -> ignored; the wait resumes for the remaining time
"""

import curses
import logging
import time
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from src.business.cli.dashboard.terminal import Terminal
from src.engine.ranking import DisplayRanker

if TYPE_CHECKING:
    from src.business.quotes.refresh import RefreshCycle

logger = logging.getLogger(__name__)

KEY_ESC = 27
KEY_CTRL_R = 18


class Action(str, Enum):
    """User actions recognized by the dashboard."""

    QUIT = "quit"
    TOGGLE_SORT = "toggle_sort"
    REFRESH = "refresh"
    RESIZE = "resize"
    IGNORE = "ignore"


KEY_ACTIONS: dict[int, Action] = {
    KEY_ESC: Action.QUIT,
    ord("q"): Action.QUIT,
    ord("Q"): Action.QUIT,
    KEY_CTRL_R: Action.TOGGLE_SORT,
    ord("s"): Action.TOGGLE_SORT,
    ord("S"): Action.TOGGLE_SORT,
    ord("r"): Action.REFRESH,
    ord("R"): Action.REFRESH,
    curses.KEY_F5: Action.REFRESH,
    curses.KEY_RESIZE: Action.RESIZE,
}


def action_for_key(key: int) -> Action:
    """Map a terminal key code to an Action."""
    return KEY_ACTIONS.get(key, Action.IGNORE)


class DashboardLoop:
    """Single-threaded timer/key loop driving refresh cycles."""

    def __init__(
        self,
        terminal: Terminal,
        cycle: "RefreshCycle",
        ranker: DisplayRanker,
        interval: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize event loop.

        Args:
            terminal: Opened terminal to poll for keys
            cycle: Refresh cycle to trigger
            ranker: Display ranker toggled by the sort key
            interval: Seconds between timed refreshes
            clock: Monotonic clock, injectable for tests
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive: {interval}")
        self.terminal = terminal
        self.cycle = cycle
        self.ranker = ranker
        self.interval = interval
        self._clock = clock
        self._deadline: Optional[float] = None

    def _refresh(self) -> None:
        self.cycle.run()
        self._deadline = self._clock() + self.interval

    def run(self) -> None:
        """Run until the quit key is pressed.

        Raises:
            UnknownTicker: Propagated from the refresh cycle (fatal)
        """
        logger.info(f"Dashboard started, refresh every {self.interval:g}s")
        self._refresh()

        while True:
            remaining = max(0.0, self._deadline - self._clock())
            key = self.terminal.poll_event(remaining)

            if key is None:
                self._refresh()
                continue

            action = action_for_key(key)
            if action is Action.QUIT:
                logger.info("Quit requested")
                return
            if action is Action.TOGGLE_SORT:
                new_key = self.ranker.toggle()
                logger.info(f"Sort key -> {new_key.value}")
            elif action is Action.REFRESH:
                logger.debug("Manual refresh")
                self._refresh()
            elif action is Action.RESIZE:
                self.cycle.redraw()
