"""Terminal boundary for the dashboard.

``Terminal`` is the grid-cell writer the renderer and event loop consume.
``CursesTerminal`` implements it on top of the standard library ``curses``
module. Writes go to curses' virtual screen and only reach the real
terminal on ``present()``, so a half-drawn frame is never shown.
"""

import curses
import logging
from abc import ABC, abstractmethod
from typing import Optional

from src.business.cli.dashboard.threshold_checker import Color

logger = logging.getLogger(__name__)

CURSES_COLORS = {
    Color.DEFAULT: -1,
    Color.YELLOW: curses.COLOR_YELLOW,
    Color.GREEN: curses.COLOR_GREEN,
    Color.RED: curses.COLOR_RED,
}


class DisplayInitFailure(RuntimeError):
    """The terminal could not be initialized."""

    pass


class Terminal(ABC):
    """Grid-cell writer consumed by the dashboard."""

    @abstractmethod
    def open(self) -> None:
        """Initialize the display.

        Raises:
            DisplayInitFailure: If the display cannot be initialized.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Shut down the display and restore the terminal."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear the pending frame."""
        pass

    @abstractmethod
    def write(
        self,
        x: int,
        y: int,
        text: str,
        fg: Color = Color.DEFAULT,
        bg: Color = Color.DEFAULT,
    ) -> None:
        """Write a styled run of characters at (x, y) into the pending frame."""
        pass

    @abstractmethod
    def present(self) -> None:
        """Show the pending frame."""
        pass

    @abstractmethod
    def poll_event(self, timeout: float) -> Optional[int]:
        """Wait up to ``timeout`` seconds for a key.

        Returns:
            Key code, or None if the timeout expired.
        """
        pass

    @property
    @abstractmethod
    def width(self) -> int:
        pass

    def __enter__(self) -> "Terminal":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class CursesTerminal(Terminal):
    """curses implementation of the Terminal boundary."""

    def __init__(self, escape_delay: int = 25) -> None:
        """Initialize curses terminal.

        Args:
            escape_delay: Milliseconds curses waits after Esc for a sequence.
        """
        self._escape_delay = escape_delay
        self._screen = None
        self._pairs: dict[tuple[Color, Color], int] = {}
        self._has_colors = False
        self._colors = dict(CURSES_COLORS)

    def open(self) -> None:
        try:
            self._screen = curses.initscr()
        except curses.error as e:
            raise DisplayInitFailure(f"curses initscr() failed: {e}") from e

        try:
            curses.noecho()
            curses.cbreak()
            self._screen.keypad(True)
            curses.set_escdelay(self._escape_delay)
            try:
                curses.curs_set(0)
            except curses.error:
                # Some terminals cannot hide the cursor
                pass
            self._init_colors()
        except curses.error as e:
            self.close()
            raise DisplayInitFailure(f"curses setup failed: {e}") from e

        logger.debug(f"Terminal opened: {self.width} columns")

    def _init_colors(self) -> None:
        if not curses.has_colors():
            return
        curses.start_color()
        try:
            curses.use_default_colors()
        except curses.error:
            # No default-color support; -1 pairs become unavailable
            self._colors[Color.DEFAULT] = curses.COLOR_WHITE
        self._has_colors = True

    def _attr(self, fg: Color, bg: Color) -> int:
        """Color pair attribute for a (fg, bg) combination, created on demand."""
        if not self._has_colors:
            return 0
        key = (fg, bg)
        if key not in self._pairs:
            pair_id = len(self._pairs) + 1
            curses.init_pair(pair_id, self._colors[fg], self._colors[bg])
            self._pairs[key] = pair_id
        return curses.color_pair(self._pairs[key])

    def close(self) -> None:
        if self._screen is None:
            return
        try:
            self._screen.keypad(False)
            curses.nocbreak()
            curses.echo()
        except curses.error:
            logger.debug("Terminal mode restore failed", exc_info=True)
        finally:
            curses.endwin()
            self._screen = None

    def clear(self) -> None:
        self._screen.erase()

    def write(
        self,
        x: int,
        y: int,
        text: str,
        fg: Color = Color.DEFAULT,
        bg: Color = Color.DEFAULT,
    ) -> None:
        height, width = self._screen.getmaxyx()
        if y < 0 or y >= height or x < 0 or x >= width:
            return
        text = text[: width - x]
        try:
            self._screen.addstr(y, x, text, self._attr(fg, bg))
        except curses.error:
            # addstr raises after writing the bottom-right cell; text is drawn
            pass

    def present(self) -> None:
        self._screen.noutrefresh()
        curses.doupdate()

    def poll_event(self, timeout: float) -> Optional[int]:
        self._screen.timeout(max(0, int(timeout * 1000)))
        key = self._screen.getch()
        if key == -1:
            return None
        return key

    @property
    def width(self) -> int:
        if self._screen is None:
            return 0
        return self._screen.getmaxyx()[1]
