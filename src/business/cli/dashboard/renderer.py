"""Dashboard renderer for the terminal.

Renders the quote dashboard as a frame of styled rows:
- Row 0: exchange summary line, one colored segment per exchange
- Row 1: column header
- Rows 2..N: one row per ranked tracked instrument

``build_frame`` is pure; ``draw`` clears the terminal, writes every run and
presents the frame once.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from src.business.cli.dashboard.components import (
    EXCHANGE_SEPARATOR,
    QUOTE_COLUMNS,
    Column,
    exchange_text,
    table_header,
    table_row,
)
from src.business.cli.dashboard.terminal import Terminal
from src.business.cli.dashboard.threshold_checker import INFO_COLOR, Color, ThresholdChecker
from src.business.config.dashboard_config import ColorConfig
from src.data.models import Instrument


@dataclass(frozen=True)
class ExchangeSegment:
    """One exchange's part of the summary line."""

    text: str
    color: Color


@dataclass(frozen=True)
class Run:
    """A styled run of characters starting at column ``x``."""

    x: int
    text: str
    fg: Color = Color.DEFAULT
    bg: Color = Color.DEFAULT


@dataclass
class FrameRow:
    """All runs drawn on one terminal line."""

    y: int
    runs: list[Run] = field(default_factory=list)

    @property
    def text(self) -> str:
        line = ""
        for run in self.runs:
            line = line.ljust(run.x) + run.text
        return line

    @property
    def color(self) -> Optional[Color]:
        """Foreground color when the row is single-colored."""
        colors = {run.fg for run in self.runs}
        return colors.pop() if len(colors) == 1 else None


@dataclass
class Frame:
    """A complete dashboard frame."""

    rows: list[FrameRow] = field(default_factory=list)

    def to_text(self) -> str:
        """Plain-text rendering, one line per row."""
        return "\n".join(row.text.rstrip() for row in self.rows)


class DashboardRenderer:
    """Dashboard renderer for terminal output."""

    def __init__(
        self,
        config: Optional[ColorConfig] = None,
        columns: tuple[Column, ...] = QUOTE_COLUMNS,
    ):
        """Initialize renderer.

        Args:
            config: Row color rule configuration
            columns: Table column layout
        """
        self.checker = ThresholdChecker(config)
        self.columns = columns

    def exchange_segment(self, instrument: Instrument) -> ExchangeSegment:
        """Summary segment for one exchange instrument."""
        return ExchangeSegment(
            text=exchange_text(instrument),
            color=self.checker.check_exchange(instrument),
        )

    def build_frame(
        self,
        exchanges: Sequence[ExchangeSegment],
        ranked: Sequence[Instrument],
    ) -> Frame:
        """Build a complete frame.

        Args:
            exchanges: Summary segments in display order
            ranked: Tracked instruments in display order

        Returns:
            Frame with 2 + len(ranked) rows
        """
        frame = Frame()

        # Each exchange keeps its own up/down color; only the header uses INFO_COLOR
        summary = FrameRow(y=0)
        x = 0
        for segment in exchanges:
            summary.runs.append(Run(x=x, text=segment.text, fg=segment.color))
            x += len(segment.text) + len(EXCHANGE_SEPARATOR)
        frame.rows.append(summary)

        frame.rows.append(FrameRow(y=1, runs=[Run(x=0, text=table_header(self.columns), fg=INFO_COLOR)]))

        for y, instrument in enumerate(ranked, start=2):
            row = Run(
                x=0,
                text=table_row(instrument, self.columns),
                fg=self.checker.check_row(instrument),
            )
            frame.rows.append(FrameRow(y=y, runs=[row]))

        return frame

    def draw(self, terminal: Terminal, frame: Frame) -> None:
        """Clear, write the whole frame, then present it once."""
        terminal.clear()
        for row in frame.rows:
            for run in row.runs:
                terminal.write(run.x, row.y, run.text, run.fg, run.bg)
        terminal.present()
