"""Dashboard table components.

Explicit column layout for the quote table and helpers that turn an
Instrument into fixed-width cells:
- Column specs (title, width, alignment, precision, scale, suffix)
- Header and row rendering
- Exchange segment formatting
"""

from dataclasses import dataclass
from typing import Optional

from src.data.models import Attribute, Instrument

VOLUME_DIVISOR = 100000.0
EXCHANGE_SEPARATOR = "  "


@dataclass(frozen=True)
class Column:
    """Fixed-width table column.

    Attributes:
        title: Header text
        width: Total cell width, suffix included
        attribute: Source attribute; None means the instrument's ticker
        align: "<" (left) or ">" (right)
        precision: Decimal places for numeric cells
        scale: Divisor applied before formatting
        suffix: Text appended after the number, inside the cell
    """

    title: str
    width: int
    attribute: Optional[Attribute] = None
    align: str = ">"
    precision: int = 2
    scale: float = 1.0
    suffix: str = ""


QUOTE_COLUMNS: tuple[Column, ...] = (
    Column("Name", 8, None, align="<"),
    Column("Last", 8, Attribute.LAST),
    Column("Change", 8, Attribute.CHANGE),
    Column("Percent", 8, Attribute.CHANGE_PERCENT, suffix="%"),
    Column("Open", 8, Attribute.OPEN),
    Column("52w Hi", 8, Attribute.HIGH_52),
    Column("52w Lo", 8, Attribute.LOW_52),
    Column("EPS", 8, Attribute.EPS),
    Column("PE", 8, Attribute.PE),
    Column("Volume", 8, Attribute.VOLUME, scale=VOLUME_DIVISOR),
    Column("VolumeA", 8, Attribute.AVG_VOLUME, scale=VOLUME_DIVISOR),
)


def format_number(value: float, precision: int = 2, width: int = 0) -> str:
    """Format a number, dropping decimals if it would overflow ``width``.

    A number still too wide without decimals is shown as ``width`` hashes.

    Args:
        value: Numeric value
        precision: Decimal places
        width: Available width, 0 for unlimited

    Returns:
        Formatted string

    Example:
        >>> format_number(1.234)
        '1.23'
        >>> format_number(123456.789, 2, 8)
        '123457'
        >>> format_number(123456789.0, 2, 8)
        '########'
    """
    text = f"{value:.{precision}f}"
    if width and len(text) > width:
        text = f"{value:.0f}"
    if width and len(text) > width:
        text = "#" * width
    return text


def format_cell(column: Column, instrument: Instrument) -> str:
    """Render one cell at the column's exact width.

    Args:
        column: Column spec
        instrument: Source instrument (fallback values while invalid)

    Returns:
        Cell text, padded to ``column.width``
    """
    if column.attribute is None:
        text = instrument.ticker[: column.width]
        return f"{text:{column.align}{column.width}}"

    if column.attribute.is_text:
        text = str(instrument.get(column.attribute))[: column.width]
        return f"{text:{column.align}{column.width}}"

    number_width = column.width - len(column.suffix)
    value = instrument.number(column.attribute) / column.scale
    text = format_number(value, column.precision, number_width)
    return f"{text:{column.align}{number_width}}{column.suffix}"


def table_header(columns: tuple[Column, ...] = QUOTE_COLUMNS) -> str:
    """Create the table header line.

    Titles use the same width and alignment as their data cells.
    """
    return "".join(f"{c.title[: c.width]:{c.align}{c.width}}" for c in columns)


def table_row(instrument: Instrument, columns: tuple[Column, ...] = QUOTE_COLUMNS) -> str:
    """Create a table data row for one instrument."""
    return "".join(format_cell(c, instrument) for c in columns)


def exchange_text(instrument: Instrument) -> str:
    """Summary text for one exchange: ``label(last change pct%)``."""
    return (
        f"{instrument.label}("
        f"{instrument.number(Attribute.LAST):.2f} "
        f"{instrument.number(Attribute.CHANGE):.2f} "
        f"{instrument.number(Attribute.CHANGE_PERCENT):.2f}%)"
    )
