"""Display formatting utilities for mist.

This module contains pure formatting logic for rendering catalog records as an
aligned text table. All functions are pure (no I/O) and can be tested without
network or filesystem access.

Example output:

    Signed │ Name         │ Version │ Build  │ Date
    ───────┼──────────────┼─────────┼────────┼───────────
    True   │ macOS Sonoma │ 14.0    │ 23A344 │ 2023-09-26
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from mist.core.catalog.types import FirmwareRecord, ProductRecord

COLUMN_SEPARATOR = " │ "
HEADER_SEPARATOR = "─┼─"
HORIZONTAL_BAR = "─"

DEFAULT_DATE_FORMAT = "%Y-%m-%d"


def get_visible_length(text: str) -> int:
    """Calculate the visible length of text, excluding ANSI and OSC escape sequences.

    Args:
        text: Text that may contain escape sequences

    Returns:
        Number of visible characters
    """
    # Remove ANSI color codes (\033[...m)
    text = re.sub(r"\033\[[0-9;]*m", "", text)
    # Remove OSC 8 hyperlink sequences (\033]8;;URL\033\\)
    text = re.sub(r"\033\]8;;[^\033]*\033\\", "", text)
    return len(text)


def pad(text: str, width: int) -> str:
    """Append spaces so text occupies width visible columns (never truncates)."""
    return text + " " * max(width - get_visible_length(text), 0)


@dataclass(frozen=True)
class Column:
    """A table column: its header label and one display value per row."""

    header: str
    values: tuple[str, ...]

    @property
    def max_value_length(self) -> int:
        """Longest visible value in the column (header excluded)."""
        return max((get_visible_length(value) for value in self.values), default=0)

    @property
    def width(self) -> int:
        """Printed width of every cell: wide enough for the header and each value."""
        return max(self.max_value_length, get_visible_length(self.header))


def render_table(columns: Sequence[Column]) -> str:
    """Render columns as a header row, a separator row and one row per record.

    Every cell, header included, is padded to its column's width, so a long
    value widens its column instead of being truncated. Each line ends with a
    newline.

    Args:
        columns: Columns in display order; all must hold the same number of values

    Returns:
        The rendered table, or "" if there are no rows
    """
    if not columns or not columns[0].values:
        return ""

    widths = [column.width for column in columns]
    lines = [
        COLUMN_SEPARATOR.join(pad(column.header, width) for column, width in zip(columns, widths)),
        HEADER_SEPARATOR.join(HORIZONTAL_BAR * width for width in widths),
    ]
    for row in zip(*(column.values for column in columns)):
        lines.append(COLUMN_SEPARATOR.join(pad(value, width) for value, width in zip(row, widths)))

    return "".join(line + "\n" for line in lines)


def render_firmware_table(
    firmwares: Sequence[FirmwareRecord], date_format: str = DEFAULT_DATE_FORMAT
) -> str:
    """Render firmwares as a Signed / Name / Version / Build / Date table.

    Args:
        firmwares: Records in display order
        date_format: strftime format for the Date column

    Returns:
        The rendered table, or "" if firmwares is empty
    """
    return render_table(
        [
            Column("Signed", tuple(firmware.signed_description for firmware in firmwares)),
            Column("Name", tuple(firmware.name for firmware in firmwares)),
            Column("Version", tuple(firmware.version for firmware in firmwares)),
            Column("Build", tuple(firmware.build for firmware in firmwares)),
            Column("Date", tuple(firmware.date.strftime(date_format) for firmware in firmwares)),
        ]
    )


def render_product_table(
    products: Sequence[ProductRecord], date_format: str = DEFAULT_DATE_FORMAT
) -> str:
    """Render installer products as an Identifier / Name / Version / Build / Date table.

    Args:
        products: Records in display order
        date_format: strftime format for the Date column

    Returns:
        The rendered table, or "" if products is empty
    """
    return render_table(
        [
            Column("Identifier", tuple(product.identifier for product in products)),
            Column("Name", tuple(product.name for product in products)),
            Column("Version", tuple(product.version for product in products)),
            Column("Build", tuple(product.build for product in products)),
            Column("Date", tuple(product.date.strftime(date_format) for product in products)),
        ]
    )
