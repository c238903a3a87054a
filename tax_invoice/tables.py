"""Bordered grid drawing shared by every tabular section.

A table is drawn as a single outer frame plus its internal separators only,
so two cells never stroke the same edge twice. When a table sits inside a
frame that somebody else draws, the caller passes ``owns_border=False`` and
the outer rectangle is left out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence, Tuple

from .canvas import Canvas
from .formatting import wrap_text


@dataclass(frozen=True)
class Table:
    x: float
    top: float
    column_widths: Sequence[float]
    row_heights: Sequence[float]
    # Columns whose single cell runs through every row.
    spanning_columns: FrozenSet[int] = frozenset()

    @property
    def width(self) -> float:
        return float(sum(self.column_widths))

    @property
    def height(self) -> float:
        return float(sum(self.row_heights))

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def column_x(self, index: int) -> float:
        return self.x + sum(self.column_widths[:index])

    def row_top(self, index: int) -> float:
        return self.top + sum(self.row_heights[:index])

    def row_segments(self) -> List[Tuple[float, float]]:
        """Runs of adjacent non-spanning columns, as ``(x_start, x_end)``."""
        segments: List[Tuple[float, float]] = []
        start: Optional[int] = None
        for index in range(len(self.column_widths) + 1):
            inside = index < len(self.column_widths) and index not in self.spanning_columns
            if inside and start is None:
                start = index
            elif not inside and start is not None:
                segments.append((self.column_x(start), self.column_x(index)))
                start = None
        return segments


def draw_table(canvas: Canvas, table: Table, owns_border: bool = True) -> float:
    """Draw the frame and internal separators of ``table``; return its bottom."""
    if owns_border:
        canvas.draw_rect(table.x, table.top, table.width, table.height)

    segments = table.row_segments()
    for row in range(1, len(table.row_heights)):
        y = table.row_top(row)
        for x_start, x_end in segments:
            canvas.draw_line(x_start, y, x_end, y)

    for column in range(1, len(table.column_widths)):
        x = table.column_x(column)
        canvas.draw_line(x, table.top, x, table.bottom)

    return table.bottom


def draw_cell_text(
    canvas: Canvas,
    table: Table,
    row: int,
    column: int,
    text: str,
    size: float,
    bold: bool = False,
    align: str = "left",
    padding: float = 6,
    baseline: float = 10,
    line_height: Optional[float] = None,
    span: int = 1,
) -> int:
    """Draw ``text`` inside a cell and return the number of lines used.

    The first baseline sits ``baseline`` below the cell top and text is inset
    by ``padding`` from the cell edges. With ``line_height`` set the text is
    wrapped to the cell's inner width; otherwise it is drawn as one run.
    """
    x = table.column_x(column)
    width = sum(table.column_widths[column:column + span])
    inner_width = width - padding * 2
    top = table.row_top(row) + baseline

    if line_height is None:
        lines = [text]
    else:
        lines = wrap_text(canvas, text, inner_width, size, bold=bold)

    for index, line in enumerate(lines):
        y = top + index * (line_height or 0)
        if align == "right":
            canvas.draw_text_right(x + width - padding, y, line, size, bold=bold)
        elif align == "center":
            line_x = x + (width - canvas.text_width(line, size, bold=bold)) / 2.0
            canvas.draw_text(line_x, y, line, size, bold=bold)
        else:
            canvas.draw_text(x + padding, y, line, size, bold=bold)
    return len(lines)
