"""Formatting and text measurement helpers."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, List, Protocol

from dateutil import parser as dateutil_parser

from .pdf_constants import CURRENCY_SYMBOL


class TextWidthProvider(Protocol):
    def text_width(self, text: str, size: float, bold: bool = False) -> float:
        ...


def _round_half_up(amount: float, places: int) -> Decimal:
    # Decimal(float) is the exact binary value, so ties round the way a reader expects.
    quantum = Decimal(1).scaleb(-places)
    return Decimal(amount).quantize(quantum, rounding=ROUND_HALF_UP)


def fmt_money(amount: float, symbol: str = CURRENCY_SYMBOL) -> str:
    return f"{symbol}{_round_half_up(amount, 2)}"


def fmt_percent(rate: float) -> str:
    """Format a fractional rate (0.09) as a whole percentage ('9%')."""
    return f"{_round_half_up(rate * 100, 0)}%"


def fmt_qty(qty: Any) -> str:
    try:
        quantity = float(qty)
        if quantity.is_integer():
            return str(int(quantity))
        return str(quantity)
    except Exception:
        return str(qty)


def safe_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except Exception:
        return default


def fmt_date(raw: str) -> str:
    """Parse a date string and return it formatted as '08 Nov 2025'."""
    raw = raw.strip()
    if not raw:
        return raw
    try:
        dt = dateutil_parser.parse(raw)
        return dt.strftime("%d %b %Y")
    except (ValueError, OverflowError):
        return raw


def wrap_text(
    fonts_obj: TextWidthProvider,
    text: str,
    max_width: float,
    font_size: float,
    bold: bool = False,
) -> List[str]:
    """Greedy word wrap of ``text`` against measured widths.

    Explicit newlines always start a new line. A word that is wider than
    ``max_width`` on its own is kept whole on a line of its own. The result is
    never empty: blank input yields ``[""]``.
    """

    def line_width(value: str) -> float:
        return fonts_obj.text_width(value, font_size, bold=bold)

    def wrap_paragraph(paragraph: str) -> List[str]:
        lines: List[str] = []
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if current and line_width(candidate) > max_width:
                lines.append(current)
                current = word
            else:
                current = candidate

        if current:
            lines.append(current)
        return lines

    result: List[str] = []
    for paragraph in (text or "").split("\n"):
        result.extend(wrap_paragraph(paragraph))
    return result if result else [""]


def center_x(
    fonts_obj: TextWidthProvider,
    text: str,
    x: float,
    width: float,
    size: float,
    bold: bool = False,
) -> float:
    return x + (width - fonts_obj.text_width(text, size, bold=bold)) / 2.0
