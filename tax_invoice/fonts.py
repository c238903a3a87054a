"""Font metrics and text drawing on the fpdf page."""

from __future__ import annotations

from typing import Tuple

from fpdf import FPDF  # type: ignore


class FontManager:
    """Measures and draws text with the PDF core Helvetica faces.

    Core fonts ship with every PDF reader, so nothing is embedded and widths
    come from the built-in metric tables.
    """

    FAMILY = "Helvetica"

    def __init__(self, pdf: FPDF) -> None:
        self.pdf = pdf
        self.family = self.FAMILY

    @staticmethod
    def _style(bold: bool) -> str:
        return "B" if bold else ""

    def text_width(self, text: str, size: float, bold: bool = False) -> float:
        self.pdf.set_font(self.family, self._style(bold), size)
        return self.pdf.get_string_width(text)

    def draw_text(
        self,
        x: float,
        y: float,
        text: str,
        size: float,
        color: Tuple[int, int, int],
        bold: bool = False,
    ) -> None:
        self.pdf.set_text_color(*color)
        self.pdf.set_font(self.family, self._style(bold), size)
        self.pdf.text(x, y, text)
