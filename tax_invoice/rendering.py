"""Invoice page composition and PDF output."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from fpdf import FPDF  # type: ignore
from fpdf.errors import FPDFException  # type: ignore

from .assets import ImageHandle, load_image
from .canvas import Canvas, ImageRun, Instruction, Line, Rect, TextRun
from .config import AssetConfig
from .fonts import FontManager
from .formatting import TextWidthProvider
from .models import InvoiceDocument
from .pdf_constants import (
    BORDER_WIDTH,
    COLOR_BLACK,
    CONTENT_W,
    GAP_HEADER_TO_PARTIES,
    GAP_ITEMS_TO_WORDS,
    GAP_PARTIES_TO_ITEMS,
    GAP_TAX_TO_BANK,
    GAP_WORDS_TO_TAX,
    HEADER_TOP_PADDING,
    MARGIN,
    PAGE_H,
    PAGE_W,
)
from .sections import (
    draw_amount_in_words,
    draw_bank_and_remarks,
    draw_company_header,
    draw_invoice_meta_table,
    draw_items_table,
    draw_party_blocks,
    draw_stamp_and_footer,
    draw_tax_breakup,
    draw_title,
)
from .totals import compute_totals

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageImages:
    logo: Optional[ImageHandle] = None
    stamp: Optional[ImageHandle] = None


def compose_page(
    document: InvoiceDocument,
    canvas: Canvas,
    images: PageImages = PageImages(),
) -> List[Instruction]:
    """Lay out every section top to bottom, threading the cursor between them."""
    invoice = document.invoice
    totals = compute_totals(invoice)

    canvas.draw_rect(MARGIN, MARGIN, CONTENT_W, canvas.height - MARGIN * 2)
    draw_title(canvas)

    header_top = MARGIN + HEADER_TOP_PADDING
    company_bottom = draw_company_header(canvas, document.company, header_top, images.logo)
    meta_bottom = draw_invoice_meta_table(canvas, invoice, header_top)
    cursor = max(company_bottom, meta_bottom)

    cursor = draw_party_blocks(canvas, invoice, cursor + GAP_HEADER_TO_PARTIES)
    cursor = draw_items_table(canvas, invoice, totals, cursor + GAP_PARTIES_TO_ITEMS)
    cursor = draw_amount_in_words(canvas, invoice, cursor + GAP_ITEMS_TO_WORDS)
    cursor = draw_tax_breakup(canvas, invoice, totals, cursor + GAP_WORDS_TO_TAX)
    cursor = draw_bank_and_remarks(canvas, invoice, document.bank, cursor + GAP_TAX_TO_BANK)

    draw_stamp_and_footer(canvas, images.stamp)
    frame_bottom = canvas.height - MARGIN
    if cursor > frame_bottom:
        logger.warning(
            "Invoice %s content ends at %.1fpt, past the page border at %.1fpt",
            invoice.number,
            cursor,
            frame_bottom,
        )
    return canvas.instructions


def render_instructions(
    data: Dict[str, Any],
    fonts: TextWidthProvider,
    images: PageImages = PageImages(),
) -> List[Instruction]:
    """Pure layout: invoice record in, drawing instructions (page space) out."""
    canvas = Canvas(fonts, PAGE_W, PAGE_H)
    return compose_page(InvoiceDocument.from_dict(data), canvas, images)


class PdfWriter:
    """Replays page-space instructions onto an fpdf page (top-left origin)."""

    def __init__(self, pdf: FPDF, fonts: FontManager) -> None:
        self.pdf = pdf
        self.fonts = fonts
        self.page_h = pdf.h

    def _top(self, y: float, height: float = 0.0) -> float:
        return self.page_h - (y + height)

    def write(self, instructions: Sequence[Instruction]) -> None:
        self.pdf.set_draw_color(*COLOR_BLACK)
        self.pdf.set_line_width(BORDER_WIDTH)
        for instruction in instructions:
            if isinstance(instruction, TextRun):
                self.fonts.draw_text(
                    instruction.x,
                    self._top(instruction.y),
                    instruction.text,
                    instruction.size,
                    COLOR_BLACK,
                    bold=instruction.bold,
                )
            elif isinstance(instruction, Line):
                self.pdf.set_line_width(instruction.thickness)
                self.pdf.line(
                    instruction.x1,
                    self._top(instruction.y1),
                    instruction.x2,
                    self._top(instruction.y2),
                )
            elif isinstance(instruction, Rect):
                self.pdf.set_line_width(instruction.thickness)
                self.pdf.rect(
                    instruction.x,
                    self._top(instruction.y, instruction.height),
                    instruction.width,
                    instruction.height,
                    style="D",
                )
            elif isinstance(instruction, ImageRun):
                self._embed_image(instruction)
            else:
                raise TypeError(f"Unsupported drawing instruction: {type(instruction).__name__}")

    def _embed_image(self, run: ImageRun) -> None:
        try:
            self.pdf.image(
                run.image.image,
                x=run.x,
                y=self._top(run.y, run.height),
                w=run.width,
                h=run.height,
            )
        except (FPDFException, OSError, ValueError) as exc:
            logger.warning("Could not embed %s: %s", run.image.name, exc)


class InvoiceRenderer:
    def __init__(self, data: Dict[str, Any], assets: Optional[AssetConfig] = None) -> None:
        self.document = InvoiceDocument.from_dict(data)
        self.assets = assets or AssetConfig()

        self.pdf = FPDF(unit="pt", format=(PAGE_W, PAGE_H))
        self.pdf.set_auto_page_break(False)
        self.pdf.set_margins(0, 0, 0)
        self.pdf.add_page()
        self._set_metadata()

        self.fonts = FontManager(self.pdf)
        self.images = PageImages(
            logo=load_image("logo", self.assets.logo_path),
            stamp=load_image("stamp", self.assets.stamp_path),
        )

    def _set_metadata(self) -> None:
        company = self.document.company
        self.pdf.set_title(f"Tax Invoice {self.document.invoice.number}".strip())
        if company.name:
            self.pdf.set_author(company.name)
        if company.brand:
            self.pdf.set_subject(company.brand)

    def render(self) -> bytes:
        canvas = Canvas(self.fonts, PAGE_W, PAGE_H)
        instructions = compose_page(self.document, canvas, self.images)
        PdfWriter(self.pdf, self.fonts).write(instructions)

        pdf_blob = self.pdf.output()
        if isinstance(pdf_blob, (bytes, bytearray)):
            return bytes(pdf_blob)
        if isinstance(pdf_blob, str):
            try:
                return pdf_blob.encode("latin-1")
            except UnicodeEncodeError as exc:
                raise RuntimeError("PDF serialization failed due to non-Latin-1 content.") from exc
        raise RuntimeError(f"Unexpected PDF output type: {type(pdf_blob).__name__}")


def render_invoice(data: Dict[str, Any], assets: Optional[AssetConfig] = None) -> bytes:
    return InvoiceRenderer(data, assets).render()
