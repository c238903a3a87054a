"""Section composers for the tax invoice page.

Each chained composer takes the data it renders and the ``top`` cursor (points
below the page's top edge), draws strictly below it and returns the cursor
position where the next section may start.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .assets import ImageHandle
from .canvas import Canvas
from .formatting import center_x, fmt_date, fmt_money, fmt_percent, fmt_qty, wrap_text
from .models import Bank, Company, Invoice, LineItem, Party
from .pdf_constants import (
    BANK_COLUMN_GAP,
    BANK_LINE_H,
    BANK_SECTION_PAD,
    BLOCK_LABEL_ADVANCE,
    CGST_LEDGER_LABEL,
    COMPANY_LINE_H,
    COMPANY_NAME_ADVANCE,
    COMPANY_PARAGRAPH_GAP,
    CONTENT_W,
    EOE_TEXT,
    FONT_SIZE_COMPANY,
    FONT_SIZE_LABEL,
    FONT_SIZE_NORMAL,
    FONT_SIZE_SMALL,
    FONT_SIZE_TITLE,
    FOOTER_DROP,
    FOOTER_TEXT,
    HEADER_INNER_PAD,
    HEADER_TEXT_MAX_W,
    HEADER_TEXT_TOP,
    ITEM_BLOCK_PAD,
    ITEM_CELL_PAD,
    ITEM_COLUMN_WIDTHS,
    ITEM_EOE_BASELINE,
    ITEM_HEADER_BASELINE,
    ITEM_HEADER_H,
    ITEM_HEADERS,
    ITEM_LINE_H,
    ITEM_PRIMARY_BASELINE,
    ITEM_SUBLINES_GAP,
    ITEM_SUBLINES_PAD,
    ITEM_TOTAL_BASELINE,
    ITEM_TOTAL_PAD,
    ITEM_TOTAL_ROW_H,
    LEFT_W,
    LEFT_X,
    LOGO_BOTTOM_PAD,
    LOGO_GUTTER,
    LOGO_WIDTH,
    MARGIN,
    META_CELL_BASELINE,
    META_CELL_PAD,
    META_LABEL_SPLIT,
    META_ROW_H,
    META_TABLE_WIDTH,
    META_WRAP_LINE_H,
    PARTY_ADDRESS_BASELINE,
    PARTY_LABEL_BASELINE,
    PARTY_NAME_BASELINE,
    PARTY_PAD,
    PARTY_ROW_H,
    PARTY_STATE_BASELINE,
    REMARKS_GAP,
    REMARKS_LINE_H,
    RIGHT_W,
    RIGHT_X,
    ROUND_OFF_LABEL,
    SGST_LEDGER_LABEL,
    SIGNATORY_BASELINE,
    SIGNATORY_TEXT,
    STAMP_BOX_BOTTOM_PAD,
    STAMP_BOX_H,
    STAMP_BOX_RIGHT_PAD,
    STAMP_BOX_W,
    STAMP_TOP_PAD,
    STAMP_WIDTH,
    SUBTITLE_TEXT,
    TAX_CELL_BASELINE,
    TAX_CELL_PAD,
    TAX_COLUMN_WIDTHS,
    TAX_HEADER_LINE_H,
    TAX_HEADERS,
    TAX_ROW_H,
    TAX_WORDS_GAP,
    TAX_WORDS_LABEL,
    TAX_WORDS_MIN_H,
    TAX_WORDS_X_OFFSET,
    TITLE_OFFSET,
    TITLE_TEXT,
    WORDS_LABEL,
    WORDS_LINE_H,
    WORDS_MIN_H,
    WORDS_RIGHT_PAD,
    WORDS_X_OFFSET,
)
from .tables import Table, draw_cell_text, draw_table
from .totals import InvoiceTotals


def _draw_lines(
    canvas: Canvas,
    x: float,
    top: float,
    lines: Sequence[str],
    size: float,
    line_height: float,
    bold: bool = False,
) -> float:
    for index, line in enumerate(lines):
        canvas.draw_text(x, top + index * line_height, line, size, bold=bold)
    return top + len(lines) * line_height


def draw_title(canvas: Canvas) -> None:
    """Page title and recipient marker, anchored just above the top border."""
    baseline = MARGIN - TITLE_OFFSET
    title_x = center_x(canvas, TITLE_TEXT, 0, canvas.width, FONT_SIZE_TITLE, bold=True)
    canvas.draw_text(title_x, baseline, TITLE_TEXT, FONT_SIZE_TITLE, bold=True)
    canvas.draw_text_right(canvas.width - MARGIN, baseline, SUBTITLE_TEXT, FONT_SIZE_NORMAL)


def draw_company_header(
    canvas: Canvas,
    company: Company,
    top: float,
    logo: Optional[ImageHandle] = None,
) -> float:
    text_x = LEFT_X + HEADER_INNER_PAD
    logo_bottom = top

    if logo is not None:
        logo_w, logo_h = logo.scale_to_width(LOGO_WIDTH)
        logo_top = top + HEADER_TEXT_TOP
        canvas.draw_image(logo, text_x, logo_top, logo_w, logo_h)
        logo_bottom = logo_top + logo_h + LOGO_BOTTOM_PAD
        text_x += LOGO_WIDTH + LOGO_GUTTER

    text_width = min(LEFT_W - (text_x - LEFT_X) - HEADER_INNER_PAD, HEADER_TEXT_MAX_W)
    y = top + HEADER_TEXT_TOP

    for line in wrap_text(canvas, company.name, text_width, FONT_SIZE_COMPANY, bold=True):
        canvas.draw_text(text_x, y, line, FONT_SIZE_COMPANY, bold=True)
        y += COMPANY_NAME_ADVANCE

    details = [
        company.address,
        f"State: {company.state}, Code : {company.state_code}",
        f"GSTIN/UIN : {company.gstin}",
        f"Contact : {company.contact}",
    ]
    for detail in details:
        lines = wrap_text(canvas, detail, text_width, FONT_SIZE_NORMAL)
        y = _draw_lines(canvas, text_x, y, lines, FONT_SIZE_NORMAL, COMPANY_LINE_H)
        y += COMPANY_PARAGRAPH_GAP

    return max(y, logo_bottom)


def draw_invoice_meta_table(canvas: Canvas, invoice: Invoice, top: float) -> float:
    rows = [
        ("Invoice No.", invoice.number),
        ("Dated", fmt_date(invoice.issue_date)),
        ("Mode/Terms of Payment", invoice.payment_mode),
        ("Supplier's Ref.", invoice.reference),
        ("Other Reference", invoice.other_reference or "-"),
        ("Terms of Delivery", invoice.terms),
    ]
    label_width = RIGHT_W * META_LABEL_SPLIT
    table = Table(RIGHT_X, top, (label_width, RIGHT_W - label_width), (META_ROW_H,) * len(rows))
    bottom = draw_table(canvas, table)

    for index, (label, value) in enumerate(rows):
        for column, text, bold in ((0, label, True), (1, value, False)):
            draw_cell_text(
                canvas,
                table,
                index,
                column,
                text,
                FONT_SIZE_NORMAL,
                bold=bold,
                padding=META_CELL_PAD,
                baseline=META_CELL_BASELINE,
                line_height=META_WRAP_LINE_H,
            )
    return bottom


def draw_party_box(
    canvas: Canvas,
    label: str,
    party: Party,
    x: float,
    top: float,
    width: float,
    owns_border: bool = True,
) -> float:
    box = Table(x, top, (width,), (PARTY_ROW_H,))
    draw_table(canvas, box, owns_border=owns_border)

    name = f"{party.name} ({party.contact})" if party.contact else party.name
    entries = [
        (label, FONT_SIZE_LABEL, True, PARTY_LABEL_BASELINE),
        (name, FONT_SIZE_NORMAL, False, PARTY_NAME_BASELINE),
        (f"State Name : {party.state}, Code : {party.state_code}", FONT_SIZE_NORMAL, False, PARTY_STATE_BASELINE),
        (party.address_line, FONT_SIZE_NORMAL, False, PARTY_ADDRESS_BASELINE),
    ]
    for text, size, bold, baseline in entries:
        draw_cell_text(canvas, box, 0, 0, text, size, bold=bold, padding=PARTY_PAD, baseline=baseline)
    return box.bottom


def draw_terms_box(
    canvas: Canvas,
    terms: str,
    x: float,
    top: float,
    width: float,
    height: float,
    owns_border: bool = True,
) -> float:
    box = Table(x, top, (width,), (height,))
    draw_table(canvas, box, owns_border=owns_border)
    draw_cell_text(
        canvas, box, 0, 0, "Terms of Delivery", FONT_SIZE_LABEL, bold=True,
        padding=PARTY_PAD, baseline=PARTY_LABEL_BASELINE,
    )
    draw_cell_text(
        canvas, box, 0, 0, terms, FONT_SIZE_LABEL, bold=True,
        padding=PARTY_PAD, baseline=PARTY_NAME_BASELINE, line_height=COMPANY_LINE_H,
    )
    return box.bottom


def draw_party_blocks(canvas: Canvas, invoice: Invoice, top: float) -> float:
    """Consignee over buyer, with the terms column spanning both rows.

    The enclosing grid owns every border; the boxes inside only place text.
    """
    party_width = CONTENT_W - META_TABLE_WIDTH
    frame = Table(
        LEFT_X,
        top,
        (party_width, META_TABLE_WIDTH),
        (PARTY_ROW_H, PARTY_ROW_H),
        spanning_columns=frozenset({1}),
    )
    bottom = draw_table(canvas, frame)

    draw_party_box(canvas, "Consignee", invoice.consignee, LEFT_X, top, party_width, owns_border=False)
    draw_terms_box(
        canvas, invoice.terms, frame.column_x(1), top, META_TABLE_WIDTH, frame.height, owns_border=False,
    )
    draw_party_box(canvas, "Buyer", invoice.buyer, LEFT_X, frame.row_top(1), party_width, owns_border=False)
    return bottom


def _item_block_height(description_lines: int) -> float:
    return ITEM_PRIMARY_BASELINE + ITEM_LINE_H + description_lines * ITEM_LINE_H + ITEM_BLOCK_PAD


def draw_items_table(canvas: Canvas, invoice: Invoice, totals: InvoiceTotals, top: float) -> float:
    widths = ITEM_COLUMN_WIDTHS
    items = invoice.items or (LineItem(),)
    description_width = widths[1] - ITEM_CELL_PAD * 2
    descriptions = [
        wrap_text(canvas, item.description, description_width, FONT_SIZE_LABEL, bold=True)
        for item in items
    ]
    sublines: List[Tuple[str, float]] = [
        (CGST_LEDGER_LABEL, totals.cgst_amount),
        (SGST_LEDGER_LABEL, totals.sgst_amount),
        (ROUND_OFF_LABEL, totals.round_off),
    ]

    detail_height = sum(_item_block_height(len(lines)) for lines in descriptions)
    detail_height += len(sublines) * ITEM_LINE_H + ITEM_SUBLINES_PAD
    table = Table(LEFT_X, top, widths, (ITEM_HEADER_H, detail_height, ITEM_TOTAL_ROW_H))
    draw_table(canvas, table)

    for column, header in enumerate(ITEM_HEADERS):
        draw_cell_text(
            canvas, table, 0, column, header, FONT_SIZE_NORMAL, bold=True,
            align="center", padding=0, baseline=ITEM_HEADER_BASELINE,
        )

    amount_right = table.column_x(6) + widths[6] - ITEM_CELL_PAD
    block_top = table.row_top(1)
    description_end = block_top
    for index, (item, lines) in enumerate(zip(items, descriptions)):
        primary_y = block_top + ITEM_PRIMARY_BASELINE
        if invoice.items:
            serial = str(index + 1)
            canvas.draw_text(
                center_x(canvas, serial, table.column_x(0), widths[0], FONT_SIZE_NORMAL),
                primary_y,
                serial,
                FONT_SIZE_NORMAL,
            )
            canvas.draw_text(table.column_x(2) + ITEM_CELL_PAD, primary_y, item.hsn or invoice.hsn, FONT_SIZE_NORMAL)
            canvas.draw_text(table.column_x(3) + ITEM_CELL_PAD, primary_y, fmt_qty(item.quantity), FONT_SIZE_NORMAL)
            canvas.draw_text_right(
                table.column_x(5) - ITEM_CELL_PAD, primary_y, fmt_money(item.rate), FONT_SIZE_NORMAL,
            )
            canvas.draw_text(table.column_x(5) + ITEM_CELL_PAD, primary_y, item.unit, FONT_SIZE_NORMAL)
            canvas.draw_text_right(amount_right, primary_y, fmt_money(item.amount), FONT_SIZE_NORMAL)

        description_end = _draw_lines(
            canvas,
            table.column_x(1) + ITEM_CELL_PAD,
            primary_y + ITEM_LINE_H,
            lines,
            FONT_SIZE_LABEL,
            ITEM_LINE_H,
            bold=True,
        )
        block_top += _item_block_height(len(lines))

    subline_y = description_end + ITEM_SUBLINES_GAP
    for label, amount in sublines:
        canvas.draw_text(table.column_x(1) + ITEM_CELL_PAD, subline_y, label, FONT_SIZE_NORMAL)
        canvas.draw_text_right(amount_right, subline_y, fmt_money(amount), FONT_SIZE_NORMAL)
        subline_y += ITEM_LINE_H

    total_top = table.row_top(2)
    total_right = table.column_x(6) + widths[6] - ITEM_TOTAL_PAD
    total_y = total_top + ITEM_TOTAL_BASELINE
    canvas.draw_text(table.column_x(1) + ITEM_TOTAL_PAD, total_y, "Total", FONT_SIZE_NORMAL, bold=True)
    canvas.draw_text_right(total_right, total_y, fmt_money(totals.grand_total), FONT_SIZE_LABEL, bold=True)
    canvas.draw_text_right(total_right, total_top + ITEM_EOE_BASELINE, EOE_TEXT, FONT_SIZE_SMALL)
    return table.bottom


def _draw_words(
    canvas: Canvas,
    label: str,
    text: str,
    top: float,
    x_offset: float,
    width: float,
    min_height: float,
) -> float:
    canvas.draw_text(LEFT_X, top, label, FONT_SIZE_LABEL, bold=True)
    lines = wrap_text(canvas, text, width, FONT_SIZE_NORMAL)
    _draw_lines(canvas, LEFT_X + x_offset, top, lines, FONT_SIZE_NORMAL, WORDS_LINE_H)
    return top + max(min_height, len(lines) * WORDS_LINE_H)


def draw_amount_in_words(canvas: Canvas, invoice: Invoice, top: float) -> float:
    width = CONTENT_W - WORDS_X_OFFSET - WORDS_RIGHT_PAD
    return _draw_words(canvas, WORDS_LABEL, invoice.amount_in_words, top, WORDS_X_OFFSET, width, WORDS_MIN_H)


def draw_tax_breakup(canvas: Canvas, invoice: Invoice, totals: InvoiceTotals, top: float) -> float:
    table = Table(LEFT_X, top, TAX_COLUMN_WIDTHS, (TAX_ROW_H,) * 3)
    draw_table(canvas, table)

    for column, header in enumerate(TAX_HEADERS):
        draw_cell_text(
            canvas, table, 0, column, header, FONT_SIZE_NORMAL, bold=True,
            padding=TAX_CELL_PAD, baseline=TAX_CELL_BASELINE, line_height=TAX_HEADER_LINE_H,
        )

    cgst_rate = fmt_percent(invoice.tax_rates.cgst)
    sgst_rate = fmt_percent(invoice.tax_rates.sgst)
    figures = [
        fmt_money(totals.base_amount),
        cgst_rate,
        fmt_money(totals.cgst_amount),
        sgst_rate,
        fmt_money(totals.sgst_amount),
        fmt_money(totals.tax_total),
    ]
    for row, first_cell, bold in ((1, invoice.hsn, False), (2, "Total", True)):
        for column, text in enumerate([first_cell, *figures]):
            # Rates and the HSN code read left to right; amounts line up on the right edge.
            align = "left" if column in (0, 2, 4) else "right"
            draw_cell_text(
                canvas, table, row, column, text, FONT_SIZE_NORMAL, bold=bold,
                align=align, padding=TAX_CELL_PAD, baseline=TAX_CELL_BASELINE,
            )

    words_top = table.bottom + TAX_WORDS_GAP
    width = CONTENT_W - TAX_WORDS_X_OFFSET
    return _draw_words(
        canvas, TAX_WORDS_LABEL, invoice.tax_amount_in_words, words_top, TAX_WORDS_X_OFFSET, width, TAX_WORDS_MIN_H,
    )


def draw_bank_and_remarks(canvas: Canvas, invoice: Invoice, bank: Bank, top: float) -> float:
    """Remarks and declaration on the left, bank details on the right."""
    column_width = CONTENT_W / 2 - 10
    bank_x = LEFT_X + column_width + BANK_COLUMN_GAP

    y = top
    for label, text, gap in (("Remarks:", invoice.remarks, REMARKS_GAP), ("Declaration:", invoice.declaration, 0)):
        canvas.draw_text(LEFT_X, y, label, FONT_SIZE_LABEL, bold=True)
        y += BLOCK_LABEL_ADVANCE
        lines = wrap_text(canvas, text, column_width, FONT_SIZE_NORMAL)
        y = _draw_lines(canvas, LEFT_X, y, lines, FONT_SIZE_NORMAL, REMARKS_LINE_H) + gap
    left_bottom = y

    bank_y = top
    canvas.draw_text(bank_x, bank_y, "Company's Bank Details", FONT_SIZE_LABEL, bold=True)
    bank_y += BLOCK_LABEL_ADVANCE
    details = [
        f"Bank Name : {bank.name}",
        f"A/c No. : {bank.account_number}",
        f"Branch & IFSC Code : {bank.branch} & {bank.ifsc}",
    ]
    for detail in details:
        lines = wrap_text(canvas, detail, column_width, FONT_SIZE_NORMAL)
        bank_y = _draw_lines(canvas, bank_x, bank_y, lines, FONT_SIZE_NORMAL, BANK_LINE_H)

    return max(left_bottom, bank_y) + BANK_SECTION_PAD


def draw_stamp_and_footer(canvas: Canvas, stamp: Optional[ImageHandle] = None) -> float:
    """Signatory box at the bottom-right margin and the footer line.

    Not chained from the cursor; returns the top of the signatory box.
    """
    box_x = canvas.width - MARGIN - STAMP_BOX_W - STAMP_BOX_RIGHT_PAD
    box_top = canvas.height - MARGIN - STAMP_BOX_BOTTOM_PAD - STAMP_BOX_H
    box = Table(box_x, box_top, (STAMP_BOX_W,), (STAMP_BOX_H,))
    draw_table(canvas, box)

    if stamp is not None:
        stamp_w, stamp_h = stamp.scale_to_width(STAMP_WIDTH)
        stamp_x = box_x + (STAMP_BOX_W - stamp_w) / 2.0
        canvas.draw_image(stamp, stamp_x, box_top + STAMP_TOP_PAD, stamp_w, stamp_h)

    draw_cell_text(
        canvas, box, 0, 0, SIGNATORY_TEXT, FONT_SIZE_NORMAL,
        align="center", padding=0, baseline=STAMP_BOX_H - SIGNATORY_BASELINE,
    )

    footer_x = center_x(canvas, FOOTER_TEXT, 0, canvas.width, FONT_SIZE_NORMAL)
    canvas.draw_text(footer_x, canvas.height - (MARGIN - FOOTER_DROP), FOOTER_TEXT, FONT_SIZE_NORMAL)
    return box_top
