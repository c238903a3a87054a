"""Layout constants for the A4 tax invoice (points, top-down cursor space)."""

from __future__ import annotations

# A4 at 72 units per inch
PAGE_W = 595.28
PAGE_H = 841.89

MARGIN = 24
BORDER_WIDTH = 0.4
META_TABLE_WIDTH = 230
META_GAP = 10

CONTENT_W = PAGE_W - MARGIN * 2
LEFT_X = MARGIN
LEFT_W = CONTENT_W - META_TABLE_WIDTH - META_GAP
RIGHT_X = LEFT_X + LEFT_W + META_GAP
RIGHT_W = META_TABLE_WIDTH

HEADER_TOP_PADDING = 8

# Gaps between chained sections
GAP_HEADER_TO_PARTIES = 10
GAP_PARTIES_TO_ITEMS = 6
GAP_ITEMS_TO_WORDS = 6
GAP_WORDS_TO_TAX = 8
GAP_TAX_TO_BANK = 10

FONT_SIZE_TITLE = 14
FONT_SIZE_COMPANY = 11
FONT_SIZE_LABEL = 10
FONT_SIZE_NORMAL = 9
FONT_SIZE_SMALL = 8

COLOR_BLACK = (0, 0, 0)

TITLE_TEXT = "Tax Invoice"
SUBTITLE_TEXT = "(ORIGINAL FOR RECIPIENT)"
TITLE_OFFSET = 8

# Company header
LOGO_WIDTH = 88
LOGO_GUTTER = 8
LOGO_BOTTOM_PAD = 4
HEADER_INNER_PAD = 8
HEADER_TEXT_TOP = 6
HEADER_TEXT_MAX_W = 205
COMPANY_NAME_ADVANCE = 14
COMPANY_LINE_H = 12
COMPANY_PARAGRAPH_GAP = 2

# Invoice metadata table
META_ROW_H = 24
META_LABEL_SPLIT = 0.45
META_CELL_PAD = 6
META_CELL_BASELINE = 8
META_WRAP_LINE_H = 10

# Party blocks
PARTY_ROW_H = 82
PARTY_PAD = 8
PARTY_LABEL_BASELINE = 10
PARTY_NAME_BASELINE = 26
PARTY_STATE_BASELINE = 40
PARTY_ADDRESS_BASELINE = 54

# Items table
ITEM_COLUMN_WIDTHS = (30, 225, 55, 45, 65, 22, 85)
ITEM_HEADERS = ("Sl No.", "Description of Goods", "HSN/SAC", "Quantity", "Rate", "per", "Amount")
ITEM_HEADER_H = 26
ITEM_HEADER_BASELINE = 10
ITEM_LINE_H = 15
ITEM_PRIMARY_BASELINE = 8
ITEM_CELL_PAD = 4
ITEM_BLOCK_PAD = 12
ITEM_SUBLINES_GAP = 6
ITEM_SUBLINES_PAD = 8
ITEM_TOTAL_ROW_H = 20
ITEM_TOTAL_PAD = 6
ITEM_TOTAL_BASELINE = 8
ITEM_EOE_BASELINE = 16
CGST_LEDGER_LABEL = "Output Cgst UP"
SGST_LEDGER_LABEL = "Output Sgst UP"
ROUND_OFF_LABEL = "Round Off"
EOE_TEXT = "E. & O.E"

# Amount in words
WORDS_LABEL = "Amount Chargeable (in words):"
WORDS_X_OFFSET = 200
WORDS_RIGHT_PAD = 10
WORDS_LINE_H = 11
WORDS_MIN_H = 14

# Tax breakup
TAX_COLUMN_WIDTHS = (70, 110, 70, 70, 70, 70, 75)
TAX_HEADERS = (
    "HSN/SAC",
    "Taxable Value",
    "CGST Rate",
    "CGST Amount",
    "SGST/UTGST Rate",
    "SGST/UTGST Amount",
    "Total Tax Amount",
)
TAX_ROW_H = 24
TAX_CELL_PAD = 6
TAX_CELL_BASELINE = 10
TAX_HEADER_LINE_H = 9
TAX_WORDS_GAP = 12
TAX_WORDS_LABEL = "Tax Amount (in words):"
TAX_WORDS_X_OFFSET = 170
TAX_WORDS_MIN_H = 16

# Bank & remarks
BLOCK_LABEL_ADVANCE = 14
REMARKS_LINE_H = 12
REMARKS_GAP = 10
BANK_LINE_H = 13
BANK_COLUMN_GAP = 20
BANK_SECTION_PAD = 6

# Stamp & footer (anchored, bottom-left page space)
STAMP_BOX_W = 160
STAMP_BOX_H = 95
STAMP_BOX_RIGHT_PAD = 8
STAMP_BOX_BOTTOM_PAD = 18
STAMP_WIDTH = 65
STAMP_TOP_PAD = 10
SIGNATORY_TEXT = "Authorised Signatory"
SIGNATORY_BASELINE = 8
FOOTER_TEXT = "This is a Computer Generated Invoice"
FOOTER_DROP = 10

CURRENCY_SYMBOL = "Rs "
