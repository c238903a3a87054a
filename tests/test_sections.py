import unittest

from fakes import FixedWidthFonts
from PIL import Image

from tax_invoice.assets import ImageHandle
from tax_invoice.canvas import Canvas, ImageRun, Line, Rect, TextRun
from tax_invoice.models import InvoiceDocument
from tax_invoice.pdf_constants import MARGIN, PAGE_H
from tax_invoice.sample import create_invoice_data
from tax_invoice.sections import (
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
from tax_invoice.totals import compute_totals


def make_handle(name: str, width: int, height: int) -> ImageHandle:
    image = Image.new("RGB", (width, height), "white")
    return ImageHandle(name=name, path=f"{name}.png", width=width, height=height, image=image)


def document_with(**invoice_overrides) -> InvoiceDocument:
    data = create_invoice_data()
    data["invoice"].update(invoice_overrides)
    return InvoiceDocument.from_dict(data)


class SectionTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.canvas = Canvas(FixedWidthFonts())
        self.document = InvoiceDocument.from_dict(create_invoice_data())
        self.totals = compute_totals(self.document.invoice)

    def texts(self):
        return [run.text for run in self.canvas.of_type(TextRun)]

    def assertDrawnWithin(self, top: float, bottom: float) -> None:
        for run in self.canvas.of_type(TextRun):
            baseline = PAGE_H - run.y
            self.assertGreaterEqual(baseline, top, run.text)
            self.assertLessEqual(baseline, bottom, run.text)


class CursorThreadingTests(SectionTestCase):
    def test_every_chained_composer_advances_the_cursor(self) -> None:
        invoice = self.document.invoice
        composers = [
            lambda top: draw_company_header(self.canvas, self.document.company, top),
            lambda top: draw_invoice_meta_table(self.canvas, invoice, top),
            lambda top: draw_party_blocks(self.canvas, invoice, top),
            lambda top: draw_items_table(self.canvas, invoice, self.totals, top),
            lambda top: draw_amount_in_words(self.canvas, invoice, top),
            lambda top: draw_tax_breakup(self.canvas, invoice, self.totals, top),
            lambda top: draw_bank_and_remarks(self.canvas, invoice, self.document.bank, top),
        ]
        for composer in composers:
            for top in (0.0, 32.0, 411.5):
                self.assertGreater(composer(top), top)

    def test_composers_draw_text_inside_their_band(self) -> None:
        invoice = self.document.invoice
        composers = [
            lambda top: draw_invoice_meta_table(self.canvas, invoice, top),
            lambda top: draw_party_blocks(self.canvas, invoice, top),
            lambda top: draw_items_table(self.canvas, invoice, self.totals, top),
            lambda top: draw_tax_breakup(self.canvas, invoice, self.totals, top),
            lambda top: draw_bank_and_remarks(self.canvas, invoice, self.document.bank, top),
        ]
        for composer in composers:
            self.canvas.instructions.clear()
            bottom = composer(300.0)
            self.assertDrawnWithin(300.0, bottom)


class HeaderTests(SectionTestCase):
    def test_title_is_anchored_above_the_top_border(self) -> None:
        draw_title(self.canvas)

        title, subtitle = self.canvas.of_type(TextRun)
        self.assertEqual(title.text, "Tax Invoice")
        self.assertTrue(title.bold)
        self.assertAlmostEqual(title.y, PAGE_H - (MARGIN - 8))
        self.assertEqual(subtitle.text, "(ORIGINAL FOR RECIPIENT)")
        self.assertAlmostEqual(subtitle.x + self.canvas.text_width(subtitle.text, 9), self.canvas.width - MARGIN)

    def test_company_header_without_logo_uses_text_height(self) -> None:
        bottom = draw_company_header(self.canvas, self.document.company, 32)

        self.assertEqual(self.canvas.of_type(ImageRun), [])
        self.assertIn("GSTIN/UIN : 09AAJCD9447L2W", self.texts())
        last_baseline = max(PAGE_H - run.y for run in self.canvas.of_type(TextRun))
        self.assertGreater(bottom, last_baseline)
        self.assertEqual({run.x for run in self.canvas.of_type(TextRun)}, {MARGIN + 8})

    def test_tall_logo_sets_the_header_bottom(self) -> None:
        logo = make_handle("logo", 88, 200)

        bottom = draw_company_header(self.canvas, self.document.company, 32, logo)

        (image,) = self.canvas.of_type(ImageRun)
        self.assertEqual((image.x, image.width, image.height), (MARGIN + 8, 88, 200))
        self.assertAlmostEqual(image.y, PAGE_H - (32 + 6 + 200))
        self.assertEqual(bottom, 32 + 6 + 200 + 4)

    def test_logo_is_scaled_to_fixed_width_and_text_moves_right(self) -> None:
        logo = make_handle("logo", 352, 40)

        bottom = draw_company_header(self.canvas, self.document.company, 32, logo)

        (image,) = self.canvas.of_type(ImageRun)
        self.assertEqual((image.width, image.height), (88, 10))
        self.assertGreater(bottom, 32 + 6 + 10 + 4)
        self.assertEqual({run.x for run in self.canvas.of_type(TextRun)}, {MARGIN + 8 + 88 + 8})

    def test_meta_table_has_six_rows_and_a_single_frame(self) -> None:
        bottom = draw_invoice_meta_table(self.canvas, self.document.invoice, 32)

        lines = self.canvas.of_type(Line)
        self.assertEqual(bottom, 32 + 6 * 24)
        self.assertEqual(len(self.canvas.of_type(Rect)), 1)
        self.assertEqual(len([line for line in lines if line.y1 == line.y2]), 5)
        self.assertEqual(len([line for line in lines if line.x1 == line.x2]), 1)
        self.assertIn("-", self.texts())
        self.assertIn("08 Nov 2025", self.texts())


class PartyBlockTests(SectionTestCase):
    def test_single_frame_with_one_divider_each_way(self) -> None:
        bottom = draw_party_blocks(self.canvas, self.document.invoice, 186)

        self.assertEqual(bottom, 186 + 164)
        self.assertEqual(len(self.canvas.of_type(Rect)), 1)
        horizontal, vertical = [], []
        for line in self.canvas.of_type(Line):
            (horizontal if line.y1 == line.y2 else vertical).append(line)
        self.assertEqual(len(horizontal), 1)
        self.assertEqual(len(vertical), 1)
        self.assertEqual(horizontal[0].x2, vertical[0].x1)
        for label in ("Consignee", "Buyer", "Terms of Delivery", "100% Payment", "Ranjeet (7897931119)"):
            self.assertIn(label, self.texts())


class ItemsTableTests(SectionTestCase):
    def grand_total_runs(self):
        return [run for run in self.canvas.of_type(TextRun) if run.text == "Rs 3580.00"]

    def test_total_cell_shows_rounded_grand_total(self) -> None:
        bottom = draw_items_table(self.canvas, self.document.invoice, self.totals, 356)

        (total,) = self.grand_total_runs()
        self.assertTrue(total.bold)
        self.assertEqual(total.size, 10)
        self.assertEqual(bottom, 356 + 26 + 50 + 53 + 20)
        for text in ("Output Cgst UP", "Rs 273.05", "Round Off", "Rs 0.01", "E. & O.E", "997319", "Nos."):
            self.assertIn(text, self.texts())

    def test_column_separators_run_once_through_the_whole_table(self) -> None:
        bottom = draw_items_table(self.canvas, self.document.invoice, self.totals, 356)

        vertical = [line for line in self.canvas.of_type(Line) if line.x1 == line.x2]
        horizontal = [line for line in self.canvas.of_type(Line) if line.y1 == line.y2]
        self.assertEqual(len(vertical), 6)
        self.assertEqual(len(horizontal), 2)
        self.assertEqual(len(self.canvas.of_type(Rect)), 1)
        for line in vertical:
            self.assertAlmostEqual(line.y1, PAGE_H - 356)
            self.assertAlmostEqual(line.y2, PAGE_H - bottom)

    def test_amount_column_is_fixed_width(self) -> None:
        draw_items_table(self.canvas, self.document.invoice, self.totals, 356)

        (frame,) = self.canvas.of_type(Rect)
        self.assertEqual(frame.x, MARGIN)
        self.assertEqual(frame.width, 527)

        def right_edge(text: str) -> float:
            (run,) = [run for run in self.canvas.of_type(TextRun) if run.text == text]
            return run.x + self.canvas.text_width(run.text, run.size, bold=run.bold)

        amount_column_right = MARGIN + 527
        self.assertAlmostEqual(right_edge("Rs 3033.89"), amount_column_right - 4)
        self.assertAlmostEqual(right_edge("Rs 0.01"), amount_column_right - 4)
        self.assertAlmostEqual(right_edge("Rs 3580.00"), amount_column_right - 6)

    def test_explicit_break_in_description_adds_a_line(self) -> None:
        document = document_with(
            items=[{"description": "Monthly Payment\nPayment no. 3", "quantity": 1, "rate": 3033.89, "unit": "Nos."}],
        )
        bottom = draw_items_table(self.canvas, document.invoice, compute_totals(document.invoice), 356)

        self.assertEqual(bottom, 356 + 26 + 65 + 53 + 20)
        self.assertIn("Payment no. 3", self.texts())

    def test_each_item_gets_its_own_block(self) -> None:
        document = document_with(
            items=[
                {"description": "Scooter rental", "quantity": 1, "rate": 2500, "unit": "Nos."},
                {"description": "Battery swap", "quantity": 2, "rate": 266.945, "unit": "Nos.", "hsn": "998729"},
            ],
        )
        bottom = draw_items_table(self.canvas, document.invoice, compute_totals(document.invoice), 356)

        self.assertEqual(bottom, 356 + 26 + 100 + 53 + 20)
        texts = self.texts()
        self.assertIn("1", texts)
        self.assertIn("2", texts)
        self.assertIn("998729", texts)
        self.assertIn("Rs 2500.00", texts)
        self.assertIn("Rs 533.89", texts)

    def test_empty_item_list_still_renders_one_block(self) -> None:
        document = document_with(items=[])
        bottom = draw_items_table(self.canvas, document.invoice, compute_totals(document.invoice), 356)

        self.assertEqual(bottom, 356 + 26 + 50 + 53 + 20)
        self.assertNotIn("1", self.texts())


class SummaryTests(SectionTestCase):
    def test_amount_in_words_reserves_minimum_height(self) -> None:
        self.assertEqual(draw_amount_in_words(self.canvas, self.document.invoice, 511), 511 + 14)

    def test_long_amount_in_words_wraps(self) -> None:
        document = document_with(amountInWords="INR " + "Nine Hundred " * 12 + "Only")

        bottom = draw_amount_in_words(self.canvas, document.invoice, 511)

        self.assertGreater(bottom, 511 + 14)
        self.assertEqual((bottom - 511) % 11, 0)

    def test_tax_breakup_draws_three_row_grid_and_words(self) -> None:
        bottom = draw_tax_breakup(self.canvas, self.document.invoice, self.totals, 533)

        lines = self.canvas.of_type(Line)
        self.assertEqual(len(self.canvas.of_type(Rect)), 1)
        self.assertEqual(len([line for line in lines if line.y1 == line.y2]), 2)
        self.assertEqual(len([line for line in lines if line.x1 == line.x2]), 6)
        self.assertEqual(bottom, 533 + 72 + 12 + 16)
        texts = self.texts()
        self.assertEqual(texts.count("9%"), 4)
        self.assertEqual(texts.count("Rs 546.10"), 2)
        self.assertIn("Tax Amount (in words):", texts)

    def test_bank_and_remarks_bottom_is_the_taller_side(self) -> None:
        short = document_with(remarks="", declaration="")
        short_bottom = draw_bank_and_remarks(self.canvas, short.invoice, short.bank, 600)
        long_bottom = draw_bank_and_remarks(self.canvas, self.document.invoice, self.document.bank, 600)

        self.assertGreater(long_bottom, short_bottom)
        self.assertIn("Bank Name : HDFC Bank", self.texts())
        self.assertIn("Branch & IFSC Code : Badshahpur & HDFC0001098", self.texts())


class StampAndFooterTests(SectionTestCase):
    def test_box_is_anchored_to_the_bottom_right_margin(self) -> None:
        box_top = draw_stamp_and_footer(self.canvas)

        (box,) = self.canvas.of_type(Rect)
        self.assertAlmostEqual(box.y, MARGIN + 18)
        self.assertAlmostEqual(box.x + box.width, self.canvas.width - MARGIN - 8)
        self.assertAlmostEqual(box_top, PAGE_H - MARGIN - 18 - 95)
        self.assertEqual(self.canvas.of_type(ImageRun), [])
        footer = [run for run in self.canvas.of_type(TextRun) if run.text == "This is a Computer Generated Invoice"]
        self.assertEqual(len(footer), 1)
        self.assertAlmostEqual(footer[0].y, MARGIN - 10)

    def test_stamp_is_centered_inside_the_box(self) -> None:
        draw_stamp_and_footer(self.canvas, make_handle("stamp", 130, 130))

        (box,) = self.canvas.of_type(Rect)
        (stamp,) = self.canvas.of_type(ImageRun)
        self.assertEqual((stamp.width, stamp.height), (65, 65))
        self.assertAlmostEqual(stamp.x, box.x + (160 - 65) / 2.0)
        self.assertAlmostEqual(stamp.y + stamp.height, box.y + box.height - 10)


if __name__ == "__main__":
    unittest.main()
