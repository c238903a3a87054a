import unittest

from fakes import FixedWidthFonts

from tax_invoice.canvas import Canvas, Line, Rect, TextRun
from tax_invoice.pdf_constants import PAGE_H, TAX_COLUMN_WIDTHS
from tax_invoice.tables import Table, draw_cell_text, draw_table


def horizontal(canvas: Canvas):
    return [line for line in canvas.of_type(Line) if line.y1 == line.y2]


def vertical(canvas: Canvas):
    return [line for line in canvas.of_type(Line) if line.x1 == line.x2]


class DrawTableTests(unittest.TestCase):
    def setUp(self) -> None:
        self.canvas = Canvas(FixedWidthFonts())

    def test_three_row_table_draws_one_frame_and_internal_separators_only(self) -> None:
        table = Table(24, 100, TAX_COLUMN_WIDTHS, (24, 24, 24))

        bottom = draw_table(self.canvas, table)

        self.assertEqual(bottom, 172)
        self.assertEqual(len(self.canvas.of_type(Rect)), 1)
        self.assertEqual(len(horizontal(self.canvas)), 2)
        self.assertEqual(len(vertical(self.canvas)), len(TAX_COLUMN_WIDTHS) - 1)
        self.assertEqual(
            sorted(line.y1 for line in horizontal(self.canvas)),
            [PAGE_H - 148, PAGE_H - 124],
        )

    def test_frame_covers_the_whole_table_in_page_space(self) -> None:
        table = Table(24, 100, (50, 50), (10, 30))

        draw_table(self.canvas, table)

        self.assertEqual(self.canvas.of_type(Rect), [Rect(24, PAGE_H - 140, 100, 40)])

    def test_separators_never_sit_on_the_outer_edges(self) -> None:
        table = Table(24, 100, (30, 70), (20, 20, 20))

        draw_table(self.canvas, table)

        for line in horizontal(self.canvas):
            self.assertNotIn(line.y1, (PAGE_H - 100, PAGE_H - 160))
        for line in vertical(self.canvas):
            self.assertNotIn(line.x1, (24, 124))

    def test_region_without_border_ownership_skips_the_frame(self) -> None:
        draw_table(self.canvas, Table(24, 100, (200,), (82,)), owns_border=False)

        self.assertEqual(self.canvas.instructions, [])

    def test_spanning_column_interrupts_horizontal_separators(self) -> None:
        table = Table(24, 0, (317.28, 230), (82, 82), spanning_columns=frozenset({1}))

        draw_table(self.canvas, table)

        self.assertEqual(horizontal(self.canvas), [Line(24, PAGE_H - 82, table.column_x(1), PAGE_H - 82)])
        self.assertEqual(len(vertical(self.canvas)), 1)

    def test_row_segments_split_around_middle_spanning_column(self) -> None:
        table = Table(0, 0, (10, 20, 30, 40), (5, 5), spanning_columns=frozenset({1}))

        self.assertEqual(table.row_segments(), [(0, 10), (30, 100)])


class DrawCellTextTests(unittest.TestCase):
    def setUp(self) -> None:
        self.canvas = Canvas(FixedWidthFonts())
        self.table = Table(10, 0, (100,), (40,))

    def test_left_aligned_text_uses_inner_padding(self) -> None:
        draw_cell_text(self.canvas, self.table, 0, 0, "abc", 10, padding=6, baseline=10)

        self.assertEqual(self.canvas.instructions, [TextRun(16, PAGE_H - 10, "abc", 10, False)])

    def test_right_and_center_alignment(self) -> None:
        draw_cell_text(self.canvas, self.table, 0, 0, "abc", 10, align="right", padding=6)
        draw_cell_text(self.canvas, self.table, 0, 0, "abc", 10, align="center", padding=6)

        right, center = self.canvas.of_type(TextRun)
        self.assertEqual(right.x, 10 + 100 - 6 - 15)
        self.assertEqual(center.x, 10 + (100 - 15) / 2.0)

    def test_wrapped_text_is_stacked_inside_the_cell(self) -> None:
        count = draw_cell_text(
            self.canvas, self.table, 0, 0, "SGST/UTGST Amount", 9, padding=6, baseline=10, line_height=9,
        )

        runs = self.canvas.of_type(TextRun)
        self.assertEqual(count, 1)
        self.assertEqual(len(runs), 1)

        narrow = Table(10, 0, (58,), (24,))
        count = draw_cell_text(
            self.canvas, narrow, 0, 0, "SGST/UTGST Amount", 9, padding=6, baseline=10, line_height=9,
        )
        runs = self.canvas.of_type(TextRun)[1:]
        self.assertEqual(count, 2)
        self.assertEqual([run.text for run in runs], ["SGST/UTGST", "Amount"])
        self.assertEqual([run.y for run in runs], [PAGE_H - 10, PAGE_H - 19])


if __name__ == "__main__":
    unittest.main()
