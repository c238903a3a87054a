import unittest

from tax_invoice.formatting import fmt_money
from tax_invoice.models import Invoice, LineItem, TaxRates
from tax_invoice.totals import compute_totals


class TotalsTests(unittest.TestCase):
    def test_single_item_scenario(self) -> None:
        invoice = Invoice(
            items=(LineItem(description="Monthly Payment", quantity=1, rate=3033.89, unit="Nos."),),
            tax_rates=TaxRates(cgst=0.09, sgst=0.09),
            round_off=0.01,
        )

        totals = compute_totals(invoice)

        self.assertAlmostEqual(totals.base_amount, 3033.89, places=9)
        self.assertAlmostEqual(totals.cgst_amount, 273.0501, places=9)
        self.assertAlmostEqual(totals.sgst_amount, 273.0501, places=9)
        self.assertAlmostEqual(totals.tax_total, 546.1002, places=9)
        self.assertAlmostEqual(totals.grand_total, 3580.0002, places=9)
        self.assertEqual(fmt_money(totals.grand_total), "Rs 3580.00")

    def test_missing_tax_rates_default_to_zero(self) -> None:
        invoice = Invoice.from_dict({"items": [{"quantity": 2, "rate": 50}]})

        totals = compute_totals(invoice)

        self.assertEqual(totals.cgst_amount, 0.0)
        self.assertEqual(totals.sgst_amount, 0.0)
        self.assertEqual(totals.grand_total, 100.0)

    def test_base_amount_sums_every_item(self) -> None:
        invoice = Invoice(
            items=(
                LineItem(quantity=2, rate=150.0),
                LineItem(quantity=0.5, rate=99.99),
                LineItem(quantity=0, rate=1000),
            ),
            tax_rates=TaxRates(cgst=0.06, sgst=0.06),
        )

        totals = compute_totals(invoice)

        self.assertAlmostEqual(totals.base_amount, 349.995, places=9)
        self.assertAlmostEqual(totals.tax_total, 349.995 * 0.12, places=9)

    def test_grand_total_matches_its_components_to_the_paisa(self) -> None:
        for quantity in (0, 1, 3, 12.5):
            for rate in (0, 0.01, 3033.89, 99999.99):
                for cgst, sgst in ((0, 0), (0.025, 0.025), (0.09, 0.09), (0.14, 0.14)):
                    for round_off in (0, 0.01, 0.49):
                        invoice = Invoice(
                            items=(LineItem(quantity=quantity, rate=rate),),
                            tax_rates=TaxRates(cgst=cgst, sgst=sgst),
                            round_off=round_off,
                        )
                        totals = compute_totals(invoice)
                        components = (
                            totals.base_amount + totals.cgst_amount + totals.sgst_amount + totals.round_off
                        )
                        self.assertAlmostEqual(totals.grand_total, components, places=6)

    def test_negative_round_off_reduces_the_total(self) -> None:
        invoice = Invoice(items=(LineItem(quantity=1, rate=100.4),), round_off=-0.4)
        self.assertEqual(fmt_money(compute_totals(invoice).grand_total), "Rs 100.00")


if __name__ == "__main__":
    unittest.main()
