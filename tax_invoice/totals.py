"""Tax and grand-total figures derived from the line items."""

from __future__ import annotations

from dataclasses import dataclass

from .models import Invoice


@dataclass(frozen=True)
class InvoiceTotals:
    base_amount: float
    cgst_amount: float
    sgst_amount: float
    tax_total: float
    round_off: float
    grand_total: float


def compute_totals(invoice: Invoice) -> InvoiceTotals:
    base_amount = 0.0
    for item in invoice.items:
        base_amount += item.quantity * item.rate

    cgst_amount = base_amount * invoice.tax_rates.cgst
    sgst_amount = base_amount * invoice.tax_rates.sgst
    tax_total = cgst_amount + sgst_amount
    round_off = invoice.round_off
    return InvoiceTotals(
        base_amount=base_amount,
        cgst_amount=cgst_amount,
        sgst_amount=sgst_amount,
        tax_total=tax_total,
        round_off=round_off,
        grand_total=base_amount + tax_total + round_off,
    )
