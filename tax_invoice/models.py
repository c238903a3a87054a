"""Immutable invoice record parsed from the JSON payload."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from .formatting import safe_float


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    return str(value)


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    return value if isinstance(value, Mapping) else {}


@dataclass(frozen=True)
class Company:
    name: str = ""
    brand: str = ""
    address: str = ""
    state: str = ""
    state_code: str = ""
    gstin: str = ""
    contact: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Company":
        return cls(
            name=_text(data, "name"),
            brand=_text(data, "brand"),
            address=_text(data, "address"),
            state=_text(data, "state"),
            state_code=_text(data, "stateCode"),
            gstin=_text(data, "gstin"),
            contact=_text(data, "contact"),
        )


@dataclass(frozen=True)
class Party:
    name: str = ""
    contact: str = ""
    state: str = ""
    state_code: str = ""
    address_line: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Party":
        return cls(
            name=_text(data, "name"),
            contact=_text(data, "contact"),
            state=_text(data, "state"),
            state_code=_text(data, "stateCode"),
            address_line=_text(data, "addressLine"),
        )


@dataclass(frozen=True)
class LineItem:
    description: str = ""
    quantity: float = 0.0
    rate: float = 0.0
    unit: str = ""
    hsn: Optional[str] = None

    @property
    def amount(self) -> float:
        return self.quantity * self.rate

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LineItem":
        hsn = data.get("hsn")
        return cls(
            description=_text(data, "description"),
            quantity=safe_float(data.get("quantity", 0), 0.0),
            rate=safe_float(data.get("rate", 0), 0.0),
            unit=_text(data, "unit"),
            hsn=str(hsn) if hsn else None,
        )


@dataclass(frozen=True)
class TaxRates:
    cgst: float = 0.0
    sgst: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TaxRates":
        return cls(
            cgst=safe_float(data.get("cgst", 0), 0.0),
            sgst=safe_float(data.get("sgst", 0), 0.0),
        )


@dataclass(frozen=True)
class Invoice:
    number: str = ""
    issue_date: str = ""
    due_date: str = ""
    terms: str = ""
    reference: str = ""
    other_reference: str = ""
    payment_mode: str = ""
    consignee: Party = field(default_factory=Party)
    buyer: Party = field(default_factory=Party)
    hsn: str = ""
    items: Tuple[LineItem, ...] = ()
    tax_rates: TaxRates = field(default_factory=TaxRates)
    round_off: float = 0.0
    amount_in_words: str = ""
    tax_amount_in_words: str = ""
    remarks: str = ""
    declaration: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Invoice":
        raw_items = data.get("items") or []
        items = tuple(LineItem.from_dict(item) for item in raw_items if isinstance(item, Mapping))
        return cls(
            number=_text(data, "number"),
            issue_date=_text(data, "issueDate"),
            due_date=_text(data, "dueDate"),
            terms=_text(data, "terms"),
            reference=_text(data, "reference"),
            other_reference=_text(data, "otherReference"),
            payment_mode=_text(data, "paymentMode"),
            consignee=Party.from_dict(_section(data, "consignee")),
            buyer=Party.from_dict(_section(data, "buyer")),
            hsn=_text(data, "hsn"),
            items=items,
            tax_rates=TaxRates.from_dict(_section(data, "taxRates")),
            round_off=safe_float(data.get("roundOff", 0), 0.0),
            amount_in_words=_text(data, "amountInWords"),
            tax_amount_in_words=_text(data, "taxAmountInWords"),
            remarks=_text(data, "remarks"),
            declaration=_text(data, "declaration"),
        )


@dataclass(frozen=True)
class Bank:
    name: str = ""
    account_number: str = ""
    ifsc: str = ""
    branch: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Bank":
        return cls(
            name=_text(data, "name"),
            account_number=_text(data, "accountNumber"),
            ifsc=_text(data, "ifsc"),
            branch=_text(data, "branch"),
        )


@dataclass(frozen=True)
class InvoiceDocument:
    company: Company
    invoice: Invoice
    bank: Bank

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InvoiceDocument":
        return cls(
            company=Company.from_dict(_section(data, "company")),
            invoice=Invoice.from_dict(_section(data, "invoice")),
            bank=Bank.from_dict(_section(data, "bank")),
        )
