"""Invoice record served by ``GET /invoice`` for this deployment."""

from __future__ import annotations

from typing import Any, Dict


def create_invoice_data() -> Dict[str, Any]:
    return {
        "company": {
            "name": "Delovita Services Pvt. Ltd.",
            "brand": "HeyEV!",
            "address": "2/52 Viklap Khand, Near Rail Vihar, Chauraha, Gomti Nagar, Lucknow",
            "state": "Uttar Pradesh",
            "stateCode": "09",
            "gstin": "09AAJCD9447L2W",
            "contact": "+91 8368395140",
        },
        "invoice": {
            "number": "25-26/UP-1596",
            "issueDate": "08 Nov 2025",
            "dueDate": "08 Nov 2025",
            "terms": "100% Payment",
            "reference": "HEV-UP-190 dt. 08-Nov-25",
            "otherReference": "",
            "paymentMode": "Cash",
            "consignee": {
                "name": "Ranjeet",
                "contact": "7897931119",
                "state": "Uttar Pradesh",
                "stateCode": "09",
                "addressLine": "Lucknow, Uttar Pradesh",
            },
            "buyer": {
                "name": "Ranjeet",
                "contact": "7897931119",
                "state": "Uttar Pradesh",
                "stateCode": "09",
                "addressLine": "Lucknow, Uttar Pradesh",
            },
            "hsn": "997319",
            "items": [
                {
                    "description": "Monthly Payment",
                    "quantity": 1,
                    "rate": 3033.89,
                    "unit": "Nos.",
                },
            ],
            "taxRates": {"cgst": 0.09, "sgst": 0.09},
            "roundOff": 0.01,
            "amountInWords": "INR Three Thousand Five Hundred Eighty Only",
            "taxAmountInWords": "INR Five Hundred Forty Six and Ten paise Only",
            "remarks": "Monthly Payment 3580, 18 Months\nPayment no. 3",
            "declaration": (
                "We declare that this invoice shows the actual price of the goods described "
                "and that all particulars are true and correct."
            ),
        },
        "bank": {
            "name": "HDFC Bank",
            "accountNumber": "50200076730302",
            "ifsc": "HDFC0001098",
            "branch": "Badshahpur",
        },
    }
