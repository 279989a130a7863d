"""JSON-file-backed implementation of InvoiceRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from gstbill.domain.model.invoice import Invoice, InvoiceItem
from gstbill.domain.model.value_objects import Money, Quantity, TaxRate
from gstbill.domain.repository.invoice_repository import InvoiceRepository
from gstbill.infrastructure.persistence.json_file import JsonFile


def _money(raw: str) -> Money:
    return Money(Decimal(raw))


class JsonInvoiceRepository(InvoiceRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- InvoiceRepository interface ------------------------------------------

    def last_id(self) -> int | None:
        invoices = self._file.load()
        if not invoices:
            return None
        return max(i["id"] for i in invoices)

    def get_by_id(self, invoice_id: int) -> Invoice | None:
        for raw in self._file.load():
            if raw["id"] == invoice_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Invoice]:
        invoices = [self._to_domain(raw) for raw in self._file.load()]
        return sorted(invoices, key=lambda i: i.id or 0)

    def list_recent(self, limit: int) -> list[Invoice]:
        return list(reversed(self.list_all()))[:limit]

    def add(self, invoice: Invoice) -> Invoice:
        invoices = self._file.load()
        raw = self._to_raw(invoice)
        raw["id"] = self._file.next_id(invoices)
        self._file.persist(invoices + [raw])
        invoice.id = raw["id"]
        return invoice

    def count(self) -> int:
        return len(self._file.load())

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(invoice: Invoice) -> dict:
        return {
            "id": invoice.id,
            "invoice_no": invoice.invoice_no,
            "date": invoice.date.isoformat(),
            "party_id": invoice.party_id,
            "party_name": invoice.party_name,
            "items": [
                {
                    "product_id": item.product_id,
                    "name": item.name,
                    "hsn": item.hsn,
                    "price": str(item.price.amount),
                    "tax_rate": item.tax_rate.value,
                    "quantity": item.quantity.value,
                    "total_base": str(item.total_base.amount),
                    "cgst_amount": str(item.cgst_amount.amount),
                    "sgst_amount": str(item.sgst_amount.amount),
                    "igst_amount": str(item.igst_amount.amount),
                    "total_tax": str(item.total_tax.amount),
                    "final_amount": str(item.final_amount.amount),
                    "is_inter_state": item.is_inter_state,
                }
                for item in invoice.items
            ],
            "sub_total": str(invoice.sub_total.amount),
            "tax_total": str(invoice.tax_total.amount),
            "grand_total": str(invoice.grand_total.amount),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Invoice:
        items = [
            InvoiceItem(
                product_id=i.get("product_id"),
                name=i["name"],
                hsn=i.get("hsn", ""),
                price=_money(i["price"]),
                tax_rate=TaxRate(i["tax_rate"]),
                quantity=Quantity(i["quantity"]),
                total_base=_money(i["total_base"]),
                cgst_amount=_money(i["cgst_amount"]),
                sgst_amount=_money(i["sgst_amount"]),
                igst_amount=_money(i["igst_amount"]),
                total_tax=_money(i["total_tax"]),
                final_amount=_money(i["final_amount"]),
                is_inter_state=i["is_inter_state"],
            )
            for i in raw["items"]
        ]
        return Invoice(
            id=raw["id"],
            invoice_no=raw["invoice_no"],
            party_id=raw["party_id"],
            party_name=raw["party_name"],
            items=items,
            sub_total=_money(raw["sub_total"]),
            tax_total=_money(raw["tax_total"]),
            grand_total=_money(raw["grand_total"]),
            date=datetime.fromisoformat(raw["date"]),
        )
