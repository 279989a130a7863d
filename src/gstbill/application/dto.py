"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from gstbill.domain.model.invoice import Invoice

DATE_FORMAT = "%d/%m/%Y"


@dataclass(frozen=True)
class InvoiceLineSpec:
    """Input: what is being billed (product ID + quantity)."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class InvoiceItemDTO:
    """Output: a single invoice line as displayed to the user."""

    name: str
    hsn: str
    quantity: int
    rate: str  # formatted, e.g. "₹100.00"
    tax_rate: str  # e.g. "18%"
    cgst: str
    sgst: str
    igst: str
    tax: str
    total: str


@dataclass(frozen=True)
class InvoiceDTO:
    """Output: a complete invoice as displayed to the user."""

    id: int
    invoice_no: str
    date: str
    party_id: int
    party_name: str
    items: list[InvoiceItemDTO]
    sub_total: str
    tax_total: str
    grand_total: str
    document: str | None = None


@dataclass(frozen=True)
class InvoiceSummaryDTO:
    id: int
    invoice_no: str
    date: str
    party_name: str
    grand_total: str


@dataclass(frozen=True)
class DashboardDTO:
    products: int
    parties: int
    invoices: int
    total_revenue: str
    recent: list[InvoiceSummaryDTO]


def to_invoice_dto(invoice: Invoice, document: str | None = None) -> InvoiceDTO:
    return InvoiceDTO(
        id=invoice.id,  # type: ignore[arg-type]
        invoice_no=invoice.invoice_no,
        date=invoice.date.strftime(DATE_FORMAT),
        party_id=invoice.party_id,
        party_name=invoice.party_name,
        items=[
            InvoiceItemDTO(
                name=item.name,
                hsn=item.hsn,
                quantity=item.quantity.value,
                rate=str(item.price),
                tax_rate=str(item.tax_rate),
                cgst=str(item.cgst_amount),
                sgst=str(item.sgst_amount),
                igst=str(item.igst_amount),
                tax=str(item.total_tax),
                total=str(item.final_amount),
            )
            for item in invoice.items
        ],
        sub_total=str(invoice.sub_total),
        tax_total=str(invoice.tax_total),
        grand_total=str(invoice.grand_total),
        document=document,
    )


def to_summary_dto(invoice: Invoice) -> InvoiceSummaryDTO:
    return InvoiceSummaryDTO(
        id=invoice.id,  # type: ignore[arg-type]
        invoice_no=invoice.invoice_no,
        date=invoice.date.strftime(DATE_FORMAT),
        party_name=invoice.party_name,
        grand_total=str(invoice.grand_total),
    )
