"""Application service: invoice queries."""

from __future__ import annotations

from gstbill.application.dto import (
    InvoiceDTO,
    InvoiceSummaryDTO,
    to_invoice_dto,
    to_summary_dto,
)
from gstbill.domain.exceptions import EntityNotFoundError
from gstbill.domain.repository.invoice_repository import InvoiceRepository


class ShowInvoiceHandler:

    def __init__(self, invoice_repo: InvoiceRepository) -> None:
        self._invoice_repo = invoice_repo

    def handle(self, invoice_id: int) -> InvoiceDTO:
        invoice = self._invoice_repo.get_by_id(invoice_id)
        if invoice is None:
            raise EntityNotFoundError(f"Invoice #{invoice_id} not found")
        return to_invoice_dto(invoice)


class ListInvoicesHandler:

    def __init__(self, invoice_repo: InvoiceRepository) -> None:
        self._invoice_repo = invoice_repo

    def handle(self, party_name: str | None = None) -> list[InvoiceSummaryDTO]:
        invoices = self._invoice_repo.list_all()
        if party_name:
            needle = party_name.lower()
            invoices = [i for i in invoices if needle in i.party_name.lower()]
        return [to_summary_dto(i) for i in invoices]
