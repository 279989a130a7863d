"""Application service: Show Dashboard use case (query)."""

from __future__ import annotations

from gstbill.application.dto import DashboardDTO, to_summary_dto
from gstbill.domain.model.value_objects import Money
from gstbill.domain.repository.invoice_repository import InvoiceRepository
from gstbill.domain.repository.party_repository import PartyRepository
from gstbill.domain.repository.product_repository import ProductRepository

RECENT_INVOICES = 5


class ShowDashboardHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        party_repo: PartyRepository,
        invoice_repo: InvoiceRepository,
    ) -> None:
        self._product_repo = product_repo
        self._party_repo = party_repo
        self._invoice_repo = invoice_repo

    def handle(self) -> DashboardDTO:
        invoices = self._invoice_repo.list_all()
        revenue = Money.zero()
        for invoice in invoices:
            revenue = revenue + invoice.grand_total

        return DashboardDTO(
            products=self._product_repo.count(),
            parties=self._party_repo.count(),
            invoices=len(invoices),
            total_revenue=str(revenue),
            recent=[
                to_summary_dto(i)
                for i in self._invoice_repo.list_recent(RECENT_INVOICES)
            ],
        )
