"""Tests for invoice queries and the dashboard."""

from datetime import datetime

import pytest

from gstbill.application.invoice_assembler import InvoiceAssembler
from gstbill.application.show_dashboard import ShowDashboardHandler
from gstbill.application.show_invoice import ListInvoicesHandler, ShowInvoiceHandler
from gstbill.domain.exceptions import EntityNotFoundError
from gstbill.domain.model.party import Party
from gstbill.domain.model.product import Product
from gstbill.domain.model.value_objects import Money, Quantity, TaxRate
from gstbill.domain.service.tax_calculator import TaxSplitCalculator
from tests.fakes import (
    FakeInvoiceRepository,
    FakePartyRepository,
    FakeProductRepository,
    FakeRenderer,
)


@pytest.fixture
def invoice_repo() -> FakeInvoiceRepository:
    """Six invoices for two parties, 118.00 each."""
    repo = FakeInvoiceRepository()
    assembler = InvoiceAssembler(repo, FakeRenderer())
    product = Product(id=1, name="Tab", hsn="", price=Money.of("100"), tax_rate=TaxRate(18))
    for n in range(6):
        party = Party.create(
            name="Shree Medicals" if n % 2 else "Kochi Pharma", mobile="1", state="Gujarat"
        )
        party.id = n % 2 + 1
        item = TaxSplitCalculator().price_line(product, Quantity(1), "Gujarat", "Gujarat")
        assembler.assemble(party, [item], date=datetime(2024, 4, n + 1))
    return repo


class TestShowInvoice:

    def test_show(self, invoice_repo):
        dto = ShowInvoiceHandler(invoice_repo).handle(2)
        assert dto.invoice_no == "INV-1002"
        assert dto.date == "02/04/2024"
        assert dto.grand_total == "₹118.00"
        assert dto.document is None

    def test_show_missing(self, invoice_repo):
        with pytest.raises(EntityNotFoundError, match="Invoice #99 not found"):
            ShowInvoiceHandler(invoice_repo).handle(99)


class TestListInvoices:

    def test_list_all_in_id_order(self, invoice_repo):
        rows = ListInvoicesHandler(invoice_repo).handle()
        assert [r.id for r in rows] == [1, 2, 3, 4, 5, 6]

    def test_filter_by_party_name(self, invoice_repo):
        rows = ListInvoicesHandler(invoice_repo).handle(party_name="shree")
        assert [r.invoice_no for r in rows] == ["INV-1002", "INV-1004", "INV-1006"]


class TestDashboard:

    def test_totals_and_recent(self, invoice_repo):
        handler = ShowDashboardHandler(
            product_repo=FakeProductRepository([Product.create(name="A")]),
            party_repo=FakePartyRepository(),
            invoice_repo=invoice_repo,
        )
        dto = handler.handle()
        assert dto.products == 1
        assert dto.parties == 0
        assert dto.invoices == 6
        assert dto.total_revenue == "₹708.00"
        assert [r.id for r in dto.recent] == [6, 5, 4, 3, 2]

    def test_empty_store(self):
        dto = ShowDashboardHandler(
            FakeProductRepository(), FakePartyRepository(), FakeInvoiceRepository()
        ).handle()
        assert dto.total_revenue == "₹0.00"
        assert dto.recent == []
