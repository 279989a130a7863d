"""Tests for the HTML invoice document."""

from datetime import datetime

import pytest

from gstbill.domain.exceptions import DocumentRenderError
from gstbill.domain.model.company import CompanyProfile
from gstbill.domain.model.invoice import Invoice
from gstbill.domain.model.party import Party
from gstbill.domain.model.product import Product
from gstbill.domain.model.value_objects import Money, Quantity, TaxRate
from gstbill.domain.service.tax_calculator import TaxSplitCalculator
from gstbill.infrastructure.rendering.html_invoice_renderer import HtmlInvoiceRenderer

COMPANY = CompanyProfile(
    name="Gopi Distributors", address="123 Market Road", city="Ahmedabad",
    state="Gujarat", pincode="380001", phone="+91 98765 43210", gstin="24ABCDE1234F1Z5",
)


@pytest.fixture
def party() -> Party:
    party = Party.create(name="Shah & Sons", mobile="9000000000", state="Gujarat",
                         address="Relief Road")
    party.id = 1
    return party


@pytest.fixture
def invoice(party) -> Invoice:
    product = Product(id=1, name="Syrup <100ml>", hsn="3004", price=Money.of("100"),
                      tax_rate=TaxRate(18))
    item = TaxSplitCalculator().price_line(product, Quantity(2), "Gujarat", "Gujarat")
    return Invoice.create("INV-1001", party, [item], date=datetime(2024, 4, 2))


class TestHtmlInvoiceRenderer:

    def test_document_contents(self, tmp_path, invoice, party):
        html = HtmlInvoiceRenderer(COMPANY, tmp_path).to_html(invoice, party)

        assert "TAX INVOICE" in html
        assert "Gopi Distributors" in html
        assert "Invoice No: INV-1001" in html
        assert "Date: 02/04/2024" in html
        assert "Bill To:" in html
        assert "GSTIN: Unregistered" in html
        assert "₹236.00" in html
        assert "Authorized Signatory" in html
        assert "Thank you for your business!" in html

    def test_values_are_escaped(self, tmp_path, invoice, party):
        html = HtmlInvoiceRenderer(COMPANY, tmp_path).to_html(invoice, party)
        assert "Shah &amp; Sons" in html
        assert "Syrup &lt;100ml&gt;" in html

    def test_render_writes_file(self, tmp_path, invoice, party):
        out = tmp_path / "docs"
        path = HtmlInvoiceRenderer(COMPANY, out).render(invoice, party)
        assert path == out / "INV-1001.html"
        assert "INV-1001" in path.read_text(encoding="utf-8")

    def test_unwritable_directory(self, tmp_path, invoice, party):
        blocker = tmp_path / "docs"
        blocker.write_text("not a directory")
        with pytest.raises(DocumentRenderError, match="Could not write"):
            HtmlInvoiceRenderer(COMPANY, blocker).render(invoice, party)
