"""Unit tests for the Invoice aggregate."""

import random

import pytest

from gstbill.domain.exceptions import ValidationError
from gstbill.domain.model.invoice import Invoice, InvoiceItem
from gstbill.domain.model.party import Party
from gstbill.domain.model.product import Product
from gstbill.domain.model.value_objects import Money, Quantity, TaxRate
from gstbill.domain.service.tax_calculator import TaxSplitCalculator


def _party(state: str = "Gujarat") -> Party:
    party = Party.create(name="Shree Medicals", mobile="9876543210", state=state)
    party.id = 1
    return party


def _item(price: str, qty: int, rate: int, state: str = "Gujarat") -> InvoiceItem:
    product = Product(
        id=1, name=f"Item {price}", hsn="3004",
        price=Money.of(price), tax_rate=TaxRate(rate),
    )
    return TaxSplitCalculator().price_line(product, Quantity(qty), "Gujarat", state)


class TestInvoiceCreate:

    def test_totals_are_sums_of_lines(self):
        items = [_item("100", 2, 18), _item("45.50", 3, 5), _item("10", 1, 0)]
        inv = Invoice.create("INV-1001", _party(), items)

        assert inv.sub_total == Money.of("346.50")
        assert inv.tax_total == Money.of("42.825")
        assert inv.grand_total == Money.of("389.325")
        assert inv.grand_total == inv.sub_total + inv.tax_total

    def test_totals_do_not_depend_on_line_order(self):
        items = [_item(str(p), q, r) for p, q, r in
                 [("19.99", 3, 12), ("250", 1, 28), ("0.35", 40, 5), ("1200", 2, 18)]]
        shuffled = items[:]
        random.Random(7).shuffle(shuffled)

        a = Invoice.create("INV-1", _party(), items)
        b = Invoice.create("INV-2", _party(), shuffled)

        assert a.sub_total == b.sub_total
        assert a.tax_total == b.tax_total
        assert a.grand_total == b.grand_total
        assert a.sub_total + a.tax_total == a.grand_total

    def test_keeps_line_order(self):
        items = [_item("1", 1, 5), _item("2", 1, 5), _item("3", 1, 5)]
        inv = Invoice.create("INV-1001", _party(), items)
        assert [i.name for i in inv.items] == ["Item 1", "Item 2", "Item 3"]

    def test_denormalizes_party_name(self):
        inv = Invoice.create("INV-1001", _party(), [_item("1", 1, 5)])
        assert inv.party_id == 1
        assert inv.party_name == "Shree Medicals"

    def test_inter_state_flag(self):
        inv = Invoice.create("INV-1001", _party("Kerala"), [_item("1", 1, 5, "Kerala")])
        assert inv.is_inter_state is True


class TestInvoiceValidation:

    def test_empty_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Invoice.create("INV-1001", _party(), [])

    def test_missing_party_rejected(self):
        with pytest.raises(ValidationError, match="party must be selected"):
            Invoice.create("INV-1001", None, [_item("1", 1, 5)])

    def test_unsaved_party_rejected(self):
        party = Party.create(name="New", mobile="1", state="Goa")
        with pytest.raises(ValidationError, match="must be saved"):
            Invoice.create("INV-1001", party, [_item("1", 1, 5)])


class TestInvoiceItemInvariant:

    def test_both_local_and_integrated_tax_rejected(self):
        ten = Money.of("10")
        with pytest.raises(ValidationError, match="both CGST/SGST and IGST"):
            InvoiceItem(
                product_id=1, name="Bad", hsn="", price=ten, tax_rate=TaxRate(18),
                quantity=Quantity(1), total_base=ten,
                cgst_amount=ten, sgst_amount=ten, igst_amount=ten,
                total_tax=Money.of("30"), final_amount=Money.of("40"),
                is_inter_state=False,
            )
