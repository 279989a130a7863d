"""Unit tests for the GST split calculation."""

from decimal import Decimal

import pytest

from gstbill.domain.model.product import Product
from gstbill.domain.model.value_objects import Money, Quantity, TaxRate
from gstbill.domain.service.tax_calculator import TaxSplitCalculator

calc = TaxSplitCalculator()


def _compute(price="100", qty=2, rate=18, origin="Gujarat", destination="Gujarat"):
    return calc.compute(Money.of(price), Quantity(qty), TaxRate(rate), origin, destination)


class TestIntraState:

    def test_reference_scenario(self):
        b = _compute()
        assert b.total_base == Money.of("200")
        assert b.cgst_amount == Money.of("18")
        assert b.sgst_amount == Money.of("18")
        assert b.igst_amount == Money.zero()
        assert b.total_tax == Money.of("36")
        assert b.final_amount == Money.of("236")
        assert b.is_inter_state is False

    def test_state_comparison_ignores_case(self):
        assert _compute(origin="Gujarat", destination="GUJARAT").is_inter_state is False

    @pytest.mark.parametrize("price,qty,rate", [
        ("99.99", 3, 5),
        ("0.01", 1, 28),
        ("1234.56", 17, 12),
        ("10", 7, 0),
    ])
    def test_split_is_exactly_half_of_the_tax(self, price, qty, rate):
        b = _compute(price, qty, rate)
        expected_tax = Decimal(price) * qty * rate / 100
        assert b.cgst_amount == b.sgst_amount
        assert b.cgst_amount.amount == expected_tax / 2
        assert b.igst_amount.is_zero

    def test_odd_paise_are_not_corrected(self):
        # 0.05 of tax splits into two halves of 0.025
        b = _compute(price="1", qty=1, rate=5)
        assert b.cgst_amount.amount == Decimal("0.025")
        assert b.total_tax.amount == Decimal("0.05")


class TestInterState:

    def test_reference_scenario(self):
        b = _compute(destination="Maharashtra")
        assert b.total_base == Money.of("200")
        assert b.igst_amount == Money.of("36")
        assert b.cgst_amount.is_zero and b.sgst_amount.is_zero
        assert b.total_tax == Money.of("36")
        assert b.final_amount == Money.of("236")
        assert b.is_inter_state is True

    @pytest.mark.parametrize("price,qty,rate", [
        ("99.99", 3, 5),
        ("1234.56", 17, 28),
    ])
    def test_whole_tax_goes_to_igst(self, price, qty, rate):
        b = _compute(price, qty, rate, destination="Delhi")
        assert b.igst_amount.amount == Decimal(price) * qty * rate / 100
        assert b.cgst_amount.is_zero and b.sgst_amount.is_zero


class TestPriceLine:

    def test_snapshots_product_fields(self):
        product = Product(
            id=4, name="Paracetamol 500", hsn="3004",
            price=Money.of("100"), tax_rate=TaxRate(12), stock=10,
        )
        item = calc.price_line(product, Quantity(3), "Gujarat", "Kerala")

        assert item.product_id == 4
        assert item.name == "Paracetamol 500"
        assert item.hsn == "3004"
        assert item.price == Money.of("100")
        assert item.igst_amount == Money.of("36")
        assert item.final_amount == Money.of("336")

        product.price = Money.of("999")
        assert item.price == Money.of("100")
