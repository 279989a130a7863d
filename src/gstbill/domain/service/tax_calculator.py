"""Domain service: GST split calculation.

A sale inside the seller's home state is taxed as CGST + SGST, each half
of the applicable rate.  A sale to any other state is taxed as a single
IGST component at the full rate.  The half split is computed by plain
division; no correction is applied when the tax is an odd number of paise.
"""

from __future__ import annotations

from dataclasses import dataclass

from gstbill.domain.model.invoice import InvoiceItem
from gstbill.domain.model.product import Product
from gstbill.domain.model.value_objects import Money, Quantity, TaxRate


@dataclass(frozen=True)
class TaxBreakdown:
    total_base: Money
    cgst_amount: Money
    sgst_amount: Money
    igst_amount: Money
    total_tax: Money
    final_amount: Money
    is_inter_state: bool


def is_inter_state(origin_state: str, destination_state: str) -> bool:
    return origin_state.strip().lower() != destination_state.strip().lower()


class TaxSplitCalculator:

    def compute(
        self,
        base_price: Money,
        quantity: Quantity,
        tax_rate: TaxRate,
        origin_state: str,
        destination_state: str,
    ) -> TaxBreakdown:
        """Split the tax on ``base_price × quantity`` by jurisdiction.

        Pure and deterministic; the origin is the seller's home state and
        the destination is the buyer's state.
        """
        total_base = base_price * quantity.value
        tax = total_base.percent(tax_rate)
        inter_state = is_inter_state(origin_state, destination_state)

        if inter_state:
            cgst = sgst = Money.zero()
            igst = tax
        else:
            cgst = tax.half()
            sgst = tax.half()
            igst = Money.zero()

        total_tax = cgst + sgst + igst
        return TaxBreakdown(
            total_base=total_base,
            cgst_amount=cgst,
            sgst_amount=sgst,
            igst_amount=igst,
            total_tax=total_tax,
            final_amount=total_base + total_tax,
            is_inter_state=inter_state,
        )

    def price_line(
        self,
        product: Product,
        quantity: Quantity,
        origin_state: str,
        destination_state: str,
    ) -> InvoiceItem:
        """Snapshot ``product`` into an invoice line with its tax split."""
        breakdown = self.compute(
            product.price, quantity, product.tax_rate, origin_state, destination_state
        )
        return InvoiceItem(
            product_id=product.id,
            name=product.name,
            hsn=product.hsn,
            price=product.price,  # <-- price snapshot
            tax_rate=product.tax_rate,
            quantity=quantity,
            total_base=breakdown.total_base,
            cgst_amount=breakdown.cgst_amount,
            sgst_amount=breakdown.sgst_amount,
            igst_amount=breakdown.igst_amount,
            total_tax=breakdown.total_tax,
            final_amount=breakdown.final_amount,
            is_inter_state=breakdown.is_inter_state,
        )
