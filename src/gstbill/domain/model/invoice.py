"""Invoice aggregate, the core of the billing domain.

The Invoice is an aggregate root that owns its line items.
All business invariants are enforced here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from gstbill.domain.exceptions import ValidationError
from gstbill.domain.model.party import Party
from gstbill.domain.model.value_objects import Money, Quantity, TaxRate


@dataclass(frozen=True)
class InvoiceItem:
    """Captures a product snapshot and its tax split at billing time.

    Immutable: later edits to the originating product never reach an
    invoice that has already been issued (price lock).
    """

    product_id: int | None
    name: str
    hsn: str
    price: Money  # locked at billing time
    tax_rate: TaxRate
    quantity: Quantity
    total_base: Money
    cgst_amount: Money
    sgst_amount: Money
    igst_amount: Money
    total_tax: Money
    final_amount: Money
    is_inter_state: bool

    def __post_init__(self) -> None:
        local = not (self.cgst_amount.is_zero and self.sgst_amount.is_zero)
        if local and not self.igst_amount.is_zero:
            raise ValidationError(
                f"Line '{self.name}' carries both CGST/SGST and IGST"
            )


@dataclass
class Invoice:
    """Aggregate root for sales invoices.

    Use the ``Invoice.create()`` factory for new invoices; it enforces all
    business rules and computes the totals.  The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    invoices without re-validating.
    """

    id: int | None
    invoice_no: str
    party_id: int
    party_name: str  # denormalized for display without a join
    items: list[InvoiceItem]
    sub_total: Money
    tax_total: Money
    grand_total: Money
    date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW invoices only) ---------------------------------

    @staticmethod
    def create(
        invoice_no: str,
        party: Party | None,
        items: list[InvoiceItem],
        date: datetime | None = None,
    ) -> Invoice:
        """Create a new invoice, enforcing all invariants."""
        if party is None:
            raise ValidationError("A party must be selected")
        if party.id is None:
            raise ValidationError("Party must be saved before it can be billed")
        if not items:
            raise ValidationError("Invoice must contain at least one item")

        sub_total = Money.zero()
        tax_total = Money.zero()
        grand_total = Money.zero()
        for item in items:
            sub_total = sub_total + item.total_base
            tax_total = tax_total + item.total_tax
            grand_total = grand_total + item.final_amount

        return Invoice(
            id=None,
            invoice_no=invoice_no,
            party_id=party.id,
            party_name=party.name,
            items=list(items),
            sub_total=sub_total,
            tax_total=tax_total,
            grand_total=grand_total,
            date=date or datetime.now(timezone.utc),
        )

    @property
    def is_inter_state(self) -> bool:
        return any(item.is_inter_state for item in self.items)
