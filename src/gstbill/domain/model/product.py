"""Product aggregate.

Products live independently of invoices. They have their own lifecycle:
prices change, products are added and removed from the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass

from gstbill.domain.exceptions import ValidationError
from gstbill.domain.model.value_objects import Money, TaxRate


@dataclass
class Product:
    """A product in the catalog.

    ``price`` is the tax-exclusive unit price.  ``stock`` is informational
    only; billing does not deduct from it and it may go negative through
    data entry.
    """

    id: int | None
    name: str
    hsn: str
    price: Money
    tax_rate: TaxRate
    stock: int = 0

    @staticmethod
    def create(
        name: str,
        hsn: str = "",
        price: Money | None = None,
        tax_rate: TaxRate | None = None,
        stock: int = 0,
    ) -> Product:
        """Create a new (unsaved) product, enforcing all invariants."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        return Product(
            id=None,
            name=name.strip(),
            hsn=(hsn or "").strip(),
            price=price if price is not None else Money.zero(),
            tax_rate=tax_rate if tax_rate is not None else TaxRate(18),
            stock=stock,
        )

    def update(
        self,
        name: str | None = None,
        hsn: str | None = None,
        price: Money | None = None,
        tax_rate: TaxRate | None = None,
        stock: int | None = None,
    ) -> None:
        """Change editable fields.

        This does NOT affect any existing invoices because invoices
        capture a product snapshot at billing time.
        """
        if name is not None:
            if not name.strip():
                raise ValidationError("Product name is required")
            self.name = name.strip()
        if hsn is not None:
            self.hsn = hsn.strip()
        if price is not None:
            self.price = price
        if tax_rate is not None:
            self.tax_rate = tax_rate
        if stock is not None:
            self.stock = stock
