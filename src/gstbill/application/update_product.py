"""Application service: Update Product use case."""

from __future__ import annotations

from gstbill.domain.exceptions import EntityNotFoundError
from gstbill.domain.model.product import Product
from gstbill.domain.model.value_objects import Money, TaxRate
from gstbill.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: int,
        name: str | None = None,
        hsn: str | None = None,
        price: str | None = None,
        tax_rate: str | int | None = None,
        stock: int | None = None,
    ) -> Product:
        """Update a product's editable fields.

        This does NOT affect any existing invoices; they captured a
        product snapshot at billing time.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        product.update(
            name=name,
            hsn=hsn,
            price=Money.of(price) if price is not None else None,
            tax_rate=TaxRate.of(tax_rate) if tax_rate is not None else None,
            stock=stock,
        )
        self._product_repo.update(product)
        return product
