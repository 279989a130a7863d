"""Application service: Add Product use case."""

from __future__ import annotations

from gstbill.domain.model.product import Product
from gstbill.domain.model.value_objects import Money, TaxRate
from gstbill.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        hsn: str = "",
        price: str = "0",
        tax_rate: str | int = 18,
        stock: int = 0,
    ) -> Product:
        """Add a new product to the catalog. The store assigns the ID."""
        product = Product.create(
            name=name,
            hsn=hsn,
            price=Money.of(price),
            tax_rate=TaxRate.of(tax_rate),
            stock=stock,
        )
        return self._product_repo.add(product)
