"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory)
live in the infrastructure layer and in the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from gstbill.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def search(self, text: str) -> list[Product]:
        """Return products whose name (case-insensitive) or HSN contains *text*."""

    @abstractmethod
    def add(self, product: Product) -> Product:
        """Insert a new product and assign its ID."""

    @abstractmethod
    def update(self, product: Product) -> None:
        """Persist changes to an existing product."""

    @abstractmethod
    def delete(self, product_id: int) -> None:
        """Remove a product. Unknown IDs are ignored."""

    @abstractmethod
    def bulk_add(self, products: Sequence[Product]) -> None:
        """Insert many products in one call.

        Either every product of the call is durably written (and gets an
        ID) or none is and StorageError is raised.
        """

    @abstractmethod
    def count(self) -> int:
        """Return the number of products in the catalog."""
