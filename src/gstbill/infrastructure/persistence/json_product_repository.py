"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from pathlib import Path

from gstbill.domain.model.product import Product
from gstbill.domain.model.value_objects import Money, TaxRate
from gstbill.domain.repository.product_repository import ProductRepository
from gstbill.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def search(self, text: str) -> list[Product]:
        needle = text.lower()
        return [
            p for p in self.list_all()
            if needle in p.name.lower() or text in p.hsn
        ]

    def add(self, product: Product) -> Product:
        records = self._file.load()
        raw = self._to_raw(product)
        raw["id"] = self._file.next_id(records)
        self._file.persist(records + [raw])
        product.id = raw["id"]
        return product

    def update(self, product: Product) -> None:
        records = self._file.load()
        for i, raw in enumerate(records):
            if raw["id"] == product.id:
                records[i] = self._to_raw(product)
                break
        else:
            records.append(self._to_raw(product))
        self._file.persist(records)

    def delete(self, product_id: int) -> None:
        records = self._file.load()
        self._file.persist([r for r in records if r["id"] != product_id])

    def bulk_add(self, products: Sequence[Product]) -> None:
        records = self._file.load()
        next_id = self._file.next_id(records)
        raws = []
        for offset, product in enumerate(products):
            raw = self._to_raw(product)
            raw["id"] = next_id + offset
            raws.append(raw)
        self._file.persist(records + raws)
        # IDs are only handed out once the write is durable
        for offset, product in enumerate(products):
            product.id = next_id + offset

    def count(self) -> int:
        return len(self._file.load())

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "hsn": product.hsn,
            "price": str(product.price.amount),
            "tax_rate": product.tax_rate.value,
            "stock": product.stock,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            hsn=raw.get("hsn", ""),
            price=Money(Decimal(raw["price"])),
            tax_rate=TaxRate(raw["tax_rate"]),
            stock=raw.get("stock", 0),
        )
