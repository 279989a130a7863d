"""Domain service: map a spreadsheet row onto a catalog Product.

Supplier price lists name their columns in many ways.  Each product field
has an ordered list of accepted header synonyms; for every synonym an
exact key match is tried first, then a case-insensitive one, and the first
hit in synonym order wins.  Blank cells do not count as a hit.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from gstbill.domain.exceptions import ValidationError
from gstbill.domain.model.product import Product
from gstbill.domain.model.value_objects import Money, TaxRate

logger = logging.getLogger("gstbill.import")

UNKNOWN_NAME = "Unknown"

NAME_HEADERS = ("Item Name", "Product", "Name", "Product Name")
HSN_HEADERS = ("HSN", "HSN Code")
PRICE_HEADERS = ("Rate", "Price", "Base Price", "Ptr", "MRP")
TAX_HEADERS = ("GST", "Tax", "Tax Rate")
STOCK_HEADERS = ("Stock", "Qty", "Quantity")


class _InvalidCell(Exception):
    pass


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def lookup(row: Mapping[Any, Any], synonyms: tuple[str, ...]) -> Any:
    """Return the first non-blank value found under any of ``synonyms``."""
    for synonym in synonyms:
        if synonym in row and not _is_blank(row[synonym]):
            return row[synonym]
        wanted = synonym.lower()
        for key, value in row.items():
            if str(key).strip().lower() == wanted and not _is_blank(value):
                return value
    return None


def _number(value: Any) -> Decimal:
    if value is None:
        return Decimal(0)
    if isinstance(value, bool):
        raise _InvalidCell(value)
    if isinstance(value, float):
        value = repr(value)
    text = str(value).strip().replace(",", "")
    try:
        number = Decimal(text)
    except InvalidOperation as exc:
        raise _InvalidCell(value) from exc
    if not number.is_finite():
        raise _InvalidCell(value)
    return number


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


class CatalogRowNormalizer:

    def normalize(self, row: Mapping[Any, Any]) -> Product | None:
        """Build a Product from ``row``, or return None if the row is unusable.

        Rows without a recognizable name, with non-numeric cells in numeric
        columns, a tax rate outside the legal slabs, a negative price or a
        fractional stock are rejected.
        """
        name = _text(lookup(row, NAME_HEADERS)) or UNKNOWN_NAME
        if name == UNKNOWN_NAME:
            return None

        try:
            price = _number(lookup(row, PRICE_HEADERS))
            tax = lookup(row, TAX_HEADERS)
            if isinstance(tax, str):
                tax = tax.strip().rstrip("%")
            tax_rate = _number(tax)
            stock = _number(lookup(row, STOCK_HEADERS))
        except _InvalidCell as exc:
            logger.debug("Dropping row %r: non-numeric cell %r", name, exc.args[0])
            return None

        if stock != stock.to_integral_value():
            logger.debug("Dropping row %r: fractional stock %s", name, stock)
            return None

        try:
            return Product.create(
                name=name,
                hsn=_text(lookup(row, HSN_HEADERS)),
                price=Money(price),
                tax_rate=TaxRate.of(tax_rate),
                stock=int(stock),
            )
        except ValidationError as exc:
            logger.debug("Dropping row %r: %s", name, exc)
            return None

    def normalize_all(self, rows: list[Mapping[Any, Any]]) -> list[Product]:
        """Normalize every row, silently filtering the unusable ones."""
        products: list[Product] = []
        for row in rows:
            product = self.normalize(row)
            if product is not None:
                products.append(product)
        return products
