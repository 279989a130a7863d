"""Application service: Create Invoice use case.

Orchestrates the flow between repositories and the domain model.
This is the only place that coordinates multiple aggregates (Party and
Product lookup + Invoice creation).
"""

from __future__ import annotations

from gstbill.application.dto import InvoiceDTO, InvoiceLineSpec, to_invoice_dto
from gstbill.application.invoice_assembler import InvoiceAssembler
from gstbill.domain.exceptions import EntityNotFoundError, ValidationError
from gstbill.domain.model.invoice import InvoiceItem
from gstbill.domain.model.value_objects import Quantity
from gstbill.domain.repository.party_repository import PartyRepository
from gstbill.domain.repository.product_repository import ProductRepository
from gstbill.domain.service.tax_calculator import TaxSplitCalculator


class CreateInvoiceHandler:

    def __init__(
        self,
        party_repo: PartyRepository,
        product_repo: ProductRepository,
        assembler: InvoiceAssembler,
        home_state: str,
        calculator: TaxSplitCalculator | None = None,
    ) -> None:
        self._party_repo = party_repo
        self._product_repo = product_repo
        self._assembler = assembler
        self._home_state = home_state
        self._calculator = calculator or TaxSplitCalculator()

    def handle(self, party_id: int | None, line_specs: list[InvoiceLineSpec]) -> InvoiceDTO:
        """Bill a party for a list of products.

        Steps:
        1. Resolve the party and each product ID (fail if not found).
        2. Price every line with the *current* product data (snapshot).
        3. Let the assembler total, number, persist and render the invoice.
        """
        if party_id is None:
            raise ValidationError("A party must be selected")
        if not line_specs:
            raise ValidationError("Invoice must contain at least one item")

        party = self._party_repo.get_by_id(party_id)
        if party is None:
            raise EntityNotFoundError(f"Party #{party_id} not found")

        items: list[InvoiceItem] = []
        for spec in line_specs:
            product = self._product_repo.get_by_id(spec.product_id)
            if product is None:
                raise EntityNotFoundError(f"Product #{spec.product_id} not found")
            items.append(
                self._calculator.price_line(
                    product,
                    Quantity(spec.quantity),
                    origin_state=self._home_state,
                    destination_state=party.state,
                )
            )

        result = self._assembler.assemble(party, items)
        return to_invoice_dto(result.invoice, document=str(result.document))
