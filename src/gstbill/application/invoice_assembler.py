"""Application service: assemble, persist and render one invoice.

Persisting and rendering are two sequential steps, not one transaction.
If rendering fails after the insert succeeded, the invoice stays saved
without a document and the failure is reported to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from gstbill.application.document_renderer import DocumentRenderer
from gstbill.domain.exceptions import DocumentRenderError, StorageError, ValidationError
from gstbill.domain.model.invoice import Invoice, InvoiceItem
from gstbill.domain.model.party import Party
from gstbill.domain.repository.invoice_repository import InvoiceRepository
from gstbill.domain.service.invoice_sequencer import InvoiceSequencer

logger = logging.getLogger("gstbill.billing")


@dataclass(frozen=True)
class AssembledInvoice:
    invoice: Invoice
    document: Path


class InvoiceAssembler:

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        renderer: DocumentRenderer,
        sequencer: InvoiceSequencer | None = None,
    ) -> None:
        self._invoice_repo = invoice_repo
        self._renderer = renderer
        self._sequencer = sequencer or InvoiceSequencer()

    def assemble(
        self,
        party: Party | None,
        items: list[InvoiceItem],
        date: datetime | None = None,
    ) -> AssembledInvoice:
        """Build the invoice aggregate from priced lines, save it, render it.

        Raises ValidationError before touching the store when no party is
        selected or there are no lines.
        """
        if party is None:
            raise ValidationError("A party must be selected")
        if not items:
            raise ValidationError("Invoice must contain at least one item")

        invoice_no = self._sequencer.next(self._invoice_repo.last_id())
        invoice = Invoice.create(invoice_no, party, items, date=date)

        try:
            invoice = self._invoice_repo.add(invoice)
        except StorageError:
            logger.error("Failed to save invoice %s", invoice_no, exc_info=True)
            raise
        logger.info(
            "Saved invoice %s (id=%s) for %s: %d lines, grand total %s",
            invoice.invoice_no, invoice.id, invoice.party_name,
            len(invoice.items), invoice.grand_total,
        )

        try:
            document = self._renderer.render(invoice, party)
        except (DocumentRenderError, OSError) as exc:
            logger.error(
                "Invoice %s saved but its document could not be rendered: %s",
                invoice.invoice_no, exc,
            )
            raise DocumentRenderError(
                f"Invoice {invoice.invoice_no} was saved but the document "
                f"could not be generated: {exc}"
            ) from exc

        logger.info("Rendered invoice %s to %s", invoice.invoice_no, document)
        return AssembledInvoice(invoice=invoice, document=document)
