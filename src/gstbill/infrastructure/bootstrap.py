"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from gstbill.application.import_catalog import BulkImportPipeline
from gstbill.application.invoice_assembler import InvoiceAssembler
from gstbill.domain.model.company import CompanyProfile
from gstbill.domain.service.invoice_sequencer import InvoiceSequencer
from gstbill.infrastructure.config import get_settings
from gstbill.infrastructure.importing.process_worker import ProcessParseWorker
from gstbill.infrastructure.persistence.json_invoice_repository import (
    JsonInvoiceRepository,
)
from gstbill.infrastructure.persistence.json_party_repository import (
    JsonPartyRepository,
)
from gstbill.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from gstbill.infrastructure.rendering.html_invoice_renderer import HtmlInvoiceRenderer


def company_profile() -> CompanyProfile:
    return get_settings().company


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(get_settings().DATA_DIR / "products.json")


def party_repository() -> JsonPartyRepository:
    return JsonPartyRepository(get_settings().DATA_DIR / "parties.json")


def invoice_repository() -> JsonInvoiceRepository:
    return JsonInvoiceRepository(get_settings().DATA_DIR / "invoices.json")


def invoice_assembler() -> InvoiceAssembler:
    settings = get_settings()
    return InvoiceAssembler(
        invoice_repo=invoice_repository(),
        renderer=HtmlInvoiceRenderer(settings.company, settings.DOCUMENTS_DIR),
        sequencer=InvoiceSequencer(
            prefix=settings.INVOICE_PREFIX, base=settings.INVOICE_NUMBER_BASE
        ),
    )


def import_pipeline(worker: ProcessParseWorker) -> BulkImportPipeline:
    settings = get_settings()
    return BulkImportPipeline(
        product_repo=product_repository(),
        worker=worker,
        chunk_size=settings.IMPORT_CHUNK_SIZE,
        yield_delay=settings.IMPORT_YIELD_DELAY,
    )
