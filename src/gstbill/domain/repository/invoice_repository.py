"""Abstract repository for Invoice aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from gstbill.domain.model.invoice import Invoice


class InvoiceRepository(ABC):

    @abstractmethod
    def last_id(self) -> int | None:
        """Return the highest stored invoice ID, or None if there is none."""

    @abstractmethod
    def get_by_id(self, invoice_id: int) -> Invoice | None:
        """Return an invoice by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Invoice]:
        """Return every invoice in ID order."""

    @abstractmethod
    def list_recent(self, limit: int) -> list[Invoice]:
        """Return up to *limit* invoices, newest ID first."""

    @abstractmethod
    def add(self, invoice: Invoice) -> Invoice:
        """Insert a new invoice in one atomic write and assign its ID."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of invoices."""
