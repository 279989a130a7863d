"""Port for the printable invoice document."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from gstbill.domain.model.invoice import Invoice
from gstbill.domain.model.party import Party


class DocumentRenderer(ABC):

    @abstractmethod
    def render(self, invoice: Invoice, party: Party) -> Path:
        """Produce the printable document for a saved invoice and return its location."""
