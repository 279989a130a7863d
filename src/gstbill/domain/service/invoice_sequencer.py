"""Domain service: display numbering for invoices.

The number is derived from the identity of the most recently stored
invoice, not from a persisted counter.  Deleted invoices leave gaps, and
two writers reading the same last id will produce the same number.
"""

from __future__ import annotations

DEFAULT_PREFIX = "INV-"
DEFAULT_BASE = 1001


class InvoiceSequencer:

    def __init__(self, prefix: str = DEFAULT_PREFIX, base: int = DEFAULT_BASE) -> None:
        self._prefix = prefix
        self._base = base

    def next(self, last_persisted_id: int | None) -> str:
        """Return the invoice number following ``last_persisted_id``.

        ``None`` (no invoice stored yet) yields the base number.
        """
        offset = last_persisted_id or 0
        return f"{self._prefix}{self._base + offset}"
