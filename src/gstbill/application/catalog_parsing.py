"""Messages exchanged with the isolated spreadsheet parsing context.

One ``ParseRequest`` goes in; exactly one terminal message comes back:
either a ``ParsedBatch`` with the normalized, filtered records or a
``ParseFailure`` describing why the file could not be decoded.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Union

from gstbill.domain.model.product import Product


@dataclass(frozen=True)
class ParseRequest:
    data: bytes
    filename: str | None = None


@dataclass(frozen=True)
class ParsedBatch:
    records: list[Product] = field(default_factory=list)
    total_rows: int = 0  # data rows seen, before filtering


@dataclass(frozen=True)
class ParseFailure:
    message: str


ParseResult = Union[ParsedBatch, ParseFailure]


class ParseWorker(ABC):
    """A parsing context isolated from the caller."""

    @abstractmethod
    def submit(self, request: ParseRequest) -> ParseResult:
        """Send one request and block until its single terminal message arrives."""

    def close(self) -> None:
        """Release the context. Safe to call more than once."""

    def __enter__(self) -> ParseWorker:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
