"""Abstract repository for Party aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from gstbill.domain.model.party import Party


class PartyRepository(ABC):

    @abstractmethod
    def get_by_id(self, party_id: int) -> Party | None:
        """Return a party by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Party]:
        """Return every party."""

    @abstractmethod
    def search(self, text: str) -> list[Party]:
        """Return parties whose name (case-insensitive) or mobile contains *text*."""

    @abstractmethod
    def add(self, party: Party) -> Party:
        """Insert a new party and assign its ID."""

    @abstractmethod
    def update(self, party: Party) -> None:
        """Persist changes to an existing party."""

    @abstractmethod
    def delete(self, party_id: int) -> None:
        """Remove a party. Invoices referencing it are left untouched."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of parties."""
