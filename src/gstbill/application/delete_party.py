"""Application service: Delete Party use case.

Deleting a party that past invoices point at is allowed; those invoices
keep the denormalized party name.
"""

from __future__ import annotations

from gstbill.domain.exceptions import EntityNotFoundError
from gstbill.domain.repository.party_repository import PartyRepository


class DeletePartyHandler:

    def __init__(self, party_repo: PartyRepository) -> None:
        self._party_repo = party_repo

    def handle(self, party_id: int) -> None:
        if self._party_repo.get_by_id(party_id) is None:
            raise EntityNotFoundError(f"Party #{party_id} not found")
        self._party_repo.delete(party_id)
