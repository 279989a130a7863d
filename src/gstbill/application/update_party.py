"""Application service: Update Party use case."""

from __future__ import annotations

from gstbill.domain.exceptions import EntityNotFoundError
from gstbill.domain.model.party import Party
from gstbill.domain.repository.party_repository import PartyRepository


class UpdatePartyHandler:

    def __init__(self, party_repo: PartyRepository) -> None:
        self._party_repo = party_repo

    def handle(
        self,
        party_id: int,
        name: str | None = None,
        mobile: str | None = None,
        state: str | None = None,
        gstin: str | None = None,
        address: str | None = None,
        email: str | None = None,
    ) -> Party:
        """Update a party.

        Past invoices keep the party name they were issued with.
        """
        party = self._party_repo.get_by_id(party_id)
        if party is None:
            raise EntityNotFoundError(f"Party #{party_id} not found")

        party.update(
            name=name,
            mobile=mobile,
            state=state,
            gstin=gstin,
            address=address,
            email=email,
        )
        self._party_repo.update(party)
        return party
