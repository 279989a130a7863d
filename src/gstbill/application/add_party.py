"""Application service: Add Party use case."""

from __future__ import annotations

from gstbill.domain.model.party import Party
from gstbill.domain.repository.party_repository import PartyRepository


class AddPartyHandler:

    def __init__(self, party_repo: PartyRepository, default_state: str) -> None:
        self._party_repo = party_repo
        self._default_state = default_state

    def handle(
        self,
        name: str,
        mobile: str,
        state: str | None = None,
        gstin: str = "",
        address: str = "",
        email: str | None = None,
    ) -> Party:
        """Add a new party. Without a state, the seller's home state is used."""
        party = Party.create(
            name=name,
            mobile=mobile,
            state=state or self._default_state,
            gstin=gstin,
            address=address,
            email=email,
        )
        return self._party_repo.add(party)
