"""JSON-file-backed implementation of PartyRepository."""

from __future__ import annotations

from pathlib import Path

from gstbill.domain.model.party import Party
from gstbill.domain.repository.party_repository import PartyRepository
from gstbill.infrastructure.persistence.json_file import JsonFile


class JsonPartyRepository(PartyRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- PartyRepository interface --------------------------------------------

    def get_by_id(self, party_id: int) -> Party | None:
        for raw in self._file.load():
            if raw["id"] == party_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Party]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def search(self, text: str) -> list[Party]:
        needle = text.lower()
        return [
            p for p in self.list_all()
            if needle in p.name.lower() or text in p.mobile
        ]

    def add(self, party: Party) -> Party:
        records = self._file.load()
        raw = self._to_raw(party)
        raw["id"] = self._file.next_id(records)
        self._file.persist(records + [raw])
        party.id = raw["id"]
        return party

    def update(self, party: Party) -> None:
        records = self._file.load()
        for i, raw in enumerate(records):
            if raw["id"] == party.id:
                records[i] = self._to_raw(party)
                break
        else:
            records.append(self._to_raw(party))
        self._file.persist(records)

    def delete(self, party_id: int) -> None:
        records = self._file.load()
        self._file.persist([r for r in records if r["id"] != party_id])

    def count(self) -> int:
        return len(self._file.load())

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(party: Party) -> dict:
        return {
            "id": party.id,
            "name": party.name,
            "gstin": party.gstin,
            "mobile": party.mobile,
            "address": party.address,
            "state": party.state,
            "email": party.email,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Party:
        return Party(
            id=raw["id"],
            name=raw["name"],
            gstin=raw.get("gstin", ""),
            mobile=raw.get("mobile", ""),
            address=raw.get("address", ""),
            state=raw["state"],
            email=raw.get("email"),
        )
