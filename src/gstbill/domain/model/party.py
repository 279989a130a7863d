"""Party aggregate: a customer or supplier that can be billed."""

from __future__ import annotations

from dataclasses import dataclass

from gstbill.domain.exceptions import ValidationError
from gstbill.domain.model.value_objects import canonical_state

GSTIN_LENGTH = 15


def normalize_gstin(raw: str | None) -> str:
    """Upper-case and truncate a GSTIN. No checksum is verified."""
    return (raw or "").strip().upper()[:GSTIN_LENGTH]


@dataclass
class Party:
    """Aggregate root for billing counterparties.

    Parties may be deleted even while past invoices still reference them;
    invoices carry a denormalized copy of the name for that reason.
    """

    id: int | None
    name: str
    gstin: str
    mobile: str
    address: str
    state: str
    email: str | None = None

    @staticmethod
    def create(
        name: str,
        mobile: str,
        state: str,
        gstin: str = "",
        address: str = "",
        email: str | None = None,
    ) -> Party:
        """Create a new party, enforcing all invariants."""
        if not name or not name.strip():
            raise ValidationError("Party name is required")
        if not mobile or not mobile.strip():
            raise ValidationError("Mobile number is required")

        return Party(
            id=None,
            name=name.strip(),
            gstin=normalize_gstin(gstin),
            mobile=mobile.strip(),
            address=(address or "").strip(),
            state=canonical_state(state),
            email=email.strip() if email and email.strip() else None,
        )

    def update(
        self,
        name: str | None = None,
        mobile: str | None = None,
        state: str | None = None,
        gstin: str | None = None,
        address: str | None = None,
        email: str | None = None,
    ) -> None:
        if name is not None:
            if not name.strip():
                raise ValidationError("Party name is required")
            self.name = name.strip()
        if mobile is not None:
            if not mobile.strip():
                raise ValidationError("Mobile number is required")
            self.mobile = mobile.strip()
        if state is not None:
            self.state = canonical_state(state)
        if gstin is not None:
            self.gstin = normalize_gstin(gstin)
        if address is not None:
            self.address = address.strip()
        if email is not None:
            self.email = email.strip() or None
