"""The seller's own letterhead details."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CompanyProfile:
    """``state`` is the home jurisdiction every sale is taxed from."""

    name: str
    address: str
    city: str
    state: str
    pincode: str
    phone: str
    gstin: str
