"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from gstbill.domain.exceptions import ValidationError

# Legal GST slabs, in percent.
TAX_RATES: tuple[int, ...] = (0, 5, 12, 18, 28)

JURISDICTIONS: tuple[str, ...] = (
    "Andhra Pradesh", "Arunachal Pradesh", "Assam", "Bihar", "Chhattisgarh",
    "Goa", "Gujarat", "Haryana", "Himachal Pradesh", "Jharkhand", "Karnataka",
    "Kerala", "Madhya Pradesh", "Maharashtra", "Manipur", "Meghalaya",
    "Mizoram", "Nagaland", "Odisha", "Punjab", "Rajasthan", "Sikkim",
    "Tamil Nadu", "Telangana", "Tripura", "Uttar Pradesh", "Uttarakhand",
    "West Bengal", "Delhi",
)


@dataclass(frozen=True)
class Money:
    """Monetary amount in rupees.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.  Amounts keep full precision;
    rounding to paise only happens when formatting for display.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int) or isinstance(factor, bool):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor)

    def percent(self, rate: TaxRate) -> Money:
        """Return ``rate`` percent of this amount."""
        return Money(self.amount * Decimal(rate.value) / Decimal(100))

    def half(self) -> Money:
        return Money(self.amount / Decimal(2))

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"₹{self.amount:,.2f}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot bill zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TaxRate:
    """A GST percentage drawn from the legal slabs."""

    value: int

    def __post_init__(self) -> None:
        if self.value not in TAX_RATES:
            allowed = ", ".join(str(r) for r in TAX_RATES)
            raise ValidationError(
                f"Tax rate must be one of {allowed}, got {self.value!r}"
            )

    def __str__(self) -> str:
        return f"{self.value}%"

    @staticmethod
    def of(value: str | float | int | Decimal) -> TaxRate:
        try:
            number = Decimal(str(value).strip().rstrip("%"))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid tax rate: {value!r}") from exc
        if number != number.to_integral_value():
            raise ValidationError(f"Invalid tax rate: {value!r}")
        return TaxRate(int(number))


def canonical_state(name: str) -> str:
    """Return the canonical spelling of a jurisdiction, matched case-insensitively."""
    wanted = (name or "").strip().lower()
    for state in JURISDICTIONS:
        if state.lower() == wanted:
            return state
    raise ValidationError(f"Unknown state: {name!r}")
