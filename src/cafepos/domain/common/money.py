from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    amount_cents: int
    currency: str

    def __post_init__(self) -> None:
        if self.amount_cents < 0:
            raise ValueError("amount_cents must be >= 0")
        if len(self.currency) != 3 or not self.currency.isalpha() or not self.currency.isupper():
            raise ValueError("currency must be a 3-letter uppercase code")

    @classmethod
    def zero(cls, currency: str) -> Money:
        return cls(amount_cents=0, currency=currency)

    @classmethod
    def from_decimal(cls, value: Decimal | float | int | str, currency: str) -> Money:
        """Convert a decimal currency amount (e.g. ``3.5``) to whole cents."""
        amount = Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)
        return cls(amount_cents=int(amount * 100), currency=currency)

    @classmethod
    def sum(cls, values: Iterable[Money], currency: str) -> Money:
        total = cls.zero(currency)
        for value in values:
            total = total + value
        return total

    def __add__(self, other: Money) -> Money:
        self._ensure_same_currency(other)
        return Money(amount_cents=self.amount_cents + other.amount_cents, currency=self.currency)

    def __sub__(self, other: Money) -> Money:
        self._ensure_same_currency(other)
        return Money(amount_cents=self.amount_cents - other.amount_cents, currency=self.currency)

    def __mul__(self, factor: int) -> Money:
        return Money(amount_cents=self.amount_cents * factor, currency=self.currency)

    __rmul__ = __mul__

    def __lt__(self, other: Money) -> bool:
        self._ensure_same_currency(other)
        return self.amount_cents < other.amount_cents

    def to_decimal(self) -> Decimal:
        return (Decimal(self.amount_cents) / 100).quantize(_CENT)

    def format(self) -> str:
        return f"{self.to_decimal():.2f}"

    def _ensure_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValueError(f"currency mismatch: {self.currency} != {other.currency}")
