"""Transaction records consumed by the account simulator."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Iterable

from cardsim.engine.errors import ValidationError

CENT = Decimal("0.01")


class Category(str, Enum):
    """Spending category of a record. PAYMENT is informational only."""

    GROCERIES = "groceries"
    GAS = "gas"
    OTHER = "other"
    PAYMENT = "payment"

    @classmethod
    def parse(cls, label: str | Category | None) -> Category:
        """Map a free-form label to a Category. Unknown labels become OTHER."""
        if isinstance(label, Category):
            return label
        if label is None:
            return cls.OTHER
        try:
            return cls(str(label).strip().lower())
        except ValueError:
            return cls.OTHER


def to_amount(value: Decimal | int | float | str) -> Decimal:
    """Convert a numeric value to a 2-digit Decimal (HALF_UP).

    Floats go through ``str`` so 19.99 stays 19.99. Strings may carry a
    leading ``$``.
    """
    if isinstance(value, str):
        value = value.strip().replace("$", "")
    elif isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid amount {value!r}") from exc
    if not amount.is_finite():
        raise ValidationError(f"Invalid amount {value!r}")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Transaction:
    """An immutable dated record.

    The amount is always non-negative in this domain; whether a value is a
    purchase or a payment depends on where the simulator applies it.
    """

    date: dt.date
    category: Category
    amount: Decimal

    def __post_init__(self) -> None:
        if self.date is None:
            raise ValidationError("Transaction date is required")
        if self.category is None:
            raise ValidationError("Transaction category is required")
        if self.amount is None:
            raise ValidationError("Transaction amount is required")
        if not isinstance(self.date, dt.date):
            raise ValidationError(f"Transaction date must be a date, got {self.date!r}")

        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "category", Category.parse(self.category))
        object.__setattr__(self, "amount", to_amount(self.amount))

    @property
    def is_payment(self) -> bool:
        return self.category is Category.PAYMENT

    @property
    def month_start(self) -> dt.date:
        """First day of the calendar month this record falls in."""
        return self.date.replace(day=1)

    def __str__(self) -> str:
        return f"{self.date.isoformat()} {self.category.value:<9s} ${self.amount:>10,.2f}"


def sort_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Order by date; records on the same date keep their input order."""
    return sorted(transactions, key=lambda t: t.date)
