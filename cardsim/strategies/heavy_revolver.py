"""Heavy revolver — minimum payments only, optionally late on a schedule."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, replace
from decimal import Decimal

from cardsim.engine.errors import ValidationError
from cardsim.strategies.base_strategy import (
    PaymentInstruction,
    PaymentStrategy,
    minimum_payment,
)


@dataclass(frozen=True)
class HeavyRevolver(PaymentStrategy):
    """Always pay max($30, 3.5% of balance); miss the due date every Nth cycle.

    A cycle is late when ``late_every_nth_cycle > 0`` and
    ``cycle_index % N == N - 1``. Late payments land 30 days after close,
    on-time ones 22 days after. ``late_every_nth_cycle = 0`` never pays late.
    """

    cycle_index: int = 0
    late_every_nth_cycle: int = 0

    def __post_init__(self) -> None:
        if self.late_every_nth_cycle < 0:
            raise ValidationError(
                f"late_every_nth_cycle must be >= 0, got {self.late_every_nth_cycle}"
            )

    @property
    def name(self) -> str:
        return "HeavyRevolver"

    @property
    def is_late_cycle(self) -> bool:
        n = self.late_every_nth_cycle
        return n > 0 and self.cycle_index % n == n - 1

    def next_payment(
        self,
        statement_balance: Decimal,
        cycle_start: dt.date,
        cycle_end: dt.date,
    ) -> tuple[PaymentInstruction, PaymentStrategy]:
        days = 30 if self.is_late_cycle else 22
        pay_date = cycle_end + dt.timedelta(days=days)
        return (
            PaymentInstruction(minimum_payment(statement_balance), pay_date),
            replace(self, cycle_index=self.cycle_index + 1),
        )
