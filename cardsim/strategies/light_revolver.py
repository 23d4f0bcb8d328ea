"""Light revolver — minimum payments, cleared in full every sixth cycle."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, replace
from decimal import Decimal

from cardsim.strategies.base_strategy import (
    PaymentInstruction,
    PaymentStrategy,
    minimum_payment,
)

CYCLE_LENGTH = 6


@dataclass(frozen=True)
class LightRevolver(PaymentStrategy):
    """Carry a balance for five cycles, then pay it off.

    Cycles with ``cycle_index % 6 == 5`` pay the full statement; every other
    cycle pays max($30, 3.5% of balance). Always paid 22 days after close.
    """

    cycle_index: int = 0

    @property
    def name(self) -> str:
        return "LightRevolver"

    @property
    def pays_in_full(self) -> bool:
        return self.cycle_index % CYCLE_LENGTH == CYCLE_LENGTH - 1

    def next_payment(
        self,
        statement_balance: Decimal,
        cycle_start: dt.date,
        cycle_end: dt.date,
    ) -> tuple[PaymentInstruction, PaymentStrategy]:
        pay_date = cycle_end + dt.timedelta(days=22)
        if self.pays_in_full:
            amount = statement_balance
        else:
            amount = minimum_payment(statement_balance)
        return (
            PaymentInstruction(amount, pay_date),
            replace(self, cycle_index=self.cycle_index + 1),
        )
