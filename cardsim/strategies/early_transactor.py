"""Early transactor — pays the whole statement the day after it closes."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal

from cardsim.strategies.base_strategy import PaymentInstruction, PaymentStrategy


@dataclass(frozen=True)
class EarlyTransactor(PaymentStrategy):
    """Pay the full statement balance on the first day of the grace period."""

    @property
    def name(self) -> str:
        return "EarlyTransactor"

    def next_payment(
        self,
        statement_balance: Decimal,
        cycle_start: dt.date,
        cycle_end: dt.date,
    ) -> tuple[PaymentInstruction, PaymentStrategy]:
        pay_date = cycle_end + dt.timedelta(days=1)
        return PaymentInstruction(statement_balance, pay_date), self
