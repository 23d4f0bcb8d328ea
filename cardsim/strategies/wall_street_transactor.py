"""Wall Street transactor — pays in full on the last day of grace."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal

from cardsim.strategies.base_strategy import PaymentInstruction, PaymentStrategy


@dataclass(frozen=True)
class WallStreetTransactor(PaymentStrategy):
    """Pay the full statement balance as late as possible without a fee.

    Keeps the cash for 22 days after the statement closes.
    """

    @property
    def name(self) -> str:
        return "WallStreetTransactor"

    def next_payment(
        self,
        statement_balance: Decimal,
        cycle_start: dt.date,
        cycle_end: dt.date,
    ) -> tuple[PaymentInstruction, PaymentStrategy]:
        pay_date = cycle_end + dt.timedelta(days=22)
        return PaymentInstruction(statement_balance, pay_date), self
