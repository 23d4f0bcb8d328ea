"""Abstract base class for payment strategies."""

from __future__ import annotations

import datetime as dt
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Sequence

from cardsim.engine.financial_model import FeeSchedule, RewardPolicy, round_currency

if TYPE_CHECKING:
    from cardsim.engine.simulator import Summary
    from cardsim.engine.transaction import Transaction

MIN_PAYMENT_FLOOR = Decimal("30.00")
MIN_PAYMENT_RATE = Decimal("0.035")


@dataclass(frozen=True)
class PaymentInstruction:
    """One payment per cycle: how much, and on which day."""

    amount: Decimal
    date: dt.date


def minimum_payment(statement_balance: Decimal) -> Decimal:
    """Statement minimum: max($30, 3.5% of balance), rounded to cents."""
    return round_currency(max(MIN_PAYMENT_FLOOR, statement_balance * MIN_PAYMENT_RATE))


class PaymentStrategy(ABC):
    """Interface for scripted payment behaviours.

    Strategies are immutable values. Any per-cycle state (such as a cycle
    index) lives in the instance, and ``next_payment()`` hands back the
    strategy to use for the following cycle instead of mutating ``self``.
    One instance can therefore seed any number of independent simulations.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this strategy."""
        ...

    @abstractmethod
    def next_payment(
        self,
        statement_balance: Decimal,
        cycle_start: dt.date,
        cycle_end: dt.date,
    ) -> tuple[PaymentInstruction, PaymentStrategy]:
        """Decide this cycle's payment.

        Args:
            statement_balance: Balance due after fees and interest.
            cycle_start: First day of the billing cycle.
            cycle_end: Last day of the billing cycle.

        Returns:
            The payment instruction and the strategy for the next cycle.
        """
        ...

    def simulate(
        self,
        transactions: Sequence[Transaction],
        start_date: dt.date,
        end_date: dt.date,
        **kwargs,
    ) -> Summary:
        """Run a full simulation using this strategy.

        Keyword arguments are forwarded to ``AccountSimulator`` (reward
        policy, fee schedule, interest method, starting balance). The reward
        policy and fee schedule fall back to the standard 3/2/1% rates and
        pricing when not given.
        """
        from cardsim.engine.simulator import AccountSimulator

        kwargs.setdefault("reward_policy", RewardPolicy.default())
        kwargs.setdefault("fee_schedule", FeeSchedule())
        return AccountSimulator(
            transactions,
            payment_strategy=self,
            start_date=start_date,
            end_date=end_date,
            **kwargs,
        ).run()
