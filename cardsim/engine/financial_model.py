"""Fee and reward tables for the account simulation.

Implements the account's pricing rules:
- Currency rounding (HALF_UP to cents)
- Category rewards
- Paper-statement fee threshold
- Minimum interest charge
- Late payment test against the grace period
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from cardsim.engine.transaction import CENT, Category


def round_currency(value: Decimal | None) -> Decimal | None:
    """Round to cents, HALF_UP. ``None`` passes through unchanged."""
    if value is None:
        return None
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class FeeSchedule:
    """Card pricing constants.

    ``apr_penalty``, ``promotional_fee_rate`` and ``late_fee_low`` are part of
    the card agreement but are not charged by the simulator.
    """

    apr_purchases: Decimal = Decimal("0.3499")
    apr_penalty: Decimal = Decimal("0.3999")
    min_interest_charge: Decimal = Decimal("2.00")
    paper_statement_fee: Decimal = Decimal("1.99")
    promotional_fee_rate: Decimal = Decimal("0.02")
    late_fee_low: Decimal = Decimal("30.00")
    late_fee_high: Decimal = Decimal("41.00")
    paper_fee_threshold: Decimal = Decimal("2.50")
    grace_period_days: int = 23

    def paper_fee_due(self, balance: Decimal) -> bool:
        """Paper statement fee applies only above the threshold (2.50 itself is free)."""
        return balance > self.paper_fee_threshold

    def apply_minimum_interest(self, interest: Decimal) -> Decimal:
        """Raise a positive charge below the minimum up to the minimum.

        Zero and negative amounts are returned unchanged.
        """
        if Decimal("0") < interest < self.min_interest_charge:
            return self.min_interest_charge
        return interest

    def payment_due_date(self, cycle_end: dt.date) -> dt.date:
        """Last on-time payment date for a cycle."""
        return cycle_end + dt.timedelta(days=self.grace_period_days)

    def is_late(self, payment_date: dt.date, cycle_end: dt.date) -> bool:
        """A payment is late when made strictly after the due date."""
        return payment_date > self.payment_due_date(cycle_end)


@dataclass(frozen=True)
class RewardPolicy:
    """Cash-back rates by spending category."""

    groceries_rate: Decimal = Decimal("0.03")
    gas_rate: Decimal = Decimal("0.02")
    other_rate: Decimal = Decimal("0.01")

    @classmethod
    def default(cls) -> RewardPolicy:
        """3% groceries, 2% gas, 1% everything else."""
        return cls()

    def rate_for(self, category: str | Category | None) -> Decimal:
        if category is None:
            return self.other_rate
        label = category.value if isinstance(category, Category) else str(category)
        label = label.strip().lower()
        if label == Category.GROCERIES.value:
            return self.groceries_rate
        if label == Category.GAS.value:
            return self.gas_rate
        return self.other_rate

    def reward_for(self, category: str | Category | None, amount: Decimal) -> Decimal:
        """Reward earned on a purchase. Unrounded; the simulator rounds the total."""
        return amount * self.rate_for(category)
