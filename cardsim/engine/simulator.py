"""AccountSimulator — month-by-month simulation of a revolving credit account.

Each iteration is one calendar-month billing cycle:

    purchases → paper fee → interest → payment decision → late fee
              → record series → apply payment → next month

The simulation is a pure function of its inputs. Payment-strategy state is
threaded through the cycle loop inside ``run()``, so two runs with the same
inputs return equal Summaries.
"""

from __future__ import annotations

import calendar
import datetime as dt
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

import pandas as pd

from cardsim.engine.errors import ValidationError
from cardsim.engine.financial_model import FeeSchedule, RewardPolicy, round_currency
from cardsim.engine.interest import (
    InterestMethod,
    compute_average_daily_balance_interest,
    compute_interest,
)
from cardsim.engine.transaction import Transaction, sort_transactions, to_amount
from cardsim.strategies.base_strategy import PaymentStrategy


@dataclass(frozen=True)
class Summary:
    """Totals and per-cycle series produced by one simulation run.

    The five series are parallel: entry ``k`` describes cycle ``k``.
    ``balances`` holds the statement balance (after fees and interest, before
    the payment); ``fee_series`` holds cumulative fees up to that cycle.
    """

    beginning_balance: Decimal
    ending_balance: Decimal
    total_payments: Decimal
    total_interest: Decimal
    total_fees: Decimal
    total_rewards: Decimal
    dates: tuple[dt.date, ...] = ()
    balances: tuple[Decimal, ...] = ()
    interest_series: tuple[Decimal, ...] = ()
    fee_series: tuple[Decimal, ...] = ()
    payment_series: tuple[Decimal, ...] = ()

    @property
    def num_cycles(self) -> int:
        return len(self.dates)

    @property
    def net_cost(self) -> Decimal:
        """Interest plus fees, less rewards earned."""
        return self.total_interest + self.total_fees - self.total_rewards

    def to_frame(self) -> pd.DataFrame:
        """Series as a DataFrame indexed by cycle number (Decimal columns kept as objects)."""
        return pd.DataFrame(
            {
                "date": list(self.dates),
                "balance": list(self.balances),
                "interest": list(self.interest_series),
                "fees": list(self.fee_series),
                "payment": list(self.payment_series),
            },
            index=pd.RangeIndex(self.num_cycles, name="cycle"),
        )


def month_end(month_start: dt.date) -> dt.date:
    """Last calendar day of the month starting at ``month_start``."""
    return month_start.replace(day=calendar.monthrange(month_start.year, month_start.month)[1])


def next_month(month_start: dt.date) -> dt.date:
    if month_start.month == 12:
        return dt.date(month_start.year + 1, 1, 1)
    return dt.date(month_start.year, month_start.month + 1, 1)


class AccountSimulator:
    """Walks calendar months applying purchases, fees, interest and payments.

    Cycle interest uses the constant-balance monthly model unless
    ``dispatch_interest_method`` is set, in which case ``interest_method``
    selects the model.
    """

    def __init__(
        self,
        transactions: Sequence[Transaction],
        reward_policy: RewardPolicy | None = None,
        fee_schedule: FeeSchedule | None = None,
        payment_strategy: PaymentStrategy | None = None,
        interest_method: InterestMethod | None = InterestMethod.SYNCHRONY_DAILY_BALANCE,
        starting_balance: Decimal | int | str | None = None,
        start_date: dt.date | None = None,
        end_date: dt.date | None = None,
        dispatch_interest_method: bool = False,
    ):
        """Validate configuration. Raises before any cycle is processed.

        Args:
            transactions: Records to apply; anything outside the date range is ignored.
            reward_policy: Category reward rates (required).
            fee_schedule: Pricing constants (required).
            payment_strategy: Payment behaviour (required).
            interest_method: Interest model selector (required).
            starting_balance: Opening balance; ``None`` means zero.
            start_date: First day of the simulated range (required).
            end_date: Last day of the simulated range (required).
            dispatch_interest_method: Use ``interest_method`` for cycle interest.

        Raises:
            ValidationError: Missing required value, or end_date before start_date.
        """
        if transactions is None:
            raise ValidationError("transactions is required (use an empty list for none)")
        if reward_policy is None:
            raise ValidationError("reward_policy is required")
        if fee_schedule is None:
            raise ValidationError("fee_schedule is required")
        if payment_strategy is None:
            raise ValidationError("payment_strategy is required")
        if interest_method is None:
            raise ValidationError("interest_method is required")
        if start_date is None or end_date is None:
            raise ValidationError("start_date and end_date are required")
        if end_date < start_date:
            raise ValidationError(
                f"end_date {end_date.isoformat()} is before start_date {start_date.isoformat()}"
            )

        self.transactions = list(transactions)
        self.reward_policy = reward_policy
        self.fees = fee_schedule
        self.payment_strategy = payment_strategy
        self.interest_method = InterestMethod.parse(interest_method)
        self.starting_balance = to_amount(starting_balance if starting_balance is not None else 0)
        self.start_date = start_date
        self.end_date = end_date
        self.dispatch_interest_method = dispatch_interest_method

    # ──────────────────────────────────────────────────────────────────────
    # Public API
    # ──────────────────────────────────────────────────────────────────────

    def run(self) -> Summary:
        """Simulate every calendar month from start_date's through end_date's."""
        fees = self.fees
        strategy = self.payment_strategy
        by_month = self._bucket_by_month()

        balance = round_currency(self.starting_balance)
        if not self.transactions and balance == 0:
            # Dormant account: nothing to bill
            zero = Decimal("0.00")
            return Summary(
                beginning_balance=balance,
                ending_balance=balance,
                total_payments=zero,
                total_interest=zero,
                total_fees=zero,
                total_rewards=zero,
            )

        total_rewards = Decimal("0")
        total_fees = Decimal("0")
        total_interest = Decimal("0")
        total_payments = Decimal("0")

        dates: list[dt.date] = []
        balances: list[Decimal] = []
        interest_series: list[Decimal] = []
        fee_series: list[Decimal] = []
        payment_series: list[Decimal] = []

        cursor = self.start_date.replace(day=1)
        final_month = self.end_date.replace(day=1)

        while cursor <= final_month:
            cycle_start = cursor
            cycle_end = month_end(cursor)

            # ── 1. Purchases & rewards ────────────────────────────────────
            for tx in by_month.get(cycle_start, []):
                balance += tx.amount
                total_rewards += self.reward_policy.reward_for(tx.category, tx.amount)

            # ── 2. Paper statement fee ────────────────────────────────────
            if fees.paper_fee_due(balance):
                balance += fees.paper_statement_fee
                total_fees += fees.paper_statement_fee

            # ── 3. Interest ───────────────────────────────────────────────
            interest = self._cycle_interest(balance, cycle_start, cycle_end)
            interest = round_currency(fees.apply_minimum_interest(interest))
            balance += interest
            total_interest += interest

            # ── 4. Payment decision ───────────────────────────────────────
            instruction, strategy = strategy.next_payment(balance, cycle_start, cycle_end)
            payment = min(instruction.amount, balance)

            # ── 5. Late fee (on the instructed date) ──────────────────────
            if fees.is_late(instruction.date, cycle_end):
                balance += fees.late_fee_high
                total_fees += fees.late_fee_high

            # ── 6. Statement series ───────────────────────────────────────
            dates.append(cycle_end)
            balances.append(balance)
            interest_series.append(interest)
            fee_series.append(total_fees)

            # ── 7. Apply payment ──────────────────────────────────────────
            balance -= payment
            total_payments += payment
            payment_series.append(payment)

            cursor = next_month(cursor)

        return Summary(
            beginning_balance=round_currency(self.starting_balance),
            ending_balance=round_currency(balance),
            total_payments=round_currency(total_payments),
            total_interest=round_currency(total_interest),
            total_fees=round_currency(total_fees),
            total_rewards=round_currency(total_rewards),
            dates=tuple(dates),
            balances=tuple(balances),
            interest_series=tuple(interest_series),
            fee_series=tuple(fee_series),
            payment_series=tuple(payment_series),
        )

    # ──────────────────────────────────────────────────────────────────────
    # Internal helpers
    # ──────────────────────────────────────────────────────────────────────

    def _bucket_by_month(self) -> dict[dt.date, list[Transaction]]:
        """Group in-range transactions by the first day of their month, in date order."""
        buckets: dict[dt.date, list[Transaction]] = defaultdict(list)
        for tx in sort_transactions(self.transactions):
            if self.start_date <= tx.date <= self.end_date:
                buckets[tx.month_start].append(tx)
        return buckets

    def _cycle_interest(
        self,
        balance: Decimal,
        cycle_start: dt.date,
        cycle_end: dt.date,
    ) -> Decimal:
        apr = self.fees.apr_purchases
        if self.dispatch_interest_method:
            return compute_interest(
                self.interest_method, balance, apr, cycle_start, cycle_end, self.fees
            )
        return compute_average_daily_balance_interest(balance, apr, cycle_start, cycle_end)
