"""Interest accrual models for one billing cycle.

Both models share the signature
``(balance, apr, cycle_start, cycle_end) -> Decimal`` and return an amount
rounded to cents. Daily rates carry 10 fractional digits:

    daily_rate = round(APR / 365, 10)
"""

from __future__ import annotations

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from cardsim.engine.errors import ValidationError
from cardsim.engine.financial_model import FeeSchedule, round_currency

DAYS_PER_YEAR = Decimal("365")
RATE_QUANTUM = Decimal("1E-10")

_DEFAULT_FEES = FeeSchedule()


class InterestMethod(str, Enum):
    """Selectable interest models."""

    SYNCHRONY_DAILY_BALANCE = "synchrony_daily_balance"
    AVERAGE_DAILY_BALANCE = "average_daily_balance"

    @classmethod
    def parse(cls, name: str | InterestMethod) -> InterestMethod:
        if isinstance(name, InterestMethod):
            return name
        key = str(name).strip().lower()
        for method in cls:
            if key in (method.value, method.name.lower()):
                return method
        valid = ", ".join(m.value for m in cls)
        raise ValidationError(f"Unknown interest method {name!r}. Valid: {valid}")


def daily_rate(apr: Decimal) -> Decimal:
    """APR ÷ 365, rounded HALF_UP to 10 fractional digits."""
    return (apr / DAYS_PER_YEAR).quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)


def daily_balance_breakdown(
    balance: Decimal,
    apr: Decimal,
    cycle_start: dt.date,
    cycle_end: dt.date,
) -> list[Decimal]:
    """Per-day accruals for the compounding daily-balance model.

    Each day with a positive running balance accrues ``balance × daily_rate``
    (10 digits), which is then added to the running balance. Days with a
    zero or negative balance accrue nothing.

    Returns:
        One entry per day in ``[cycle_start, cycle_end]``; empty when
        ``cycle_end`` precedes ``cycle_start``.
    """
    rate = daily_rate(apr)
    running = balance
    daily: list[Decimal] = []

    day = cycle_start
    while day <= cycle_end:
        accrued = Decimal("0")
        if running > 0:
            accrued = (running * rate).quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)
            running += accrued
        daily.append(accrued)
        day += dt.timedelta(days=1)

    return daily


def compute_daily_balance_interest(
    balance: Decimal,
    apr: Decimal,
    cycle_start: dt.date,
    cycle_end: dt.date,
    fees: FeeSchedule = _DEFAULT_FEES,
) -> Decimal:
    """Synchrony-style daily balance interest with daily compounding.

    The minimum interest charge is applied to the cycle total before
    rounding to cents.
    """
    total = sum(daily_balance_breakdown(balance, apr, cycle_start, cycle_end), Decimal("0"))
    total = fees.apply_minimum_interest(total)
    return round_currency(total)


def compute_average_daily_balance_interest(
    balance: Decimal,
    apr: Decimal,
    cycle_start: dt.date,
    cycle_end: dt.date,
) -> Decimal:
    """Constant-balance monthly model.

    Formula: I = B × daily_rate × days_in_cycle

    ``days_in_cycle`` is the day-of-month of ``cycle_end``, i.e. the month
    length for a calendar cycle. A zero or credit balance accrues nothing.
    """
    if balance <= 0:
        return Decimal("0.00")
    days = Decimal(cycle_end.day)
    return round_currency(balance * daily_rate(apr) * days)


def compute_interest(
    method: InterestMethod,
    balance: Decimal,
    apr: Decimal,
    cycle_start: dt.date,
    cycle_end: dt.date,
    fees: FeeSchedule = _DEFAULT_FEES,
) -> Decimal:
    """Compute one cycle's interest with the selected model."""
    if method is InterestMethod.SYNCHRONY_DAILY_BALANCE:
        return compute_daily_balance_interest(balance, apr, cycle_start, cycle_end, fees)
    elif method is InterestMethod.AVERAGE_DAILY_BALANCE:
        return compute_average_daily_balance_interest(balance, apr, cycle_start, cycle_end)
    else:
        raise ValidationError(f"Unknown interest method: {method!r}")
