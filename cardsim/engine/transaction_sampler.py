"""TransactionSampler — generates synthetic purchase histories.

Produces random monthly purchase streams with configurable category mix,
purchase counts and amounts, for benchmarking payment strategies without a
CSV export. Also provides named presets for reproducible comparisons.
"""

from __future__ import annotations

import calendar
import datetime as dt
from decimal import Decimal

import numpy as np

from cardsim.engine.transaction import Category, Transaction, sort_transactions

_PURCHASE_CATEGORIES = [Category.GROCERIES, Category.GAS, Category.OTHER]


class TransactionSampler:
    """Generate randomized or preset purchase histories."""

    def __init__(
        self,
        purchases_per_month_range: tuple[int, int] = (4, 12),
        amount_range: tuple[float, float] = (5.0, 250.0),
        category_weights: tuple[float, float, float] = (0.4, 0.2, 0.4),
    ):
        if len(category_weights) != len(_PURCHASE_CATEGORIES):
            raise ValueError(
                f"category_weights needs {len(_PURCHASE_CATEGORIES)} entries "
                f"(groceries, gas, other), got {len(category_weights)}"
            )
        total = float(sum(category_weights))
        if total <= 0:
            raise ValueError("category_weights must sum to a positive number")

        self.purchases_per_month_range = purchases_per_month_range
        self.amount_range = amount_range
        self.category_weights = tuple(w / total for w in category_weights)

    def sample(
        self,
        start_date: dt.date,
        end_date: dt.date,
        rng: np.random.Generator | None = None,
    ) -> list[Transaction]:
        """Sample purchases for every month touching ``[start_date, end_date]``.

        Args:
            start_date: First day purchases may fall on.
            end_date: Last day purchases may fall on.
            rng: Numpy random Generator for reproducibility.

        Returns:
            Transactions in date order.
        """
        if end_date < start_date:
            raise ValueError(f"end_date {end_date} is before start_date {start_date}")
        if rng is None:
            rng = np.random.default_rng()

        transactions: list[Transaction] = []
        month = start_date.replace(day=1)
        while month <= end_date:
            last_day = calendar.monthrange(month.year, month.month)[1]
            first = max(start_date, month)
            last = min(end_date, month.replace(day=last_day))

            count = rng.integers(
                self.purchases_per_month_range[0], self.purchases_per_month_range[1] + 1
            )
            span = (last - first).days
            for _ in range(count):
                day = first + dt.timedelta(days=int(rng.integers(0, span + 1)))
                idx = rng.choice(len(_PURCHASE_CATEGORIES), p=self.category_weights)
                category = _PURCHASE_CATEGORIES[idx]
                amount = round(float(rng.uniform(*self.amount_range)), 2)
                transactions.append(Transaction(day, category, Decimal(f"{amount:.2f}")))

            month = month.replace(day=last_day) + dt.timedelta(days=1)

        return sort_transactions(transactions)

    @staticmethod
    def preset(name: str) -> TransactionSampler:
        """Return a named spending profile.

        Available presets:
            - "light_spender": a few small purchases a month
            - "heavy_spender": many large purchases a month
            - "commuter": gas-heavy spending

        Raises:
            ValueError: If preset name is unknown.
        """
        presets = {
            "light_spender": TransactionSampler(
                purchases_per_month_range=(1, 4),
                amount_range=(5.0, 60.0),
            ),
            "heavy_spender": TransactionSampler(
                purchases_per_month_range=(15, 30),
                amount_range=(20.0, 400.0),
            ),
            "commuter": TransactionSampler(
                purchases_per_month_range=(6, 14),
                amount_range=(25.0, 90.0),
                category_weights=(0.2, 0.6, 0.2),
            ),
        }

        if name not in presets:
            valid = ", ".join(sorted(presets.keys()))
            raise ValueError(f"Unknown preset {name!r}. Valid: {valid}")

        return presets[name]
