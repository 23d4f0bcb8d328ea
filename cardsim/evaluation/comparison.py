"""Side-by-side comparison of payment strategies on the same purchases."""

from __future__ import annotations

import datetime as dt
from typing import Sequence

import pandas as pd

from cardsim.engine.financial_model import FeeSchedule, RewardPolicy
from cardsim.engine.transaction import Transaction
from cardsim.evaluation.metrics import compute_summary_metrics
from cardsim.strategies import ALL_STRATEGIES, PaymentStrategy


def default_strategies() -> list[PaymentStrategy]:
    """One instance of each strategy with default parameters."""
    return [cls() for cls in ALL_STRATEGIES]


def compare_strategies(
    transactions: Sequence[Transaction],
    start_date: dt.date,
    end_date: dt.date,
    strategies: Sequence[PaymentStrategy] | None = None,
    **sim_kwargs,
) -> pd.DataFrame:
    """Simulate every strategy on identical inputs.

    Args:
        transactions: Purchase history shared by all runs.
        start_date: First day of the simulated range.
        end_date: Last day of the simulated range.
        strategies: Strategies to compare; defaults to all of them.
        **sim_kwargs: Forwarded to ``AccountSimulator`` (starting_balance,
            interest_method, reward_policy, fee_schedule, ...).

    Returns:
        DataFrame with one row per strategy, in input order.
    """
    if strategies is None:
        strategies = default_strategies()
    sim_kwargs.setdefault("reward_policy", RewardPolicy.default())
    fees = sim_kwargs.setdefault("fee_schedule", FeeSchedule())

    rows: list[dict] = []
    for strategy in strategies:
        summary = strategy.simulate(transactions, start_date, end_date, **sim_kwargs)
        metrics = compute_summary_metrics(summary, fees)
        rows.append({
            "strategy": strategy.name,
            "total_payments": float(summary.total_payments),
            "total_interest": float(summary.total_interest),
            "total_fees": float(summary.total_fees),
            "total_rewards": float(summary.total_rewards),
            "ending_balance": float(summary.ending_balance),
            "net_cost": float(metrics["net_cost"]),
            "avg_balance": round(metrics["avg_balance"], 2),
            "late_cycles": metrics["late_cycles"],
            "effective_interest_rate": round(metrics["effective_interest_rate"], 4),
        })

    return pd.DataFrame(rows)
