"""Account health metrics and reports for simulation results."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Sequence

import numpy as np
import pandas as pd

from cardsim.engine.financial_model import FeeSchedule
from cardsim.engine.simulator import Summary
from cardsim.engine.transaction import Transaction


def count_late_cycles(summary: Summary, fees: FeeSchedule | None = None) -> int:
    """Number of cycles charged a late fee.

    Derived from the cumulative fee series: a cycle whose fee increment
    reaches the late fee must include one.
    """
    fees = fees or FeeSchedule()
    previous = Decimal("0")
    late = 0
    for cumulative in summary.fee_series:
        if cumulative - previous >= fees.late_fee_high:
            late += 1
        previous = cumulative
    return late


def compute_summary_metrics(summary: Summary, fees: FeeSchedule | None = None) -> dict[str, Any]:
    """Headline numbers for one simulation run.

    Returns:
        Dict with cycles, avg_balance, peak_balance, late_cycles,
        cycles_paid_in_full, net_cost, interest_per_cycle and
        effective_interest_rate. Balances are floats (for plotting and
        tables); net_cost stays a Decimal.

    The effective interest rate is the annualised interest paid per dollar
    of average statement balance: total_interest / avg_balance × 12 / cycles.
    """
    balances = np.array([float(b) for b in summary.balances], dtype=np.float64)
    payments = np.array([float(p) for p in summary.payment_series], dtype=np.float64)

    n = summary.num_cycles
    paid_in_full = int(np.sum((balances > 0) & np.isclose(payments, balances))) if n else 0
    avg_balance = float(np.mean(balances)) if n else 0.0
    effective_rate = 0.0
    if avg_balance > 0:
        effective_rate = float(summary.total_interest) / avg_balance * 12 / n

    return {
        "cycles": n,
        "avg_balance": avg_balance,
        "peak_balance": float(np.max(balances)) if n else 0.0,
        "late_cycles": count_late_cycles(summary, fees),
        "cycles_paid_in_full": paid_in_full,
        "net_cost": summary.net_cost,
        "interest_per_cycle": float(summary.total_interest) / n if n else 0.0,
        "effective_interest_rate": effective_rate,
    }


def category_spending_by_month(transactions: Sequence[Transaction]) -> pd.DataFrame:
    """Total purchase amount per calendar month and category.

    Payments are excluded. Rows are months (``YYYY-MM``), columns are
    category names; months without spending in a category show 0.
    """
    rows = [
        {
            "month": tx.date.strftime("%Y-%m"),
            "category": tx.category.value,
            "amount": float(tx.amount),
        }
        for tx in transactions
        if not tx.is_payment
    ]
    if not rows:
        return pd.DataFrame()

    df = pd.DataFrame(rows)
    table = df.pivot_table(
        index="month", columns="category", values="amount", aggfunc="sum", fill_value=0.0
    )
    table.columns.name = None
    return table.sort_index()


def format_statement(summary: Summary, title: str = "Account Simulation") -> str:
    """Human-readable monthly statement table with totals."""
    lines = [
        f"\n{'='*72}",
        f"  {title}",
        f"{'='*72}",
        f"  {'Cycle end':<12s}{'Balance':>14s}{'Interest':>12s}{'Fees (cum)':>14s}{'Payment':>14s}",
    ]
    for date, bal, interest, fee, pay in zip(
        summary.dates,
        summary.balances,
        summary.interest_series,
        summary.fee_series,
        summary.payment_series,
    ):
        lines.append(
            f"  {date.isoformat():<12s}"
            f"${bal:>12,.2f}"
            f"  ${interest:>9,.2f}"
            f"  ${fee:>11,.2f}"
            f"  ${pay:>11,.2f}"
        )
    lines.append(f"  {'─'*68}")
    lines.append(
        f"  Beginning: ${summary.beginning_balance:,.2f}  "
        f"Ending: ${summary.ending_balance:,.2f}  "
        f"Payments: ${summary.total_payments:,.2f}"
    )
    lines.append(
        f"  Interest: ${summary.total_interest:,.2f}  "
        f"Fees: ${summary.total_fees:,.2f}  "
        f"Rewards: ${summary.total_rewards:,.2f}  "
        f"Net cost: ${summary.net_cost:,.2f}"
    )
    return "\n".join(lines)
