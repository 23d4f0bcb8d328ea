"""Plot simulation series and category spending.

Usage:
    python scripts/plot_simulation.py
    python scripts/plot_simulation.py --input results/simulation_series.csv
    python scripts/plot_simulation.py --transactions data/sample_transactions.csv
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt
import pandas as pd

from cardsim.evaluation.metrics import category_spending_by_month
from cardsim.utils.loader import load_transactions


# Color palette — muted, professional
COLORS = {
    "balance": "#3498db",
    "interest": "#e74c3c",
    "fees": "#9b59b6",
    "payment": "#2ecc71",
}


def make_series_plots(df: pd.DataFrame, output_path: str = "results/simulation_series.png") -> None:
    """Create a 4-panel line chart of the per-cycle series.

    Panels: Statement Balance, Interest, Cumulative Fees, Payments
    """
    dates = pd.to_datetime(df["date"])

    fig, axes = plt.subplots(2, 2, figsize=(14, 10), sharex=True)
    fig.suptitle("Account Simulation", fontsize=16, fontweight="bold", y=0.98)

    panels = [
        ("balance", "Statement Balance ($)", axes[0, 0]),
        ("interest", "Interest Charged ($)", axes[0, 1]),
        ("fees", "Cumulative Fees ($)", axes[1, 0]),
        ("payment", "Payment ($)", axes[1, 1]),
    ]

    for col, title, ax in panels:
        ax.plot(dates, df[col].astype(float), marker="o", markersize=3, color=COLORS[col])
        ax.set_title(title, fontsize=12, fontweight="bold")
        ax.tick_params(axis="x", rotation=30)
        ax.grid(axis="y", alpha=0.3)

    plt.tight_layout(rect=[0, 0, 1, 0.95])

    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(str(out), dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"Series plot saved to {out}")


def make_category_plot(table: pd.DataFrame, output_path: str = "results/category_spending.png") -> None:
    """Line chart of monthly spending per category."""
    fig, ax = plt.subplots(figsize=(12, 6))
    for category in table.columns:
        ax.plot(table.index, table[category], marker="o", label=category.title())

    ax.set_title("Category Spending Over Time", fontsize=14, fontweight="bold")
    ax.set_xlabel("Month")
    ax.set_ylabel("Total Amount (USD)")
    ax.tick_params(axis="x", rotation=30)
    ax.grid(axis="y", alpha=0.3)
    ax.legend()

    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(str(out), dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"Category plot saved to {out}")


def main():
    parser = argparse.ArgumentParser(description="Generate simulation charts")
    parser.add_argument(
        "--input",
        type=str,
        default="results/simulation_series.csv",
        help="Per-cycle series CSV from run_simulation.py",
    )
    parser.add_argument(
        "--transactions",
        type=str,
        default=None,
        help="Transaction CSV for the category spending chart",
    )
    parser.add_argument("--output-dir", type=str, default="results", help="Directory for images")
    args = parser.parse_args()

    csv_path = Path(args.input)
    if not csv_path.exists():
        print(f"Error: {csv_path} not found. Run run_simulation.py first.")
        sys.exit(1)

    df = pd.read_csv(csv_path)
    print(f"Loaded {len(df)} cycles from {csv_path}")
    make_series_plots(df, str(Path(args.output_dir) / "simulation_series.png"))

    if args.transactions:
        table = category_spending_by_month(load_transactions(args.transactions))
        if table.empty:
            print("No purchases to chart.")
        else:
            make_category_plot(table, str(Path(args.output_dir) / "category_spending.png"))


if __name__ == "__main__":
    main()
