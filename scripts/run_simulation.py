"""Run one account simulation from a YAML config and a transaction CSV.

Usage:
    python scripts/run_simulation.py
    python scripts/run_simulation.py --config configs/simulation/heavy_revolver.yaml
    python scripts/run_simulation.py --transactions data/sample_transactions.csv --output results
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from cardsim.evaluation.metrics import compute_summary_metrics, format_statement
from cardsim.utils.config import load_sim_config, resolve_path
from cardsim.utils.loader import load_transactions


def main():
    parser = argparse.ArgumentParser(description="Simulate a credit card account month by month")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/simulation/default.yaml",
        help="Path to simulation YAML",
    )
    parser.add_argument(
        "--transactions",
        type=str,
        default=None,
        help="Transaction CSV (overrides transactions_path in the config)",
    )
    parser.add_argument("--output", type=str, default="results", help="Output directory")
    args = parser.parse_args()

    cfg = load_sim_config(args.config)
    csv_arg = args.transactions or cfg.transactions_path
    if csv_arg is None:
        print("Error: no transaction CSV given (--transactions or transactions_path).")
        sys.exit(1)

    csv_path = resolve_path(csv_arg)
    if not csv_path.exists():
        print(f"Error: {csv_path} not found.")
        sys.exit(1)

    transactions = load_transactions(csv_path)
    print(f"Loaded {len(transactions)} transactions from {csv_path}")

    simulator = cfg.build_simulator(transactions)
    summary = simulator.run()

    title = (
        f"{simulator.payment_strategy.name} — "
        f"{cfg.start_date.isoformat()} to {cfg.end_date.isoformat()}"
    )
    print(format_statement(summary, title=title))

    metrics = compute_summary_metrics(summary)
    print(
        f"\n  Avg balance: ${metrics['avg_balance']:,.2f}  "
        f"Peak: ${metrics['peak_balance']:,.2f}  "
        f"Late cycles: {metrics['late_cycles']}  "
        f"Effective rate: {metrics['effective_interest_rate']:.2%}"
    )

    out_path = Path(args.output)
    out_path.mkdir(parents=True, exist_ok=True)
    series_path = out_path / "simulation_series.csv"
    summary.to_frame().to_csv(series_path)
    print(f"\nPer-cycle series saved to {series_path}")


if __name__ == "__main__":
    main()
