"""Compare all payment strategies on the same purchase history.

Usage:
    python scripts/compare_strategies.py                                  # sample CSV
    python scripts/compare_strategies.py --preset heavy_spender --seeds 42 123 456
    python scripts/compare_strategies.py --transactions my_statement.csv --late-every 3
"""

import argparse
import sys
import time
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import numpy as np
import pandas as pd

from cardsim.engine.transaction_sampler import TransactionSampler
from cardsim.evaluation.comparison import compare_strategies
from cardsim.strategies import EarlyTransactor, HeavyRevolver, LightRevolver, WallStreetTransactor
from cardsim.utils.config import load_sim_config, resolve_path
from cardsim.utils.loader import load_transactions


def print_summary(df: pd.DataFrame) -> None:
    """Print mean totals grouped by strategy."""
    summary = (
        df.groupby("strategy", sort=False)[
            ["total_interest", "total_fees", "total_rewards", "net_cost", "late_cycles"]
        ]
        .mean()
        .round(2)
    )
    print("\n" + "=" * 90)
    print("  STRATEGY COMPARISON — Mean over runs")
    print("=" * 90)
    print(summary.to_string())
    print()


def main():
    parser = argparse.ArgumentParser(description="Compare payment strategies")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/simulation/default.yaml",
        help="Simulation YAML (date range, starting balance, interest method)",
    )
    parser.add_argument("--transactions", type=str, default=None, help="Transaction CSV")
    parser.add_argument("--preset", type=str, default=None, help="Sample purchases from a preset")
    parser.add_argument("--seeds", type=int, nargs="+", default=[42], help="Sampler seeds")
    parser.add_argument("--late-every", type=int, default=6, help="HeavyRevolver lateness modulus")
    parser.add_argument("--output", type=str, default="results", help="Output directory")
    args = parser.parse_args()

    cfg = load_sim_config(args.config)
    strategies = [
        EarlyTransactor(),
        WallStreetTransactor(),
        LightRevolver(cycle_index=cfg.strategy.start_index),
        HeavyRevolver(cycle_index=cfg.strategy.start_index, late_every_nth_cycle=args.late_every),
    ]
    sim_kwargs = dict(
        reward_policy=cfg.build_reward_policy(),
        interest_method=cfg.interest_method,
        starting_balance=cfg.starting_balance,
        dispatch_interest_method=cfg.dispatch_interest_method,
    )

    if args.preset:
        sampler = TransactionSampler.preset(args.preset)
        histories = [
            (seed, sampler.sample(cfg.start_date, cfg.end_date, np.random.default_rng(seed)))
            for seed in args.seeds
        ]
        print(f"Sampled {len(histories)} histories from preset {args.preset!r}")
    else:
        csv_path = resolve_path(args.transactions or cfg.transactions_path or "")
        if not csv_path.is_file():
            print(f"Error: {csv_path} not found.")
            sys.exit(1)
        histories = [(None, load_transactions(csv_path))]
        print(f"Loaded {len(histories[0][1])} transactions from {csv_path}")

    t0 = time.time()
    frames = []
    for seed, transactions in histories:
        df = compare_strategies(
            transactions, cfg.start_date, cfg.end_date, strategies=strategies, **sim_kwargs
        )
        df.insert(1, "seed", seed)
        frames.append(df)
    results = pd.concat(frames, ignore_index=True)
    print(f"  {len(results)} simulations in {time.time() - t0:.2f}s")

    out_path = Path(args.output)
    out_path.mkdir(parents=True, exist_ok=True)
    csv_out = out_path / "strategy_comparison.csv"
    results.to_csv(csv_out, index=False)
    print(f"\nPer-run results saved to {csv_out}")

    print_summary(results)


if __name__ == "__main__":
    main()
