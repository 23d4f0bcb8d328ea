"""YAML configuration loader and dataclasses for simulation setup."""

from __future__ import annotations

import datetime as dt
import yaml
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, Any, Sequence

from cardsim.engine.errors import ValidationError
from cardsim.engine.financial_model import FeeSchedule, RewardPolicy
from cardsim.engine.interest import InterestMethod
from cardsim.engine.transaction import to_amount

if TYPE_CHECKING:
    from cardsim.engine.simulator import AccountSimulator
    from cardsim.engine.transaction import Transaction
    from cardsim.strategies import PaymentStrategy


def resolve_path(path: str | Path) -> Path:
    """Resolve a config or data path, anchoring relative paths to the project root.

    The project root is identified as the nearest ancestor directory that
    contains ``pyproject.toml``.  If the file exists as-is (e.g. an absolute
    path or the CWD happens to be the project root already), it is returned
    unchanged.
    """
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p

    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "pyproject.toml").exists():
            # Returned even if missing so open() raises a descriptive FileNotFoundError
            return parent / p

    return p


@dataclass
class RewardConfig:
    """Reward rates per category."""

    groceries_rate: Decimal = Decimal("0.03")
    gas_rate: Decimal = Decimal("0.02")
    other_rate: Decimal = Decimal("0.01")


@dataclass
class StrategyConfig:
    """Payment strategy selection and its parameters."""

    name: str = "early_transactor"
    start_index: int = 0            # Light/Heavy revolver starting cycle index
    late_every_nth_cycle: int = 0   # Heavy revolver lateness modulus (0 = never late)


@dataclass
class SimulationConfig:
    """Full simulation configuration."""

    start_date: dt.date
    end_date: dt.date
    starting_balance: Decimal = Decimal("0.00")
    interest_method: InterestMethod = InterestMethod.SYNCHRONY_DAILY_BALANCE
    dispatch_interest_method: bool = False
    transactions_path: str | None = None
    strategy: StrategyConfig = field(default_factory=StrategyConfig)
    reward: RewardConfig = field(default_factory=RewardConfig)

    def build_reward_policy(self) -> RewardPolicy:
        return RewardPolicy(
            groceries_rate=self.reward.groceries_rate,
            gas_rate=self.reward.gas_rate,
            other_rate=self.reward.other_rate,
        )

    def build_strategy(self) -> PaymentStrategy:
        from cardsim.strategies import make_strategy

        return make_strategy(
            self.strategy.name,
            start_index=self.strategy.start_index,
            late_every_nth_cycle=self.strategy.late_every_nth_cycle,
        )

    def build_simulator(self, transactions: Sequence[Transaction]) -> AccountSimulator:
        """Wire an AccountSimulator for these settings."""
        from cardsim.engine.simulator import AccountSimulator

        return AccountSimulator(
            transactions,
            reward_policy=self.build_reward_policy(),
            fee_schedule=FeeSchedule(),
            payment_strategy=self.build_strategy(),
            interest_method=self.interest_method,
            starting_balance=self.starting_balance,
            start_date=self.start_date,
            end_date=self.end_date,
            dispatch_interest_method=self.dispatch_interest_method,
        )


def _as_date(value: Any, key: str) -> dt.date:
    # PyYAML already turns unquoted ISO dates into datetime.date
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if value is None:
        raise ValidationError(f"Missing required config value {key!r}")
    try:
        return dt.date.fromisoformat(str(value))
    except ValueError as exc:
        raise ValidationError(f"Invalid date for {key!r}: {value!r}") from exc


def _as_rate(value: Any) -> Decimal:
    # str() first so 0.03 from YAML stays exactly 0.03
    return Decimal(str(value))


def sim_config_from_dict(raw: dict[str, Any]) -> SimulationConfig:
    """Build a SimulationConfig from a parsed YAML mapping.

    Raises:
        ValidationError: Missing dates or an unknown interest method.
    """
    strategy_dict = raw.get("strategy", {}) or {}
    strategy_cfg = StrategyConfig(
        name=str(strategy_dict.get("name", "early_transactor")),
        start_index=int(strategy_dict.get("start_index", 0)),
        late_every_nth_cycle=int(strategy_dict.get("late_every_nth_cycle", 0)),
    )

    reward_dict = raw.get("reward", {}) or {}
    reward_cfg = RewardConfig(
        groceries_rate=_as_rate(reward_dict.get("groceries_rate", "0.03")),
        gas_rate=_as_rate(reward_dict.get("gas_rate", "0.02")),
        other_rate=_as_rate(reward_dict.get("other_rate", "0.01")),
    )

    transactions_path = raw.get("transactions_path")

    return SimulationConfig(
        start_date=_as_date(raw.get("start_date"), "start_date"),
        end_date=_as_date(raw.get("end_date"), "end_date"),
        starting_balance=to_amount(str(raw.get("starting_balance", "0"))),
        interest_method=InterestMethod.parse(
            raw.get("interest_method", InterestMethod.SYNCHRONY_DAILY_BALANCE.value)
        ),
        dispatch_interest_method=bool(raw.get("dispatch_interest_method", False)),
        transactions_path=str(transactions_path) if transactions_path else None,
        strategy=strategy_cfg,
        reward=reward_cfg,
    )


def load_sim_config(path: str | Path) -> SimulationConfig:
    """Load a SimulationConfig from a YAML file.

    Args:
        path: Path to a YAML config file (e.g., configs/simulation/default.yaml).

    Returns:
        Populated SimulationConfig instance.
    """
    path = resolve_path(path)
    with open(path, "r") as f:
        raw: dict[str, Any] = yaml.safe_load(f) or {}
    return sim_config_from_dict(raw)
