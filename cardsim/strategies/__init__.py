"""Payment strategies for the account simulator."""

from cardsim.engine.errors import ValidationError
from cardsim.strategies.base_strategy import (
    PaymentInstruction,
    PaymentStrategy,
    minimum_payment,
)
from cardsim.strategies.early_transactor import EarlyTransactor
from cardsim.strategies.wall_street_transactor import WallStreetTransactor
from cardsim.strategies.light_revolver import LightRevolver
from cardsim.strategies.heavy_revolver import HeavyRevolver

ALL_STRATEGIES = [
    EarlyTransactor,
    WallStreetTransactor,
    LightRevolver,
    HeavyRevolver,
]

_REGISTRY = {
    "early_transactor": EarlyTransactor,
    "wall_street_transactor": WallStreetTransactor,
    "light_revolver": LightRevolver,
    "heavy_revolver": HeavyRevolver,
}


def make_strategy(
    name: str,
    start_index: int = 0,
    late_every_nth_cycle: int = 0,
) -> PaymentStrategy:
    """Build a strategy from its config name.

    Names are matched case-insensitively; ``"EarlyTransactor"`` and
    ``"early_transactor"`` are equivalent. Parameters a strategy does not
    use are ignored.

    Raises:
        ValidationError: If the name is unknown.
    """
    key = name.strip().lower().replace("-", "_").replace(" ", "_")
    by_class_name = {cls.__name__.lower(): cls for cls in ALL_STRATEGIES}
    cls = _REGISTRY.get(key) or by_class_name.get(key)
    if cls is None:
        valid = ", ".join(sorted(_REGISTRY))
        raise ValidationError(f"Unknown payment strategy {name!r}. Valid: {valid}")

    if cls is LightRevolver:
        return LightRevolver(cycle_index=start_index)
    if cls is HeavyRevolver:
        return HeavyRevolver(cycle_index=start_index, late_every_nth_cycle=late_every_nth_cycle)
    return cls()


__all__ = [
    "PaymentInstruction",
    "PaymentStrategy",
    "minimum_payment",
    "EarlyTransactor",
    "WallStreetTransactor",
    "LightRevolver",
    "HeavyRevolver",
    "ALL_STRATEGIES",
    "make_strategy",
]
