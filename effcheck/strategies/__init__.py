from effcheck.strategies.base import StrategyHandler, Trial
from effcheck.strategies.random_trial import RandomStrategy
from effcheck.strategies.replaying import ReplayStrategy
from effcheck.strategies.shrinking import ShrinkStrategy

__all__ = [
    "RandomStrategy",
    "ReplayStrategy",
    "ShrinkStrategy",
    "StrategyHandler",
    "Trial",
]
