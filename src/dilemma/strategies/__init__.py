"""Strategy implementations for Dilemma.

1. Strategy contract and adapters for generator-based strategies
2. Example strategies (always cooperate, grim trigger, tit for tat, ...)
"""

from dilemma.strategies.base import (
    AsyncGeneratorStrategy,
    GeneratorStrategy,
    SimpleStrategy,
    StepResult,
    Strategy,
    StrategyFactory,
    as_strategy,
    strategy,
    strategy_name,
)
from dilemma.strategies.deterministic import (
    STRATEGIES,
    Alternator,
    always_cooperate,
    always_defect,
    get_strategy_by_name,
    grim_trigger,
    list_strategy_names,
    suspicious_tit_for_tat,
    tit_for_tat,
)

__all__ = [
    # Contract
    "Strategy",
    "StrategyFactory",
    "StepResult",
    "SimpleStrategy",
    "GeneratorStrategy",
    "AsyncGeneratorStrategy",
    "as_strategy",
    "strategy",
    "strategy_name",
    # Examples
    "always_cooperate",
    "always_defect",
    "grim_trigger",
    "tit_for_tat",
    "suspicious_tit_for_tat",
    "Alternator",
    # Registry
    "STRATEGIES",
    "get_strategy_by_name",
    "list_strategy_names",
]
