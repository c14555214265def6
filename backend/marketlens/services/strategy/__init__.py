"""
Strategy Generator

CONTRACT:
    Input:  StrategyInput (all engine output for one asset)
    Output: TradingStrategy

RESPONSIBILITIES:
    - Buy / Sell / Hold recommendation
    - Entry, stop-loss and target levels
    - Timeframe and rationale

The analysis orchestrator forwards the result untouched.
"""

from marketlens.services.strategy.interface import (
    StrategyGeneratorInterface,
    StrategyInput,
)
from marketlens.services.strategy.service import (
    RuleBasedStrategyGenerator,
    default_strategy,
    get_strategy_generator,
)

__all__ = [
    "StrategyGeneratorInterface",
    "StrategyInput",
    "RuleBasedStrategyGenerator",
    "default_strategy",
    "get_strategy_generator",
]
