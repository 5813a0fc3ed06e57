"""Table rules and the dealer policy."""

from core.strategy.rules import RuleSet
from core.strategy.dealer import DealerDecision, dealer_decision

__all__ = [
    "RuleSet",
    "DealerDecision",
    "dealer_decision",
]
