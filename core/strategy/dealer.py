"""Dealer turn-taking policy."""

from enum import Enum, auto

from core.hand import BUST_LIMIT
from core.strategy.rules import RuleSet

_DEFAULT_RULES = RuleSet()


class DealerDecision(Enum):
    """What the dealer does after looking at the current hand values."""

    DRAW = auto()
    STAND_DEALER_WINS = auto()
    STAND_PLAYER_WINS = auto()
    BUST_PLAYER_WINS = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def is_final(self) -> bool:
        """Check if the decision ends the dealer turn."""
        return self != DealerDecision.DRAW

    @property
    def dealer_wins(self) -> bool:
        """Check if the decision resolves the round for the dealer."""
        return self == DealerDecision.STAND_DEALER_WINS


def dealer_decision(
    dealer_value: int,
    player_value: int,
    rules: RuleSet | None = None,
) -> DealerDecision:
    """
    Decide the dealer's next move.

    Rules are checked in a fixed order: a bust ends the round for the
    player, meeting or beating the player's value wins for the dealer (ties
    go to the dealer), reaching the standing threshold without catching up
    loses, and anything else draws another card.

    Args:
        dealer_value: Current value of the dealer's full hand
        player_value: Player's value, fixed when the dealer turn began
        rules: Table rules supplying the standing threshold

    Returns:
        Exactly one DealerDecision
    """
    rules = rules or _DEFAULT_RULES

    if dealer_value > BUST_LIMIT:
        return DealerDecision.BUST_PLAYER_WINS
    if dealer_value >= player_value:
        return DealerDecision.STAND_DEALER_WINS
    if dealer_value >= rules.dealer_stands_on:
        return DealerDecision.STAND_PLAYER_WINS
    return DealerDecision.DRAW
