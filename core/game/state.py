"""Game state enumeration."""

from enum import Enum, auto


class GameState(Enum):
    """
    Game state machine states.

    Flow: AWAITING_DEAL → PLAYER_TURN → DEALER_TURN → RESOLVED
    """

    # No round dealt yet
    AWAITING_DEAL = auto()

    # Player hits or stays
    PLAYER_TURN = auto()

    # Dealer reveals and plays
    DEALER_TURN = auto()

    # Round finished, ready for a new deal
    RESOLVED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()
