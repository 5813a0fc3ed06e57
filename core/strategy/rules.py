"""Blackjack table rules."""

from dataclasses import dataclass

from core.hand import BUST_LIMIT


@dataclass(frozen=True)
class RuleSet:
    """
    Blackjack table rules configuration.

    There is no wagering, splitting, doubling or surrender: a round is a
    single player hand against the dealer, and ties go to the dealer. The
    bust limit is fixed at ``BUST_LIMIT`` because hand scoring depends on it.
    """

    # Deck configuration
    deck_count: int = 2

    # Cards dealt to each party at the start of a round
    initial_cards: int = 2

    # Dealer stands once reaching this value
    dealer_stands_on: int = 17

    # Consecutive failed dealer draws before the dealer turn gives up
    max_dealer_draw_failures: int = 3

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.deck_count < 1 or self.deck_count > 20:
            raise ValueError("deck_count must be between 1 and 20")
        if self.initial_cards < 1:
            raise ValueError("initial_cards must be at least 1")
        if self.dealer_stands_on > BUST_LIMIT:
            raise ValueError(f"dealer_stands_on cannot exceed {BUST_LIMIT}")
        if self.max_dealer_draw_failures < 1:
            raise ValueError("max_dealer_draw_failures must be at least 1")
