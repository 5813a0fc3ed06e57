"""Blackjack game engine with state machine."""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Callable, Literal

from transitions import Machine

from core.cards import Card
from core.deck import DeckHandle, DeckProvider
from core.errors import DeckError, DrawFailed, ProviderUnavailable, TransportError
from core.hand import Hand
from core.strategy.dealer import DealerDecision, dealer_decision
from core.strategy.rules import RuleSet
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.state import GameState

logger = logging.getLogger(__name__)

Party = Literal["player", "dealer"]


@dataclass
class GameRound:
    """
    State of a single round.

    ``dealer_wins`` and ``winner`` are only meaningful once ``is_game_over``
    is set. A new round object replaces this one at every new game.
    """

    player_hand: Hand = field(default_factory=Hand)
    dealer_hand: Hand = field(default_factory=Hand)
    player_turn_ended: bool = False
    is_game_over: bool = False
    dealer_wins: bool = False

    @property
    def winner(self) -> Party | None:
        """Return the winning party, or None while the round is in play."""
        if not self.is_game_over:
            return None
        return "dealer" if self.dealer_wins else "player"


class BlackjackGame:
    """
    Blackjack game engine using a state machine.

    Cards come from a DeckProvider; every draw is awaited before the next
    one is requested. While one intent is waiting on the provider, every
    other intent is rejected.
    """

    # State machine states
    STATES = [s.name.lower() for s in GameState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "deal", "source": ["awaiting_deal", "player_turn", "resolved"], "dest": "player_turn"},
        {"trigger": "player_action", "source": "player_turn", "dest": "player_turn"},
        {"trigger": "player_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "resolved"},
    ]

    def __init__(
        self,
        deck_provider: DeckProvider,
        rules: RuleSet | None = None,
    ) -> None:
        """
        Initialize a new blackjack game.

        Args:
            deck_provider: Source of shuffled cards
            rules: Game rules (uses defaults if not provided)
        """
        self.rules = rules or RuleSet()
        self.deck_provider = deck_provider
        self.deck: DeckHandle | None = None
        self.round = GameRound()
        self.events = EventEmitter()
        self._busy = False

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="awaiting_deal",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> GameState:
        """Get current game state as enum."""
        return GameState[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    @asynccontextmanager
    async def _provider_call(self) -> AsyncIterator[None]:
        """Mark the game busy for the duration of an intent."""
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    def _reject(self, message: str) -> bool:
        """Emit an invalid-action event and refuse the intent."""
        self.events.emit_new(
            EventType.INVALID_ACTION,
            message=message,
            state=self.state.name,
        )
        return False

    # Intents

    async def start(self) -> bool:
        """
        Create the shuffled deck and deal the first round.

        Raises:
            ProviderUnavailable: If the deck could not be created
        """
        if self._busy:
            return self._reject("Action already in progress")

        async with self._provider_call():
            try:
                self.deck = await self.deck_provider.create_shuffled_deck(
                    self.rules.deck_count
                )
            except ProviderUnavailable:
                logger.error("Failed to connect to deck provider")
                raise
            except DeckError as exc:
                logger.error("Failed to connect to deck provider: %s", exc)
                raise ProviderUnavailable(str(exc)) from exc

        logger.info("Created deck %s", self.deck.deck_id)
        self.events.emit_new(
            EventType.DECK_CREATED,
            deck_id=self.deck.deck_id,
            remaining=self.deck.remaining,
        )
        return await self.new_game()

    async def new_game(self) -> bool:
        """Reshuffle the deck and deal player, dealer, player, dealer."""
        if self._busy:
            return self._reject("Action already in progress")
        if self.deck is None:
            return self._reject("No deck; start the game first")
        if self.state == GameState.DEALER_TURN:
            return self._reject("Cannot deal during the dealer's turn")

        async with self._provider_call():
            self.round = GameRound()
            await self._reshuffle()

            for i in range(self.rules.initial_cards * 2):
                if i % 2:
                    await self._draw_card(self.round.dealer_hand, "dealer")
                else:
                    await self._draw_card(self.round.player_hand, "player")

            self.deal()

        self.events.emit_new(
            EventType.ROUND_STARTED,
            player_cards=len(self.round.player_hand),
            dealer_cards=len(self.round.dealer_hand),
        )
        return True

    async def hit(self) -> bool:
        """Player hits (takes another card); a bust hands the round to the dealer."""
        if not self._can_act("hit"):
            return False

        async with self._provider_call():
            hand = self.round.player_hand
            await self._draw_card(hand, "player")
            self.events.emit_new(EventType.PLAYER_HIT, hand_value=hand.value)

            if hand.is_busted:
                self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=hand.value)
                self.round.player_turn_ended = True
                self.round.dealer_wins = True
                self.round.is_game_over = True
                self.player_done()
                await self._play_dealer()
            else:
                self.player_action()

        return True

    async def stay(self) -> bool:
        """Player stays, ending their turn and starting the dealer's."""
        if not self._can_act("stay"):
            return False

        async with self._provider_call():
            self.events.emit_new(
                EventType.PLAYER_STAND,
                hand_value=self.round.player_hand.value,
            )
            self.round.player_turn_ended = True
            self.player_done()
            await self._play_dealer()

        return True

    def _can_act(self, action: str) -> bool:
        if self._busy:
            return self._reject("Action already in progress")
        if self.state != GameState.PLAYER_TURN or self.round.is_game_over:
            return self._reject(f"Cannot {action} in current state")
        return True

    # Provider access

    async def _reshuffle(self) -> None:
        """Return drawn cards to the deck; a failure leaves the deck as it is."""
        assert self.deck is not None
        try:
            self.deck = await self.deck_provider.reshuffle(self.deck)
        except (DrawFailed, TransportError) as exc:
            logger.warning("Reshuffle of deck %s failed: %s", self.deck.deck_id, exc)
            return
        self.events.emit_new(
            EventType.DECK_SHUFFLED,
            deck_id=self.deck.deck_id,
            remaining=self.deck.remaining,
        )

    async def _draw_card(self, hand: Hand, party: Party) -> Card | None:
        """
        Draw one card into a hand.

        A failed draw is logged and skipped: the hand is left untouched and
        nothing already drawn is rolled back.
        """
        assert self.deck is not None
        try:
            cards = await self.deck_provider.draw(self.deck, 1)
        except (DrawFailed, TransportError) as exc:
            logger.warning("Draw for %s failed: %s", party, exc)
            self.events.emit_new(EventType.DRAW_FAILED, hand=party, reason=str(exc))
            return None

        card = cards[0]
        face_up = not (
            party == "dealer"
            and len(hand) >= 1
            and not self.round.player_turn_ended
        )
        hand.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card) if face_up else "??",
            hand=party,
            hand_value=hand.value if face_up else None,
        )
        return card

    # Dealer turn

    async def _play_dealer(self) -> None:
        """
        Reveal the hole card and draw until the dealer policy is final.

        The round always ends resolved. If the provider raises anything
        other than a draw failure, the dealer stands on its current hand
        (the policy still wanted a card, so the player wins) and the error
        propagates after the round is closed.
        """
        rnd = self.round
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            cards=[str(c) for c in rnd.dealer_hand],
            hand_value=rnd.dealer_hand.value,
        )

        try:
            # A player bust resolves the round without any dealer draws
            if not rnd.dealer_wins:
                await self._dealer_draws()
        finally:
            if not rnd.is_game_over:
                logger.error(
                    "Dealer turn aborted; dealer stands on %d",
                    rnd.dealer_hand.value,
                )
                self._finish_dealer(DealerDecision.STAND_PLAYER_WINS)
            self.dealer_done()

            logger.info(
                "Round over: %s wins (player %d, dealer %d)",
                rnd.winner,
                rnd.player_hand.value,
                rnd.dealer_hand.value,
            )
            self.events.emit_new(
                EventType.ROUND_ENDED,
                winner=rnd.winner,
                player_value=rnd.player_hand.value,
                dealer_value=rnd.dealer_hand.value,
            )

    async def _dealer_draws(self) -> None:
        rnd = self.round
        player_value = rnd.player_hand.value
        failures = 0

        while not rnd.is_game_over:
            decision = dealer_decision(rnd.dealer_hand.value, player_value, self.rules)
            if decision.is_final:
                self._finish_dealer(decision)
                return

            card = await self._draw_card(rnd.dealer_hand, "dealer")
            if card is None:
                failures += 1
                if failures >= self.rules.max_dealer_draw_failures:
                    logger.warning(
                        "Dealer stands on %d after %d failed draws",
                        rnd.dealer_hand.value,
                        failures,
                    )
                    self._finish_dealer(DealerDecision.STAND_PLAYER_WINS)
                continue

            failures = 0
            self.events.emit_new(
                EventType.DEALER_HITS,
                hand_value=rnd.dealer_hand.value,
            )

    def _finish_dealer(self, decision: DealerDecision) -> None:
        self.round.is_game_over = True
        self.round.dealer_wins = decision.dealer_wins
        if decision == DealerDecision.BUST_PLAYER_WINS:
            self.events.emit_new(
                EventType.DEALER_BUSTS,
                hand_value=self.round.dealer_hand.value,
            )
        else:
            self.events.emit_new(
                EventType.DEALER_STANDS,
                hand_value=self.round.dealer_hand.value,
                decision=decision.name,
            )

    # Queries

    @property
    def player_hand(self) -> Hand:
        """The player's hand for this round."""
        return self.round.player_hand

    @property
    def dealer_hand(self) -> Hand:
        """The dealer's full hand, hole card included."""
        return self.round.dealer_hand

    def dealer_hand_for_display(self, reveal_all: bool = False) -> list[Card | None]:
        """
        Return the dealer's cards as they may be shown.

        Until the player's turn ends only the first card is visible; every
        later card is replaced by None (face down). Scoring is unaffected.
        """
        cards = list(self.round.dealer_hand)
        if reveal_all or self.round.player_turn_ended:
            return cards
        return cards[:1] + [None] * (len(cards) - 1)

    @property
    def player_value(self) -> int:
        """Value of the player's hand."""
        return self.round.player_hand.value

    @property
    def dealer_value(self) -> int:
        """Value of the dealer's full hand."""
        return self.round.dealer_hand.value

    @property
    def dealer_visible_value(self) -> int:
        """Value of the dealer cards currently face up."""
        return Hand([c for c in self.dealer_hand_for_display() if c is not None]).value

    @property
    def player_turn_ended(self) -> bool:
        """Check if the player's turn is over."""
        return self.round.player_turn_ended

    @property
    def is_round_over(self) -> bool:
        """Check if the current round has been decided."""
        return self.round.is_game_over

    @property
    def dealer_won(self) -> bool:
        """Check if the dealer won; only meaningful once the round is over."""
        return self.round.is_game_over and self.round.dealer_wins

    @property
    def winner(self) -> Party | None:
        """The winning party, or None while the round is in play."""
        return self.round.winner

    @property
    def is_busy(self) -> bool:
        """Check if an intent is waiting on the deck provider."""
        return self._busy

    @property
    def can_hit(self) -> bool:
        """Check if hitting is allowed."""
        return (
            not self._busy
            and self.state == GameState.PLAYER_TURN
            and not self.round.is_game_over
        )

    @property
    def can_stay(self) -> bool:
        """Check if staying is allowed."""
        return self.can_hit

    @property
    def can_deal(self) -> bool:
        """Check if a new game can be dealt."""
        return (
            not self._busy
            and self.deck is not None
            and self.state != GameState.DEALER_TURN
        )
