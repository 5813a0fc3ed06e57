"""Deck provider contract and an in-memory shoe implementation."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from random import Random
from uuid import uuid4

from core.cards import Card, Rank, Suit
from core.errors import DrawFailed


@dataclass(frozen=True)
class DeckHandle:
    """Reference to a shuffled deck session owned by a provider."""

    deck_id: str
    remaining: int = 0


class DeckProvider(ABC):
    """
    Abstract source of shuffled cards.

    The provider is the only authority on card identity and order. Every
    call is a suspension point; callers await them one at a time.
    """

    @abstractmethod
    async def create_shuffled_deck(self, deck_count: int) -> DeckHandle:
        """
        Create a new shuffled deck.

        Raises:
            ProviderUnavailable: If the deck could not be created
        """
        ...

    @abstractmethod
    async def reshuffle(self, handle: DeckHandle) -> DeckHandle:
        """
        Return all drawn cards to the deck and shuffle it.

        Raises:
            DrawFailed: If the provider refused the shuffle
            TransportError: If the provider could not be reached
        """
        ...

    @abstractmethod
    async def draw(self, handle: DeckHandle, count: int = 1) -> list[Card]:
        """
        Draw cards from the top of the deck.

        Raises:
            DrawFailed: If the provider refused the draw
            TransportError: If the provider could not be reached
        """
        ...

    async def aclose(self) -> None:
        """Release any resources held by the provider."""


class InMemoryDeckProvider(DeckProvider):
    """Multi-deck shoes shuffled locally, for offline play and tests."""

    def __init__(self, rng: Random | None = None) -> None:
        self._rng = rng or Random()
        self._decks: dict[str, tuple[int, list[Card]]] = {}

    def _full_shoe(self, deck_count: int) -> list[Card]:
        return [
            Card(rank, suit)
            for _ in range(deck_count)
            for suit in Suit
            for rank in Rank
        ]

    def _cards(self, handle: DeckHandle) -> list[Card]:
        if handle.deck_id not in self._decks:
            raise DrawFailed(f"Unknown deck: {handle.deck_id}")
        return self._decks[handle.deck_id][1]

    async def create_shuffled_deck(self, deck_count: int) -> DeckHandle:
        """Create a new shuffled shoe of ``deck_count`` decks."""
        if deck_count < 1:
            raise ValueError("Shoe must have at least 1 deck")
        deck_id = uuid4().hex[:12]
        cards = self._full_shoe(deck_count)
        self._rng.shuffle(cards)
        self._decks[deck_id] = (deck_count, cards)
        return DeckHandle(deck_id=deck_id, remaining=len(cards))

    async def reshuffle(self, handle: DeckHandle) -> DeckHandle:
        """Rebuild the full shoe and shuffle it."""
        if handle.deck_id not in self._decks:
            raise DrawFailed(f"Unknown deck: {handle.deck_id}")
        deck_count, _ = self._decks[handle.deck_id]
        cards = self._full_shoe(deck_count)
        self._rng.shuffle(cards)
        self._decks[handle.deck_id] = (deck_count, cards)
        return DeckHandle(deck_id=handle.deck_id, remaining=len(cards))

    async def draw(self, handle: DeckHandle, count: int = 1) -> list[Card]:
        """Draw ``count`` cards from the shoe."""
        cards = self._cards(handle)
        if count < 1:
            raise DrawFailed("Must draw at least one card")
        if count > len(cards):
            raise DrawFailed(
                f"Not enough cards remaining to draw {count} additional"
            )
        return [cards.pop() for _ in range(count)]

    def cards_remaining(self, handle: DeckHandle) -> int:
        """Return the number of cards left in a shoe."""
        return len(self._cards(handle))
