"""Core blackjack engine - 100% UI-agnostic."""

from core.cards import Card, Rank, Suit
from core.deck import DeckHandle, DeckProvider, InMemoryDeckProvider
from core.errors import DeckError, DrawFailed, ProviderUnavailable, TransportError
from core.hand import Hand, compute_value

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "Hand",
    "compute_value",
    "DeckHandle",
    "DeckProvider",
    "InMemoryDeckProvider",
    "DeckError",
    "DrawFailed",
    "ProviderUnavailable",
    "TransportError",
]
