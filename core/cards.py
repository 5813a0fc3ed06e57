"""Card, Rank, and Suit - immutable card representations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

CARD_IMAGE_URI = "https://deckofcardsapi.com/static/img/{code}.png"


class Suit(Enum):
    """Card suits, named as the deck API names them."""

    CLUBS = "CLUBS"
    DIAMONDS = "DIAMONDS"
    HEARTS = "HEARTS"
    SPADES = "SPADES"

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]

    @property
    def code(self) -> str:
        """Single-letter suit code used in card codes."""
        return self.value[0]

    @classmethod
    def parse(cls, s: str) -> "Suit":
        """Parse a deck API suit name."""
        try:
            return cls(s.strip().upper())
        except ValueError:
            raise ValueError(f"Invalid suit: {s}") from None


class Rank(Enum):
    """Card ranks, valued by the deck API's rank strings."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "JACK"
    QUEEN = "QUEEN"
    KING = "KING"
    ACE = "ACE"

    def __str__(self) -> str:
        if self.value.isdigit():
            return self.value
        return self.value[0]

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        return BLACKJACK_VALUES[self]

    @property
    def code(self) -> str:
        """Rank part of a deck API card code ('0' stands for ten)."""
        if self == Rank.TEN:
            return "0"
        return str(self)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE

    @classmethod
    def parse(cls, s: str) -> "Rank":
        """Parse a deck API rank string such as '7', '10' or 'KING'."""
        try:
            return cls(s.strip().upper())
        except ValueError:
            raise ValueError(f"Invalid rank: {s}") from None


BLACKJACK_VALUES: dict[Rank, int] = {
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 10,
    Rank.KING: 10,
    Rank.ACE: 11,
}


@dataclass(frozen=True, slots=True)
class Card:
    """
    Immutable playing card.

    Rank determines value, suit is cosmetic, and ``image`` is an opaque
    display reference that takes no part in equality.
    """

    rank: Rank
    suit: Suit
    image: str | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @property
    def code(self) -> str:
        """Deck API card code, e.g. 'AS' or '0H'."""
        return f"{self.rank.code}{self.suit.code}"

    @property
    def image_uri(self) -> str:
        """Image reference for display, falling back to the API's static image."""
        return self.image or CARD_IMAGE_URI.format(code=self.code)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Card":
        """
        Create a card from a deck API card object.

        Args:
            payload: Mapping with at least ``value`` and ``suit`` keys

        Raises:
            ValueError: If the rank or suit is missing or unknown
        """
        try:
            rank_str = payload["value"]
            suit_str = payload["suit"]
        except (KeyError, TypeError):
            raise ValueError(f"Invalid card payload: {payload!r}") from None
        if not isinstance(rank_str, str) or not isinstance(suit_str, str):
            raise ValueError(f"Invalid card payload: {payload!r}")
        return cls(Rank.parse(rank_str), Suit.parse(suit_str), payload.get("image"))
