"""Shared test helpers: card builders, a scripted deck and hypothesis strategies."""

from hypothesis import strategies as st

from core.cards import Card, Rank, Suit
from core.deck import DeckHandle, DeckProvider
from core.errors import DrawFailed, ProviderUnavailable
from core.hand import Hand


_RANKS = {rank.code: rank for rank in Rank}
_SUITS = {suit.code: suit for suit in Suit}


def card(code: str) -> Card:
    """Build a card from a deck API code like 'AS', '0H' or 'KC'."""
    return Card(_RANKS[code[:-1]], _SUITS[code[-1]])


def cards(*codes: str) -> list[Card]:
    """Build cards from deck API codes."""
    return [card(code) for code in codes]


def hand(*codes: str) -> Hand:
    """Build a hand from card codes."""
    return Hand(cards(*codes))


class ScriptedDeckProvider(DeckProvider):
    """
    Deck provider that deals a fixed sequence of cards.

    An exception instance in the script is raised instead of dealing a card,
    which lets tests inject draw failures at exact positions.
    """

    def __init__(self, script: list[Card | Exception] | None = None) -> None:
        self.script: list[Card | Exception] = list(script or [])
        self.fail_create = False
        self.draw_calls = 0
        self.reshuffle_calls = 0
        self.closed = False

    def load(self, *items: Card | Exception | str) -> None:
        """Append cards (or card codes, or errors) to the script."""
        for item in items:
            self.script.append(card(item) if isinstance(item, str) else item)

    async def create_shuffled_deck(self, deck_count: int) -> DeckHandle:
        if self.fail_create:
            raise ProviderUnavailable("Failed to connect to API")
        return DeckHandle(deck_id="scripted", remaining=52 * deck_count)

    async def reshuffle(self, handle: DeckHandle) -> DeckHandle:
        self.reshuffle_calls += 1
        return handle

    async def draw(self, handle: DeckHandle, count: int = 1) -> list[Card]:
        self.draw_calls += 1
        if len(self.script) < count:
            raise DrawFailed("Not enough cards remaining")
        drawn = []
        for _ in range(count):
            item = self.script.pop(0)
            if isinstance(item, Exception):
                raise item
            drawn.append(item)
        return drawn

    async def aclose(self) -> None:
        self.closed = True


@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


@st.composite
def hand_strategy(draw, min_cards=0, max_cards=12):
    """Generate a random hand."""
    return Hand(draw(st.lists(card_strategy(), min_size=min_cards, max_size=max_cards)))
