"""Pytest fixtures for blackjack tests."""

import pytest
from random import Random

from core.deck import InMemoryDeckProvider
from core.hand import Hand
from core.strategy import RuleSet
from core.game import BlackjackGame
from tests.support import ScriptedDeckProvider, hand


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def memory_provider(rng):
    """A seeded in-memory deck provider."""
    return InMemoryDeckProvider(rng=rng)


@pytest.fixture
def scripted_provider():
    """A deck provider dealing a scripted card sequence."""
    return ScriptedDeckProvider()


@pytest.fixture
def empty_hand():
    """An empty hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural 21 (A-K)."""
    return hand("AS", "KH")


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return hand("AS", "6H")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return hand("0S", "6H")


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return hand("0S", "6H", "KC")


@pytest.fixture
def rules():
    """Default ruleset."""
    return RuleSet()


@pytest.fixture
def game(scripted_provider):
    """A game dealt from the scripted provider."""
    return BlackjackGame(deck_provider=scripted_provider)


@pytest.fixture
def recorded_events(game):
    """Event types emitted by ``game``, in order."""
    events = []
    game.subscribe(lambda event: events.append(event.event_type))
    return events
