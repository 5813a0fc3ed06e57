"""Deck provider errors."""


class DeckError(Exception):
    """Base class for failures reported by a deck provider."""


class ProviderUnavailable(DeckError):
    """The deck could not be created, so no game can start."""


class DrawFailed(DeckError):
    """The provider answered but refused the draw or reshuffle."""


class TransportError(DeckError):
    """The provider could not be reached or its response could not be parsed."""
