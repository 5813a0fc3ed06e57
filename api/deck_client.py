"""Deck provider backed by the deckofcardsapi.com REST API."""

import logging
from typing import Any

import httpx

from config import config
from core.cards import Card
from core.deck import DeckHandle, DeckProvider, InMemoryDeckProvider
from core.errors import DrawFailed, ProviderUnavailable, TransportError

logger = logging.getLogger(__name__)


class DeckOfCardsProvider(DeckProvider):
    """
    Deck provider talking to the Deck of Cards API over HTTP.

    Failures are never retried. A ``success: false`` answer becomes
    DrawFailed (ProviderUnavailable when creating a deck); network errors
    and unreadable responses become TransportError.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        base_url = base_url or config.deck_api.base_url
        if not base_url.endswith("/"):
            base_url += "/"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else config.deck_api.timeout,
        )
        self._base_url = base_url

    async def _request(
        self,
        method: str,
        path: str,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a request and return the decoded JSON object."""
        url = f"{self._base_url}{path}"
        try:
            if method == "POST":
                response = await self._client.post(url, data=data)
            else:
                response = await self._client.get(url)
            payload = response.json()
        except httpx.HTTPError as exc:
            logger.warning("Deck API %s %s failed: %s", method, path, exc)
            raise TransportError(f"{method} {path}: {exc}") from exc
        except ValueError as exc:
            logger.warning("Deck API %s %s returned invalid JSON", method, path)
            raise TransportError(f"{method} {path}: invalid JSON") from exc

        if not isinstance(payload, dict):
            raise TransportError(f"{method} {path}: unexpected response {payload!r}")
        return payload

    def _handle(self, payload: dict[str, Any], deck_id: str | None = None) -> DeckHandle:
        deck_id = payload.get("deck_id", deck_id)
        if not isinstance(deck_id, str) or not deck_id:
            raise TransportError("Response is missing deck_id")
        try:
            remaining = int(payload.get("remaining", 0))
        except (TypeError, ValueError) as exc:
            raise TransportError(f"Invalid remaining count: {payload.get('remaining')!r}") from exc
        return DeckHandle(deck_id=deck_id, remaining=remaining)

    async def create_shuffled_deck(self, deck_count: int) -> DeckHandle:
        """Create a new shuffled deck of ``deck_count`` decks."""
        try:
            payload = await self._request(
                "POST", "new/shuffle/", data={"deck_count": str(deck_count)}
            )
            if not payload.get("success"):
                raise ProviderUnavailable(
                    payload.get("error", "Deck API refused to create a deck")
                )
            return self._handle(payload)
        except TransportError as exc:
            raise ProviderUnavailable(str(exc)) from exc

    async def reshuffle(self, handle: DeckHandle) -> DeckHandle:
        """Return all drawn cards to the deck and shuffle it."""
        payload = await self._request("GET", f"{handle.deck_id}/shuffle/")
        if not payload.get("success"):
            raise DrawFailed(payload.get("error", "Deck API refused to reshuffle"))
        return self._handle(payload, handle.deck_id)

    async def draw(self, handle: DeckHandle, count: int = 1) -> list[Card]:
        """Draw ``count`` cards from the deck."""
        payload = await self._request(
            "POST", f"{handle.deck_id}/draw/", data={"count": str(count)}
        )
        if not payload.get("success"):
            raise DrawFailed(payload.get("error", "Deck API refused to draw"))

        raw_cards = payload.get("cards")
        if not isinstance(raw_cards, list) or len(raw_cards) != count:
            raise DrawFailed(f"Expected {count} cards, got {raw_cards!r}")
        try:
            return [Card.from_api(c) for c in raw_cards]
        except ValueError as exc:
            raise TransportError(str(exc)) from exc

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            await self._client.aclose()


# Global provider instance shared by all games
_deck_provider: DeckProvider | None = None


def get_deck_provider() -> DeckProvider:
    """Get or create the configured deck provider."""
    global _deck_provider
    if _deck_provider is None:
        if config.deck_api.provider == "local":
            _deck_provider = InMemoryDeckProvider()
        else:
            _deck_provider = DeckOfCardsProvider()
        logger.info("Using %s deck provider", config.deck_api.provider)
    return _deck_provider


async def close_deck_provider() -> None:
    """Close the shared deck provider, if one was created."""
    global _deck_provider
    if _deck_provider is not None:
        await _deck_provider.aclose()
        _deck_provider = None
