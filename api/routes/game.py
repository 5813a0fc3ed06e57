"""Game API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Header
from typing import Annotated

from api.deck_client import get_deck_provider
from api.schemas import (
    ActionRequest,
    CardResponse,
    GameStateResponse,
    HandResponse,
    NewGameResponse,
)
from api.session import GameRegistry, extract_session_id, get_registry
from config import config
from core.cards import Card
from core.deck import DeckProvider
from core.game import BlackjackGame
from core.hand import BUST_LIMIT, Hand
from core.strategy.rules import RuleSet

router = APIRouter()


def _card_to_response(card: Card | None) -> CardResponse:
    """Convert a Card to CardResponse; None is a face-down card."""
    if card is None:
        return CardResponse(image=config.deck_api.card_back_uri, hidden=True)
    return CardResponse(
        rank=card.rank.value,
        suit=card.suit.value,
        code=card.code,
        value=card.value,
        image=card.image_uri,
    )


def _hand_to_response(cards: list[Card | None], value: int | None) -> HandResponse:
    """Convert displayed cards to HandResponse."""
    return HandResponse(
        cards=[_card_to_response(c) for c in cards],
        value=value,
        is_busted=value is not None and value > BUST_LIMIT,
    )


def _game_state_response(game: BlackjackGame) -> GameStateResponse:
    """Convert game state to response."""
    player_hand: Hand = game.player_hand
    revealed = game.player_turn_ended

    return GameStateResponse(
        state=game.state.name,
        deck_id=game.deck.deck_id if game.deck else None,
        player_hand=_hand_to_response(list(player_hand), player_hand.value),
        dealer_hand=_hand_to_response(
            game.dealer_hand_for_display(),
            game.dealer_value if revealed else None,
        ),
        dealer_visible_value=game.dealer_visible_value,
        player_turn_ended=revealed,
        is_round_over=game.is_round_over,
        winner=game.winner,
        can_hit=game.can_hit,
        can_stay=game.can_stay,
        can_deal=game.can_deal,
    )


async def _get_game(session_id: str, registry: GameRegistry) -> BlackjackGame:
    """Look up the game for a signed session token."""
    if extract_session_id(session_id) is None:
        raise HTTPException(status_code=404, detail="Unknown or expired session")
    game = await registry.get(session_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Unknown or expired session")
    return game


@router.post("/new")
async def new_game(
    registry: Annotated[GameRegistry, Depends(get_registry)],
    deck_provider: Annotated[DeckProvider, Depends(get_deck_provider)],
    session_id: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> NewGameResponse:
    """
    Create a game session, shuffle a fresh deck and deal the first round.

    A valid session token is reused; a missing or forged one gets a fresh id.
    """
    if session_id is None or extract_session_id(session_id) is None:
        session_id = registry.create_session_id()

    game = BlackjackGame(
        deck_provider=deck_provider,
        rules=RuleSet(deck_count=config.deck_api.deck_count),
    )
    await game.start()  # ProviderUnavailable is mapped to 503
    await registry.set(session_id, game)

    return NewGameResponse(session_id=session_id, game=_game_state_response(game))


@router.get("/state")
async def get_state(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
    registry: Annotated[GameRegistry, Depends(get_registry)],
) -> GameStateResponse:
    """Get current game state."""
    game = await _get_game(session_id, registry)
    return _game_state_response(game)


@router.post("/deal")
async def deal(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
    registry: Annotated[GameRegistry, Depends(get_registry)],
) -> GameStateResponse:
    """Reshuffle and deal a new round."""
    game = await _get_game(session_id, registry)

    if not await game.new_game():
        raise HTTPException(status_code=409, detail="Cannot deal now")

    return _game_state_response(game)


@router.post("/action")
async def player_action(
    request: ActionRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
    registry: Annotated[GameRegistry, Depends(get_registry)],
) -> GameStateResponse:
    """Execute a player action."""
    game = await _get_game(session_id, registry)

    actions = {
        "hit": game.hit,
        "stay": game.stay,
    }

    if not await actions[request.action]():
        raise HTTPException(status_code=409, detail=f"Cannot {request.action} now")

    return _game_state_response(game)
