"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict
from typing import Literal


class ActionRequest(BaseModel):
    """Request for player action."""

    action: Literal["hit", "stay"]


class CardResponse(BaseModel):
    """Card representation; hidden cards carry only the card back image."""

    model_config = ConfigDict(from_attributes=True)

    rank: str | None = None
    suit: str | None = None
    code: str | None = None
    value: int | None = None
    image: str
    hidden: bool = False


class HandResponse(BaseModel):
    """Hand representation."""

    cards: list[CardResponse]
    value: int | None
    is_busted: bool


class GameStateResponse(BaseModel):
    """Current game state."""

    state: str
    deck_id: str | None
    player_hand: HandResponse
    dealer_hand: HandResponse
    dealer_visible_value: int
    player_turn_ended: bool
    is_round_over: bool
    winner: Literal["player", "dealer"] | None
    can_hit: bool
    can_stay: bool
    can_deal: bool


class NewGameResponse(BaseModel):
    """Response to creating a game session."""

    session_id: str
    game: GameStateResponse
