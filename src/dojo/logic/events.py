"""Domain event models emitted by round transitions.

Every transition returns the events it produced next to the new state.
Listeners (the rendering layer) receive them together with the snapshot.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from dojo.logic.tiles import Tile
from dojo.logic.types import RoundResult


class EventType(str, Enum):
    ROUND_STARTED = "round_started"
    DRAW = "draw"
    DISCARD = "discard"
    RON_OPPORTUNITY = "ron_opportunity"
    ROUND_END = "round_end"


class RoundStartedEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal[EventType.ROUND_STARTED] = EventType.ROUND_STARTED
    round_number: int
    wall_count: int


class DrawEvent(BaseModel):
    """A seat drew a tile. The tile itself is only in the drawing seat's view."""

    model_config = ConfigDict(frozen=True)

    type: Literal[EventType.DRAW] = EventType.DRAW
    seat: int
    wall_count: int


class DiscardEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal[EventType.DISCARD] = EventType.DISCARD
    seat: int
    tile: Tile
    is_tsumogiri: bool = False  # true if the drawn tile was discarded


class RonOpportunityEvent(BaseModel):
    """The human seat can claim a discard for ron."""

    model_config = ConfigDict(frozen=True)

    type: Literal[EventType.RON_OPPORTUNITY] = EventType.RON_OPPORTUNITY
    tile: Tile
    from_seat: int


class RoundEndEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal[EventType.ROUND_END] = EventType.ROUND_END
    result: RoundResult


GameEvent = RoundStartedEvent | DrawEvent | DiscardEvent | RonOpportunityEvent | RoundEndEvent
