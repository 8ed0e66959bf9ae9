"""
Pydantic models for round engine data structures.

Contains typed models for tile selections, round results, opponent actions,
and the read-only views handed to the rendering layer.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from dojo.logic.enums import AIPlayerStrategy, RoundPhase, RoundResultType
from dojo.logic.tiles import Tile


class SeatConfig(BaseModel):
    """Configuration for a single seat, supplied by the lobby roster."""

    name: str
    ai_strategy: AIPlayerStrategy | None = None  # None for the human seat


class HeldTile(BaseModel):
    """Selection of a tile in the held hand by position."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["held"] = "held"
    index: int


class DrawnTile(BaseModel):
    """Selection of the tile in the drawn-tile slot."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["drawn"] = "drawn"


Selection = Annotated[HeldTile | DrawnTile, Field(discriminator="kind")]


class SelectTileData(BaseModel):
    """Data for select_tile action."""

    selection: Selection


class TsumoResult(BaseModel):
    """Result of a tsumo (self-draw) win."""

    type: RoundResultType = RoundResultType.TSUMO
    winner_seat: int
    win_tile: Tile
    points: int
    scores: dict[int, int]
    score_changes: dict[int, int]


class RonResult(BaseModel):
    """Result of a ron (discard) win."""

    type: RoundResultType = RoundResultType.RON
    winner_seat: int
    loser_seat: int
    win_tile: Tile
    points: int
    scores: dict[int, int]
    score_changes: dict[int, int]


class ExhaustiveDrawResult(BaseModel):
    """Result of an exhaustive draw (wall empty, no winner)."""

    type: RoundResultType = RoundResultType.EXHAUSTIVE_DRAW
    human_tenpai: bool
    tenpai_seats: list[int]
    noten_seats: list[int]
    scores: dict[int, int]
    score_changes: dict[int, int]


RoundResult = TsumoResult | RonResult | ExhaustiveDrawResult


class AIPlayerAction(BaseModel):
    """Opponent's chosen action during its turn."""

    declare_tsumo: bool = False
    discard_index: int | None = None  # index into hand + drawn tile


class PendingRonView(BaseModel):
    """Ron opportunity offered to the human seat."""

    tile: Tile
    from_seat: int


class SeatView(BaseModel):
    """Seat information visible to the viewer.

    Tiles and the drawn tile are only filled in for the viewing seat;
    other seats expose counts only.
    """

    seat: int
    name: str
    is_ai_player: bool
    score: int
    tile_count: int
    has_drawn_tile: bool
    tiles: list[Tile] | None = None
    drawn_tile: Tile | None = None
    discards: list[Tile]
    melds: list[list[Tile]]


class RoundView(BaseModel):
    """Read-only snapshot of a round for one viewing seat."""

    seat: int
    round_number: int
    wall_count: int
    active_seat: int
    phase: RoundPhase
    selection: Selection | None
    is_ended: bool
    pending_ron: PendingRonView | None
    can_declare_tsumo: bool
    can_declare_ron: bool
    waiting_kinds: list[int]
    status_message: str
    seats: list[SeatView]
    result: RoundResult | None = None
