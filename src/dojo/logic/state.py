"""
Round state models.

RoundState is a frozen value. Transitions never mutate it; they return a new
state built with model_copy (see state_utils).
"""

from __future__ import annotations

from collections import Counter

from pydantic import BaseModel, ConfigDict

from dojo.logic.enums import AIPlayerStrategy, RoundPhase, RoundResultType
from dojo.logic.exceptions import InvariantViolationError
from dojo.logic.settings import DEFAULT_STARTING_SCORE, SUPPORTED_NUM_SEATS, GameSettings
from dojo.logic.tiles import COPIES_PER_KIND, NUM_KINDS, TOTAL_TILES, Tile
from dojo.logic.types import (
    PendingRonView,
    RoundResult,
    RoundView,
    SeatView,
    Selection,
)
from dojo.logic.wall import Wall, tiles_remaining
from dojo.logic.win import get_waiting_kinds, is_winning_hand

HUMAN_SEAT = 0


class PendingRon(BaseModel):
    """A discard the human seat may claim for ron."""

    model_config = ConfigDict(frozen=True)

    tile: Tile
    from_seat: int


class SeatState(BaseModel):
    """
    Per-seat state: held hand, drawn-tile slot, discards, melds and score.
    """

    model_config = ConfigDict(frozen=True)

    seat: int
    name: str
    ai_strategy: AIPlayerStrategy | None = None  # None for the human seat

    hand: tuple[Tile, ...] = ()  # held tiles, 13 between turns
    drawn_tile: Tile | None = None  # kept apart from the hand until discarded or absorbed
    discards: tuple[Tile, ...] = ()  # append-only
    melds: tuple[tuple[Tile, ...], ...] = ()  # reserved for open calls, always empty

    score: int = DEFAULT_STARTING_SCORE

    @property
    def is_ai_player(self) -> bool:
        return self.ai_strategy is not None

    def hand_with_drawn(self) -> list[Tile]:
        """Held tiles plus the drawn tile (if any), in that order."""
        tiles = list(self.hand)
        if self.drawn_tile is not None:
            tiles.append(self.drawn_tile)
        return tiles


class RoundState(BaseModel):
    """
    Represents the state of a single round.
    """

    model_config = ConfigDict(frozen=True)

    wall: Wall = Wall()
    seats: tuple[SeatState, ...] = ()

    active_seat: int = 0
    phase: RoundPhase = RoundPhase.DRAW
    selection: Selection | None = None
    is_ended: bool = False
    pending_ron: PendingRon | None = None
    result: RoundResult | None = None

    round_number: int = 0
    turn_count: int = 0  # completed discards
    settings: GameSettings = GameSettings()

    @property
    def human(self) -> SeatState:
        return self.seats[HUMAN_SEAT]

    @property
    def scores(self) -> dict[int, int]:
        return {s.seat: s.score for s in self.seats}


def next_seat(seat: int, num_seats: int = SUPPORTED_NUM_SEATS) -> int:
    """Seat that acts after `seat`, wrapping after the last seat."""
    return (seat + 1) % num_seats


def can_declare_tsumo(round_state: RoundState) -> bool:
    """
    Check if the human seat may declare a self-draw win right now.

    Requires the human's discard phase, a drawn tile, and a complete hand.
    """
    human = round_state.human
    return (
        not round_state.is_ended
        and round_state.phase == RoundPhase.DISCARD
        and round_state.active_seat == HUMAN_SEAT
        and human.drawn_tile is not None
        and is_winning_hand(human.hand_with_drawn())
    )


def can_declare_ron(round_state: RoundState) -> bool:
    """Check if the human seat is being offered a ron decision."""
    return (
        not round_state.is_ended
        and round_state.phase == RoundPhase.WAIT_FOR_RON_DECISION
        and round_state.pending_ron is not None
    )


def all_tiles(round_state: RoundState) -> list[Tile]:
    """Every tile the round accounts for: wall, hands, drawn slots and discards."""
    tiles = list(round_state.wall.tiles)
    for seat in round_state.seats:
        tiles.extend(seat.hand_with_drawn())
        tiles.extend(seat.discards)
        for meld in seat.melds:
            tiles.extend(meld)
    return tiles


def check_tile_conservation(round_state: RoundState) -> None:
    """
    Verify the round still holds exactly the full tile set.

    Raises InvariantViolationError when a tile id is duplicated or missing,
    or when a kind does not appear exactly four times.
    """
    tiles = all_tiles(round_state)
    ids = [tile.id for tile in tiles]
    if len(ids) != TOTAL_TILES or len(set(ids)) != TOTAL_TILES:
        duplicates = sorted(tile_id for tile_id, count in Counter(ids).items() if count > 1)
        raise InvariantViolationError(
            invariant="tile_conservation",
            detail=f"expected {TOTAL_TILES} unique tiles, got {len(ids)} (duplicates: {duplicates})",
        )
    kinds = Counter(tile.kind for tile in tiles)
    bad_kinds = [kind for kind in range(NUM_KINDS) if kinds[kind] != COPIES_PER_KIND]
    if bad_kinds:
        raise InvariantViolationError(
            invariant="tile_conservation",
            detail=f"kinds without exactly {COPIES_PER_KIND} copies: {bad_kinds}",
        )


def _status_message(round_state: RoundState) -> str:
    """Short status line for the human seat, mirroring the table's status bar."""
    result = round_state.result
    if round_state.is_ended and result is not None:
        if result.type == RoundResultType.EXHAUSTIVE_DRAW:
            return "Exhaustive draw: tenpai" if result.human_tenpai else "Exhaustive draw: noten"
        winner = round_state.seats[result.winner_seat]
        if winner.seat == HUMAN_SEAT:
            return "Tsumo! You win" if result.type == RoundResultType.TSUMO else "Ron! You win"
        return f"{winner.name} won by {result.type.value}"

    if can_declare_ron(round_state):
        return "Ron is available"

    if round_state.active_seat == HUMAN_SEAT:
        if round_state.phase != RoundPhase.DISCARD:
            return "Drawing a tile"
        if can_declare_tsumo(round_state):
            return "Tsumo is available"
        return "Select a tile to discard"

    if get_waiting_kinds(round_state.human.hand):
        return "Tenpai! Waiting for ron"
    return f"{round_state.seats[round_state.active_seat].name} is thinking"


def get_round_view(round_state: RoundState, seat: int = HUMAN_SEAT) -> RoundView:
    """
    Return the visible round state for a specific seat.

    The viewer sees its own hand and drawn tile. For every other seat only
    tile counts, discards, melds and scores are exposed. The tsumo/ron flags
    are derived from the current state on every call.
    """
    seats_view: list[SeatView] = []
    for s in round_state.seats:
        is_viewer = s.seat == seat
        seats_view.append(
            SeatView(
                seat=s.seat,
                name=s.name,
                is_ai_player=s.is_ai_player,
                score=s.score,
                tile_count=len(s.hand),
                has_drawn_tile=s.drawn_tile is not None,
                tiles=list(s.hand) if is_viewer else None,
                drawn_tile=s.drawn_tile if is_viewer else None,
                discards=list(s.discards),
                melds=[list(meld) for meld in s.melds],
            )
        )

    pending = round_state.pending_ron
    is_human_viewer = seat == HUMAN_SEAT
    return RoundView(
        seat=seat,
        round_number=round_state.round_number,
        wall_count=tiles_remaining(round_state.wall),
        active_seat=round_state.active_seat,
        phase=round_state.phase,
        selection=round_state.selection if is_human_viewer else None,
        is_ended=round_state.is_ended,
        pending_ron=PendingRonView(tile=pending.tile, from_seat=pending.from_seat) if pending else None,
        can_declare_tsumo=is_human_viewer and can_declare_tsumo(round_state),
        can_declare_ron=is_human_viewer and can_declare_ron(round_state),
        waiting_kinds=get_waiting_kinds(round_state.seats[seat].hand) if is_human_viewer else [],
        status_message=_status_message(round_state),
        seats=seats_view,
        result=round_state.result,
    )
