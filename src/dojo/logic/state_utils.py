"""
Immutable state update utilities using Pydantic model_copy.

These helpers never mutate the input state; they always return new state
objects with the requested changes applied.
"""

from dojo.logic.enums import RoundPhase
from dojo.logic.state import RoundState, next_seat
from dojo.logic.tiles import Tile


def update_seat(
    round_state: RoundState,
    seat: int,
    **updates: object,
) -> RoundState:
    """
    Return new round state with updated seat.

    Args:
        round_state: Current round state
        seat: Seat to update (0-3)
        **updates: Fields to update on the seat

    Returns:
        New RoundState with updated seat

    """
    seats = list(round_state.seats)
    seats[seat] = round_state.seats[seat].model_copy(update=updates)
    return round_state.model_copy(update={"seats": tuple(seats)})


def add_discard_to_seat(
    round_state: RoundState,
    seat: int,
    tile: Tile,
) -> RoundState:
    """
    Return new state with tile appended to the seat's discard pile.
    """
    discards = (*round_state.seats[seat].discards, tile)
    return update_seat(round_state, seat, discards=discards)


def apply_score_changes(
    round_state: RoundState,
    score_changes: dict[int, int],
) -> RoundState:
    """
    Return new state with each seat's score shifted by its change.
    """
    seats = tuple(
        s.model_copy(update={"score": s.score + score_changes.get(s.seat, 0)}) for s in round_state.seats
    )
    return round_state.model_copy(update={"seats": seats})


def advance_turn(
    round_state: RoundState,
    from_seat: int | None = None,
) -> RoundState:
    """
    Return new state with the seat after `from_seat` (default: active seat) to draw.

    Args:
        round_state: Current round state
        from_seat: Seat whose turn just finished

    Returns:
        New RoundState in the draw phase for the next seat

    """
    seat = round_state.active_seat if from_seat is None else from_seat
    return round_state.model_copy(
        update={
            "active_seat": next_seat(seat, len(round_state.seats)),
            "phase": RoundPhase.DRAW,
            "selection": None,
            "pending_ron": None,
        }
    )

