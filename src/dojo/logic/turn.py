"""
Turn loop orchestration for a single round.

Every function takes a RoundState and returns (new_round_state, events).
The human seat's draw stops in the discard phase and waits for input;
an opponent's whole turn (draw, tsumo or discard, ron offer) runs as one step.
"""

from __future__ import annotations

import logging

from dojo.logic.ai_player import AIPlayer
from dojo.logic.enums import RoundPhase
from dojo.logic.events import DrawEvent, GameEvent, RonOpportunityEvent, RoundEndEvent
from dojo.logic.exceptions import InvalidActionError, InvalidWinError
from dojo.logic.round import (
    check_exhaustive_draw,
    discard_tile,
    draw_tile,
    end_round,
    process_exhaustive_draw,
)
from dojo.logic.scoring import apply_ron_score, apply_tsumo_score
from dojo.logic.state import (
    HUMAN_SEAT,
    PendingRon,
    RoundState,
    can_declare_ron,
    can_declare_tsumo,
)
from dojo.logic.state_utils import advance_turn
from dojo.logic.tiles import Tile, format_tiles
from dojo.logic.wall import tiles_remaining
from dojo.logic.win import is_winning_hand

logger = logging.getLogger(__name__)


def process_draw_phase(round_state: RoundState) -> tuple[RoundState, list[GameEvent]]:
    """
    Run the pending draw for the active seat.

    Ends the round with an exhaustive draw when the wall is empty. Otherwise
    the human seat moves to its discard phase and an opponent plays out its
    whole turn.

    Returns (new_round_state, events).
    """
    if round_state.is_ended or round_state.phase != RoundPhase.DRAW:
        raise InvalidActionError(f"cannot draw in phase {round_state.phase.value}")

    if check_exhaustive_draw(round_state):
        new_round_state, result = process_exhaustive_draw(round_state)
        return new_round_state, [RoundEndEvent(result=result)]

    seat = round_state.active_seat
    new_round_state, drawn_tile = draw_tile(round_state)
    if drawn_tile is None:  # pragma: no cover
        raise AssertionError("drawn_tile is None after exhaustive draw check passed")

    events: list[GameEvent] = [DrawEvent(seat=seat, wall_count=tiles_remaining(new_round_state.wall))]

    if seat == HUMAN_SEAT:
        new_round_state = new_round_state.model_copy(update={"phase": RoundPhase.DISCARD})
        return new_round_state, events

    new_round_state, turn_events = process_opponent_turn(new_round_state)
    events.extend(turn_events)
    return new_round_state, events


def process_opponent_turn(round_state: RoundState) -> tuple[RoundState, list[GameEvent]]:
    """
    Finish an opponent's turn after its draw: tsumo, or discard and offer ron.
    """
    seat = round_state.active_seat
    seat_state = round_state.seats[seat]
    if seat_state.ai_strategy is None:
        raise InvalidActionError(f"seat {seat} is not controlled by an opponent strategy")

    action = AIPlayer(seat_state.ai_strategy).get_action(seat_state)
    if action.declare_tsumo:
        win_tile = seat_state.drawn_tile
        if win_tile is None:  # pragma: no cover
            raise AssertionError("opponent declared tsumo without a drawn tile")
        new_round_state, result = apply_tsumo_score(round_state, seat, win_tile)
        return end_round(new_round_state, result), [RoundEndEvent(result=result)]

    if action.discard_index is None:  # pragma: no cover
        raise AssertionError("opponent action has neither tsumo nor discard")
    new_round_state, discard_event = discard_tile(round_state, seat, action.discard_index)
    logger.debug(f"seat {seat} discarded {discard_event.tile}")

    new_round_state, ron_events = check_ron_opportunity(new_round_state, discard_event.tile, seat)
    return new_round_state, [discard_event, *ron_events]


def check_ron_opportunity(
    round_state: RoundState,
    tile: Tile,
    from_seat: int,
) -> tuple[RoundState, list[GameEvent]]:
    """
    Offer the human seat a ron on an opponent's discard, or pass the turn on.

    The human's 13 held tiles plus the discard are checked for a complete hand.
    """
    human = round_state.human
    if is_winning_hand([*human.hand, tile]):
        logger.info(f"ron available on {tile} from seat {from_seat}")
        new_round_state = round_state.model_copy(
            update={
                "phase": RoundPhase.WAIT_FOR_RON_DECISION,
                "pending_ron": PendingRon(tile=tile, from_seat=from_seat),
            }
        )
        return new_round_state, [RonOpportunityEvent(tile=tile, from_seat=from_seat)]
    return advance_turn(round_state, from_seat), []


def process_tsumo_call(round_state: RoundState) -> tuple[RoundState, list[GameEvent]]:
    """
    Process a tsumo declaration from the human seat.

    Returns (new_round_state, events).
    """
    human = round_state.human
    if not can_declare_tsumo(round_state):
        logger.debug(f"tsumo rejected, hand={format_tiles(human.hand_with_drawn())}")
        raise InvalidWinError("cannot declare tsumo: conditions not met")

    win_tile = human.drawn_tile
    if win_tile is None:  # pragma: no cover
        raise AssertionError("tsumo allowed without a drawn tile")
    new_round_state, result = apply_tsumo_score(round_state, HUMAN_SEAT, win_tile)
    return end_round(new_round_state, result), [RoundEndEvent(result=result)]


def process_ron_call(round_state: RoundState) -> tuple[RoundState, list[GameEvent]]:
    """
    Claim the pending discard for ron.

    The discard stays in the discarder's pile; the win is scored against it.
    """
    pending = round_state.pending_ron
    if not can_declare_ron(round_state) or pending is None:
        raise InvalidWinError("cannot declare ron: no pending discard")

    new_round_state, result = apply_ron_score(round_state, HUMAN_SEAT, pending.from_seat, pending.tile)
    return end_round(new_round_state, result), [RoundEndEvent(result=result)]


def process_ron_decline(round_state: RoundState) -> tuple[RoundState, list[GameEvent]]:
    """
    Pass on the pending discard; play resumes with the seat after the discarder.
    """
    pending = round_state.pending_ron
    if not can_declare_ron(round_state) or pending is None:
        raise InvalidActionError("no ron decision is pending")
    logger.debug(f"ron declined on {pending.tile} from seat {pending.from_seat}")
    return advance_turn(round_state, pending.from_seat), []
