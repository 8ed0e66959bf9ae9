"""
Action handlers for round actions.

Each handler validates its preconditions against the current phase, the
active seat and the human hand, and returns an ActionResult. Handlers raise
GameRuleError subclasses on a failed precondition; apply_action is the one
boundary that turns those into unchanged-state results.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, NamedTuple

from pydantic import ValidationError

from dojo.logic.enums import GameAction, RoundPhase
from dojo.logic.events import GameEvent
from dojo.logic.exceptions import GameRuleError, InvalidActionError, InvalidDiscardError, InvalidSelectionError
from dojo.logic.round import discard_tile
from dojo.logic.state import HUMAN_SEAT, RoundState
from dojo.logic.state_utils import advance_turn
from dojo.logic.turn import process_draw_phase, process_ron_call, process_ron_decline, process_tsumo_call
from dojo.logic.types import DrawnTile, SelectTileData, Selection

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class ActionResult(NamedTuple):
    """
    Result of an action handler execution.

    `changed` is False when the action was rejected; round_state is then the
    state that was passed in.
    """

    round_state: RoundState
    events: list[GameEvent]
    changed: bool = True


def _require_human_discard_phase(round_state: RoundState) -> None:
    if round_state.is_ended:
        raise InvalidActionError("round has ended")
    if round_state.active_seat != HUMAN_SEAT or round_state.phase != RoundPhase.DISCARD:
        raise InvalidActionError(
            f"not the human discard phase (seat {round_state.active_seat}, phase {round_state.phase.value})"
        )


def selection_to_index(round_state: RoundState, selection: Selection) -> int:
    """
    Resolve a selection to an index into the human's hand + drawn tile.

    Raises InvalidSelectionError if the selection points at nothing.
    """
    human = round_state.human
    if isinstance(selection, DrawnTile):
        if human.drawn_tile is None:
            raise InvalidSelectionError("no drawn tile to select")
        return len(human.hand)
    if not 0 <= selection.index < len(human.hand):
        raise InvalidSelectionError(f"held tile index {selection.index} out of range for {len(human.hand)} tiles")
    return selection.index


def _commit_discard(round_state: RoundState, selection: Selection) -> ActionResult:
    index = selection_to_index(round_state, selection)
    new_round_state, discard_event = discard_tile(round_state, HUMAN_SEAT, index)
    logger.debug(f"human discarded {discard_event.tile}")
    new_round_state = advance_turn(new_round_state, HUMAN_SEAT)
    return ActionResult(new_round_state, [discard_event])


def handle_select_tile(round_state: RoundState, data: SelectTileData) -> ActionResult:
    """
    Handle a tile selection by the human seat.

    Selecting the tile that is already selected commits it as the discard.
    """
    _require_human_discard_phase(round_state)
    selection = data.selection
    selection_to_index(round_state, selection)

    if round_state.selection == selection:
        return _commit_discard(round_state, selection)
    return ActionResult(round_state.model_copy(update={"selection": selection}), [])


def handle_confirm_discard(round_state: RoundState) -> ActionResult:
    """
    Commit the selected tile as the human's discard.
    """
    _require_human_discard_phase(round_state)
    if round_state.selection is None:
        raise InvalidDiscardError("no tile selected")
    return _commit_discard(round_state, round_state.selection)


def handle_declare_tsumo(round_state: RoundState) -> ActionResult:
    new_round_state, events = process_tsumo_call(round_state)
    return ActionResult(new_round_state, events)


def handle_declare_ron(round_state: RoundState) -> ActionResult:
    new_round_state, events = process_ron_call(round_state)
    return ActionResult(new_round_state, events)


def handle_decline_ron(round_state: RoundState) -> ActionResult:
    new_round_state, events = process_ron_decline(round_state)
    return ActionResult(new_round_state, events)


def handle_advance(round_state: RoundState) -> ActionResult:
    """
    Run the next engine step: the human's draw or one whole opponent turn.
    """
    new_round_state, events = process_draw_phase(round_state)
    return ActionResult(new_round_state, events)


_NO_DATA_HANDLERS: dict[GameAction, Callable[[RoundState], ActionResult]] = {
    GameAction.CONFIRM_DISCARD: handle_confirm_discard,
    GameAction.DECLARE_TSUMO: handle_declare_tsumo,
    GameAction.DECLARE_RON: handle_declare_ron,
    GameAction.DECLINE_RON: handle_decline_ron,
    GameAction.ADVANCE: handle_advance,
}


def apply_action(
    round_state: RoundState,
    action: GameAction,
    data: dict[str, Any] | SelectTileData | None = None,
) -> ActionResult:
    """
    Apply one action to the round and return the result.

    Rejected actions (wrong phase, wrong seat, bad selection, malformed data)
    leave the state unchanged and return changed=False.
    """
    try:
        if action == GameAction.SELECT_TILE:
            select_data = data if isinstance(data, SelectTileData) else SelectTileData.model_validate(data or {})
            return handle_select_tile(round_state, select_data)
        return _NO_DATA_HANDLERS[action](round_state)
    except GameRuleError as e:
        logger.debug(f"{action.value} rejected: {e}")
    except ValidationError as e:
        logger.debug(f"{action.value} rejected, invalid data: {e.error_count()} errors")
    return ActionResult(round_state, [], changed=False)
