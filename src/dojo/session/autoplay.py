"""
Headless round runner.

Plays a whole round through RoundController with a scripted human seat:
it takes every tsumo and ron offered and otherwise discards like an
isolation-strategy opponent. Used for seed replays and quick profiling.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dojo.logic.ai_player import choose_discard
from dojo.logic.types import DrawnTile, HeldTile
from dojo.session.controller import RoundController

if TYPE_CHECKING:
    from dojo.logic.types import RoundView
    from dojo.session.settings import TableSettings

logger = logging.getLogger(__name__)

# the human seat draws at most 21 times from an 84-tile wall
MAX_HUMAN_DECISIONS = 100


def play_scripted_turn(controller: RoundController) -> bool:
    """
    Make one decision for the human seat.

    Returns False when the round has ended or nothing was accepted.
    """
    if controller.round_state.is_ended:
        return False
    if controller.can_declare_tsumo:
        return controller.declare_tsumo()
    if controller.can_declare_ron:
        return controller.declare_ron()

    human = controller.round_state.human
    tiles = human.hand_with_drawn()
    if human.drawn_tile is None:
        return False
    index = choose_discard(tiles)
    selection = DrawnTile() if index == len(human.hand) else HeldTile(index=index)
    # second click on the same tile commits the discard
    return controller.select_tile(selection) and controller.select_tile(selection)


def play_round(seed: str | None = None, table_settings: TableSettings | None = None) -> RoundView:
    """
    Play one round to the end and return the final snapshot.
    """
    controller = RoundController(table_settings=table_settings)
    controller.start_new_round(seed)
    controller.run_until_idle()
    for _ in range(MAX_HUMAN_DECISIONS):
        if not play_scripted_turn(controller):
            break
        controller.run_until_idle()

    view = controller.snapshot()
    if not view.is_ended:
        raise RuntimeError(f"round did not finish after {MAX_HUMAN_DECISIONS} decisions")
    logger.info(f"round finished: {view.status_message}, scores={[s.score for s in view.seats]}")
    return view
