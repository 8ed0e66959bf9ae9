"""
Scoring calculation for the round engine.

Points follow an exponential ladder on the han count. No yaku are counted:
the round always scores wins with GameSettings.fixed_han.
"""

import logging

from dojo.logic.state import RoundState
from dojo.logic.state_utils import apply_score_changes
from dojo.logic.tiles import Tile
from dojo.logic.types import RonResult, TsumoResult

logger = logging.getLogger(__name__)

BASE_POINTS_UNIT = 300
RON_MULTIPLIER = 4
TSUMO_MULTIPLIER = 2


def calc_points(han: int, *, is_ron: bool) -> int:
    """
    Return the points a win is worth.

    base = 300 * 2^(han + 1); ron pays base * 4, tsumo base * 2.
    """
    if han < 0:
        raise ValueError(f"han must not be negative, got {han}")
    base = BASE_POINTS_UNIT * 2 ** (han + 1)
    return base * (RON_MULTIPLIER if is_ron else TSUMO_MULTIPLIER)


def tsumo_score_changes(winner_seat: int, points: int, num_seats: int) -> dict[int, int]:
    """
    Score changes for a self-draw win.

    The winner gains the full points; each other seat pays points // 3.
    Truncation is kept as-is, so the deductions may sum to less than the gain.
    """
    payment = points // 3
    return {seat: points if seat == winner_seat else -payment for seat in range(num_seats)}


def ron_score_changes(winner_seat: int, loser_seat: int, points: int, num_seats: int) -> dict[int, int]:
    """Score changes for a ron win: only the discarding seat pays."""
    changes = dict.fromkeys(range(num_seats), 0)
    changes[winner_seat] = points
    changes[loser_seat] = -points
    return changes


def apply_tsumo_score(
    round_state: RoundState,
    winner_seat: int,
    win_tile: Tile,
) -> tuple[RoundState, TsumoResult]:
    """
    Settle a tsumo win and return (new_state, result).
    """
    points = calc_points(round_state.settings.fixed_han, is_ron=False)
    changes = tsumo_score_changes(winner_seat, points, len(round_state.seats))
    new_state = apply_score_changes(round_state, changes)
    logger.info(f"tsumo by seat {winner_seat} for {points} points, changes={changes}")
    return new_state, TsumoResult(
        winner_seat=winner_seat,
        win_tile=win_tile,
        points=points,
        scores=new_state.scores,
        score_changes=changes,
    )


def apply_ron_score(
    round_state: RoundState,
    winner_seat: int,
    loser_seat: int,
    win_tile: Tile,
) -> tuple[RoundState, RonResult]:
    """
    Settle a ron win and return (new_state, result).
    """
    points = calc_points(round_state.settings.fixed_han, is_ron=True)
    changes = ron_score_changes(winner_seat, loser_seat, points, len(round_state.seats))
    new_state = apply_score_changes(round_state, changes)
    logger.info(f"ron by seat {winner_seat} off seat {loser_seat} for {points} points")
    return new_state, RonResult(
        winner_seat=winner_seat,
        loser_seat=loser_seat,
        win_tile=win_tile,
        points=points,
        scores=new_state.scores,
        score_changes=changes,
    )
