"""
Round initialization and tile movement for a single round.
"""

from __future__ import annotations

import logging

from dojo.logic.enums import RoundPhase
from dojo.logic.events import DiscardEvent, RoundStartedEvent
from dojo.logic.exceptions import InvalidDiscardError
from dojo.logic.settings import GameSettings, validate_settings
from dojo.logic.state import HUMAN_SEAT, RoundState, SeatState
from dojo.logic.state_utils import add_discard_to_seat, update_seat
from dojo.logic.tiles import Tile, format_tiles, sort_tiles
from dojo.logic.types import ExhaustiveDrawResult, RoundResult, SeatConfig
from dojo.logic.wall import Wall, create_wall, deal_initial_hands, is_wall_exhausted, tiles_remaining
from dojo.logic.wall import draw_tile as draw_from_wall
from dojo.logic.win import is_tenpai

logger = logging.getLogger(__name__)


def default_seat_configs(settings: GameSettings | None = None) -> list[SeatConfig]:
    """Human at seat 0, opponents on the remaining seats."""
    settings = settings or GameSettings()
    configs = [SeatConfig(name="You")]
    configs.extend(
        SeatConfig(name=f"Opponent {seat}", ai_strategy=settings.opponent_strategy)
        for seat in range(1, settings.num_seats)
    )
    return configs


def init_round(  # noqa: PLR0913
    seat_configs: list[SeatConfig] | None = None,
    *,
    settings: GameSettings | None = None,
    seed: str | None = None,
    round_number: int = 0,
    wall: Wall | None = None,
    scores: list[int] | None = None,
) -> tuple[RoundState, list[RoundStartedEvent]]:
    """
    Create a fresh round: shuffle (unless a wall is given), deal, seat the players.

    The round starts in the draw phase with seat 0 active. Scores default to
    the starting score; a caller carrying totals across rounds may pass them.
    """
    settings = settings or GameSettings()
    validate_settings(settings)
    configs = seat_configs or default_seat_configs(settings)
    if len(configs) != settings.num_seats:
        raise ValueError(f"Expected {settings.num_seats} seat configs, got {len(configs)}")
    if configs[HUMAN_SEAT].ai_strategy is not None:
        raise ValueError(f"Seat {HUMAN_SEAT} must be the human seat")
    if scores is not None and len(scores) != settings.num_seats:
        raise ValueError(f"Expected {settings.num_seats} scores, got {len(scores)}")

    full_wall = wall if wall is not None else create_wall(seed, round_number)
    remaining_wall, hands = deal_initial_hands(full_wall, settings.num_seats, settings.hand_size)

    seats = tuple(
        SeatState(
            seat=seat,
            name=config.name,
            ai_strategy=config.ai_strategy,
            hand=tuple(hands[seat]),
            score=scores[seat] if scores is not None else settings.starting_score,
        )
        for seat, config in enumerate(configs)
    )
    round_state = RoundState(
        wall=remaining_wall,
        seats=seats,
        active_seat=HUMAN_SEAT,
        phase=RoundPhase.DRAW,
        round_number=round_number,
        settings=settings,
    )
    logger.info(
        f"round {round_number} dealt, wall={tiles_remaining(remaining_wall)}, "
        f"human hand={format_tiles(round_state.human.hand)}"
    )
    return round_state, [RoundStartedEvent(round_number=round_number, wall_count=tiles_remaining(remaining_wall))]


def check_exhaustive_draw(round_state: RoundState) -> bool:
    """
    Check if the wall is exhausted (no more tiles to draw).
    """
    return is_wall_exhausted(round_state.wall)


def draw_tile(round_state: RoundState) -> tuple[RoundState, Tile | None]:
    """
    Draw a tile from the wall into the active seat's drawn-tile slot.

    Returns (new_round_state, drawn_tile), or (unchanged_state, None) if the
    wall is empty.
    """
    new_wall, tile = draw_from_wall(round_state.wall)
    if tile is None:
        return round_state, None
    new_state = round_state.model_copy(update={"wall": new_wall})
    new_state = update_seat(new_state, round_state.active_seat, drawn_tile=tile)
    return new_state, tile


def discard_tile(
    round_state: RoundState,
    seat: int,
    index: int,
) -> tuple[RoundState, DiscardEvent]:
    """
    Discard a tile from a seat's hand + drawn tile.

    `index` points into hand_with_drawn(): positions below len(hand) are held
    tiles and len(hand) is the drawn tile. The drawn tile (if kept) joins the
    hand, which is re-sorted. Returns (new_round_state, discard_event).
    """
    seat_state = round_state.seats[seat]
    tiles = seat_state.hand_with_drawn()
    if not 0 <= index < len(tiles):
        logger.warning(f"seat {seat} tried to discard index {index} of {len(tiles)} tiles")
        raise InvalidDiscardError(f"discard index {index} out of range for {len(tiles)} tiles")

    tile = tiles.pop(index)
    is_tsumogiri = seat_state.drawn_tile is not None and index == len(seat_state.hand)

    new_state = update_seat(round_state, seat, hand=tuple(sort_tiles(tiles)), drawn_tile=None)
    new_state = add_discard_to_seat(new_state, seat, tile)
    new_state = new_state.model_copy(update={"turn_count": round_state.turn_count + 1})
    return new_state, DiscardEvent(seat=seat, tile=tile, is_tsumogiri=is_tsumogiri)


def end_round(round_state: RoundState, result: RoundResult) -> RoundState:
    """
    Return the terminal state carrying the round result.
    """
    return round_state.model_copy(
        update={
            "phase": RoundPhase.ENDED,
            "is_ended": True,
            "result": result,
            "selection": None,
            "pending_ron": None,
        }
    )


def process_exhaustive_draw(round_state: RoundState) -> tuple[RoundState, ExhaustiveDrawResult]:
    """
    End the round with no winner because the wall ran out.

    No points move. Tenpai is evaluated on each seat's 13 held tiles and the
    human seat's status is reported separately.
    """
    tenpai_seats = [s.seat for s in round_state.seats if is_tenpai(s.hand)]
    noten_seats = [s.seat for s in round_state.seats if s.seat not in tenpai_seats]
    result = ExhaustiveDrawResult(
        human_tenpai=HUMAN_SEAT in tenpai_seats,
        tenpai_seats=tenpai_seats,
        noten_seats=noten_seats,
        scores=round_state.scores,
        score_changes=dict.fromkeys(range(len(round_state.seats)), 0),
    )
    logger.info(f"exhaustive draw, tenpai seats={tenpai_seats}")
    return end_round(round_state, result), result
