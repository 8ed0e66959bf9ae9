"""
Opponent decision making.

The default strategy discards the most isolated tile: every tile is scored
by how much it contributes to pairs and nearby runs, and the lowest score
goes. There is no lookahead, no read on other hands and no defense.
Opponents always declare tsumo when their hand is complete and never
claim discards.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dojo.logic.enums import AIPlayerStrategy
from dojo.logic.tiles import SUIT_RANKS, Tile, hand_to_34_array
from dojo.logic.types import AIPlayerAction
from dojo.logic.win import is_winning_hand

if TYPE_CHECKING:
    from dojo.logic.state import SeatState

PAIR_SCORE = 10
NEIGHBOR_SCORE = 8  # same suit, rank distance 1
NEAR_NEIGHBOR_SCORE = 3  # same suit, rank distance 2


def _has_kind_at(tiles_34: list[int], tile: Tile, offset: int) -> bool:
    rank = tile.rank + offset
    if not 1 <= rank <= SUIT_RANKS:
        return False
    kind = tile.kind + offset
    return tiles_34[kind] > 0


def score_tile(tile: Tile, tiles_34: list[int]) -> int:
    """
    Score how useful a tile is to the hand described by tiles_34.

    +10 when another copy of the same kind is held, +8 per held neighbor at
    rank distance 1 and +3 per held neighbor at distance 2. Honor tiles have
    no neighbors.
    """
    score = PAIR_SCORE if tiles_34[tile.kind] >= 2 else 0  # noqa: PLR2004
    if tile.is_honor:
        return score
    for offset in (-1, 1):
        if _has_kind_at(tiles_34, tile, offset):
            score += NEIGHBOR_SCORE
    for offset in (-2, 2):
        if _has_kind_at(tiles_34, tile, offset):
            score += NEAR_NEIGHBOR_SCORE
    return score


def choose_discard(tiles: list[Tile]) -> int:
    """
    Return the index of the tile to discard.

    Picks the lowest-scoring tile; ties go to the earliest position.
    """
    if not tiles:
        raise ValueError("cannot select discard from empty hand")
    tiles_34 = hand_to_34_array(tiles)
    scores = [score_tile(tile, tiles_34) for tile in tiles]
    return scores.index(min(scores))


class AIPlayer:
    """
    Opponent with a configurable discard strategy.

    Decisions are pure functions of the seat's current tiles; nothing is
    carried between calls.
    """

    def __init__(self, strategy: AIPlayerStrategy = AIPlayerStrategy.ISOLATION) -> None:
        self.strategy = strategy

    def should_declare_tsumo(self, seat: SeatState) -> bool:
        """Opponents always take a complete hand."""
        return seat.drawn_tile is not None and is_winning_hand(seat.hand_with_drawn())

    def select_discard(self, seat: SeatState) -> int:
        """
        Select a tile to discard, as an index into hand + drawn tile.
        """
        tiles = seat.hand_with_drawn()
        if self.strategy == AIPlayerStrategy.TSUMOGIRI:
            if not tiles:
                raise ValueError("cannot select discard from empty hand")
            return len(tiles) - 1
        return choose_discard(tiles)

    def get_action(self, seat: SeatState) -> AIPlayerAction:
        """
        Determine the opponent's turn action after its draw.
        """
        if self.should_declare_tsumo(seat):
            return AIPlayerAction(declare_tsumo=True)
        return AIPlayerAction(discard_index=self.select_discard(seat))
