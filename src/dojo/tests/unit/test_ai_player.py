"""
Unit tests for opponent discard selection.
"""

import pytest

from dojo.logic.ai_player import AIPlayer, choose_discard, score_tile
from dojo.logic.enums import AIPlayerStrategy
from dojo.logic.state import SeatState
from dojo.logic.tiles import hand_to_34_array
from dojo.tests.helpers import tiles


def _seat(hand, drawn=None) -> SeatState:
    return SeatState(
        seat=1,
        name="Opponent 1",
        ai_strategy=AIPlayerStrategy.ISOLATION,
        hand=tuple(hand),
        drawn_tile=drawn,
    )


class TestScoreTile:
    def test_isolated_tile_scores_zero(self):
        hand = tiles(man="1", pin="9")
        assert score_tile(hand[0], hand_to_34_array(hand)) == 0

    def test_pair_bonus(self):
        hand = tiles(honors="11")
        assert score_tile(hand[0], hand_to_34_array(hand)) == 10

    def test_neighbors(self):
        # 5m with 4m, 6m (distance 1) and 3m, 7m (distance 2)
        hand = tiles(man="34567")
        five = hand[2]
        assert score_tile(five, hand_to_34_array(hand)) == 8 + 8 + 3 + 3

    def test_honors_have_no_neighbors(self):
        # east, south and west are adjacent kinds but not a run
        hand = tiles(honors="123")
        assert score_tile(hand[1], hand_to_34_array(hand)) == 0

    def test_neighbors_stay_within_suit(self):
        # 9m and 1p are adjacent kinds but not neighbors
        hand = tiles(man="9", pin="1")
        assert score_tile(hand[0], hand_to_34_array(hand)) == 0
        assert score_tile(hand[1], hand_to_34_array(hand)) == 0


class TestChooseDiscard:
    def test_discards_isolated_tile(self):
        hand = tiles(man="123", sou="9", pin="456")
        # order is 123m 456p 9s
        assert choose_discard(hand) == 6

    def test_ties_go_to_first_index(self):
        hand = tiles(man="1", pin="5", honors="7")
        assert choose_discard(hand) == 0

    def test_empty_hand(self):
        with pytest.raises(ValueError, match="empty hand"):
            choose_discard([])


class TestAIPlayer:
    def test_declares_tsumo_on_complete_hand(self):
        hand = tiles(man="123456789", pin="1235")
        seat = _seat(hand, drawn=tiles(pin="55")[1])
        action = AIPlayer().get_action(seat)
        assert action.declare_tsumo
        assert action.discard_index is None

    def test_discards_when_not_complete(self):
        hand = tiles(sou="111222333444", pin="5")
        seat = _seat(hand, drawn=tiles(honors="1")[0])
        action = AIPlayer().get_action(seat)
        assert not action.declare_tsumo
        # 5p sorts first in the hand and scores zero, like the drawn east wind
        assert action.discard_index == 0

    def test_tsumogiri_discards_drawn_tile(self):
        hand = tiles(man="123456789", pin="1299")
        seat = _seat(hand, drawn=tiles(honors="1")[0])
        assert AIPlayer(AIPlayerStrategy.TSUMOGIRI).select_discard(seat) == len(hand)

    def test_no_tsumo_without_drawn_tile(self):
        seat = _seat(tiles(man="123456789", pin="1235"))
        assert not AIPlayer().should_declare_tsumo(seat)
