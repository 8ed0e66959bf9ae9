"""
Unit tests for point calculation and score settlement.
"""

import pytest

from dojo.logic.enums import RoundResultType
from dojo.logic.scoring import apply_ron_score, apply_tsumo_score, calc_points, ron_score_changes, tsumo_score_changes
from dojo.tests.helpers import tiles


class TestCalcPoints:
    def test_one_han(self):
        assert calc_points(1, is_ron=False) == 2400
        assert calc_points(1, is_ron=True) == 4800

    def test_doubles_per_han(self):
        assert calc_points(2, is_ron=True) == 2 * calc_points(1, is_ron=True)

    def test_negative_han_rejected(self):
        with pytest.raises(ValueError, match="han"):
            calc_points(-1, is_ron=True)


class TestScoreChanges:
    def test_tsumo_each_other_seat_pays_a_third(self):
        assert tsumo_score_changes(2, 2400, 4) == {0: -800, 1: -800, 2: 2400, 3: -800}

    def test_tsumo_truncates_payment(self):
        changes = tsumo_score_changes(0, 1000, 4)
        assert changes[1] == -333
        assert changes[0] == 1000

    def test_ron_only_discarder_pays(self):
        assert ron_score_changes(0, 3, 4800, 4) == {0: 4800, 1: 0, 2: 0, 3: -4800}


class TestApplyScore:
    def test_apply_tsumo_score(self, dealt_round):
        win_tile = tiles(pin="5")[0]
        new_state, result = apply_tsumo_score(dealt_round, 0, win_tile)

        assert result.type == RoundResultType.TSUMO
        assert result.points == 2400
        assert result.scores == {0: 27400, 1: 24200, 2: 24200, 3: 24200}
        assert new_state.scores == result.scores
        assert dealt_round.scores == {0: 25000, 1: 25000, 2: 25000, 3: 25000}

    def test_apply_ron_score(self, dealt_round):
        win_tile = tiles(pin="5")[0]
        new_state, result = apply_ron_score(dealt_round, 0, 1, win_tile)

        assert result.type == RoundResultType.RON
        assert result.loser_seat == 1
        assert result.scores == {0: 29800, 1: 20200, 2: 25000, 3: 25000}
        assert new_state.scores == result.scores

    def test_fixed_han_setting_is_used(self, dealt_round):
        settings = dealt_round.settings.model_copy(update={"fixed_han": 2})
        round_state = dealt_round.model_copy(update={"settings": settings})
        _, result = apply_ron_score(round_state, 0, 1, tiles(pin="5")[0])
        assert result.points == 9600
