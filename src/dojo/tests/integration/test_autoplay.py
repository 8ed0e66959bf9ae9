"""
Whole rounds with a scripted human seat, plus seed replays.
"""

import pytest

from dojo.logic.enums import RoundResultType
from dojo.session.autoplay import play_round, play_scripted_turn
from dojo.session.controller import RoundController, replay_round
from dojo.session.settings import TableSettings
from dojo.tests.helpers import FIXED_SEED

CHECKED = TableSettings(check_invariants=True)


class TestPlayRound:
    @pytest.mark.parametrize("seed", [FIXED_SEED, "cd" * 96, "0f" * 96])
    def test_round_finishes_with_conserved_points(self, seed):
        view = play_round(seed, CHECKED)

        assert view.is_ended
        assert view.result is not None
        # 2400 splits evenly into three 800 payments, so points are conserved
        assert sum(seat.score for seat in view.seats) == 100000
        if view.result.type == RoundResultType.EXHAUSTIVE_DRAW:
            assert all(change == 0 for change in view.result.score_changes.values())

    def test_same_seed_same_result(self):
        first = play_round(FIXED_SEED, CHECKED)
        second = play_round(FIXED_SEED, CHECKED)
        assert first == second


class TestReplayRound:
    def test_replay_matches_live_round(self):
        controller = RoundController(table_settings=CHECKED)
        controller.start_new_round(FIXED_SEED)
        controller.run_until_idle()
        for _ in range(10):
            if not play_scripted_turn(controller):
                break
            controller.run_until_idle()

        replayed = replay_round(FIXED_SEED, controller.action_log)
        assert replayed == controller.round_state
