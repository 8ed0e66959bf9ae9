"""
Rounds driven by the asyncio scheduler instead of run_until_idle().
"""

import asyncio

from dojo.logic.enums import RoundPhase
from dojo.logic.types import DrawnTile
from dojo.session.controller import RoundController
from dojo.session.settings import TableSettings
from dojo.tests.helpers import build_wall, kinds, scripted_hands

NOTEN_HUMAN = {"man": "147258369", "honors": "1357"}
DRAWS = kinds(honors="4") + kinds(honors="1")


def _paced_controller(**delays) -> RoundController:
    table_settings = TableSettings(
        human_draw_delay=0,
        first_opponent_delay=delays.get("first", 0.01),
        next_opponent_delay=delays.get("next", 0.01),
        after_declined_ron_delay=delays.get("declined", 0.01),
        check_invariants=True,
    )
    return RoundController(table_settings=table_settings)


class TestPacedRound:
    async def test_opponents_play_one_snapshot_at_a_time(self):
        controller = _paced_controller()
        active_seats = []
        controller.subscribe(lambda view, events: active_seats.append(view.active_seat))
        controller.start()
        controller.start_new_round(wall=build_wall(scripted_hands(human=NOTEN_HUMAN), DRAWS))
        await controller.wait_idle()
        assert controller.snapshot().phase == RoundPhase.DISCARD

        controller.select_tile(DrawnTile())
        controller.confirm_discard()
        await controller.wait_idle()

        view = controller.snapshot()
        assert view.active_seat == 0
        assert view.phase == RoundPhase.DISCARD
        assert active_seats[-5:] == [1, 2, 3, 0, 0]
        controller.close()

    async def test_human_input_ignored_during_opponent_turn(self):
        controller = _paced_controller(first=0.05)
        controller.start()
        controller.start_new_round(wall=build_wall(scripted_hands(human=NOTEN_HUMAN), DRAWS))
        await controller.wait_idle()
        controller.select_tile(DrawnTile())
        controller.confirm_discard()

        # seat 1 has not played yet
        assert controller.snapshot().active_seat == 1
        assert not controller.select_tile(0)
        assert not controller.confirm_discard()
        await controller.wait_idle()
        assert controller.snapshot().active_seat == 0
        controller.close()

    async def test_new_round_cancels_pending_opponent(self):
        controller = _paced_controller(first=0.05)
        controller.start()
        controller.start_new_round(wall=build_wall(scripted_hands(human=NOTEN_HUMAN), DRAWS))
        await controller.wait_idle()
        controller.select_tile(DrawnTile())
        controller.confirm_discard()

        controller.start_new_round(wall=build_wall(scripted_hands(), kinds(pin="5")))
        await asyncio.sleep(0.1)
        await controller.wait_idle()

        view = controller.snapshot()
        assert view.active_seat == 0
        assert view.can_declare_tsumo
        assert all(not seat.discards for seat in view.seats)
        controller.close()

    async def test_listener_can_restart_round_mid_step(self):
        controller = _paced_controller()
        restarted_from = []

        def restart_once(view, events):
            if view.phase == RoundPhase.DISCARD and not restarted_from:
                restarted_from.append(view.round_number)
                controller.start_new_round(wall=build_wall(scripted_hands(), kinds(pin="5")))

        controller.subscribe(restart_once)
        controller.start()
        controller.start_new_round(wall=build_wall(scripted_hands(human=NOTEN_HUMAN), DRAWS))
        await controller.wait_idle()

        view = controller.snapshot()
        assert restarted_from == [0]
        assert view.round_number == 1
        assert view.phase == RoundPhase.DISCARD
        assert view.can_declare_tsumo
        controller.close()
