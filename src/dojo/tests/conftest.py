import os

import pytest

from dojo.logic.state import RoundState
from dojo.session.controller import RoundController
from dojo.session.settings import TableSettings
from dojo.tests.helpers import FIXED_SEED, make_round


@pytest.fixture(autouse=True)
def _clear_dojo_env(monkeypatch):
    """Keep DOJO_* variables from the developer shell out of TableSettings."""
    for name in list(os.environ):
        if name.startswith("DOJO_"):
            monkeypatch.delenv(name)


@pytest.fixture
def fixed_seed() -> str:
    return FIXED_SEED


@pytest.fixture
def dealt_round() -> RoundState:
    """Scripted round: seat 0 waits on 5p, seat 1 holds an isolated 5p."""
    return make_round()


@pytest.fixture
def controller():
    table_settings = TableSettings(
        human_draw_delay=0,
        first_opponent_delay=0,
        next_opponent_delay=0,
        after_declined_ron_delay=0,
        check_invariants=True,
    )
    ctrl = RoundController(table_settings=table_settings)
    yield ctrl
    ctrl.close()
