"""
Round controller: the single owner and mutator of the round state.

The controller feeds human input and scheduled engine steps through
apply_action, keeps the latest state, and hands every accepted transition
to its listeners as (snapshot, events).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from dojo.logic.action_handlers import ActionResult, apply_action
from dojo.logic.enums import GameAction, RoundPhase, StepKind
from dojo.logic.exceptions import InvalidActionError
from dojo.logic.rng import generate_seed
from dojo.logic.round import init_round
from dojo.logic.settings import GameSettings
from dojo.logic.state import (
    HUMAN_SEAT,
    RoundState,
    can_declare_ron,
    can_declare_tsumo,
    check_tile_conservation,
    get_round_view,
)
from dojo.logic.timer import StepScheduler
from dojo.logic.types import HeldTile, SelectTileData
from dojo.session.settings import TableSettings

if TYPE_CHECKING:
    from collections.abc import Callable

    from dojo.logic.events import GameEvent
    from dojo.logic.types import RoundView, SeatConfig, Selection
    from dojo.logic.wall import Wall

    RoundListener = Callable[[RoundView, list[GameEvent]], None]

logger = logging.getLogger(__name__)

_HUMAN_DISCARD_ACTIONS = (GameAction.SELECT_TILE, GameAction.CONFIRM_DISCARD)


class RoundController:
    """
    Owns one round at a time for a table with a single human seat.

    Engine steps (the human's draw, each opponent turn) are queued on a
    StepScheduler. Call run_until_idle() to play them out immediately, or
    start() inside a running event loop to pace them with the configured
    delays. Human actions that do not fit the current phase are ignored.
    """

    def __init__(
        self,
        seat_configs: list[SeatConfig] | None = None,
        *,
        settings: GameSettings | None = None,
        table_settings: TableSettings | None = None,
    ) -> None:
        self._seat_configs = seat_configs
        self._settings = settings or GameSettings()
        self._table_settings = table_settings or TableSettings()
        self._scheduler = StepScheduler(self._run_step, self._table_settings.scheduler_config())
        self._listeners: list[RoundListener] = []
        self._round_state: RoundState | None = None
        self._rounds_started = 0
        self._seed: str | None = None
        self._action_log: list[tuple[GameAction, dict[str, Any] | None]] = []

    @property
    def round_state(self) -> RoundState:
        if self._round_state is None:
            raise InvalidActionError("no round has been started")
        return self._round_state

    @property
    def seed(self) -> str | None:
        """Seed of the current wall, or None when the wall was supplied directly."""
        return self._seed

    @property
    def action_log(self) -> list[tuple[GameAction, dict[str, Any] | None]]:
        """Accepted human actions of the current round, in order."""
        return list(self._action_log)

    @property
    def scheduler(self) -> StepScheduler:
        return self._scheduler

    @property
    def can_declare_tsumo(self) -> bool:
        return self._round_state is not None and can_declare_tsumo(self._round_state)

    @property
    def can_declare_ron(self) -> bool:
        return self._round_state is not None and can_declare_ron(self._round_state)

    def snapshot(self) -> RoundView:
        """Read-only view of the current round for the human seat."""
        return get_round_view(self.round_state, HUMAN_SEAT)

    def subscribe(self, listener: RoundListener) -> Callable[[], None]:
        """
        Register a listener called after every accepted transition.

        Returns a callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start_new_round(self, seed: str | None = None, *, wall: Wall | None = None) -> RoundView:
        """
        Discard the current round (if any) and deal a fresh one.

        The wall comes from `wall` when given, otherwise from `seed`, the
        configured table seed, or a newly generated seed, in that order.
        """
        self._scheduler.cancel()
        if wall is not None:
            self._seed = None
        else:
            self._seed = seed or self._table_settings.seed or generate_seed()

        round_number = self._rounds_started
        self._rounds_started += 1
        new_state, events = init_round(
            self._seat_configs,
            settings=self._settings,
            seed=self._seed,
            round_number=round_number,
            wall=wall,
        )
        self._action_log = []
        self._commit(ActionResult(new_state, list(events)), None)
        return self.snapshot()

    def select_tile(self, selection: Selection | int) -> bool:
        """
        Select a tile of the human hand: a held index or DrawnTile().

        Selecting the already-selected tile discards it.
        """
        if isinstance(selection, int):
            selection = HeldTile(index=selection)
        return self._dispatch(GameAction.SELECT_TILE, SelectTileData(selection=selection))

    def confirm_discard(self) -> bool:
        return self._dispatch(GameAction.CONFIRM_DISCARD)

    def declare_tsumo(self) -> bool:
        return self._dispatch(GameAction.DECLARE_TSUMO)

    def declare_ron(self) -> bool:
        return self._dispatch(GameAction.DECLARE_RON)

    def decline_ron(self) -> bool:
        return self._dispatch(GameAction.DECLINE_RON)

    def run_until_idle(self) -> int:
        """Play out every pending engine step now. Returns the number of steps run."""
        return self._scheduler.run_until_idle()

    def start(self) -> None:
        """Pace pending and future engine steps on the running event loop."""
        self._scheduler.start()

    async def wait_idle(self) -> None:
        await self._scheduler.wait_idle()

    def close(self) -> None:
        self._scheduler.cancel()

    def _dispatch(self, action: GameAction, data: SelectTileData | None = None) -> bool:
        if self._round_state is None:
            logger.debug(f"{action.value} ignored, no round started")
            return False
        result = apply_action(self._round_state, action, data)
        if not result.changed:
            return False
        self._action_log.append((action, data.model_dump() if data is not None else None))
        self._commit(result, action)
        return True

    def _run_step(self, kind: StepKind) -> None:
        if self._round_state is None:  # pragma: no cover
            return
        result = apply_action(self._round_state, GameAction.ADVANCE)
        if not result.changed:
            logger.warning(f"scheduled {kind.value} step had nothing to do")
            return
        self._commit(result, GameAction.ADVANCE)

    def _commit(self, result: ActionResult, action: GameAction | None) -> None:
        new_state = result.round_state
        self._round_state = new_state
        if self._table_settings.check_invariants:
            check_tile_conservation(new_state)

        view = self.snapshot()
        for listener in list(self._listeners):
            listener(view, result.events)
        if self._round_state is not new_state:
            # a listener already moved the round on
            return

        next_step = _next_step_kind(new_state, action)
        if next_step is not None:
            self._scheduler.schedule(next_step)


def _next_step_kind(round_state: RoundState, action: GameAction | None) -> StepKind | None:
    """Kind of engine step the state is waiting on, or None when it waits for the human."""
    if round_state.is_ended or round_state.phase != RoundPhase.DRAW:
        return None
    if round_state.active_seat == HUMAN_SEAT:
        return StepKind.HUMAN_DRAW
    if action == GameAction.DECLINE_RON:
        return StepKind.AFTER_DECLINED_RON
    if action in _HUMAN_DISCARD_ACTIONS:
        return StepKind.FIRST_OPPONENT
    return StepKind.NEXT_OPPONENT


def replay_round(
    seed: str,
    actions: list[tuple[GameAction, dict[str, Any] | None]],
    *,
    round_number: int = 0,
    seat_configs: list[SeatConfig] | None = None,
    settings: GameSettings | None = None,
) -> RoundState:
    """
    Rebuild a round from its seed and its accepted human actions.

    Engine steps are deterministic, so they are replayed by running every
    pending step before each human action and once more at the end.
    """
    round_state, _ = init_round(seat_configs, settings=settings, seed=seed, round_number=round_number)
    round_state = _advance_until_human(round_state)
    for action, data in actions:
        result = apply_action(round_state, action, data)
        if not result.changed:
            raise InvalidActionError(f"replayed {action.value} was rejected")
        round_state = _advance_until_human(result.round_state)
    return round_state


def _advance_until_human(round_state: RoundState) -> RoundState:
    while not round_state.is_ended and round_state.phase == RoundPhase.DRAW:
        round_state = apply_action(round_state, GameAction.ADVANCE).round_state
    return round_state
