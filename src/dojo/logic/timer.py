"""
Step scheduler that paces engine steps for the rendering layer.

Pending steps run in FIFO order. Headless callers drain them synchronously
with run_until_idle(); an interactive table calls start() so each step runs
on the event loop after its configured delay.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import TYPE_CHECKING

from pydantic import BaseModel

from dojo.logic.enums import StepKind

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable


class SchedulerConfig(BaseModel):
    """Delays (seconds) before each kind of engine step."""

    human_draw_delay: float = 0
    first_opponent_delay: float = 0.8
    next_opponent_delay: float = 0.6
    after_declined_ron_delay: float = 0.4

    def delay_for(self, kind: StepKind) -> float:
        return {
            StepKind.HUMAN_DRAW: self.human_draw_delay,
            StepKind.FIRST_OPPONENT: self.first_opponent_delay,
            StepKind.NEXT_OPPONENT: self.next_opponent_delay,
            StepKind.AFTER_DECLINED_RON: self.after_declined_ron_delay,
        }[kind]


class StepScheduler:
    """
    Queue of pending engine steps with optional asyncio pacing.

    run_step is called once per step, in order. It may schedule further
    steps; they join the same queue.
    """

    def __init__(
        self,
        run_step: Callable[[StepKind], None],
        config: SchedulerConfig | None = None,
    ) -> None:
        self._run_step = run_step
        self._config = config or SchedulerConfig()
        self._pending: deque[StepKind] = deque()
        self._active_task: asyncio.Task[None] | None = None
        self._paced = False

    @property
    def pending(self) -> list[StepKind]:
        return list(self._pending)

    @property
    def is_idle(self) -> bool:
        """True when nothing is queued and no paced step is in flight."""
        return not self._pending and (self._active_task is None or self._active_task.done())

    def schedule(self, kind: StepKind) -> None:
        """Queue a step; in paced mode make sure a drain task is running."""
        self._pending.append(kind)
        if self._paced:
            self._ensure_task()

    def run_until_idle(self) -> int:
        """
        Run every pending step now, including steps they schedule.

        Returns the number of steps run.
        """
        count = 0
        while self._pending:
            self._run_step(self._pending.popleft())
            count += 1
        return count

    def start(self) -> None:
        """Switch to paced mode and drain pending steps on the running loop."""
        self._paced = True
        if self._pending:
            self._ensure_task()

    async def wait_idle(self) -> None:
        """
        Wait until the paced drain task has nothing left to run.

        A drain task cancelled by cancel() is not an error here; waiting
        moves on to the task that replaced it, if any.
        """
        while self._active_task is not None and not self._active_task.done():
            await asyncio.wait({self._active_task})

    def cancel(self) -> None:
        """Drop every pending step and stop the in-flight delay."""
        self._pending.clear()
        if self._active_task is not None and not self._active_task.done():
            self._active_task.cancel()
        self._active_task = None

    def _ensure_task(self) -> None:
        if self._active_task is None or self._active_task.done():
            self._active_task = asyncio.create_task(self._drain())

    async def _drain(self) -> None:
        try:
            while self._pending and asyncio.current_task() is self._active_task:
                kind = self._pending.popleft()
                await asyncio.sleep(self._config.delay_for(kind))
                self._run_step(kind)
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("scheduled step failed")
