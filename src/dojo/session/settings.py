"""Table runtime configuration via environment variables."""

from pydantic_settings import BaseSettings

from dojo.logic.timer import SchedulerConfig


class TableSettings(BaseSettings):
    model_config = {"env_prefix": "DOJO_"}

    human_draw_delay: float = 0
    first_opponent_delay: float = 0.8
    next_opponent_delay: float = 0.6
    after_declined_ron_delay: float = 0.4

    log_dir: str | None = None
    check_invariants: bool = False
    seed: str | None = None  # fixed wall seed for reproducible rounds

    def scheduler_config(self) -> SchedulerConfig:
        return SchedulerConfig(
            human_draw_delay=self.human_draw_delay,
            first_opponent_delay=self.first_opponent_delay,
            next_opponent_delay=self.next_opponent_delay,
            after_declined_ron_delay=self.after_declined_ron_delay,
        )
