"""Centralized rule settings for a single round."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from dojo.logic.enums import AIPlayerStrategy
from dojo.logic.exceptions import UnsupportedSettingsError

SUPPORTED_NUM_SEATS = 4
SUPPORTED_HAND_SIZE = 13
DEFAULT_STARTING_SCORE = 25000


class GameSettings(BaseModel):
    """
    Configuration for the round rules.

    All fields default to the standard four-seat table with one human seat.
    """

    model_config = ConfigDict(frozen=True)

    num_seats: int = SUPPORTED_NUM_SEATS
    hand_size: int = SUPPORTED_HAND_SIZE
    starting_score: int = DEFAULT_STARTING_SCORE

    # every win is valued at this han count (no yaku counting)
    fixed_han: int = 1

    opponent_strategy: AIPlayerStrategy = AIPlayerStrategy.ISOLATION


def validate_settings(settings: GameSettings) -> None:
    """
    Reject settings the engine cannot honor.

    Raises UnsupportedSettingsError listing every problem found.
    """
    errors: list[str] = []
    if settings.num_seats != SUPPORTED_NUM_SEATS:
        errors.append(f"num_seats={settings.num_seats} (only {SUPPORTED_NUM_SEATS} is supported)")
    if settings.hand_size != SUPPORTED_HAND_SIZE:
        errors.append(f"hand_size={settings.hand_size} (only {SUPPORTED_HAND_SIZE} is supported)")
    if settings.starting_score < 0:
        errors.append(f"starting_score={settings.starting_score} must not be negative")
    if settings.fixed_han < 1:
        errors.append(f"fixed_han={settings.fixed_han} must be at least 1")
    if errors:
        raise UnsupportedSettingsError("unsupported settings: " + "; ".join(errors))
