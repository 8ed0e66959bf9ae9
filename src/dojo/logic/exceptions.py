"""Typed domain exceptions for round rule violations.

All rule violations raised by transition handlers are subclasses of
GameRuleError. The action boundary (action_handlers.apply_action) catches
them and turns the action into a no-op, so callers never see them.
"""


class GameRuleError(Exception):
    """Base exception for round rule violations.

    Raised by domain logic (turn.py, round.py, action_handlers.py) when an
    action does not match the current phase, active seat, or hand contents.
    """


class InvalidActionError(GameRuleError):
    """Action is not valid in the current round state."""


class InvalidSelectionError(GameRuleError):
    """Tile selection does not point at a tile the human seat holds."""


class InvalidDiscardError(GameRuleError):
    """Discard cannot be committed (nothing selected, wrong phase, etc.)."""


class InvalidWinError(GameRuleError):
    """Win declaration (tsumo/ron) conditions not met."""


class UnsupportedSettingsError(GameRuleError):
    """Game settings contain values the engine cannot honor."""


class InvariantViolationError(Exception):
    """Raised when an internal state invariant is broken.

    This is never raised for user input. It signals a bug in the engine,
    such as a tile appearing twice or disappearing between transitions.

    Attributes:
        invariant: Short name of the broken invariant.
        detail: Human-readable explanation.

    """

    def __init__(self, *, invariant: str, detail: str) -> None:
        self.invariant = invariant
        self.detail = detail
        super().__init__(f"{invariant}: {detail}")
