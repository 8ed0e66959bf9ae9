"""
String enum definitions for round engine concepts.
"""

from enum import Enum


class Suit(str, Enum):
    """Tile suits. Numbered suits run 1-9, honors 1-7."""

    MAN = "man"
    PIN = "pin"
    SOU = "sou"
    HONOR = "honor"


class RoundPhase(str, Enum):
    """Phase of a round."""

    DRAW = "draw"
    DISCARD = "discard"
    WAIT_FOR_RON_DECISION = "wait_for_ron_decision"
    ENDED = "ended"


class GameAction(str, Enum):
    """Actions dispatched to the round engine."""

    SELECT_TILE = "select_tile"
    CONFIRM_DISCARD = "confirm_discard"
    DECLARE_TSUMO = "declare_tsumo"
    DECLARE_RON = "declare_ron"
    DECLINE_RON = "decline_ron"
    ADVANCE = "advance"  # run the next pending draw or opponent turn


class RoundResultType(str, Enum):
    """Types of round end results."""

    TSUMO = "tsumo"
    RON = "ron"
    EXHAUSTIVE_DRAW = "exhaustive_draw"


class AIPlayerStrategy(str, Enum):
    """Available opponent discard strategies."""

    ISOLATION = "isolation"  # discard the most isolated tile
    TSUMOGIRI = "tsumogiri"  # always discard the drawn tile


class StepKind(str, Enum):
    """Kinds of scheduled engine steps, used to pick the pacing delay."""

    HUMAN_DRAW = "human_draw"
    FIRST_OPPONENT = "first_opponent"
    NEXT_OPPONENT = "next_opponent"
    AFTER_DECLINED_RON = "after_declined_ron"
