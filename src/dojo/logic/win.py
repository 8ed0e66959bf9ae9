"""
Win and tenpai detection.

Both predicates work on a 34-array of per-kind counts and search every
decomposition by backtracking. Numbered suits can form runs; honors can
only form triplets or the pair.
"""

from functools import lru_cache

from dojo.logic.tiles import HONOR_34_START, NUM_KINDS, SUIT_RANKS, Tile, hand_to_34_array

WINNING_HAND_SIZE = 14
TENPAI_HAND_SIZE = 13
SEVEN_PAIRS_COUNT = 7

# run starts must leave room for two higher ranks in the same suit
_MAX_RUN_START_RANK = SUIT_RANKS - 2


def _can_start_run(kind: int) -> bool:
    return kind < HONOR_34_START and kind % SUIT_RANKS < _MAX_RUN_START_RANK


@lru_cache(maxsize=4096)
def _can_form_sets(counts: tuple[int, ...]) -> bool:
    """
    Check whether the counts split entirely into triplets and runs.

    The lowest remaining kind must belong to some group, so only two branches
    exist per step: a triplet of it, or a run starting at it. Each call removes
    three tiles, which bounds the recursion depth.
    """
    first = next((kind for kind, count in enumerate(counts) if count > 0), None)
    if first is None:
        return True

    if counts[first] >= 3:
        rest = list(counts)
        rest[first] -= 3
        if _can_form_sets(tuple(rest)):
            return True

    if _can_start_run(first) and counts[first + 1] > 0 and counts[first + 2] > 0:
        rest = list(counts)
        rest[first] -= 1
        rest[first + 1] -= 1
        rest[first + 2] -= 1
        if _can_form_sets(tuple(rest)):
            return True

    return False


def _is_seven_pairs(counts: tuple[int, ...]) -> bool:
    present = [count for count in counts if count > 0]
    pairs = [count for count in present if count >= 2]
    return len(pairs) == SEVEN_PAIRS_COUNT and len(present) == SEVEN_PAIRS_COUNT


@lru_cache(maxsize=4096)
def _is_winning_counts(counts: tuple[int, ...]) -> bool:
    for kind in range(NUM_KINDS):
        if counts[kind] < 2:
            continue
        rest = list(counts)
        rest[kind] -= 2
        if _can_form_sets(tuple(rest)):
            return True
    return _is_seven_pairs(counts)


def is_winning_hand(tiles: list[Tile] | tuple[Tile, ...]) -> bool:
    """
    Check if 14 tiles form a complete hand.

    Complete means four groups (triplet or same-suit run) plus one pair, or
    seven pairs of distinct kinds. Any other hand size returns False.
    """
    if len(tiles) != WINNING_HAND_SIZE:
        return False
    return _is_winning_counts(tuple(hand_to_34_array(tiles)))


def get_waiting_kinds(tiles: list[Tile] | tuple[Tile, ...]) -> list[int]:
    """
    Find every tile kind (34-format) that would complete a 13-tile hand.

    All 34 kinds are tried regardless of how many copies remain in the wall
    or are already held.
    """
    if len(tiles) != TENPAI_HAND_SIZE:
        return []
    tiles_34 = hand_to_34_array(tiles)
    waiting = []
    for kind in range(NUM_KINDS):
        tiles_34[kind] += 1
        if _is_winning_counts(tuple(tiles_34)):
            waiting.append(kind)
        tiles_34[kind] -= 1
    return waiting


def is_tenpai(tiles: list[Tile] | tuple[Tile, ...]) -> bool:
    """
    Check if a 13-tile hand is one tile away from complete.

    Any other hand size returns False.
    """
    return len(get_waiting_kinds(tiles)) > 0
