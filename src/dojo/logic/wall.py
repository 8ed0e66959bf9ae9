"""
Wall state and operations.

The wall is the ordered stack of undrawn tiles. Tiles are dealt and drawn
from the front. An empty wall is not an error here: draw_tile reports it by
returning None and the round turns that into an exhaustive draw.
"""

from pydantic import BaseModel, ConfigDict

from dojo.logic.rng import shuffle_tiles
from dojo.logic.settings import SUPPORTED_HAND_SIZE, SUPPORTED_NUM_SEATS
from dojo.logic.tiles import TOTAL_TILES, Tile, build_deck, sort_tiles, tiles_from_ids


class Wall(BaseModel):
    """Immutable wall state for a round."""

    model_config = ConfigDict(frozen=True)

    tiles: tuple[Tile, ...] = ()


def create_wall(seed: str | None = None, round_number: int = 0) -> Wall:
    """
    Build the full tile set and shuffle it into a wall.

    With a seed the wall is reproducible; without one it is freshly random.
    """
    return Wall(tiles=tuple(shuffle_tiles(build_deck(), seed, round_number)))


def create_wall_from_tiles(tile_ids: list[int]) -> Wall:
    """
    Create a wall from an explicit tile order (for tests/replays).

    The list must be a full permutation of the 136 tile ids; its first
    element is the first tile dealt.
    """
    if len(tile_ids) != TOTAL_TILES:
        raise ValueError(f"Expected {TOTAL_TILES} tiles, got {len(tile_ids)}")
    if not all(isinstance(t, int) and 0 <= t <= TOTAL_TILES - 1 for t in tile_ids):
        raise ValueError(f"All tile IDs must be integers in [0, {TOTAL_TILES - 1}]")
    if len(set(tile_ids)) != TOTAL_TILES:
        raise ValueError("All tile IDs must be unique (full permutation)")
    return Wall(tiles=tuple(tiles_from_ids(tile_ids)))


def deal(wall: Wall, count: int) -> tuple[Wall, tuple[Tile, ...]]:
    """Remove and return the first `count` tiles of the wall."""
    if count < 0:
        raise ValueError(f"Cannot deal a negative number of tiles: {count}")
    if count > len(wall.tiles):
        raise ValueError(f"Wall has {len(wall.tiles)} tiles, cannot deal {count}")
    dealt = wall.tiles[:count]
    return wall.model_copy(update={"tiles": wall.tiles[count:]}), dealt


def deal_initial_hands(
    wall: Wall,
    num_seats: int = SUPPORTED_NUM_SEATS,
    hand_size: int = SUPPORTED_HAND_SIZE,
) -> tuple[Wall, list[list[Tile]]]:
    """
    Deal one starting hand per seat.

    Each seat in order receives `hand_size` consecutive tiles from the front
    of the wall. Returns (updated_wall, hands) with each hand sorted by id.
    A full 136-tile wall dealt to four 13-tile hands leaves 84 tiles.
    """
    hands: list[list[Tile]] = []
    current = wall
    for _ in range(num_seats):
        current, dealt = deal(current, hand_size)
        hands.append(sort_tiles(dealt))
    return current, hands


def draw_tile(wall: Wall) -> tuple[Wall, Tile | None]:
    """Draw from front of the wall. Returns (new_wall, tile) or (wall, None) if empty."""
    if not wall.tiles:
        return wall, None
    return wall.model_copy(update={"tiles": wall.tiles[1:]}), wall.tiles[0]


def is_wall_exhausted(wall: Wall) -> bool:
    """Check if the wall is empty."""
    return len(wall.tiles) == 0


def tiles_remaining(wall: Wall) -> int:
    return len(wall.tiles)
