"""
Tile representation utilities for the round engine.
"""

from mahjong.tile import TilesConverter
from pydantic import BaseModel, ConfigDict

from dojo.logic.enums import Suit

# tile ranges in 136-format (4 copies of each tile)
# man (characters): 0-35 (1m-9m, 4 copies each)
# pin (circles): 36-71 (1p-9p, 4 copies each)
# sou (bamboo): 72-107 (1s-9s, 4 copies each)
# honors: 108-135 (E, S, W, N, Haku, Hatsu, Chun, 4 copies each)

TOTAL_TILES = 136
COPIES_PER_KIND = 4
NUM_KINDS = 34
SUIT_RANKS = 9
HONOR_RANKS = 7

# tile kinds in 34-format
MAN_34_START = 0
PIN_34_START = 9
SOU_34_START = 18
HONOR_34_START = 27

_SUIT_ORDER: tuple[Suit, ...] = (Suit.MAN, Suit.PIN, Suit.SOU, Suit.HONOR)
_SUIT_34_START: dict[Suit, int] = {
    Suit.MAN: MAN_34_START,
    Suit.PIN: PIN_34_START,
    Suit.SOU: SOU_34_START,
    Suit.HONOR: HONOR_34_START,
}


class Tile(BaseModel):
    """A single physical tile."""

    model_config = ConfigDict(frozen=True)

    id: int
    suit: Suit
    rank: int

    @property
    def kind(self) -> int:
        """34-format index shared by all four copies of this tile."""
        return self.id // COPIES_PER_KIND

    @property
    def is_honor(self) -> bool:
        return self.suit == Suit.HONOR

    def __str__(self) -> str:
        return format_tiles([self])


def ranks_in_suit(suit: Suit) -> int:
    """Number of ranks a suit carries (9 for numbered suits, 7 for honors)."""
    return HONOR_RANKS if suit == Suit.HONOR else SUIT_RANKS


def kind_of(suit: Suit, rank: int) -> int:
    """
    Convert a (suit, rank) pair to its 34-format index.
    """
    if not 1 <= rank <= ranks_in_suit(suit):
        raise ValueError(f"rank {rank} out of range for suit {suit.value}")
    return _SUIT_34_START[suit] + rank - 1


def suit_of_kind(kind: int) -> Suit:
    """Return the suit a 34-format index belongs to."""
    if not 0 <= kind < NUM_KINDS:
        raise ValueError(f"tile kind must be in [0, {NUM_KINDS - 1}], got {kind}")
    return _SUIT_ORDER[min(kind // SUIT_RANKS, len(_SUIT_ORDER) - 1)]


def rank_of_kind(kind: int) -> int:
    return kind - _SUIT_34_START[suit_of_kind(kind)] + 1


def tile_from_id(tile_id: int) -> Tile:
    """
    Build the Tile for a 136-format id.

    Ids are laid out kind-major, so four consecutive ids share a kind.
    """
    if not 0 <= tile_id < TOTAL_TILES:
        raise ValueError(f"tile_id must be in [0, {TOTAL_TILES - 1}], got {tile_id}")
    kind = tile_id // COPIES_PER_KIND
    return Tile(id=tile_id, suit=suit_of_kind(kind), rank=rank_of_kind(kind))


def build_deck() -> list[Tile]:
    """
    Build the full 136-tile set in its canonical order (before shuffling).

    Order is man 1-9, pin 1-9, sou 1-9, honors 1-7, four copies of each.
    """
    return [tile_from_id(tile_id) for tile_id in range(TOTAL_TILES)]


def tiles_from_ids(tile_ids: list[int] | tuple[int, ...]) -> list[Tile]:
    return [tile_from_id(tile_id) for tile_id in tile_ids]


def hand_to_34_array(tiles: list[Tile] | tuple[Tile, ...]) -> list[int]:
    """
    Convert tiles to a 34-array of per-kind counts.
    """
    tiles_34 = [0] * NUM_KINDS
    for tile in tiles:
        tiles_34[tile.kind] += 1
    return tiles_34


def sort_tiles(tiles: list[Tile] | tuple[Tile, ...]) -> list[Tile]:
    """
    Sort tiles by id, which also orders them by kind.
    """
    return sorted(tiles, key=lambda tile: tile.id)


def format_tiles(tiles: list[Tile] | tuple[Tile, ...]) -> str:
    """
    Render tiles as a compact one-line string, e.g. "123m456p11z".
    """
    return TilesConverter.to_one_line_string([tile.id for tile in tiles])
