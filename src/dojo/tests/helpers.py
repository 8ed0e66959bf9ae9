from mahjong.tile import TilesConverter

from dojo.logic.rng import SEED_BYTES
from dojo.logic.round import init_round
from dojo.logic.state import RoundState
from dojo.logic.state_utils import update_seat
from dojo.logic.tiles import COPIES_PER_KIND, TOTAL_TILES, Tile, tiles_from_ids
from dojo.logic.wall import Wall, create_wall_from_tiles

FIXED_SEED = "ab" * SEED_BYTES

# 123m 456m 789m 123p 5p: single wait on 5p
TENPAI_5P = {"man": "123456789", "pin": "1235"}
# 111s 222s 333s 444s 5p: the 5p is its most isolated tile
ISOLATED_5P = {"sou": "111222333444", "pin": "5"}
# no complete hand with any single draw
SCATTERED = {"man": "258", "pin": "179", "sou": "1469", "honors": "567"}
# seven honor pairs minus one tile
HONOR_PAIRS = {"honors": "1122334455667"}


def tiles(man: str = "", pin: str = "", sou: str = "", honors: str = "") -> list[Tile]:
    """Tiles from mahjong-library notation, e.g. tiles(man="123", honors="11")."""
    return tiles_from_ids(TilesConverter.string_to_136_array(man=man, pin=pin, sou=sou, honors=honors))


def kinds(man: str = "", pin: str = "", sou: str = "", honors: str = "") -> list[int]:
    return [t // COPIES_PER_KIND for t in TilesConverter.string_to_136_array(man=man, pin=pin, sou=sou, honors=honors)]


def build_wall_ids(hands: list[list[int]], draws: list[int] | None = None) -> list[int]:
    """
    Build a full wall order that deals `hands` (tile kinds) to seats 0-3 and
    then draws `draws` (tile kinds) in order.

    Each kind takes its lowest unused copy. Leftover ids follow in ascending order.
    """
    next_copy = [0] * (TOTAL_TILES // COPIES_PER_KIND)
    order: list[int] = []
    for kind in [k for hand in hands for k in hand] + list(draws or []):
        if next_copy[kind] >= COPIES_PER_KIND:
            raise ValueError(f"more than {COPIES_PER_KIND} copies of kind {kind}")
        order.append(kind * COPIES_PER_KIND + next_copy[kind])
        next_copy[kind] += 1
    used = set(order)
    order.extend(tile_id for tile_id in range(TOTAL_TILES) if tile_id not in used)
    return order


def build_wall(hands: list[list[int]], draws: list[int] | None = None) -> Wall:
    return create_wall_from_tiles(build_wall_ids(hands, draws))


def scripted_hands(
    human: dict[str, str] = TENPAI_5P,
    seat1: dict[str, str] = ISOLATED_5P,
    seat2: dict[str, str] = SCATTERED,
    seat3: dict[str, str] = HONOR_PAIRS,
) -> list[list[int]]:
    return [kinds(**human), kinds(**seat1), kinds(**seat2), kinds(**seat3)]


def make_round(hands: list[list[int]] | None = None, draws: list[int] | None = None) -> RoundState:
    """Dealt round in the draw phase with seat 0 active."""
    round_state, _ = init_round(wall=build_wall(hands or scripted_hands(), draws))
    return round_state


def exhaust_wall(round_state: RoundState, seat: int = 3) -> RoundState:
    """Move every wall tile into a seat's discards, keeping the full tile set."""
    discards = (*round_state.seats[seat].discards, *round_state.wall.tiles)
    new_state = update_seat(round_state, seat, discards=discards)
    return new_state.model_copy(update={"wall": Wall()})
