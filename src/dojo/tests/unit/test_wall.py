"""
Unit tests for Wall model and wall operations.
"""

import pytest
from pydantic import ValidationError

from dojo.logic.rng import SEED_BYTES
from dojo.logic.tiles import TOTAL_TILES, tile_from_id
from dojo.logic.settings import SUPPORTED_HAND_SIZE, SUPPORTED_NUM_SEATS
from dojo.logic.wall import (
    Wall,
    create_wall,
    create_wall_from_tiles,
    deal,
    deal_initial_hands,
    draw_tile,
    is_wall_exhausted,
    tiles_remaining,
)

FIXED_SEED = "ab" * SEED_BYTES


class TestCreateWall:
    def test_all_tiles_present(self):
        wall = create_wall(FIXED_SEED, 0)
        assert sorted(tile.id for tile in wall.tiles) == list(range(TOTAL_TILES))

    def test_deterministic(self):
        assert create_wall(FIXED_SEED, 0) == create_wall(FIXED_SEED, 0)

    def test_different_rounds_different_walls(self):
        assert create_wall(FIXED_SEED, 0).tiles != create_wall(FIXED_SEED, 1).tiles

    def test_unseeded_is_shuffled(self):
        wall = create_wall()
        assert [tile.id for tile in wall.tiles] != list(range(TOTAL_TILES))


class TestCreateWallFromTiles:
    def test_keeps_given_order(self):
        order = list(reversed(range(TOTAL_TILES)))
        wall = create_wall_from_tiles(order)
        assert [tile.id for tile in wall.tiles] == order

    def test_rejects_short_list(self):
        with pytest.raises(ValueError, match="Expected 136 tiles"):
            create_wall_from_tiles(list(range(100)))

    def test_rejects_duplicates(self):
        order = list(range(TOTAL_TILES))
        order[5] = 4
        with pytest.raises(ValueError, match="unique"):
            create_wall_from_tiles(order)

    def test_rejects_out_of_range(self):
        order = list(range(TOTAL_TILES))
        order[0] = TOTAL_TILES
        with pytest.raises(ValueError, match="integers in"):
            create_wall_from_tiles(order)


class TestDeal:
    def test_deal_takes_from_front(self):
        wall = create_wall_from_tiles(list(range(TOTAL_TILES)))
        new_wall, dealt = deal(wall, 3)
        assert [tile.id for tile in dealt] == [0, 1, 2]
        assert len(new_wall.tiles) == TOTAL_TILES - 3

    def test_deal_too_many(self):
        wall = Wall(tiles=(tile_from_id(0),))
        with pytest.raises(ValueError, match="cannot deal 2"):
            deal(wall, 2)

    def test_deal_negative(self):
        with pytest.raises(ValueError, match="negative"):
            deal(Wall(), -1)

    def test_initial_hands_leave_84_tiles(self):
        wall = create_wall(FIXED_SEED, 0)
        new_wall, hands = deal_initial_hands(wall)
        assert len(hands) == SUPPORTED_NUM_SEATS
        assert all(len(hand) == SUPPORTED_HAND_SIZE for hand in hands)
        assert tiles_remaining(new_wall) == 84

    def test_initial_hands_are_sequential_and_sorted(self):
        order = list(reversed(range(TOTAL_TILES)))
        _, hands = deal_initial_hands(create_wall_from_tiles(order))
        assert [tile.id for tile in hands[0]] == sorted(order[:SUPPORTED_HAND_SIZE])
        assert [tile.id for tile in hands[1]] == sorted(order[SUPPORTED_HAND_SIZE : 2 * SUPPORTED_HAND_SIZE])


class TestDrawTile:
    def test_draws_front_tile(self):
        wall = create_wall_from_tiles(list(range(TOTAL_TILES)))
        new_wall, tile = draw_tile(wall)
        assert tile is not None
        assert tile.id == 0
        assert tiles_remaining(new_wall) == TOTAL_TILES - 1

    def test_empty_wall_returns_none(self):
        wall = Wall()
        new_wall, tile = draw_tile(wall)
        assert tile is None
        assert new_wall is wall
        assert is_wall_exhausted(new_wall)


class TestWallImmutability:
    def test_frozen(self):
        wall = Wall()
        with pytest.raises(ValidationError):
            wall.tiles = (tile_from_id(0),)

    def test_draw_does_not_mutate(self):
        wall = create_wall(FIXED_SEED, 0)
        draw_tile(wall)
        assert tiles_remaining(wall) == TOTAL_TILES
