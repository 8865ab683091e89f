import pytest

from lockgrid.errors import PlacementExhausted
from lockgrid.grid import Level
from lockgrid.mapgen.terrain import empty_level, fill_level, scatter_generator, basic_room_generator
from lockgrid.rng import Xoroshiro128Plus
from lockgrid.tiles import PURE_FLOOR, PURE_WALL, Entity, bit

def ring_is_wall(lv):
    return all(lv.get(x, y) == PURE_WALL for x, y in lv.coords() if lv.on_ring(x, y))

def test_fill_level_clears_other_bits():
    lv = Level.blank(5)
    lv.set(2, 2, 0b1111111110)
    fill_level(lv, Entity.GOLD)
    assert set(lv.tiles) == {bit(Entity.GOLD)}

def test_empty_level_ring_and_interior():
    for size in (3, 8, 22):
        lv = Level.blank(size)
        empty_level(lv)
        assert ring_is_wall(lv)
        assert all(lv.get(x, y) == PURE_FLOOR for x, y in lv.interior())

def test_scatter_generator_keeps_ring_and_uses_pure_tiles():
    lv = Level.blank()
    scatter_generator(lv, Xoroshiro128Plus.from_seed(1, 1))
    assert ring_is_wall(lv)
    assert set(lv.tiles) == {PURE_FLOOR, PURE_WALL}
    floors = lv.count(Entity.FLOOR)
    assert 0 < floors <= (lv.size - 2) ** 2

def test_scatter_generator_zero_portion_is_solid():
    lv = Level.blank(10)
    scatter_generator(lv, Xoroshiro128Plus.from_seed(1, 1), floor_portion=0.0)
    assert set(lv.tiles) == {PURE_WALL}

def test_rooms_stay_inside_ring():
    lv = Level.blank()
    fill_level(lv, Entity.WALL)
    lv.set(10, 10, PURE_FLOOR)
    rng = Xoroshiro128Plus.from_seed(5, 6)
    basic_room_generator(lv, rng)
    assert ring_is_wall(lv)
    assert lv.count(Entity.FLOOR) >= 4
    assert set(lv.tiles) == {PURE_FLOOR, PURE_WALL}

def test_rooms_need_existing_floor():
    lv = Level.blank(8)
    fill_level(lv, Entity.WALL)
    with pytest.raises(PlacementExhausted) as exc:
        basic_room_generator(lv, Xoroshiro128Plus.from_seed(1, 1), attempts=50)
    assert exc.value.attempts == 50
