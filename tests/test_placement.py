import pytest

from lockgrid.config import ScatterParams
from lockgrid.errors import PlacementExhausted
from lockgrid.grid import Level
from lockgrid.mapgen.carve import digger_generator
from lockgrid.mapgen.placement import scatter_entities, scatter_placer, verified_scatter_placer
from lockgrid.mapgen.terrain import empty_level, fill_level
from lockgrid.oracle import is_completable, validate
from lockgrid.rng import Xoroshiro128Plus
from lockgrid.tiles import PURE_WALL, Entity, bit, mask_of

def test_scatter_placer_seed_1_1_places_one_of_each_on_pure_floor():
    lv = Level.blank(22)
    empty_level(lv)
    # Same seed and scatter step on a copy gives the tiles as they were
    # just before the exit, key and player went down.
    before = lv.copy()
    scatter_entities(before, Xoroshiro128Plus.from_seed(1, 1), ScatterParams())
    scatter_placer(lv, Xoroshiro128Plus.from_seed(1, 1))

    spots = [lv.find(e) for e in (Entity.EXIT, Entity.KEY, Entity.PLAYER)]
    assert len(set(spots)) == 3
    for x, y in spots:
        assert before.get(x, y) == bit(Entity.FLOOR), (x, y)
    untouched = [i for i in range(len(lv.tiles)) if (i % 22, i // 22) not in spots]
    assert all(lv.tiles[i] == before.tiles[i] for i in untouched)

    for e in (Entity.PLAYER, Entity.KEY, Entity.EXIT, Entity.LOCK):
        assert lv.count(e) == 1, e
    # Placed tiles carry nothing besides their own entities.
    assert lv.get(*lv.find(Entity.EXIT)) == mask_of(Entity.FLOOR, Entity.EXIT, Entity.LOCK)
    assert lv.get(*lv.find(Entity.KEY)) == mask_of(Entity.FLOOR, Entity.KEY)
    assert lv.get(*lv.find(Entity.PLAYER)) == mask_of(Entity.FLOOR, Entity.PLAYER)
    assert all(lv.get(x, y) == PURE_WALL for x, y in lv.coords() if lv.on_ring(x, y))

def test_scatter_entities_are_exclusive_and_skip_walls():
    lv = Level.blank(10)
    empty_level(lv)
    lv.set(4, 4, PURE_WALL)
    scatter_entities(lv, Xoroshiro128Plus.from_seed(2, 2), ScatterParams(1.0, 1.0, 1.0))
    for x, y in lv.interior():
        if (x, y) == (4, 4):
            assert lv.get(x, y) == PURE_WALL
        else:
            assert lv.get(x, y) == mask_of(Entity.FLOOR, Entity.GOLD)

    lv = Level.blank(10)
    empty_level(lv)
    scatter_entities(lv, Xoroshiro128Plus.from_seed(2, 2), ScatterParams.from_weights(0.0, 0.0, 1.0))
    assert all(lv.get(x, y) == mask_of(Entity.FLOOR, Entity.SPIKES) for x, y in lv.interior())

def test_verified_placer_is_completable_on_open_floor():
    for seed in ((1, 1), (5, 9), (31, 4)):
        lv = Level.blank()
        empty_level(lv)
        verified_scatter_placer(lv, Xoroshiro128Plus.from_seed(*seed))
        assert validate(lv) == [], seed

def test_verified_placer_on_dug_corridors():
    for seed in ((3, 3), (77, 1)):
        lv = Level.blank()
        digger_generator(lv, Xoroshiro128Plus.from_seed(*seed))
        verified_scatter_placer(lv, Xoroshiro128Plus.from_seed(*seed), ScatterParams(0.07, 0.03, 0.0))
        assert is_completable(lv)

def test_verified_placer_keeps_key_with_exit():
    # Two sealed rooms: whichever room gets the exit must also get key and player.
    rows = [
        "#########",
        "#...#...#",
        "#...#...#",
        "#...#...#",
        "#########",
        "#########",
        "#########",
        "#########",
        "#########",
    ]
    walls = {"#": PURE_WALL, ".": bit(Entity.FLOOR)}
    for seed in range(1, 6):
        lv = Level(tiles=[walls[c] for row in rows for c in row], size=9)
        verified_scatter_placer(lv, Xoroshiro128Plus.from_seed(seed, 1), ScatterParams(0.0, 0.0, 0.0))
        ex, ky, pl = lv.find(Entity.EXIT), lv.find(Entity.KEY), lv.find(Entity.PLAYER)
        assert (ex[0] < 4) == (ky[0] < 4) == (pl[0] < 4)
        assert is_completable(lv)

def test_placement_exhausted_when_no_floor():
    lv = Level.blank(8)
    fill_level(lv, Entity.WALL)
    with pytest.raises(PlacementExhausted) as exc:
        scatter_placer(lv, Xoroshiro128Plus.from_seed(1, 1), attempts=64)
    assert exc.value.what == "exit"

    lv = Level.blank(8)
    fill_level(lv, Entity.WALL)
    lv.set(3, 3, bit(Entity.FLOOR))
    # Room for the exit, none left for the key.
    with pytest.raises(PlacementExhausted) as exc:
        verified_scatter_placer(lv, Xoroshiro128Plus.from_seed(1, 1), ScatterParams(0.0, 0.0, 0.0))
    assert exc.value.what == "key"
