# src/lockgrid/mapgen/placement.py
# Entity placement: scattered hazards/rewards plus the exit, key and player.

import logging
from typing import Callable, Optional

from ..config import MAX_PLACEMENT_ATTEMPTS, ScatterParams
from ..errors import PlacementExhausted
from ..grid import Level, XY
from ..oracle import seen_from
from ..rng import Xoroshiro128Plus
from ..tiles import PURE_FLOOR, SOLID_ENTITIES, Entity, bit, mask_of

logger = logging.getLogger(__name__)

def random_interior(level: Level, rng: Xoroshiro128Plus) -> XY:
    # x, y in 1..size-2: never the outer ring
    x = rng.int_range(1, level.size - 2)
    y = rng.int_range(1, level.size - 2)
    return (x, y)

def sample_tile(
    level: Level,
    rng: Xoroshiro128Plus,
    accept: Callable[[int, int], bool],
    what: str,
    attempts: int = MAX_PLACEMENT_ATTEMPTS,
) -> XY:
    """
    Draw random interior coordinates until `accept(x, y)` holds.
    Raises PlacementExhausted after `attempts` draws.
    """
    for _ in range(attempts):
        x, y = random_interior(level, rng)
        if accept(x, y):
            return (x, y)
    raise PlacementExhausted(what, attempts)

def is_pure_floor(level: Level, x: int, y: int) -> bool:
    return level.get(x, y) == PURE_FLOOR

def scatter_entities(level: Level, rng: Xoroshiro128Plus, params: ScatterParams) -> None:
    """
    Gold, else enemy, else spikes on each non-wall interior tile, one
    Bernoulli draw per check. At most one of the three lands per tile.
    """
    for x, y in level.interior():
        t = level.get(x, y)
        if t & SOLID_ENTITIES:
            continue
        if rng.bernoulli(params.gold_chance):
            t |= bit(Entity.GOLD)
        elif rng.bernoulli(params.enemy_chance):
            t |= bit(Entity.ENEMY)
        elif rng.bernoulli(params.spikes_chance):
            t |= bit(Entity.SPIKES)
        level.set(x, y, t)

def scatter_placer(
    level: Level,
    rng: Xoroshiro128Plus,
    params: Optional[ScatterParams] = None,
    attempts: int = MAX_PLACEMENT_ATTEMPTS,
) -> None:
    """
    Scatter entities, then put the locked exit, the key and the player each
    on a pure floor tile. Unverified: the result may not be completable.
    """
    scatter_entities(level, rng, params or ScatterParams())

    def on_floor(x: int, y: int) -> bool:
        return is_pure_floor(level, x, y)

    order = (
        ("exit", mask_of(Entity.FLOOR, Entity.EXIT, Entity.LOCK)),
        ("key", mask_of(Entity.FLOOR, Entity.KEY)),
        ("player", mask_of(Entity.FLOOR, Entity.PLAYER)),
    )
    for what, tile in order:
        x, y = sample_tile(level, rng, on_floor, what, attempts)
        level.set(x, y, tile)
        logger.debug("placed %s at (%d, %d)", what, x, y)

def verified_scatter_placer(
    level: Level,
    rng: Xoroshiro128Plus,
    params: Optional[ScatterParams] = None,
    attempts: int = MAX_PLACEMENT_ATTEMPTS,
) -> None:
    """
    Like scatter_placer, but the key must be able to reach the exit and the
    player must be able to reach both, so the result is completable whenever
    placement succeeds.
    """
    scatter_entities(level, rng, params or ScatterParams())

    exit_bit = bit(Entity.EXIT)
    goal = mask_of(Entity.KEY, Entity.EXIT)

    def on_floor(x: int, y: int) -> bool:
        return is_pure_floor(level, x, y)

    def key_ok(x: int, y: int) -> bool:
        return on_floor(x, y) and bool(seen_from(level, x, y, until=exit_bit) & exit_bit)

    def player_ok(x: int, y: int) -> bool:
        return on_floor(x, y) and (seen_from(level, x, y, until=goal) & goal) == goal

    x, y = sample_tile(level, rng, on_floor, "exit", attempts)
    level.set(x, y, level.get(x, y) | mask_of(Entity.EXIT, Entity.LOCK))
    logger.debug("placed exit at (%d, %d)", x, y)

    x, y = sample_tile(level, rng, key_ok, "key", attempts)
    level.add(x, y, Entity.KEY)
    logger.debug("placed key at (%d, %d)", x, y)

    x, y = sample_tile(level, rng, player_ok, "player", attempts)
    level.add(x, y, Entity.PLAYER)
    logger.debug("placed player at (%d, %d)", x, y)
