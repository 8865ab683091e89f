# src/lockgrid/mapgen/reverse.py
# Subtractive generators: add walls one at a time to a populated level and
# roll back any wall that breaks the level.

import logging
from typing import Callable, Optional

from ..config import WallParams
from ..errors import MissingPlayer
from ..grid import Level
from ..oracle import count_entities, find_player, is_completable, reachable_entity_count
from ..rng import Xoroshiro128Plus
from ..tiles import PURE_WALL, SOLID_ENTITIES, Entity, bit
from .placement import random_interior

logger = logging.getLogger(__name__)

def try_wall(level: Level, x: int, y: int, still_valid: Callable[[Level], bool]) -> bool:
    """
    Tentatively OR a wall into (x, y). Keep it as a pure wall tile if
    `still_valid` accepts the result, otherwise restore the tile.
    Player tiles are never walled.
    """
    t = level.get(x, y)
    if t & bit(Entity.PLAYER):
        return False
    if t & SOLID_ENTITIES:
        # Already solid; clearing its other bits cannot change reachability.
        level.set(x, y, PURE_WALL)
        return True
    level.set(x, y, t | PURE_WALL)
    if still_valid(level):
        level.set(x, y, PURE_WALL)
        return True
    level.set(x, y, t)
    return False

def _scatter_walls(
    level: Level,
    rng: Xoroshiro128Plus,
    params: WallParams,
    still_valid: Callable[[Level], bool],
) -> int:
    wall_count = int(params.portion * level.size * level.size)
    placed = 0
    for _ in range(wall_count):
        for _ in range(params.attempts):
            x, y = random_interior(level, rng)
            if try_wall(level, x, y, still_valid):
                placed += 1
                break
    logger.debug("reverse scatter: %d/%d walls committed", placed, wall_count)
    return placed

def reverse_verified_scatter_generator(
    level: Level,
    rng: Xoroshiro128Plus,
    params: Optional[WallParams] = None,
) -> int:
    """
    Carve by subtraction: add random walls to an already populated level,
    keeping only those that leave it completable. Each wall gets
    `params.attempts` tries before it is skipped.

    Returns the number of committed wall additions. A completable input
    stays completable.
    """
    return _scatter_walls(level, rng, params or WallParams(), is_completable)

def reverse_entity_preserving_scatter_generator(
    level: Level,
    rng: Xoroshiro128Plus,
    params: Optional[WallParams] = None,
) -> int:
    """
    Experimental. Like reverse_verified_scatter_generator, but a wall is kept
    only while every entity-bearing tile in the level stays reachable from the
    player. If some entity is unreachable to begin with, no new wall is kept.
    """
    if find_player(level) is None:
        raise MissingPlayer("entity-preserving carve needs a player")
    p = params or WallParams(portion=0.5)
    total = count_entities(level)

    def all_reachable(lv: Level) -> bool:
        return reachable_entity_count(lv) == total

    return _scatter_walls(level, rng, p, all_reachable)

def reverse_verified_fill_generator(level: Level) -> int:
    """
    Experimental, deterministic: try to wall every interior tile in row-major
    order, keeping each wall that leaves the level completable.
    """
    placed = 0
    for x, y in level.interior():
        if try_wall(level, x, y, is_completable):
            placed += 1
    logger.debug("reverse fill: %d walls committed", placed)
    return placed
