# src/lockgrid/mapgen/terrain.py
# Floor/wall layouts: the empty walled level, scatter noise and rectangular rooms.

import logging
from typing import Optional

from ..config import MAX_PLACEMENT_ATTEMPTS, RoomParams
from ..grid import Level
from ..rng import Xoroshiro128Plus
from ..tiles import PURE_FLOOR, PURE_WALL, Entity, bit
from .placement import is_pure_floor, random_interior, sample_tile

logger = logging.getLogger(__name__)

def clamp(low: int, v: int, high: int) -> int:
    return min(max(low, v), high)

def fill_level(level: Level, entity: int) -> None:
    """Every tile becomes exactly `entity`; all other bits are cleared."""
    b = bit(entity)
    level.tiles[:] = [b] * (level.size * level.size)

def empty_level(level: Level) -> None:
    """Floor everywhere, walled outer ring."""
    fill_level(level, Entity.FLOOR)
    last = level.size - 1
    for i in range(level.size):
        level.set(i, 0, PURE_WALL)
        level.set(i, last, PURE_WALL)
        level.set(0, i, PURE_WALL)
        level.set(last, i, PURE_WALL)

def scatter_generator(level: Level, rng: Xoroshiro128Plus, floor_portion: float = 0.5) -> None:
    """
    Naive noise: start from solid wall and drop floor on random interior
    tiles. No connectivity guarantee.
    """
    fill_level(level, Entity.WALL)
    floor_count = int(floor_portion * level.size * level.size)
    for _ in range(floor_count):
        x, y = random_interior(level, rng)
        level.set(x, y, PURE_FLOOR)
    logger.debug("scatter: %d floor draws", floor_count)

def basic_room_generator(
    level: Level,
    rng: Xoroshiro128Plus,
    params: Optional[RoomParams] = None,
    attempts: int = MAX_PLACEMENT_ATTEMPTS,
) -> None:
    """
    Stamp rectangular floor rooms centred on existing floor tiles, clamped
    inside the wall ring. Rooms may overlap; meant to run after another
    generator has dug some floor.
    """
    p = params or RoomParams()
    lo, hi = 1, level.size - 2

    def on_floor(x: int, y: int) -> bool:
        return is_pure_floor(level, x, y)

    for n in range(p.count):
        cx, cy = sample_tile(level, rng, on_floor, f"room {n} centre", attempts)
        w = rng.int_range(p.min_width, p.max_width)
        h = rng.int_range(p.min_height, p.max_height)
        left, top = cx - w // 2, cy - h // 2
        for dy in range(h):
            for dx in range(w):
                level.set(clamp(lo, left + dx, hi), clamp(lo, top + dy, hi), PURE_FLOOR)
        logger.debug("room %d: %dx%d at (%d, %d)", n, w, h, cx, cy)
