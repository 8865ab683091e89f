# src/lockgrid/mapgen/carve.py
# Random-walk "digger" carving: mostly straight corridors with occasional turns.

import logging
from typing import Optional

from ..config import MAX_PLACEMENT_ATTEMPTS, DiggerParams
from ..grid import Level
from ..rng import Xoroshiro128Plus
from ..tiles import PURE_FLOOR, Entity
from .placement import is_pure_floor, random_interior, sample_tile
from .terrain import clamp, fill_level

logger = logging.getLogger(__name__)

UP, DOWN, LEFT, RIGHT = 1, 2, 3, 4
STEP = {
    UP:    ( 0, -1),
    DOWN:  ( 0,  1),
    LEFT:  (-1,  0),
    RIGHT: ( 1,  0),
}

def dig(
    level: Level,
    rng: Xoroshiro128Plus,
    x: int,
    y: int,
    steps: int,
    turn_chance_step: float,
) -> None:
    """
    Walk one agent from (x, y). Each step carves the current tile, moves one
    tile (clamped inside the ring), then maybe turns. The turn chance grows
    by `turn_chance_step` on every straight step and drops back to it after
    a turn.
    """
    lo, hi = 1, level.size - 2
    direction = rng.int_range(UP, RIGHT)
    turn_chance = turn_chance_step
    for _ in range(steps):
        level.set(x, y, PURE_FLOOR)
        dx, dy = STEP[direction]
        x = clamp(lo, x + dx, hi)
        y = clamp(lo, y + dy, hi)
        if rng.bernoulli(turn_chance):
            direction = rng.int_range(UP, RIGHT)
            turn_chance = turn_chance_step
        else:
            turn_chance += turn_chance_step

def digger_generator(
    level: Level,
    rng: Xoroshiro128Plus,
    params: Optional[DiggerParams] = None,
    attempts: int = MAX_PLACEMENT_ATTEMPTS,
) -> None:
    """
    Fill with wall, then let `agents` diggers carve. Every agent after the
    first starts on floor dug by an earlier one, so all floor ends up in one
    connected region.
    """
    p = params or DiggerParams()
    fill_level(level, Entity.WALL)
    steps = int(p.walkable_portion * level.size * level.size)

    def on_floor(x: int, y: int) -> bool:
        return is_pure_floor(level, x, y)

    for agent in range(p.agents):
        if agent == 0:
            x, y = random_interior(level, rng)
        else:
            x, y = sample_tile(level, rng, on_floor, f"digger {agent} start", attempts)
        dig(level, rng, x, y, steps, p.turn_chance_step)
        logger.debug("digger %d: start (%d, %d), %d steps", agent, x, y, steps)
