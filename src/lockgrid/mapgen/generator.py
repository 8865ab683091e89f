# src/lockgrid/mapgen/generator.py
# Named generation recipes, each seeded from an explicit (a, b) pair.

import logging
from typing import Optional, Tuple

from ..config import DEFAULT_CONFIG, LEVEL_SIZE, GenConfig
from ..grid import Level
from ..rng import Xoroshiro128Plus
from .carve import digger_generator
from .placement import scatter_placer, verified_scatter_placer
from .reverse import reverse_verified_scatter_generator
from .terrain import basic_room_generator, empty_level, scatter_generator

logger = logging.getLogger(__name__)

RECIPES = ("reverse", "digger", "scatter")

def build_reverse(level: Level, rng: Xoroshiro128Plus, cfg: GenConfig) -> None:
    # Open floor, entities first, then walls that keep it completable.
    empty_level(level)
    verified_scatter_placer(level, rng, cfg.scatter, cfg.max_placement_attempts)
    reverse_verified_scatter_generator(level, rng, cfg.walls)

def build_digger(level: Level, rng: Xoroshiro128Plus, cfg: GenConfig) -> None:
    digger_generator(level, rng, cfg.digger, cfg.max_placement_attempts)
    basic_room_generator(level, rng, cfg.rooms, cfg.max_placement_attempts)
    verified_scatter_placer(level, rng, cfg.scatter, cfg.max_placement_attempts)

def build_scatter(level: Level, rng: Xoroshiro128Plus, cfg: GenConfig) -> None:
    # Unverified baseline.
    scatter_generator(level, rng, cfg.floor_portion)
    scatter_placer(level, rng, cfg.scatter, cfg.max_placement_attempts)

_BUILDERS = {
    "reverse": build_reverse,
    "digger": build_digger,
    "scatter": build_scatter,
}

def generate_level(
    seed: Tuple[int, int] = (1, 1),
    recipe: str = "reverse",
    size: int = LEVEL_SIZE,
    config: Optional[GenConfig] = None,
) -> Level:
    """
    Build a fresh level with the named recipe. Same seed, recipe, size and
    config always give the same level. PlacementExhausted propagates; any
    regenerate-on-failure policy belongs to the caller.
    """
    try:
        build = _BUILDERS[recipe]
    except KeyError:
        raise ValueError(f"unknown recipe {recipe!r}; expected one of {RECIPES}") from None
    rng = Xoroshiro128Plus.from_seed(*seed)
    level = Level.blank(size)
    build(level, rng, config or DEFAULT_CONFIG)
    logger.info("generated %s level %dx%d from seed %s", recipe, size, size, seed)
    return level
