# src/lockgrid/oracle.py
# Completability checks built on the flood fill.

from typing import List, Optional

from .flood import EntityCounter, TileRecorder, flood
from .grid import Level, XY
from .tiles import TERRAIN, WALKABLE, Entity, bit, mask_of

GOAL = mask_of(Entity.KEY, Entity.EXIT)

def find_player(level: Level) -> Optional[XY]:
    return level.find(Entity.PLAYER)

def seen_from(level: Level, x: int, y: int, until: int = 0) -> int:
    """OR of every tile walkable-reachable from (x, y)."""
    rec = TileRecorder(until=until)
    flood(level, x, y, WALKABLE, rec)
    return rec.seen

def is_completable(level: Level) -> bool:
    """
    True iff the key and the exit are both walkable-reachable from the player.
    A level without a player is not completable.
    """
    p = find_player(level)
    if p is None:
        return False
    return (seen_from(level, p[0], p[1], until=GOAL) & GOAL) == GOAL

def count_entities(level: Level) -> int:
    """Tiles carrying anything other than terrain, over the whole level."""
    return sum(1 for t in level.tiles if t & ~TERRAIN)

def reachable_entity_count(level: Level) -> int:
    p = find_player(level)
    if p is None:
        return 0
    counter = EntityCounter()
    flood(level, p[0], p[1], WALKABLE, counter)
    return counter.count

def validate(level: Level, completable: Optional[bool] = None) -> List[str]:
    """
    Human-readable problems with a generated level; empty when well formed.
    Pass `completable` when the caller has already run is_completable.
    """
    problems = []
    for e in (Entity.PLAYER, Entity.KEY, Entity.EXIT):
        n = level.count(e)
        if n != 1:
            problems.append(f"expected exactly one {e.name.lower()}, found {n}")

    ex = level.find(Entity.EXIT)
    if ex is not None and not level.has(ex[0], ex[1], Entity.LOCK):
        problems.append(f"exit at {ex} is not locked")

    wall = bit(Entity.WALL)
    for x, y in level.coords():
        if level.on_ring(x, y) and not level.get(x, y) & wall:
            problems.append(f"outer ring open at ({x}, {y})")
            break

    if completable is None:
        completable = is_completable(level)
    if not completable:
        problems.append("key and exit are not both reachable from the player")
    return problems
