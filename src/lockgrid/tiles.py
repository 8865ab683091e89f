# Entity kinds and the tile bit set.
#
# A tile is a plain int where bit k set means entity kind k is present.
# Several entities may share one tile (e.g. Floor|Exit|Lock).

from dataclasses import dataclass
from enum import IntEnum
from typing import List

TILE_BITS = 16
TILE_MAX = (1 << TILE_BITS) - 1

class Entity(IntEnum):
    FLOOR = 1
    WALL = 2
    SPIKES = 3
    EXIT = 4
    LOCK = 5
    GOLD = 6
    KEY = 7
    ENEMY = 8
    PLAYER = 9

ENTITY_TYPE_COUNT = len(Entity)

def bit(entity: int) -> int:
    return 1 << entity

def mask_of(*entities: int) -> int:
    m = 0
    for e in entities:
        m |= bit(e)
    return m

def has(tile: int, entity: int) -> bool:
    return bool(tile & bit(entity))

def insert(tile: int, entity: int) -> int:
    return tile | bit(entity)

def remove(tile: int, entity: int) -> int:
    return tile & ~bit(entity)

def toggle(tile: int, entity: int) -> int:
    return tile ^ bit(entity)

def entities_in(tile: int) -> List[Entity]:
    """Entities present on the tile, lowest ordinal first."""
    return [e for e in Entity if tile & bit(e)]

def top_entity(tile: int) -> int:
    """Highest entity ordinal on the tile, 0 for an empty tile."""
    top = 0
    for e in Entity:
        if tile & bit(e):
            top = int(e)
    return top

# Floor, Wall, Spikes: the bits that decide whether a tile can be walked on.
TERRAIN = mask_of(Entity.FLOOR, Entity.WALL, Entity.SPIKES)
# Unaffected by gameplay updates.
STATIC_ENTITIES = mask_of(Entity.FLOOR, Entity.WALL, Entity.SPIKES, Entity.EXIT)
# Cannot be walked on.
SOLID_ENTITIES = mask_of(Entity.WALL)

PURE_FLOOR = bit(Entity.FLOOR)
PURE_WALL = bit(Entity.WALL)

@dataclass(frozen=True)
class Query:
    """
    Masked equality predicate: a tile matches iff its masked bits equal the
    target's masked bits. Bits outside the mask are ignored.
    """
    mask: int
    target: int

    def matches(self, tile: int) -> bool:
        return (tile & self.mask) == (self.target & self.mask)

# Floor set, neither Wall nor Spikes.
WALKABLE = Query(TERRAIN, PURE_FLOOR)
