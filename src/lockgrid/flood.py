# src/lockgrid/flood.py
# Four-way masked flood fill with a visitor callback.

from collections import deque
from dataclasses import dataclass
from typing import Callable, Optional, Set, Tuple

from .grid import Level, XY
from .tiles import TERRAIN, Entity, Query, bit

UNSEEN, PENDING, DONE = 0, 1, 2

NEIGHBOURS = ((-1, 0), (1, 0), (0, -1), (0, 1))

@dataclass
class TileRef:
    """Mutable handle onto one tile of a level, handed to flood visitors."""
    level: Level
    index: int

    @property
    def value(self) -> int:
        return self.level.tiles[self.index]

    @value.setter
    def value(self, v: int) -> None:
        self.level.tiles[self.index] = v

    def has(self, entity: int) -> bool:
        return bool(self.value & bit(entity))

    def add(self, entity: int) -> None:
        self.value = self.value | bit(entity)

    def discard(self, entity: int) -> None:
        self.value = self.value & ~bit(entity)

# visit(ref, x, y) -> truthy to stop the flood
Visitor = Callable[[TileRef, int, int], Optional[bool]]

def flood(level: Level, start_x: int, start_y: int, query: Query, visit: Visitor) -> int:
    """
    Visit every tile matching `query` that is 4-connected to the start through
    matching tiles. Returns the number of tiles visited.

    The start tile is queued whether or not it matches; if it does not, nothing
    is visited and 0 is returned. Each tile is visited at most once. When the
    visitor returns a truthy value the flood stops at once; the tile that
    triggered the stop is included in the count.
    """
    n = level.size
    tiles = level.tiles
    marks = bytearray(n * n)

    start = level.idx(start_x, start_y)
    marks[start] = PENDING
    todo = deque([start])
    steps = 0

    while todo:
        i = todo.popleft()
        marks[i] = DONE
        if not query.matches(tiles[i]):
            continue

        x, y = i % n, i // n
        steps += 1
        if visit(TileRef(level, i), x, y):
            return steps

        for dx, dy in NEIGHBOURS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < n and 0 <= ny < n:
                j = nx + ny * n
                if marks[j] == UNSEEN:
                    marks[j] = PENDING
                    todo.append(j)

    return steps

class TileRecorder:
    """Visitor ORing every visited tile into `seen`; can stop once `until` is all seen."""

    def __init__(self, until: int = 0):
        self.seen = 0
        self.until = until

    def __call__(self, ref: TileRef, x: int, y: int) -> bool:
        self.seen |= ref.value
        return bool(self.until) and (self.seen & self.until) == self.until

class EntityCounter:
    """Visitor counting tiles that carry anything besides terrain."""

    def __init__(self):
        self.count = 0

    def __call__(self, ref: TileRef, x: int, y: int) -> bool:
        if ref.value & ~TERRAIN:
            self.count += 1
        return False

def mark_spikes(ref: TileRef, x: int, y: int) -> bool:
    # Editor helper: paints the flooded region with spikes.
    ref.add(Entity.SPIKES)
    return False

def reachable(level: Level, x: int, y: int, query: Query) -> Set[XY]:
    out: Set[Tuple[int, int]] = set()

    def _collect(ref: TileRef, vx: int, vy: int) -> bool:
        out.add((vx, vy))
        return False

    flood(level, x, y, query, _collect)
    return out
