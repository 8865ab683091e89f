from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .config import LEVEL_SIZE
from .tiles import bit

XY = Tuple[int, int]

@dataclass
class Level:
    """
    Square grid of tiles stored row-major in one flat list
    (index = x + y * size), the same layout the binary format uses.
    """
    tiles: List[int] = field(repr=False)
    size: int = LEVEL_SIZE

    def __post_init__(self) -> None:
        if self.size < 3:
            raise ValueError("level size must be at least 3")
        if len(self.tiles) != self.size * self.size:
            raise ValueError(
                f"expected {self.size * self.size} tiles, got {len(self.tiles)}"
            )

    @classmethod
    def blank(cls, size: int = LEVEL_SIZE) -> "Level":
        # Zero-valued: no entity bits anywhere (not the same as all floor).
        return cls(tiles=[0] * (size * size), size=size)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def on_ring(self, x: int, y: int) -> bool:
        last = self.size - 1
        return x in (0, last) or y in (0, last)

    def idx(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) outside {self.size}x{self.size} level")
        return x + y * self.size

    def get(self, x: int, y: int) -> int:
        return self.tiles[self.idx(x, y)]

    def set(self, x: int, y: int, v: int) -> None:
        self.tiles[self.idx(x, y)] = v

    def has(self, x: int, y: int, entity: int) -> bool:
        return bool(self.get(x, y) & bit(entity))

    def add(self, x: int, y: int, entity: int) -> None:
        self.tiles[self.idx(x, y)] |= bit(entity)

    def discard(self, x: int, y: int, entity: int) -> None:
        self.tiles[self.idx(x, y)] &= ~bit(entity)

    def toggle(self, x: int, y: int, entity: int) -> None:
        self.tiles[self.idx(x, y)] ^= bit(entity)

    def coords(self) -> Iterator[XY]:
        for y in range(self.size):
            for x in range(self.size):
                yield (x, y)

    def interior(self) -> Iterator[XY]:
        for y in range(1, self.size - 1):
            for x in range(1, self.size - 1):
                yield (x, y)

    def find(self, entity: int) -> Optional[XY]:
        """First tile carrying entity in row-major order, or None."""
        b = bit(entity)
        for i, t in enumerate(self.tiles):
            if t & b:
                return (i % self.size, i // self.size)
        return None

    def positions(self, entity: int) -> List[XY]:
        b = bit(entity)
        return [(i % self.size, i // self.size) for i, t in enumerate(self.tiles) if t & b]

    def count(self, entity: int) -> int:
        b = bit(entity)
        return sum(1 for t in self.tiles if t & b)

    def copy(self) -> "Level":
        return Level(tiles=list(self.tiles), size=self.size)

    def as_matrix(self) -> List[List[int]]:
        n = self.size
        return [self.tiles[y * n:(y + 1) * n] for y in range(n)]
