# src/lockgrid/codec.py
"""
Raw level format: size*size unsigned 16-bit tiles, row-major, native byte
order, no header. The file length alone gives the grid size.
"""

import math
from array import array
from typing import BinaryIO

from .config import LEVEL_SIZE
from .errors import LevelFormatError
from .grid import Level
from .tiles import TILE_MAX, top_entity

TILE_BYTES = 2
ENTITY_CHARS = " _#^E%*KEP"  # indexed by highest entity ordinal on the tile

def _tile_array() -> array:
    a = array("H")
    if a.itemsize != TILE_BYTES:
        # Every mainstream platform has a 2-byte unsigned short.
        raise LevelFormatError(f"platform unsigned short is {a.itemsize} bytes")
    return a

def level_to_bytes(level: Level) -> bytes:
    bad = [t for t in level.tiles if not 0 <= t <= TILE_MAX]
    if bad:
        raise LevelFormatError(f"tile value {bad[0]} does not fit in 16 bits")
    a = _tile_array()
    a.extend(level.tiles)
    return a.tobytes()

def level_from_bytes(data: bytes, size: int = LEVEL_SIZE) -> Level:
    want = size * size * TILE_BYTES
    if len(data) != want:
        raise LevelFormatError(f"expected {want} bytes for a {size}x{size} level, got {len(data)}")
    a = _tile_array()
    a.frombytes(data)
    return Level(tiles=a.tolist(), size=size)

def size_from_length(nbytes: int) -> int:
    """Grid side implied by a file of nbytes."""
    n = nbytes // TILE_BYTES
    side = math.isqrt(n)
    if nbytes % TILE_BYTES or side * side != n or side < 3:
        raise LevelFormatError(f"{nbytes} bytes is not a square level")
    return side

def write_level(fp: BinaryIO, level: Level) -> None:
    fp.write(level_to_bytes(level))

def read_level(fp: BinaryIO, size: int = LEVEL_SIZE) -> Level:
    want = size * size * TILE_BYTES
    data = fp.read(want)
    if len(data) < want:
        raise LevelFormatError(f"short read: {len(data)} of {want} bytes")
    if fp.read(1):
        raise LevelFormatError(f"trailing data after {want} bytes")
    return level_from_bytes(data, size)

def to_ascii(level: Level) -> str:
    rows = []
    for row in level.as_matrix():
        rows.append("".join(ENTITY_CHARS[top_entity(t)] for t in row))
    return "\n".join(rows) + "\n"
