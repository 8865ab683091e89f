# src/lockgrid/render.py
# Offline PNG export of a level using Pillow.
# Works with a horizontal sprite sheet (sprite k at x = k * tile_size) or,
# without one, flat fallback colours.

import os
from functools import lru_cache
from typing import Optional

from PIL import Image, ImageDraw

from .config import SPRITE_SIZE
from .grid import Level
from .tiles import Entity, entities_in

FALLBACK = {
    Entity.FLOOR:  (200, 190, 170, 255),
    Entity.WALL:   ( 70,  70,  80, 255),
    Entity.SPIKES: (170,  40,  40, 255),
    Entity.EXIT:   ( 40, 160,  60, 255),
    Entity.LOCK:   (120,  80,  30, 255),
    Entity.GOLD:   (240, 200,  20, 255),
    Entity.KEY:    (250, 240, 120, 255),
    Entity.ENEMY:  (150,  40, 160, 255),
    Entity.PLAYER: ( 40, 110, 230, 255),
}

# Inset (in eighths of a tile) so stacked entities stay visible.
_INSET = {
    Entity.FLOOR: 0, Entity.WALL: 0, Entity.SPIKES: 1, Entity.EXIT: 1,
    Entity.LOCK: 2, Entity.GOLD: 3, Entity.KEY: 3, Entity.ENEMY: 2, Entity.PLAYER: 2,
}

@lru_cache(maxsize=64)
def _fallback_sprite(entity: Entity, tile_size: int) -> Image.Image:
    img = Image.new("RGBA", (tile_size, tile_size), (0, 0, 0, 0))
    pad = _INSET[entity] * tile_size // 8
    draw = ImageDraw.Draw(img)
    draw.rectangle((pad, pad, tile_size - 1 - pad, tile_size - 1 - pad), fill=FALLBACK[entity])
    return img

def load_sheet(path: str) -> Image.Image:
    return Image.open(path).convert("RGBA")

def _sheet_sprite(sheet: Image.Image, entity: Entity, tile_size: int) -> Image.Image:
    src = sheet.height  # sprites are square, one row
    box = (int(entity) * src, 0, int(entity) * src + src, src)
    img = sheet.crop(box)
    if img.size != (tile_size, tile_size):
        img = img.resize((tile_size, tile_size), Image.NEAREST)
    return img

def render_level(
    level: Level,
    tile_size: int = SPRITE_SIZE,
    sheet: Optional[Image.Image] = None,
) -> Image.Image:
    """Draw every entity on every tile, lowest ordinal first."""
    side = level.size * tile_size
    canvas = Image.new("RGBA", (side, side), (0, 0, 0, 255))
    sprites = {}
    for (x, y) in level.coords():
        for e in entities_in(level.get(x, y)):
            img = sprites.get(e)
            if img is None:
                img = _sheet_sprite(sheet, e, tile_size) if sheet is not None else _fallback_sprite(e, tile_size)
                sprites[e] = img
            x0, y0 = x * tile_size, y * tile_size
            canvas.paste(img, (x0, y0, x0 + tile_size, y0 + tile_size), img)
    return canvas

def save_png(level: Level, path: str, tile_size: int = SPRITE_SIZE, sheet_path: Optional[str] = None) -> None:
    sheet = load_sheet(sheet_path) if sheet_path else None
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    render_level(level, tile_size, sheet).save(path)
