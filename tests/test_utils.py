import io
from typing import Any, Tuple

from PIL import Image
from pyrsistent import pset

from tile_scene.scene import Scene
from tile_scene.sprite import Sprite

CELL = 16
GRASS = (34, 139, 34, 255)
RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
GREEN = (0, 255, 0, 255)
YELLOW = (255, 255, 0, 255)


def png_bytes(
    color: Tuple[int, int, int, int], size: Tuple[int, int] = (CELL, CELL)
) -> bytes:
    """Encode a solid-colour RGBA image as PNG."""
    buffer = io.BytesIO()
    Image.new("RGBA", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def write_png(
    path: Any, color: Tuple[int, int, int, int], size: Tuple[int, int] = (CELL, CELL)
) -> str:
    Image.new("RGBA", size, color).save(str(path), format="PNG")
    return str(path)


def make_scene(
    size: Tuple[int, int] = (160, 160), cell_size: int = CELL, debug: bool = False
) -> Scene:
    """Empty scene over a grass background (10x10 cells by default)."""
    return Scene.from_background(png_bytes(GRASS, size), cell_size, debug=debug)


def solid_sprite(
    x: int,
    y: int,
    color: Tuple[int, int, int, int] = RED,
    size: Tuple[int, int] = (CELL, CELL),
    **kwargs: Any,
) -> Sprite:
    return Sprite(image=png_bytes(color, size), x=x, y=y, **kwargs)


def soil(x: int, y: int, **kwargs: Any) -> Sprite:
    """Host sprite accepting one ``crop`` on top."""
    return solid_sprite(
        x, y, YELLOW, kind="soil", can_be_hovered_by=pset(["crop"]), **kwargs
    )


def crop(x: int, y: int, **kwargs: Any) -> Sprite:
    """Sprite that must sit on ``soil``."""
    return solid_sprite(
        x, y, GREEN, kind="crop", needs_hover=pset(["soil"]), z_index=2, **kwargs
    )


def pixel(image: Image.Image, cell_x: int, cell_y: int, scale: int = 1) -> Tuple[int, ...]:
    """Colour at the centre of a cell."""
    half = CELL // 2
    return image.getpixel(((cell_x * CELL + half) * scale, (cell_y * CELL + half) * scale))
