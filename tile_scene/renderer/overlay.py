"""Overlay renderers.

Each function draws onto the compositor's in-progress canvas, after the
sprites, and before upscaling. Text is anchored on its baseline (``"ls"``),
so a label at cell ``(x, y)`` sits on the top edge of that cell.
"""

import logging
from typing import Dict, Optional

from PIL import Image, ImageDraw

from tile_scene.assets import Font, load_font, load_image
from tile_scene.scene import Scene

logger = logging.getLogger(__name__)

# Notification banner placement, in cells
BANNER_CELL = (0, 5)
BANNER_HEIGHT_CELLS = 3
MESSAGE_CELL = (2, 7)
MESSAGE_FONT_SIZE = 13
MESSAGE_COLOR = (255, 255, 255, 255)
BANNER_FILL = (20, 28, 40, 230)

DEBUG_SHADE = (0, 0, 0, 128)
DEBUG_LABEL_COLOR = (255, 0, 21, 255)
DEBUG_FONT_SIZE = 10
DEBUG_LABEL_OFFSET = (3, 10)


def paste_at(canvas: Image.Image, image: Image.Image, x: int, y: int) -> None:
    """Alpha-composite ``image`` with its top-left at ``(x, y)``, clipped to the canvas."""
    left, top = max(0, -x), max(0, -y)
    if left >= image.width or top >= image.height:
        return
    if x >= canvas.width or y >= canvas.height:
        return
    canvas.alpha_composite(image, (x + left, y + top), (left, top))


def _banner_image(canvas: Image.Image, scene: Scene, banner_path: Optional[str]) -> Image.Image:
    if banner_path is not None:
        _, banner = load_image(banner_path)
        return banner.convert("RGBA")
    panel = Image.new(
        "RGBA", (canvas.width, BANNER_HEIGHT_CELLS * scene.cell_size), (0, 0, 0, 0)
    )
    ImageDraw.Draw(panel).rounded_rectangle(
        (0, 0, panel.width - 1, panel.height - 1),
        radius=max(1, scene.cell_size // 4),
        fill=BANNER_FILL,
    )
    return panel


def draw_notification(
    canvas: Image.Image,
    scene: Scene,
    font_path: Optional[str] = None,
    banner_path: Optional[str] = None,
) -> None:
    """Draw the pending notification.

    The message stays pending; :meth:`SceneRenderer.render` clears it once
    the artifact carrying it is saved.

    The banner is the image at ``banner_path`` or, without one, a plain
    rounded panel spanning the canvas width.
    """
    if not scene.message:
        return
    banner = _banner_image(canvas, scene, banner_path)
    paste_at(canvas, banner, *scene.cell_to_pixel(*BANNER_CELL))

    font = load_font(font_path, MESSAGE_FONT_SIZE)
    ImageDraw.Draw(canvas).text(
        scene.cell_to_pixel(*MESSAGE_CELL),
        scene.message,
        font=font,
        fill=MESSAGE_COLOR,
        anchor="ls",
    )
    logger.debug("Drew notification %r", scene.message)


def draw_text_labels(canvas: Image.Image, scene: Scene, font_path: Optional[str] = None) -> None:
    """Draw every text label in list order."""
    if not scene.texts:
        return
    draw = ImageDraw.Draw(canvas)
    fonts: Dict[int, Font] = {}
    for label in scene.texts:
        if label.size not in fonts:
            fonts[label.size] = load_font(font_path, label.size)
        draw.text(
            scene.cell_to_pixel(label.x, label.y),
            label.message,
            font=fonts[label.size],
            fill=(*label.color, 255),
            anchor="ls",
        )


def draw_debug_grid(canvas: Image.Image, scene: Scene, font_path: Optional[str] = None) -> None:
    """Shade every cell and number the rows and columns.

    Cells are shaded one pixel short of the cell size so the grid lines stay
    visible. Bounds come from the canvas, not from the scene's stored grid.
    """
    cell = scene.cell_size
    columns, rows = canvas.width // cell, canvas.height // cell

    shade = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    shade_draw = ImageDraw.Draw(shade)
    for y in range(rows):
        for x in range(columns):
            x0, y0 = x * cell, y * cell
            shade_draw.rectangle((x0, y0, x0 + cell - 2, y0 + cell - 2), fill=DEBUG_SHADE)
    canvas.alpha_composite(shade)

    font = load_font(font_path, DEBUG_FONT_SIZE)
    draw = ImageDraw.Draw(canvas)
    dx, dy = DEBUG_LABEL_OFFSET
    for y in range(rows):
        draw.text((dx, dy + y * cell), str(y), font=font, fill=DEBUG_LABEL_COLOR, anchor="ls")
    for x in range(columns):
        draw.text((dx + x * cell, dy), str(x), font=font, fill=DEBUG_LABEL_COLOR, anchor="ls")
