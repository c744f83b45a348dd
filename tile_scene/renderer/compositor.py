"""Scene compositor.

Turns a :class:`tile_scene.scene.Scene` into a flattened PNG. Paint order:

1. background, decoded on every call (it also fixes the canvas size),
2. sprites by ascending ``z_index`` (order within one z-index is unspecified),
3. the pending notification banner,
4. text labels in list order,
5. the debug grid when ``scene.debug`` is set,

then a nearest-neighbour upscale by an integer factor. Later paints win over
earlier ones wherever they are opaque.

:func:`compose` never modifies the scene. :meth:`SceneRenderer.render`
consumes ``scene.message`` once the PNG is written, so a failed render
leaves the notification pending for the next one.
The written file is never deleted here; it belongs to the caller.
"""

import logging
from typing import Dict, List, Optional

from PIL import Image

from tile_scene.assets import decode_image, save_image
from tile_scene.config import DEFAULT_OUTPUT_DIR, DEFAULT_SCALE, SceneConfig
from tile_scene.errors import AssetError, RenderError
from tile_scene.renderer.overlay import (
    draw_debug_grid,
    draw_notification,
    draw_text_labels,
    paste_at,
)
from tile_scene.scene import Scene
from tile_scene.sprite import Sprite

logger = logging.getLogger(__name__)

CANVAS_FILL = (255, 255, 255, 255)


def z_layers(scene: Scene) -> List[List[Sprite]]:
    """Group sprites by z-index, lowest first."""
    layers: Dict[int, List[Sprite]] = {}
    for sprite in scene.sprites.values():
        layers.setdefault(sprite.z_index, []).append(sprite)
    return [layers[z] for z in sorted(layers)]


def draw_sprites(canvas: Image.Image, scene: Scene) -> None:
    for layer in z_layers(scene):
        for sprite in layer:
            shown = sprite.display_sprite()
            paste_at(canvas, decode_image(shown.image), *scene.cell_to_pixel(shown.x, shown.y))


def scale_up(canvas: Image.Image, scale: int) -> Image.Image:
    if scale == 1:
        return canvas
    return canvas.resize(
        (canvas.width * scale, canvas.height * scale), Image.Resampling.NEAREST
    )


def compose(
    scene: Scene,
    scale: int = DEFAULT_SCALE,
    font_path: Optional[str] = None,
    banner_path: Optional[str] = None,
) -> Image.Image:
    """Paint the scene and return the upscaled image without saving it.

    Args:
        scene: Scene to draw; left untouched.
        scale: Integer upscale factor.
        font_path: TrueType font for text; ``None`` uses Pillow's built-in font.
        banner_path: Notification banner image; ``None`` draws a plain panel.

    Returns:
        Image.Image: RGBA image of ``scale`` times the background size.

    Raises:
        RenderError: If the background, a sprite, the banner or a font cannot
            be loaded.
    """
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")
    try:
        background = decode_image(scene.background)
        canvas = Image.new("RGBA", background.size, CANVAS_FILL)
        canvas.alpha_composite(background)

        draw_sprites(canvas, scene)
        draw_notification(canvas, scene, font_path=font_path, banner_path=banner_path)
        draw_text_labels(canvas, scene, font_path=font_path)
        if scene.debug:
            draw_debug_grid(canvas, scene, font_path=font_path)
    except AssetError as e:
        raise RenderError(f"Failed to compose scene: {e}") from e

    logger.debug("Composed %d sprites on %dx%d canvas", len(scene.sprites), *canvas.size)
    return scale_up(canvas, scale)


class SceneRenderer:
    """Render options bundled for repeated use.

    Attributes:
        scale: Integer upscale factor.
        output_dir: Directory rendered PNGs are written to.
        font_path: TrueType font for text, or ``None``.
        banner_path: Notification banner image, or ``None``.
    """

    scale: int
    output_dir: str
    font_path: Optional[str]
    banner_path: Optional[str]

    def __init__(
        self,
        scale: int = DEFAULT_SCALE,
        output_dir: str = DEFAULT_OUTPUT_DIR,
        font_path: Optional[str] = None,
        banner_path: Optional[str] = None,
    ):
        self.scale = scale
        self.output_dir = output_dir
        self.font_path = font_path
        self.banner_path = banner_path

    @classmethod
    def from_config(cls, config: SceneConfig) -> "SceneRenderer":
        return cls(
            scale=config.scale,
            output_dir=config.output_dir,
            font_path=config.asset_path(config.font_path),
            banner_path=config.asset_path(config.banner_path),
        )

    def compose(self, scene: Scene) -> Image.Image:
        return compose(
            scene,
            scale=self.scale,
            font_path=self.font_path,
            banner_path=self.banner_path,
        )

    def render(self, scene: Scene) -> str:
        """Compose ``scene`` and save it, returning the written path.

        The pending notification is cleared only after the file is written.

        Raises:
            RenderError: If composing or saving fails.
        """
        image = self.compose(scene)
        try:
            path = save_image(image, self.output_dir)
        except AssetError as e:
            raise RenderError(f"Failed to save scene: {e}") from e
        scene.message = None
        return path


def render_scene(scene: Scene, config: Optional[SceneConfig] = None) -> str:
    """Render ``scene`` with ``config`` (defaults when omitted) and return the file path."""
    return SceneRenderer.from_config(config or SceneConfig()).render(scene)
