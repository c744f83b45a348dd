"""Scene state.

A :class:`Scene` is the aggregate the compositor renders: a background, the
grid derived from it, a registry of sprites keyed by caller-supplied ids,
an optional pending notification, text labels and the debug flag.

Unlike sprites the scene object itself is mutable, with a single owner. The
registry is a persistent map that is *replaced* on every successful write,
never edited in place, so a rejected :meth:`Scene.upsert` leaves the exact
previous registry object behind.

Always go through :meth:`Scene.upsert` to add or move a sprite: it is the
only place placement rules are enforced.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional

from pyrsistent import PMap, pmap

from tile_scene.assets import decode_image, load_image
from tile_scene.config import SceneConfig
from tile_scene.errors import PlacementError
from tile_scene.grid import GridGeometry
from tile_scene.placement import release_hover, validate_placement
from tile_scene.sprite import Sprite, TextLabel
from tile_scene.types import RGB, PixelPosition, SpriteID

logger = logging.getLogger(__name__)


@dataclass
class Scene:
    """Background, grid and sprite registry.

    Attributes:
        grid: Cell geometry derived from the background.
        background: Encoded PNG payload of the background.
        sprites: Registry of placed sprites.
        message: Pending notification, consumed by the next render.
        texts: Text labels painted in list order.
        debug: Draw the debug grid overlay.
    """

    grid: GridGeometry
    background: bytes
    sprites: PMap[SpriteID, Sprite] = pmap()
    message: Optional[str] = None
    texts: List[TextLabel] = field(default_factory=list)
    debug: bool = False

    @classmethod
    def from_background(cls, background: bytes, cell_size: int, debug: bool = False) -> "Scene":
        """Build an empty scene over a PNG payload.

        Raises:
            AssetError: If the payload cannot be decoded.
        """
        size = decode_image(background).size
        return cls(grid=GridGeometry.from_pixel_size(size, cell_size), background=background, debug=debug)

    @classmethod
    def from_config(cls, background: bytes, config: SceneConfig) -> "Scene":
        return cls.from_background(background, config.cell_size, debug=config.debug)

    @classmethod
    def from_file(cls, path: str, config: SceneConfig) -> "Scene":
        """Build an empty scene over an image file resolved against ``config.asset_root``."""
        data, _ = load_image(path, config.asset_root)
        return cls.from_config(data, config)

    # -------- Grid accessors --------

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def cell_size(self) -> int:
        return self.grid.cell_size

    def cell_to_pixel(self, x: int, y: int) -> PixelPosition:
        return self.grid.cell_to_pixel(x, y)

    # -------- Registry --------

    def upsert(self, sprite_id: SpriteID, sprite: Sprite) -> None:
        """Add ``sprite`` under ``sprite_id`` or replace the sprite stored there.

        ``hovered`` is owned by the registry: an update that keeps the sprite
        on its cell keeps the stored flag, anything else starts unhovered. A
        hovering sprite that moves off its cell gives its previous host's
        slot back.

        Raises:
            PlacementError: If the placement is rejected; the scene is unchanged.
        """
        try:
            sprites = validate_placement(self, sprite_id, sprite)
        except PlacementError as e:
            logger.warning("Rejected %r at %s: %s", sprite_id, sprite.position, e)
            raise
        previous = self.sprites.get(sprite_id)
        stays = previous is not None and previous.position == sprite.position
        if previous is not None and not stays:
            sprites = release_hover(sprites.discard(sprite_id), previous)
        hovered = previous.hovered if previous is not None and stays else False
        if sprite.hovered != hovered:
            sprite = replace(sprite, hovered=hovered)
        self.sprites = sprites.set(sprite_id, sprite)
        logger.debug("Placed %r at %s (z=%d)", sprite_id, sprite.position, sprite.z_index)

    def remove(self, sprite_id: SpriteID) -> None:
        """Delete ``sprite_id``; absent ids are ignored."""
        previous = self.sprites.get(sprite_id)
        if previous is None:
            return
        self.sprites = release_hover(self.sprites.discard(sprite_id), previous)
        logger.debug("Removed %r from %s", sprite_id, previous.position)

    def get(self, sprite_id: SpriteID) -> Optional[Sprite]:
        return self.sprites.get(sprite_id)

    def __contains__(self, sprite_id: object) -> bool:
        return sprite_id in self.sprites

    # -------- Overlays --------

    def send_notification(self, message: str) -> None:
        """Show ``message`` in the banner of the next render only."""
        self.message = message

    def add_text(self, message: str, x: int, y: int, size: int = 12, color: RGB = (0, 0, 0)) -> TextLabel:
        label = TextLabel(message=message, x=x, y=y, size=size, color=color)
        self.texts.append(label)
        return label

    def clear_texts(self) -> None:
        self.texts.clear()
