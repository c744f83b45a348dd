"""Common type aliases and enumerations.

``SpriteID`` keys the scene registry; ``SpriteKind`` is the type identifier
matched by the hover relationship sets of :class:`tile_scene.sprite.Sprite`.
"""

from enum import StrEnum
from typing import Tuple

SpriteID = str
SpriteKind = str

RGB = Tuple[int, int, int]
CellPosition = Tuple[int, int]
PixelPosition = Tuple[int, int]


class PlacementErrorKind(StrEnum):
    """Reasons a sprite may not be placed (values are stable wire strings)."""

    WIDTH_BOUND_EXCEEDED = "MAX_WIDTH"
    HEIGHT_BOUND_EXCEEDED = "MAX_HEIGHT"
    ALREADY_OCCUPIED_NO_HOVER = "ALREADY_ENT_HERE_NO_HOVER_BY"
    BAD_HOVER_CAPABILITY = "BAD_HOVERED_ENTITY"
    HOVER_SLOT_ALREADY_USED = "HOVERED_ENTITY_ALREADY_USED"
    NO_HOVER_TARGET = "NO_ENTITY_TO_PUT"
