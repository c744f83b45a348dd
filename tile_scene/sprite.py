"""Sprite and text label value objects.

A :class:`Sprite` is an image anchored on the tile grid. It is not bound to a
particular scene: the scene registry keys it by a caller-supplied id, so the
id is not repeated on the sprite itself.

Leveled sprites carry alternate, fully specified sprites in ``levels``. When
``level > 1`` and a variant exists for it, the compositor paints the
variant's image at the live sprite's position::

    crop = leveled_sprite(
        [pum_1, pum_2, pum_3],
        x=4,
        y=2,
        level=2,
        kind="crop",
        needs_hover=pset(["soil"]),
    )

Hover relationships stack one sprite on top of another:

* ``can_be_hovered_by`` lists the kinds this sprite accepts on top of it.
* ``needs_hover`` lists the kinds this sprite must be placed atop; a
  non-empty set makes the sprite require a host.
* ``hovered`` records whether the one hover slot is in use. It is maintained
  by :mod:`tile_scene.placement` on the stored copy.
"""

from dataclasses import dataclass, replace
from typing import Sequence

from pyrsistent import PMap, PSet, pmap, pset

from tile_scene.types import RGB, CellPosition, SpriteKind


@dataclass(frozen=True)
class Sprite:
    """Grid-anchored image.

    Attributes:
        image: Encoded PNG payload.
        x: Column of the anchor cell.
        y: Row of the anchor cell.
        width_cell: Footprint width in cells.
        height_cell: Footprint height in cells.
        z_index: Paint order, ascending.
        level: Current level selector.
        levels: Level number to alternate sprite.
        kind: Type identifier matched against hover sets.
        can_be_hovered_by: Kinds accepted on top of this sprite.
        needs_hover: Kinds this sprite must sit atop.
        hovered: Whether the hover slot is consumed.
    """

    image: bytes
    x: int = 0
    y: int = 0
    width_cell: int = 1
    height_cell: int = 1
    z_index: int = 0
    level: int = 0
    levels: PMap[int, "Sprite"] = pmap()
    kind: SpriteKind = ""
    can_be_hovered_by: PSet[SpriteKind] = pset()
    needs_hover: PSet[SpriteKind] = pset()
    hovered: bool = False

    @property
    def position(self) -> CellPosition:
        return self.x, self.y

    @property
    def requires_hover(self) -> bool:
        return len(self.needs_hover) > 0

    def accepts(self, kind: SpriteKind) -> bool:
        return kind in self.can_be_hovered_by

    def display_sprite(self) -> "Sprite":
        """Return the sprite to paint: the current level variant when one applies.

        The variant keeps its own image but always takes this sprite's
        position, since variants do not carry an authoritative one.
        """
        if self.level > 1 and self.level in self.levels:
            return replace(self.levels[self.level], x=self.x, y=self.y)
        return self

    def moved_to(self, x: int, y: int) -> "Sprite":
        return replace(self, x=x, y=y)

    def at_level(self, level: int) -> "Sprite":
        return replace(self, level=level)


def leveled_sprite(
    images: Sequence[bytes],
    x: int,
    y: int,
    level: int = 0,
    **kwargs: object,
) -> Sprite:
    """Build a sprite whose base image is ``images[0]`` with one variant per image.

    Variant ``i`` (1-based) uses ``images[i - 1]``, matching the convention
    that level 1 is the base look. Extra keyword arguments (footprint,
    z-index, kind, hover sets) apply to the base sprite and its variants.
    """
    if not images:
        raise ValueError("A leveled sprite needs at least one image")
    variants = {
        i: Sprite(image=image, x=x, y=y, **kwargs)  # type: ignore[arg-type]
        for i, image in enumerate(images, start=1)
    }
    return Sprite(
        image=images[0],
        x=x,
        y=y,
        level=level,
        levels=pmap(variants),
        **kwargs,  # type: ignore[arg-type]
    )


@dataclass(frozen=True)
class TextLabel:
    """Text painted at a cell, baseline anchored.

    Attributes:
        message: Text to draw.
        x: Column of the anchor cell.
        y: Row of the anchor cell.
        size: Font size in points.
        color: Fill colour.
    """

    message: str
    x: int
    y: int
    size: int = 12
    color: RGB = (0, 0, 0)
