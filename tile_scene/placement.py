"""Placement validation.

Every write into a scene registry goes through :func:`validate_placement`.
The validator is a pure function over the current registry: instead of
flipping the host's ``hovered`` flag in place it returns the registry as it
must look once the candidate is committed, with the host's stored copy
replaced. Callers commit that registry together with the candidate, so a
rejected placement never leaves a partial write behind.

Checks run in order and stop at the first failure:

1. Width bound, 2. height bound, 3. occupancy scan, 4. missing hover target.
"""

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, List, Optional, Tuple

from pyrsistent import PMap

from tile_scene.errors import PlacementError
from tile_scene.grid import GridGeometry
from tile_scene.sprite import Sprite
from tile_scene.types import PlacementErrorKind, SpriteID

if TYPE_CHECKING:
    from tile_scene.scene import Scene

logger = logging.getLogger(__name__)

Registry = PMap[SpriteID, Sprite]


def _exceeds(anchor: int, footprint: int, bound: int) -> bool:
    if footprint > 1:
        return anchor + footprint >= bound
    return anchor >= bound


def check_bounds(grid: GridGeometry, sprite: Sprite) -> None:
    """Raise if the sprite's footprint reaches past the last usable cell.

    Only upper bounds are checked. A 1x1 sprite may use any cell below the
    bound; a wider footprint compares ``x + width`` against it with ``>=``,
    so it can never reach the last column (rows likewise).
    """
    if _exceeds(sprite.x, sprite.width_cell, grid.width):
        raise PlacementError(
            PlacementErrorKind.WIDTH_BOUND_EXCEEDED,
            f"x={sprite.x} (width {sprite.width_cell}) is above maximum width {grid.width}",
        )
    if _exceeds(sprite.y, sprite.height_cell, grid.height):
        raise PlacementError(
            PlacementErrorKind.HEIGHT_BOUND_EXCEEDED,
            f"y={sprite.y} (height {sprite.height_cell}) is above maximum height {grid.height}",
        )


def occupants_at(
    sprites: Registry, x: int, y: int, exclude: Optional[SpriteID] = None
) -> List[Tuple[SpriteID, Sprite]]:
    """Return ``(id, sprite)`` pairs anchored at ``(x, y)``, sorted by id."""
    return sorted(
        (
            (sid, other)
            for sid, other in sprites.items()
            if sid != exclude and other.x == x and other.y == y
        ),
        key=lambda item: item[0],
    )


def _keeps_hover_slot(sprites: Registry, sprite_id: SpriteID, sprite: Sprite) -> bool:
    # An update that leaves a hovering sprite on its cell keeps the slot it holds.
    previous = sprites.get(sprite_id)
    return (
        previous is not None
        and previous.requires_hover
        and previous.position == sprite.position
        and any(
            host.hovered and host.accepts(sprite.kind)
            for _, host in occupants_at(sprites, sprite.x, sprite.y, exclude=sprite_id)
        )
    )


def _claim_hover_slot(
    sprites: Registry,
    sprite_id: SpriteID,
    sprite: Sprite,
    occupants: List[Tuple[SpriteID, Sprite]],
) -> Registry:
    accepting = [(sid, host) for sid, host in occupants if host.accepts(sprite.kind)]
    if not accepting:
        raise PlacementError(
            PlacementErrorKind.BAD_HOVER_CAPABILITY,
            f"no sprite at {sprite.position} can be hovered by {sprite.kind!r}",
        )
    if _keeps_hover_slot(sprites, sprite_id, sprite):
        return sprites
    for host_id, host in accepting:
        if not host.hovered:
            return sprites.set(host_id, replace(host, hovered=True))
    raise PlacementError(
        PlacementErrorKind.HOVER_SLOT_ALREADY_USED,
        f"sprite {accepting[0][0]!r} at {sprite.position} is already hovered",
    )


def _without_riders(
    sprites: Registry,
    sprite_id: SpriteID,
    sprite: Sprite,
    occupants: List[Tuple[SpriteID, Sprite]],
) -> List[Tuple[SpriteID, Sprite]]:
    # A hovered host updated on its own cell is not blocked by the sprites it carries.
    previous = sprites.get(sprite_id)
    if previous is None or not previous.hovered or previous.position != sprite.position:
        return occupants
    return [
        (sid, other)
        for sid, other in occupants
        if not (other.requires_hover and sprite.accepts(other.kind))
    ]


def validate_placement(scene: "Scene", sprite_id: SpriteID, sprite: Sprite) -> Registry:
    """Check whether ``sprite`` may be stored under ``sprite_id``.

    The entry already stored under ``sprite_id`` is ignored by the occupancy
    scan, so re-validating a sprite on its own cell succeeds. Likewise a
    hovered host updated on its own cell ignores the hovering sprites it
    still accepts, so it can change image or level under a crop.

    Args:
        scene: Scene holding the grid and the current registry.
        sprite_id: Registry key the sprite will be stored under.
        sprite: Candidate sprite.

    Returns:
        Registry: ``scene.sprites`` with the host's ``hovered`` flag set when the
            candidate consumes a hover slot, otherwise ``scene.sprites`` itself.
            The candidate is not yet part of it.

    Raises:
        PlacementError: With the first failing rule as ``kind``.
    """
    check_bounds(scene.grid, sprite)

    occupants = occupants_at(scene.sprites, sprite.x, sprite.y, exclude=sprite_id)
    if not sprite.requires_hover:
        occupants = _without_riders(scene.sprites, sprite_id, sprite, occupants)
        if occupants:
            raise PlacementError(
                PlacementErrorKind.ALREADY_OCCUPIED_NO_HOVER,
                f"cell {sprite.position} is already used by {occupants[0][0]!r}",
            )
        return scene.sprites

    if not occupants:
        raise PlacementError(
            PlacementErrorKind.NO_HOVER_TARGET,
            f"nothing at {sprite.position} for {sprite_id!r} to hover",
        )
    return _claim_hover_slot(scene.sprites, sprite_id, sprite, occupants)


def placement_error(
    scene: "Scene", sprite_id: SpriteID, sprite: Sprite
) -> Optional[PlacementErrorKind]:
    """Return why ``sprite`` cannot be placed, or ``None`` if it can. Never mutates."""
    try:
        validate_placement(scene, sprite_id, sprite)
    except PlacementError as e:
        return e.kind
    return None


def release_hover(sprites: Registry, sprite: Sprite) -> Registry:
    """Free the hover slot a hovering ``sprite`` holds on its cell.

    Used when the sprite is removed or moved away. The first hovered host
    accepting the sprite's kind is released; anything else is left alone.
    """
    if not sprite.requires_hover:
        return sprites
    for host_id, host in occupants_at(sprites, sprite.x, sprite.y):
        if host.hovered and host.accepts(sprite.kind):
            logger.debug("Releasing hover slot of %r at %s", host_id, sprite.position)
            return sprites.set(host_id, replace(host, hovered=False))
    return sprites
