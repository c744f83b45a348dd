"""Demo farm land.

Builds the stock farm scene (``base.png`` on a 16 px grid) and leveled crop
sprites whose images follow the ``pum_<level>.png`` naming of the bundled
pumpkin assets::

    scene = create_demo_farm_land()
    scene.upsert("soil-4-2", make_soil_sprite(soil, x=4, y=2))
    scene.upsert("pumpkin-4-2", make_crop_sprite("farms/pumpkins", x=4, y=2, level=2))
    path = render_scene(scene)
"""

import os
from dataclasses import replace
from typing import Optional

from pyrsistent import pset

from tile_scene.assets import load_image
from tile_scene.config import DEFAULT_CELL_SIZE, SceneConfig
from tile_scene.scene import Scene
from tile_scene.sprite import Sprite, leveled_sprite

FARM_BACKGROUND = "base.png"
CROP_KIND = "crop"
SOIL_KIND = "soil"
CROP_Z_INDEX = 2


def create_demo_farm_land(config: Optional[SceneConfig] = None) -> Scene:
    """Load ``base.png`` from the asset root into an empty 16 px grid scene.

    The debug flag comes from ``config`` (or the environment when omitted).

    Raises:
        AssetError: If the background cannot be loaded.
    """
    config = config or SceneConfig.from_env()
    if config.cell_size != DEFAULT_CELL_SIZE:
        config = replace(config, cell_size=DEFAULT_CELL_SIZE)
    return Scene.from_file(FARM_BACKGROUND, config)


def make_crop_sprite(
    base_dir: str,
    x: int,
    y: int,
    level: int = 1,
    max_level: int = 4,
    prefix: str = "pum",
    asset_root: Optional[str] = None,
) -> Sprite:
    """Build a crop that grows through ``max_level`` images and sits on soil."""
    images = [
        load_image(os.path.join(base_dir, f"{prefix}_{i}.png"), asset_root)[0]
        for i in range(1, max_level + 1)
    ]
    return leveled_sprite(
        images,
        x=x,
        y=y,
        level=level,
        z_index=CROP_Z_INDEX,
        kind=CROP_KIND,
        needs_hover=pset([SOIL_KIND]),
    )


def make_soil_sprite(image: bytes, x: int, y: int) -> Sprite:
    """Tilled soil that accepts one crop on top of it."""
    return Sprite(
        image=image,
        x=x,
        y=y,
        z_index=1,
        kind=SOIL_KIND,
        can_be_hovered_by=pset([CROP_KIND]),
    )
