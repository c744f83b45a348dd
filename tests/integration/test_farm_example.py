import os

import pytest

from tile_scene.config import SceneConfig
from tile_scene.errors import AssetError, PlacementError
from tile_scene.examples.farm import (
    CROP_KIND,
    SOIL_KIND,
    create_demo_farm_land,
    make_crop_sprite,
    make_soil_sprite,
)
from tile_scene.renderer.compositor import compose
from tile_scene.types import PlacementErrorKind
from tests.test_utils import GRASS, YELLOW, pixel, png_bytes, write_png

PUMPKIN_COLORS = [
    (200, 100, 0, 255),
    (210, 120, 0, 255),
    (220, 140, 0, 255),
    (230, 160, 0, 255),
]


@pytest.fixture
def asset_root(tmp_path) -> str:
    write_png(tmp_path / "base.png", GRASS, (160, 160))
    pumpkins = tmp_path / "farms" / "pumpkins"
    pumpkins.mkdir(parents=True)
    for level, color in enumerate(PUMPKIN_COLORS, start=1):
        write_png(pumpkins / f"pum_{level}.png", color)
    return str(tmp_path)


def test_demo_farm_land_from_config(asset_root: str) -> None:
    scene = create_demo_farm_land(SceneConfig(asset_root=asset_root))
    assert (scene.width, scene.height) == (10, 10)
    assert scene.cell_size == 16
    assert not scene.debug
    assert len(scene.sprites) == 0


def test_demo_farm_land_forces_16px_grid(asset_root: str) -> None:
    scene = create_demo_farm_land(SceneConfig(asset_root=asset_root, cell_size=8))
    assert scene.cell_size == 16


def test_demo_farm_land_reads_environment(asset_root: str, monkeypatch) -> None:
    monkeypatch.setenv("LAND_DEBUGGING", "1")
    monkeypatch.setenv("TILE_SCENE_ASSET_ROOT", asset_root)
    scene = create_demo_farm_land()
    assert scene.debug
    assert scene.width == 10


def test_demo_farm_land_missing_background(tmp_path) -> None:
    with pytest.raises(AssetError):
        create_demo_farm_land(SceneConfig(asset_root=str(tmp_path)))


def test_crop_sprite_has_one_variant_per_level(asset_root: str) -> None:
    sprite = make_crop_sprite(os.path.join("farms", "pumpkins"), 3, 4, level=2, asset_root=asset_root)
    assert sorted(sprite.levels) == [1, 2, 3, 4]
    assert sprite.kind == CROP_KIND
    assert SOIL_KIND in sprite.needs_hover
    assert sprite.position == (3, 4)


def test_crop_sprite_missing_level_image(asset_root: str) -> None:
    with pytest.raises(AssetError):
        make_crop_sprite("farms/pumpkins", 0, 0, max_level=5, asset_root=asset_root)


@pytest.mark.parametrize("level, color_index", [(1, 0), (3, 2), (4, 3)])
def test_growing_pumpkin_renders_its_level(asset_root: str, level: int, color_index: int) -> None:
    scene = create_demo_farm_land(SceneConfig(asset_root=asset_root))
    scene.upsert("soil-4-2", make_soil_sprite(png_bytes(YELLOW), 4, 2))
    scene.upsert(
        "pumpkin-4-2",
        make_crop_sprite("farms/pumpkins", 4, 2, level=level, asset_root=asset_root),
    )
    assert scene.get("soil-4-2").hovered
    image = compose(scene, scale=1)
    assert pixel(image, 4, 2) == PUMPKIN_COLORS[color_index]
    assert pixel(image, 5, 2) == GRASS


def test_pumpkin_needs_free_soil(asset_root: str) -> None:
    scene = create_demo_farm_land(SceneConfig(asset_root=asset_root))
    crop = make_crop_sprite("farms/pumpkins", 1, 1, asset_root=asset_root)
    with pytest.raises(PlacementError) as exc:
        scene.upsert("pumpkin", crop)
    assert exc.value.kind == PlacementErrorKind.NO_HOVER_TARGET

    scene.upsert("soil", make_soil_sprite(png_bytes(YELLOW), 1, 1))
    scene.upsert("pumpkin", crop)
    with pytest.raises(PlacementError) as exc:
        scene.upsert("pumpkin-2", crop)
    assert exc.value.kind == PlacementErrorKind.HOVER_SLOT_ALREADY_USED

    # harvesting frees the soil for the next crop
    scene.remove("pumpkin")
    scene.upsert("pumpkin-2", crop)
    assert scene.get("soil").hovered
