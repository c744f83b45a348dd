from dataclasses import replace

import pytest
from pyrsistent import pmap, pset

from tile_scene.sprite import Sprite, TextLabel, leveled_sprite
from tests.test_utils import BLUE, GREEN, RED, png_bytes, solid_sprite


def test_defaults() -> None:
    sprite = Sprite(image=b"img")
    assert sprite.position == (0, 0)
    assert (sprite.width_cell, sprite.height_cell) == (1, 1)
    assert sprite.z_index == 0
    assert sprite.levels == pmap()
    assert not sprite.requires_hover
    assert not sprite.hovered


def test_requires_hover_and_accepts() -> None:
    host = Sprite(image=b"img", kind="soil", can_be_hovered_by=pset(["crop"]))
    guest = Sprite(image=b"img", kind="crop", needs_hover=pset(["soil"]))
    assert guest.requires_hover
    assert not host.requires_hover
    assert host.accepts("crop")
    assert not host.accepts("rock")
    assert not guest.accepts("crop")


def test_display_sprite_substitutes_level_image_keeping_position() -> None:
    variant = solid_sprite(0, 0, BLUE)
    sprite = solid_sprite(4, 3, RED, level=2, levels=pmap({2: variant}))
    shown = sprite.display_sprite()
    assert shown.image == variant.image
    assert shown.position == (4, 3)


@pytest.mark.parametrize("level", [0, 1])
def test_display_sprite_uses_base_for_low_levels(level: int) -> None:
    variant = solid_sprite(0, 0, BLUE)
    sprite = solid_sprite(1, 1, RED, level=level, levels=pmap({1: variant}))
    assert sprite.display_sprite() is sprite


def test_display_sprite_uses_base_when_variant_missing() -> None:
    sprite = solid_sprite(1, 1, RED, level=5, levels=pmap({2: solid_sprite(0, 0, BLUE)}))
    assert sprite.display_sprite() is sprite


def test_moved_and_leveled_copies() -> None:
    sprite = solid_sprite(1, 1)
    assert sprite.moved_to(2, 3).position == (2, 3)
    assert sprite.at_level(3).level == 3
    assert sprite.position == (1, 1)


def test_sprites_are_hashable_values() -> None:
    a = solid_sprite(1, 1, needs_hover=pset(["soil"]))
    b = solid_sprite(1, 1, needs_hover=pset(["soil"]))
    assert a == b
    assert hash(a) == hash(b)
    assert replace(a, hovered=True) != b


def test_leveled_sprite_builds_one_variant_per_image() -> None:
    images = [png_bytes(RED), png_bytes(GREEN), png_bytes(BLUE)]
    sprite = leveled_sprite(images, x=2, y=5, level=3, kind="crop", z_index=2)
    assert sprite.image == images[0]
    assert sorted(sprite.levels.keys()) == [1, 2, 3]
    assert sprite.levels[3].image == images[2]
    assert sprite.levels[2].kind == "crop"
    assert sprite.levels[2].z_index == 2
    assert sprite.display_sprite().image == images[2]
    assert sprite.display_sprite().position == (2, 5)


def test_leveled_sprite_requires_images() -> None:
    with pytest.raises(ValueError):
        leveled_sprite([], x=0, y=0)


def test_text_label_defaults() -> None:
    label = TextLabel(message="hello", x=1, y=2)
    assert label.size == 12
    assert label.color == (0, 0, 0)
