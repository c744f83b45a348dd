"""Scene configuration.

Values are read once, when a :class:`SceneConfig` is built, and copied into
the objects that need them; nothing re-reads the environment per render.

Environment variables understood by :meth:`SceneConfig.from_env`:

* ``LAND_DEBUGGING``: enables the debug grid overlay.
* ``TILE_SCENE_ASSET_ROOT``: directory holding ``base.png`` and other assets.
* ``TILE_SCENE_OUTPUT_DIR``: directory rendered PNGs are written to.
* ``TILE_SCENE_FONT``: TrueType font used for text labels.
* ``TILE_SCENE_BANNER``: image painted behind notifications.
* ``TILE_SCENE_SCALE``: integer upscale factor of the final image.

Relative font and banner paths are resolved against the asset root, like
the background image.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from tile_scene.assets import resolve_path

logger = logging.getLogger(__name__)

DEFAULT_CELL_SIZE = 16
DEFAULT_SCALE = 3
DEFAULT_ASSET_ROOT = "assets"
DEFAULT_OUTPUT_DIR = os.path.join(DEFAULT_ASSET_ROOT, "tmp")

_TRUE_VALUES = frozenset(["1", "t", "T", "TRUE", "true", "True"])
_FALSE_VALUES = frozenset(["0", "f", "F", "FALSE", "false", "False"])


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    """Parse a boolean flag using the ``1/t/true`` and ``0/f/false`` spellings.

    Unset or unrecognized values fall back to ``default``.
    """
    if value is None:
        return default
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning("Unrecognized boolean value %r, using %s", value, default)
    return default


@dataclass(frozen=True)
class SceneConfig:
    """Settings shared by scene construction and rendering.

    Attributes:
        debug: Draw the debug grid overlay.
        cell_size: Cell edge length in pixels.
        scale: Integer upscale factor applied to the finished canvas.
        asset_root: Directory assets are resolved against.
        output_dir: Directory rendered artifacts are written to.
        font_path: TrueType font for text; ``None`` uses Pillow's built-in font.
            Relative paths are resolved against ``asset_root``.
        banner_path: Notification banner image; ``None`` draws a plain panel.
            Relative paths are resolved against ``asset_root``.
    """

    debug: bool = False
    cell_size: int = DEFAULT_CELL_SIZE
    scale: int = DEFAULT_SCALE
    asset_root: str = DEFAULT_ASSET_ROOT
    output_dir: str = DEFAULT_OUTPUT_DIR
    font_path: Optional[str] = None
    banner_path: Optional[str] = None

    def __post_init__(self) -> None:
        if self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        if self.scale <= 0:
            raise ValueError(f"scale must be positive, got {self.scale}")

    def asset_path(self, path: Optional[str]) -> Optional[str]:
        """Resolve a relative ``path`` against ``asset_root``; absolute paths and ``None`` pass through."""
        if path is None:
            return None
        return resolve_path(path, self.asset_root)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SceneConfig":
        env = os.environ if environ is None else environ
        scale = env.get("TILE_SCENE_SCALE")
        return cls(
            debug=parse_bool(env.get("LAND_DEBUGGING")),
            scale=int(scale) if scale else DEFAULT_SCALE,
            asset_root=env.get("TILE_SCENE_ASSET_ROOT", DEFAULT_ASSET_ROOT),
            output_dir=env.get("TILE_SCENE_OUTPUT_DIR", DEFAULT_OUTPUT_DIR),
            font_path=env.get("TILE_SCENE_FONT") or None,
            banner_path=env.get("TILE_SCENE_BANNER") or None,
        )
