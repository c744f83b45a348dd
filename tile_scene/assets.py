"""Asset loading and persistence.

Images travel through the engine as encoded PNG payloads (``bytes``) so that
sprites stay immutable and hashable; they are decoded with Pillow when a
scene is composed. Every failure is raised as :class:`AssetError` with the
original exception chained.
"""

import io
import logging
import os
import uuid
from functools import lru_cache
from typing import Optional, Tuple, Union

from PIL import Image, ImageFont

from tile_scene.errors import AssetError

logger = logging.getLogger(__name__)

Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]


def resolve_path(path: str, asset_root: Optional[str] = None) -> str:
    if asset_root is None or os.path.isabs(path):
        return path
    return os.path.join(asset_root, path)


def encode_png(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    try:
        image.save(buffer, format="PNG")
    except (OSError, ValueError) as e:
        raise AssetError(f"Failed to encode image: {e}") from e
    return buffer.getvalue()


def load_image(path: str, asset_root: Optional[str] = None) -> Tuple[bytes, Image.Image]:
    """Load an image file.

    Args:
        path: Image path, relative to ``asset_root`` when one is given.
        asset_root: Optional directory to resolve ``path`` against.

    Returns:
        Tuple[bytes, Image.Image]: Canonical PNG encoding and the decoded image.

    Raises:
        AssetError: If the file cannot be opened, decoded or re-encoded.
    """
    full_path = resolve_path(path, asset_root)
    try:
        with Image.open(full_path) as opened:
            image = opened.copy()
    except (OSError, ValueError) as e:
        raise AssetError(f"Failed to load image {full_path}: {e}") from e
    logger.debug("Loaded %s (%dx%d)", full_path, image.width, image.height)
    return encode_png(image), image


@lru_cache(maxsize=512)
def decode_image(data: bytes) -> Image.Image:
    """Decode a PNG payload into an RGBA image.

    Results are cached per payload; callers must treat them as read-only.
    """
    try:
        with Image.open(io.BytesIO(data)) as opened:
            return opened.convert("RGBA")
    except (OSError, ValueError) as e:
        raise AssetError(f"Failed to decode image payload: {e}") from e


def load_font(path: Optional[str], size: int) -> Font:
    """Return a font face of ``size`` points.

    A configured ``path`` must load; there is no silent fallback. Without a
    path, Pillow's built-in scalable font is used.
    """
    if path is None:
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(path, size=size)
    except (OSError, ValueError) as e:
        raise AssetError(f"Failed to load font {path}: {e}") from e


def unique_filename(output_dir: str) -> str:
    return os.path.join(output_dir, f"tmp_{uuid.uuid4()}.png")


def save_image(image: Image.Image, output_dir: str) -> str:
    """Write ``image`` as a uniquely named PNG inside ``output_dir``.

    The file is never deleted by this package; the caller owns it.

    Returns:
        str: Path of the written file.
    """
    filename = unique_filename(output_dir)
    try:
        os.makedirs(output_dir, exist_ok=True)
        image.save(filename, format="PNG")
    except (OSError, ValueError) as e:
        raise AssetError(f"Failed to save {filename}: {e}") from e
    logger.info("Saved render to %s", filename)
    return filename
