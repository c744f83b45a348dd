"""Grid geometry.

Fixed-size square cells laid over a background raster. The cell grid is
derived once from the background's pixel size; trailing pixels that do not
fill a whole cell are not addressable.
"""

from dataclasses import dataclass
from typing import Tuple

from tile_scene.types import PixelPosition


@dataclass(frozen=True)
class GridGeometry:
    """Cell size and scene bounds.

    Attributes:
        cell_size: Edge length of a cell in pixels.
        width: Scene width in whole cells.
        height: Scene height in whole cells.
        pixel_width: Background width in pixels.
        pixel_height: Background height in pixels.
    """

    cell_size: int
    width: int
    height: int
    pixel_width: int
    pixel_height: int

    @classmethod
    def from_pixel_size(cls, size: Tuple[int, int], cell_size: int) -> "GridGeometry":
        if cell_size <= 0:
            raise ValueError(f"Cell size must be positive, got {cell_size}")
        pixel_width, pixel_height = size
        return cls(
            cell_size=cell_size,
            width=pixel_width // cell_size,
            height=pixel_height // cell_size,
            pixel_width=pixel_width,
            pixel_height=pixel_height,
        )

    def cell_to_pixel(self, x: int, y: int) -> PixelPosition:
        """Return the top-left pixel of cell ``(x, y)``. Negative cells map to negative pixels."""
        return x * self.cell_size, y * self.cell_size
