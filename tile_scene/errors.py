"""Exception hierarchy.

Placement failures are local and recoverable: the caller may retry with a
different position. Asset and render failures wrap the underlying Pillow or
OS error (available as ``__cause__``) and are reported to the caller of
:func:`tile_scene.renderer.compositor.render_scene`.
"""

from tile_scene.types import PlacementErrorKind


class TileSceneError(Exception):
    """Base class for all errors raised by ``tile_scene``."""


class PlacementError(TileSceneError, ValueError):
    """A sprite cannot occupy the requested cell.

    Attributes:
        kind: Which placement rule rejected the sprite.
    """

    def __init__(self, kind: PlacementErrorKind, message: str = "") -> None:
        self.kind = kind
        super().__init__(message or kind.value)


class AssetError(TileSceneError):
    """An image or font could not be loaded, decoded, encoded or saved."""


class RenderError(TileSceneError):
    """A scene could not be composed or persisted."""
