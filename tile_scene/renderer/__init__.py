"""Rendering subpackage.

Turns a mutable :class:`tile_scene.scene.Scene` into a flattened, upscaled
PNG. The renderer focuses on:

* Deterministic layering by ascending sprite ``z_index``.
* Overlays drawn after the sprites: notification banner, text labels and the
    debug grid.
* Plain Pillow compositing suitable for small pixel-art tile maps.

See :mod:`tile_scene.renderer.compositor` for the paint pipeline and
:mod:`tile_scene.renderer.overlay` for the overlay steps.
"""
