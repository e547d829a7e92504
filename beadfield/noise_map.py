"""Noise-map renderer.

An alternate view that shades a grid of square cells by the magnitude of
a 2D noise field. The noise function itself is supplied by the caller:
any ``noise(x, y) -> float`` in [-1, 1].
"""

from __future__ import annotations

from collections.abc import Callable

from .clock import AnimationClock
from .params import Viewport
from .surface import Surface

DEFAULT_NODES = 256
# Noise coordinates are surface pixels divided by this
NOISE_ZOOM = 100


class NoiseMapRenderer:
    """Paints ``|noise(x / 100, y / 100)|`` as black at that opacity.

    Args:
        noise: 2D noise function.
        viewport: Host drawing area.
        nodes: Cells per row; cell size is ``surface_width / nodes``.
        surface: Target surface, or None until attached.
        clock: Animation clock shared with the scheduler binding.
    """

    def __init__(
        self,
        noise: Callable[[float, float], float],
        viewport: Viewport | None = None,
        nodes: int = DEFAULT_NODES,
        surface: Surface | None = None,
        clock: AnimationClock | None = None,
    ):
        if nodes < 1:
            raise ValueError(f"nodes must be positive, got {nodes}")
        self.noise = noise
        self.viewport = viewport or Viewport()
        self.nodes = nodes
        self.surface = surface
        self.clock = clock or AnimationClock()

    @property
    def cell_size(self) -> float:
        return self.viewport.surface_width / self.nodes

    def attach(self, surface: Surface | None) -> None:
        self.surface = surface

    def draw(self, elapsed_seconds: float = 0.0) -> bool:
        """Repaint the noise map; the field does not vary with time."""
        surface = self.surface
        if surface is None:
            return False

        vp = self.viewport
        size = self.cell_size
        extent = vp.surface_width

        surface.clear_rect(0, 0, vp.surface_width, vp.surface_height)

        # Square grid over the surface width in both directions
        y = 0.0
        while y < extent:
            x = 0.0
            while x < extent:
                v = abs(float(self.noise(x / NOISE_ZOOM, y / NOISE_ZOOM)))
                surface.set_fill_style(f"rgba(0,0,0, {v:.4f})")
                surface.fill_rect(x, y, size, size)
                x += size
            y += size

        return True

    def on_frame(self, timestamp: float) -> bool:
        if self.surface is None:
            return False
        return self.draw(self.clock.elapsed_seconds(timestamp))
