"""Frame rendering for bead fields.

``FrameRenderer`` owns the cached bead field and repaints it once per
scheduler tick:

1. Clear the surface.
2. Draw every ring bead, either at its motion state for the elapsed
   time (animation running) or at its static radius and fallback color.
3. Optionally draw the center bead under the same policy.

The bead field is rebuilt only when a layout field of the parameter
snapshot (or the viewport) changes; toggling the animation or the
center bead reuses it.

Export helpers at the bottom render single frames to SVG/PNG and short
animations to GIF.
"""

from __future__ import annotations

import io

import structlog

from .clock import AnimationClock
from .field import Bead, BeadField, build_bead_field
from .geometry import TAU
from .params import LayoutParameters, Viewport
from .scheduler import FrameLoop
from .surface import ImageSurface, Surface, SVGSurface

logger = structlog.get_logger(__name__)


class FrameRenderer:
    """Redraws a bead field onto a surface.

    Args:
        params: Initial layout parameter snapshot.
        viewport: Host drawing area.
        surface: Target surface, or None until the host attaches one.
        clock: Animation clock; a fresh one by default.
    """

    def __init__(
        self,
        params: LayoutParameters,
        viewport: Viewport | None = None,
        surface: Surface | None = None,
        clock: AnimationClock | None = None,
    ):
        self.params = params
        self.viewport = viewport or Viewport()
        self.surface = surface
        self.clock = clock or AnimationClock()
        self._field: BeadField | None = None
        self._field_key: tuple | None = None
        self.rebuilds = 0

    @property
    def field(self) -> BeadField:
        """Current bead field, rebuilt if the layout is dirty."""
        key = (self.params.layout_key(), self.viewport)
        if self._field is None or key != self._field_key:
            self._field = build_bead_field(self.params, self.viewport)
            self._field_key = key
            self.rebuilds += 1
        return self._field

    def update(
        self,
        params: LayoutParameters | None = None,
        viewport: Viewport | None = None,
    ) -> None:
        """Install a new parameter snapshot and/or viewport."""
        if params is not None:
            self.params = params
        if viewport is not None:
            self.viewport = viewport

    def attach(self, surface: Surface | None) -> None:
        self.surface = surface

    def draw(self, elapsed_seconds: float) -> bool:
        """Repaint one frame.

        Returns:
            False if no surface is attached (nothing drawn), else True.
        """
        surface = self.surface
        if surface is None:
            return False

        params = self.params
        field = self.field
        animated = params.animation_running

        surface.clear_rect(0, 0, self.viewport.surface_width, self.viewport.surface_height)

        for bead in field.beads():
            _draw_bead(surface, bead, elapsed_seconds, animated)

        if params.draw_center_bead:
            _draw_bead(surface, field.center_bead, elapsed_seconds, animated)

        return True

    def on_frame(self, timestamp: float) -> bool:
        """Scheduler callback: ``timestamp`` is monotonic milliseconds."""
        if self.surface is None:
            return False
        return self.draw(self.clock.elapsed_seconds(timestamp))


def _draw_bead(surface: Surface, bead: Bead, t: float, animated: bool) -> None:
    if animated:
        state = bead.motion(t)
        radius, color = state.radius, state.color
    else:
        radius, color = bead.base_radius, bead.static_color

    x, y = bead.position
    surface.begin_path()
    surface.arc(x, y, radius, 0, TAU)
    surface.set_fill_style(color)
    surface.fill()


def render_svg(
    params: LayoutParameters,
    viewport: Viewport | None = None,
    t: float = 0.0,
) -> str:
    """Render the frame at ``t`` seconds as an SVG document.

    The document is sized to the logical viewport, with the backing
    surface's pixel space as its viewBox.
    """
    viewport = viewport or Viewport()
    surface = SVGSurface(
        viewport.surface_width,
        viewport.surface_height,
        display_width=viewport.width,
        display_height=viewport.height,
    )
    FrameRenderer(params, viewport, surface).draw(t)
    svg = surface.to_svg()

    logger.debug("svg_rendered", elements=surface.element_count, t=t)
    return svg


def render_png(
    params: LayoutParameters,
    viewport: Viewport | None = None,
    t: float = 0.0,
) -> bytes:
    """Render the frame at ``t`` seconds as a PNG at surface resolution.

    Generates SVG first, then converts to PNG via CairoSVG.
    """
    import cairosvg

    viewport = viewport or Viewport()
    svg = render_svg(params, viewport, t)
    png_bytes = cairosvg.svg2png(
        bytestring=svg.encode("utf-8"),
        output_width=round(viewport.surface_width),
        output_height=round(viewport.surface_height),
    )

    logger.debug("png_rendered", bytes=len(png_bytes), t=t)
    return png_bytes


def render_gif(
    params: LayoutParameters,
    viewport: Viewport | None = None,
    frames: int = 60,
    fps: int = 30,
    background: str = "white",
) -> bytes:
    """Render ``frames`` consecutive frames as an animated GIF.

    Frames are driven through the scheduler binding with the timestamps
    a display at ``fps`` would deliver, rasterised with Pillow.

    Raises:
        ValueError: If ``frames`` or ``fps`` is not positive.
    """
    if frames < 1:
        raise ValueError(f"frames must be positive, got {frames}")
    if fps < 1:
        raise ValueError(f"fps must be positive, got {fps}")

    viewport = viewport or Viewport()
    surface = ImageSurface(viewport.surface_width, viewport.surface_height)
    renderer = FrameRenderer(params, viewport, surface)
    images = []

    def capture(timestamp: float) -> None:
        renderer.on_frame(timestamp)
        images.append(surface.flattened(background))

    loop = FrameLoop(capture, fps=fps, absorb_errors=False)
    for timestamp in loop.timestamps(frames):
        loop.tick(timestamp)

    buf = io.BytesIO()
    images[0].save(
        buf,
        format="GIF",
        save_all=True,
        append_images=images[1:],
        duration=round(1000 / fps),
        loop=0,
    )
    gif_bytes = buf.getvalue()

    logger.debug("gif_rendered", frames=frames, fps=fps, bytes=len(gif_bytes))
    return gif_bytes
