"""Rendering surfaces.

The frame renderers only need a handful of immediate-mode 2D drawing
primitives (clear, arc, fill). ``Surface`` names that capability; the
concrete surfaces below either record the calls, build an SVG document,
or rasterise with Pillow.

Colors are passed through uninterpreted: a malformed color is the
surface's problem, not the renderer's.
"""

from __future__ import annotations

import io
import re
from typing import Protocol

from PIL import Image, ImageColor, ImageDraw

_RGBA_FRACTIONAL = re.compile(
    r"^rgba\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*([0-9]*\.?[0-9]+)\s*\)$"
)


class Surface(Protocol):
    """Immediate-mode 2D drawing capability."""

    width: float
    height: float

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def begin_path(self) -> None: ...

    def arc(self, cx: float, cy: float, r: float, start_angle: float, end_angle: float) -> None: ...

    def set_fill_style(self, color: str) -> None: ...

    def fill(self) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None: ...


class RecordingSurface:
    """Surface that records every primitive call as a tuple.

    ``calls`` holds entries like ``("arc", cx, cy, r, start, end)``.
    """

    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height
        self.calls: list[tuple] = []

    def clear_rect(self, x, y, w, h):
        self.calls.append(("clear_rect", x, y, w, h))

    def begin_path(self):
        self.calls.append(("begin_path",))

    def arc(self, cx, cy, r, start_angle, end_angle):
        self.calls.append(("arc", cx, cy, r, start_angle, end_angle))

    def set_fill_style(self, color):
        self.calls.append(("set_fill_style", color))

    def fill(self):
        self.calls.append(("fill",))

    def fill_rect(self, x, y, w, h):
        self.calls.append(("fill_rect", x, y, w, h))

    def named(self, name: str) -> list[tuple]:
        """All recorded calls of one primitive."""
        return [c for c in self.calls if c[0] == name]

    def reset(self) -> None:
        self.calls.clear()


class _PathSurface:
    """Shared path/fill-style bookkeeping for the concrete surfaces."""

    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height
        self.fill_style = "#000"
        self._path: list[tuple[float, float, float]] = []

    def begin_path(self):
        self._path = []

    def arc(self, cx, cy, r, start_angle, end_angle):
        # Only full circles are drawn by the renderers
        self._path.append((cx, cy, r))

    def set_fill_style(self, color):
        self.fill_style = color


class SVGSurface(_PathSurface):
    """Surface that accumulates SVG elements.

    Args:
        width: Backing surface width in pixels.
        height: Backing surface height in pixels.
        display_width: Rendered width attribute (defaults to ``width``).
        display_height: Rendered height attribute (defaults to ``height``).
    """

    def __init__(
        self,
        width: float,
        height: float,
        display_width: float | None = None,
        display_height: float | None = None,
    ):
        super().__init__(width, height)
        self.display_width = display_width if display_width is not None else width
        self.display_height = display_height if display_height is not None else height
        # (element, bounding box)
        self._elements: list[tuple[str, tuple[float, float, float, float]]] = []

    def clear_rect(self, x, y, w, h):
        if x <= 0 and y <= 0 and x + w >= self.width and y + h >= self.height:
            self._elements = []
            return
        self._elements = [
            (el, box)
            for el, box in self._elements
            if not (box[0] >= x and box[1] >= y and box[2] <= x + w and box[3] <= y + h)
        ]

    def fill(self):
        for cx, cy, r in self._path:
            self._elements.append(
                (
                    f'  <circle cx="{cx:.2f}" cy="{cy:.2f}" r="{r:.2f}" fill="{self.fill_style}"/>',
                    (cx - r, cy - r, cx + r, cy + r),
                )
            )

    def fill_rect(self, x, y, w, h):
        self._elements.append(
            (
                f'  <rect x="{x:.2f}" y="{y:.2f}" width="{w:.2f}" height="{h:.2f}" '
                f'fill="{self.fill_style}"/>',
                (x, y, x + w, y + h),
            )
        )

    @property
    def element_count(self) -> int:
        return len(self._elements)

    def to_svg(self) -> str:
        """Return the current contents as a complete SVG document."""
        parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" '
            f'viewBox="0 0 {self.width:g} {self.height:g}" '
            f'width="{self.display_width:g}" height="{self.display_height:g}">',
        ]
        parts.extend(el for el, _box in self._elements)
        parts.append("</svg>")
        return "\n".join(parts)


def parse_color(color: str) -> tuple[int, int, int, int]:
    """Parse a color string into an RGBA tuple.

    Accepts everything ``PIL.ImageColor`` does plus ``rgba(r, g, b, a)``
    with a fractional alpha in [0, 1].

    Raises:
        ValueError: If the color cannot be parsed.
    """
    match = _RGBA_FRACTIONAL.match(color.strip())
    if match and "." in match.group(4):
        r, g, b = (int(match.group(i)) for i in range(1, 4))
        alpha = max(0.0, min(1.0, float(match.group(4))))
        return (r, g, b, round(alpha * 255))
    return ImageColor.getcolor(color, "RGBA")


class ImageSurface(_PathSurface):
    """Pillow-backed raster surface (RGBA, alpha-blended drawing)."""

    def __init__(self, width: float, height: float):
        super().__init__(width, height)
        self.image = Image.new("RGBA", (round(width), round(height)), (0, 0, 0, 0))
        self._draw = ImageDraw.Draw(self.image, "RGBA")

    def clear_rect(self, x, y, w, h):
        box = (
            max(0, round(x)),
            max(0, round(y)),
            min(self.image.width, round(x + w)),
            min(self.image.height, round(y + h)),
        )
        if box[2] > box[0] and box[3] > box[1]:
            self.image.paste((0, 0, 0, 0), box)

    def fill(self):
        rgba = parse_color(self.fill_style)
        for cx, cy, r in self._path:
            if r <= 0:
                continue
            self._draw.ellipse((cx - r, cy - r, cx + r, cy + r), fill=rgba)

    def fill_rect(self, x, y, w, h):
        if w <= 0 or h <= 0:
            return
        self._draw.rectangle((x, y, x + w, y + h), fill=parse_color(self.fill_style))

    def flattened(self, background: str = "white") -> Image.Image:
        """Composite onto an opaque background (RGB)."""
        base = Image.new("RGBA", self.image.size, background)
        base.alpha_composite(self.image)
        return base.convert("RGB")

    def to_png(self) -> bytes:
        buf = io.BytesIO()
        self.image.save(buf, format="PNG")
        return buf.getvalue()
