"""Layout parameters and host viewport.

The parameter panel and the host shell live outside this package; they
hand in immutable snapshots. A new ``LayoutParameters`` snapshot that
differs in a layout field triggers a bead field rebuild, anything else
reuses the cached field.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Defaults from the parameter panel
DEFAULT_SPACING_PER_SCALE = 20
DEFAULT_NUM_RINGS = 5
DEFAULT_BEAD_RADIUS = 15
DEFAULT_COLOR1 = "#000"
DEFAULT_COLOR2 = "#080593"

# Static-path fill color per theme
THEME_COLORS = {"light": "#000", "dark": "#fff"}

# Fields whose change invalidates the bead field
LAYOUT_FIELDS = (
    "spacing",
    "outer_ring_radius",
    "num_rings",
    "bead_radius",
    "rotation",
    "color1",
    "color2",
    "theme",
)


class Viewport(BaseModel):
    """Host-supplied drawing area.

    ``width``/``height`` are logical pixels; the backing surface is
    ``scale`` times larger in each direction.
    """

    model_config = ConfigDict(frozen=True)

    width: float = Field(default=400, gt=0, description="Logical width in pixels")
    height: float = Field(default=400, gt=0, description="Logical height in pixels")
    scale: float = Field(default=3, gt=0, description="Device pixel multiplier")

    @property
    def surface_width(self) -> float:
        return self.width * self.scale

    @property
    def surface_height(self) -> float:
        return self.height * self.scale

    @property
    def center(self) -> tuple[float, float]:
        return (self.scale * self.width / 2, self.scale * self.height / 2)


class LayoutParameters(BaseModel):
    """Snapshot of the live-editable layout and animation parameters."""

    model_config = ConfigDict(frozen=True)

    spacing: float = Field(
        default=DEFAULT_SPACING_PER_SCALE * 3,
        gt=0,
        allow_inf_nan=False,
        description="Minimum distance between neighbouring bead centers",
    )
    outer_ring_radius: float = Field(
        default=400,
        ge=0,
        allow_inf_nan=False,
        description="Radius of ring 0",
    )
    num_rings: int = Field(default=DEFAULT_NUM_RINGS, ge=0, description="Number of rings")
    bead_radius: float = Field(default=DEFAULT_BEAD_RADIUS, ge=0, description="Peak bead radius")
    rotation: float = Field(
        default=0,
        allow_inf_nan=False,
        description="Loop offset per ring index, in turns",
    )
    draw_center_bead: bool = True
    animation_running: bool = True
    color1: str = DEFAULT_COLOR1
    color2: str = DEFAULT_COLOR2
    theme: Literal["light", "dark"] = "light"

    @classmethod
    def defaults(cls, viewport: Viewport, **overrides) -> LayoutParameters:
        """Build a snapshot with the panel defaults for ``viewport``.

        Raises:
            ValueError: If an override violates a field bound.
        """
        values = {
            "spacing": DEFAULT_SPACING_PER_SCALE * viewport.scale,
            "outer_ring_radius": viewport.width,
        }
        values.update(overrides)
        return cls(**values)

    @property
    def fallback_color(self) -> str:
        """Fill color used while the animation is stopped."""
        return THEME_COLORS[self.theme]

    def layout_key(self) -> tuple:
        """Values that determine the bead field."""
        return tuple(getattr(self, name) for name in LAYOUT_FIELDS)
