"""Bead field data model and construction.

A bead field is root -> rings -> beads: rings run from the outermost
(index 0) inwards with evenly decreasing radii, and each bead carries
its static position and radius plus the motion function evaluated on
every animated frame.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from .geometry import point_count, ring_beads, starting_angle
from .motion import MotionFunction
from .params import LayoutParameters, Viewport

logger = structlog.get_logger(__name__)

# Upper bound on ring beads in one field
MAX_BEADS = 100_000


@dataclass(frozen=True)
class Bead:
    """A single drawn point on a ring.

    Attributes:
        position: (x, y) center in surface pixels.
        base_radius: Radius drawn while the animation is stopped.
        motion: Time -> radius/color function for animated frames.
        static_color: Color drawn while the animation is stopped.
    """

    position: tuple[float, float]
    base_radius: float
    motion: MotionFunction
    static_color: str


@dataclass(frozen=True)
class Ring:
    """Concentric ring of beads, in angular sweep order."""

    radius: float
    beads: tuple[Bead, ...] = ()


@dataclass(frozen=True)
class BeadField:
    """All rings for one layout, outer to inner, plus the center bead.

    The center bead is always built; whether it is drawn is a frame-time
    decision.
    """

    rings: tuple[Ring, ...]
    center_bead: Bead

    @property
    def bead_count(self) -> int:
        """Total beads across all rings (center bead excluded)."""
        return sum(len(ring.beads) for ring in self.rings)

    def beads(self):
        """Iterate every ring bead, outer ring first."""
        for ring in self.rings:
            yield from ring.beads


def ring_radius(params: LayoutParameters, ring_index: int) -> float:
    """Radius of ring ``ring_index``: evenly stepped from the outer ring."""
    return params.outer_ring_radius - ring_index * (params.outer_ring_radius / params.num_rings)


def _make_bead(params: LayoutParameters, x: float, y: float, index: float) -> Bead:
    return Bead(
        position=(x, y),
        base_radius=params.bead_radius,
        motion=MotionFunction(
            base_radius=params.bead_radius,
            index=index,
            color1=params.color1,
            color2=params.color2,
        ),
        static_color=params.fallback_color,
    )


def build_bead_field(params: LayoutParameters, viewport: Viewport) -> BeadField:
    """Lay out every ring and bead for a parameter snapshot.

    Deterministic and side-effect free: identical inputs produce an
    identical field.

    Args:
        params: Layout parameter snapshot.
        viewport: Host drawing area; the rings are centered on it.

    Returns:
        The complete bead field.

    Raises:
        ValueError: If the layout would hold more than MAX_BEADS beads.
    """
    total = sum(
        point_count(params.spacing, ring_radius(params, i)) for i in range(params.num_rings)
    )
    if total > MAX_BEADS:
        raise ValueError(f"Too many beads: {total} (max {MAX_BEADS})")

    center = viewport.center
    rings: list[Ring] = []

    for ring_index in range(params.num_rings):
        radius = ring_radius(params, ring_index)
        # Offset by one so the first ring is already rotated
        start = starting_angle(params.rotation, ring_index + 1)
        points = ring_beads(radius, params.spacing, center, start)
        beads = tuple(_make_bead(params, x, y, i) for i, x, y in points)
        rings.append(Ring(radius=radius, beads=beads))

    field = BeadField(
        rings=tuple(rings),
        center_bead=_make_bead(params, center[0], center[1], 0),
    )

    logger.debug(
        "bead_field_built",
        rings=len(field.rings),
        beads=field.bead_count,
        spacing=params.spacing,
        outer_ring_radius=params.outer_ring_radius,
    )
    return field
