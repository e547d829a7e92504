"""Ring geometry for bead layouts.

A ring of radius ``r`` holds as many beads as fit around it with at
least ``spacing`` between neighbouring centers (measured as a chord):

    angular_spacing = 2 * asin(spacing / (2 * r))
    point_count     = floor(2 * pi / angular_spacing)

Beads are swept with a loop index that starts at the ring's starting
offset (``rotation * 2 * pi * ring_index``) rather than at zero, and the
same index feeds both the bead angle and the bead's motion seed.
"""

from __future__ import annotations

import math
from collections.abc import Iterator

import numpy as np
import structlog

logger = structlog.get_logger(__name__)

TAU = 2 * math.pi


def angular_spacing(spacing: float, ring_radius: float) -> float:
    """Angle subtended by a chord of length ``spacing`` on the ring.

    Returns NaN when the chord does not fit on the ring.
    """
    if ring_radius <= 0:
        return math.nan
    ratio = spacing / (2 * ring_radius)
    if not -1.0 <= ratio <= 1.0:
        return math.nan
    return 2 * math.asin(ratio)


def point_count(spacing: float, ring_radius: float) -> int:
    """Number of beads that fit evenly around a ring.

    Degenerate rings (non-positive radius or spacing, or a spacing wider
    than the ring's diameter) hold no beads.
    """
    angle = angular_spacing(spacing, ring_radius)
    if not math.isfinite(angle) or angle <= 0:
        return 0
    return max(0, math.floor(TAU / angle))


def starting_angle(rotation: float, ring_index: int) -> float:
    """Loop offset for a ring: ``rotation`` turns per ring index."""
    return rotation * TAU * ring_index


def sweep_indices(count: int, start: float = 0.0) -> Iterator[float]:
    """Yield loop indices ``start, start + 1, ...`` below ``count + start``.

    Always ``count`` indices; the offset rotates the sweep without adding
    or dropping beads.
    """
    for k in range(count):
        yield start + k


def ring_beads(
    ring_radius: float,
    spacing: float,
    center: tuple[float, float],
    start: float = 0.0,
) -> list[tuple[float, float, float]]:
    """Compute bead centers around one ring.

    Args:
        ring_radius: Radius of the ring in surface pixels.
        spacing: Minimum chord distance between neighbouring beads.
        center: (x, y) of the ring center.
        start: Loop offset for this ring (see ``starting_angle``).

    Returns:
        List of (loop_index, x, y) tuples in sweep order. Empty for a
        degenerate ring.
    """
    n = point_count(spacing, ring_radius)
    if n < 1:
        logger.debug("degenerate_ring", ring_radius=ring_radius, spacing=spacing)
        return []

    indices = np.fromiter(sweep_indices(n, start), dtype=float)
    angles = indices * TAU / n
    cx, cy = center
    xs = cx + ring_radius * np.cos(angles)
    ys = cy + ring_radius * np.sin(angles)

    return [(float(i), float(x), float(y)) for i, x, y in zip(indices, xs, ys)]
