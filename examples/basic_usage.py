#!/usr/bin/env python3
"""Basic usage example for Beadfield.

Demonstrates laying out a bead field, drawing frames through the
scheduler binding, and exporting SVG/PNG/GIF output.

Usage:
    python examples/basic_usage.py
"""

import os
import sys

# Add parent directory to path for direct script execution
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from beadfield.field import build_bead_field
from beadfield.params import LayoutParameters, Viewport
from beadfield.renderer import FrameRenderer, render_gif, render_png, render_svg
from beadfield.scheduler import FrameLoop
from beadfield.surface import RecordingSurface


def example_layout():
    """Build a bead field and inspect its rings."""
    print("=" * 60)
    print("Example 1: Bead field layout")
    print("=" * 60)

    viewport = Viewport(width=400, height=400, scale=3)
    params = LayoutParameters.defaults(viewport)
    field = build_bead_field(params, viewport)

    for index, ring in enumerate(field.rings):
        print(f"  Ring {index}: radius={ring.radius:7.1f}  beads={len(ring.beads)}")
    print(f"  Total beads: {field.bead_count}")
    print()


def example_frames():
    """Drive a renderer with scheduler timestamps and count draw calls."""
    print("=" * 60)
    print("Example 2: Scheduled frames")
    print("=" * 60)

    viewport = Viewport(width=200, height=200, scale=1)
    params = LayoutParameters.defaults(viewport, num_rings=3)
    surface = RecordingSurface(viewport.surface_width, viewport.surface_height)
    renderer = FrameRenderer(params, viewport, surface)

    loop = FrameLoop(renderer.on_frame, fps=60)
    for timestamp in loop.timestamps(30):
        loop.tick(timestamp)

    print(f"  Frames:      {loop.frame_count}")
    print(f"  Arcs drawn:  {len(surface.named('arc'))}")
    print(f"  Rebuilds:    {renderer.rebuilds}")
    print()


def example_export():
    """Export a still frame and a short animation."""
    print("=" * 60)
    print("Example 3: Export")
    print("=" * 60)

    viewport = Viewport(width=200, height=200, scale=2)
    params = LayoutParameters.defaults(viewport, rotation=0.05, color1="#ff8800")

    svg = render_svg(params, viewport, t=1.5)
    png = render_png(params, viewport, t=1.5)
    gif = render_gif(params, Viewport(width=100, height=100, scale=1), frames=20, fps=20)

    print(f"  SVG: {len(svg)} chars")
    print(f"  PNG: {len(png)} bytes")
    print(f"  GIF: {len(gif)} bytes")
    print()


if __name__ == "__main__":
    example_layout()
    example_frames()
    example_export()
