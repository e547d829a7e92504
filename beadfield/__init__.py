"""Beadfield -- animated radial bead layouts on a 2D drawing surface.

Beads are placed on concentric rings from a handful of scalar layout
parameters (spacing, ring count, radii, rotation, colors). Each bead
carries a closed-form motion function of elapsed time that pulses its
radius and flips its color, and a frame renderer repaints the whole
field once per scheduler tick.

Rendering goes through a small immediate-mode surface capability
(clear, arc, fill), so the same frame can be recorded, exported to
SVG/PNG, or rasterised with Pillow.
"""
