"""Tests for frame rendering and export."""

import math

import pytest

from beadfield.field import build_bead_field
from beadfield.params import LayoutParameters, Viewport
from beadfield.renderer import FrameRenderer, render_gif, render_png, render_svg
from beadfield.surface import ImageSurface, RecordingSurface

VIEWPORT = Viewport(width=300, height=200, scale=2)


def _params(**overrides):
    values = {"spacing": 10, "outer_ring_radius": 100, "num_rings": 3, "bead_radius": 5}
    values.update(overrides)
    return LayoutParameters(**values)


def _renderer(**overrides):
    surface = RecordingSurface(VIEWPORT.surface_width, VIEWPORT.surface_height)
    return FrameRenderer(_params(**overrides), VIEWPORT, surface), surface


class TestFrameRenderer:
    def test_no_surface_is_a_noop(self):
        renderer = FrameRenderer(_params(), VIEWPORT)
        assert renderer.draw(1.0) is False
        assert renderer.on_frame(1000.0) is False
        assert not renderer.clock.started

    def test_clears_scaled_surface_first(self):
        renderer, surface = _renderer()
        renderer.draw(0.5)
        assert surface.calls[0] == ("clear_rect", 0, 0, 600, 400)

    def test_draw_call_sequence_per_bead(self):
        renderer, surface = _renderer(num_rings=1, draw_center_bead=False)
        renderer.draw(0.5)
        assert [c[0] for c in surface.calls[1:5]] == ["begin_path", "arc", "set_fill_style", "fill"]
        arc = surface.calls[2]
        assert arc[4:] == (0, 2 * math.pi)

    def test_one_circle_per_bead_without_center(self):
        renderer, surface = _renderer(draw_center_bead=False)
        renderer.draw(0.5)
        assert len(surface.named("arc")) == renderer.field.bead_count
        assert len(surface.named("fill")) == renderer.field.bead_count

    def test_center_bead_adds_one_circle(self):
        renderer, surface = _renderer(draw_center_bead=True)
        renderer.draw(0.5)
        arcs = surface.named("arc")
        assert len(arcs) == renderer.field.bead_count + 1
        assert arcs[-1][1:3] == VIEWPORT.center

    def test_zero_rings_draws_only_clear(self):
        renderer, surface = _renderer(num_rings=0, draw_center_bead=False)
        assert renderer.draw(2.0) is True
        assert surface.calls == [("clear_rect", 0, 0, 600, 400)]

    def test_idempotent(self):
        renderer, surface = _renderer()
        renderer.draw(1.25)
        first = list(surface.calls)
        surface.reset()
        renderer.draw(1.25)
        assert surface.calls == first

    def test_animated_beads_follow_motion(self):
        renderer, surface = _renderer(draw_center_bead=False)
        renderer.draw(2.0)
        beads = list(renderer.field.beads())
        for bead, arc in zip(beads, surface.named("arc")):
            assert arc[3] == bead.motion(2.0).radius
        colors = [c[1] for c in surface.named("set_fill_style")]
        assert colors == [bead.motion(2.0).color for bead in beads]

    def test_stopping_animation_draws_static_beads(self):
        renderer, surface = _renderer()
        renderer.draw(3.0)
        animated = surface.named("arc")

        renderer.update(params=renderer.params.model_copy(update={"animation_running": False}))
        surface.reset()
        renderer.draw(3.0)
        static = surface.named("arc")

        assert len(static) == len(animated)
        assert [a[1:3] for a in static] == [a[1:3] for a in animated]
        assert all(a[3] == 5 for a in static)
        assert {c[1] for c in surface.named("set_fill_style")} == {"#000"}

    def test_static_color_follows_theme(self):
        renderer, surface = _renderer(animation_running=False, theme="dark")
        renderer.draw(0.0)
        assert {c[1] for c in surface.named("set_fill_style")} == {"#fff"}

    def test_field_reused_until_layout_changes(self):
        renderer, _surface = _renderer()
        field = renderer.field
        renderer.update(
            params=renderer.params.model_copy(
                update={"animation_running": False, "draw_center_bead": False}
            )
        )
        assert renderer.field is field
        assert renderer.rebuilds == 1

        renderer.update(params=_params(spacing=20))
        assert renderer.field is not field
        assert renderer.rebuilds == 2

    def test_viewport_change_rebuilds(self):
        renderer, _surface = _renderer()
        field = renderer.field
        renderer.update(viewport=Viewport(width=100, height=100, scale=1))
        assert renderer.field is not field

    def test_field_matches_direct_construction(self):
        renderer, _surface = _renderer()
        assert renderer.field == build_bead_field(renderer.params, VIEWPORT)

    def test_on_frame_uses_elapsed_seconds(self):
        renderer, surface = _renderer(draw_center_bead=False)
        assert renderer.on_frame(5000.0) is True
        assert all(arc[3] == 0 for arc in surface.named("arc"))

        surface.reset()
        renderer.on_frame(6000.0)
        beads = list(renderer.field.beads())
        radii = [arc[3] for arc in surface.named("arc")]
        assert radii == [bead.motion(1.0).radius for bead in beads]

    def test_attach_later(self):
        renderer = FrameRenderer(_params(), VIEWPORT)
        assert renderer.on_frame(100.0) is False
        surface = RecordingSurface(600, 400)
        renderer.attach(surface)
        assert renderer.on_frame(200.0) is True
        assert renderer.clock.start_time == 200.0


    def test_clear_covers_non_square_surface(self):
        viewport = Viewport(width=300, height=100, scale=1)
        surface = ImageSurface(viewport.surface_width, viewport.surface_height)
        params = _params(
            outer_ring_radius=140, num_rings=1, animation_running=False, draw_center_bead=False
        )
        renderer = FrameRenderer(params, viewport, surface)
        renderer.draw(0.0)
        assert surface.image.getchannel("A").getbbox() is not None

        renderer.update(params=params.model_copy(update={"num_rings": 0}))
        renderer.draw(0.0)
        assert surface.image.getchannel("A").getbbox() is None

    def test_negative_rotation_renders(self):
        renderer, surface = _renderer(rotation=-0.05, draw_center_bead=False)
        assert renderer.draw(1.0) is True
        radii = [arc[3] for arc in surface.named("arc")]
        assert len(radii) == renderer.field.bead_count
        assert all(0 <= r <= 5 for r in radii)


class TestRenderSVG:
    def test_render_svg_produces_valid_svg(self):
        svg = render_svg(_params(), VIEWPORT, t=1.0)
        assert svg.startswith("<svg")
        assert svg.endswith("</svg>")
        assert "xmlns" in svg

    def test_render_svg_circle_count(self):
        params = _params()
        svg = render_svg(params, VIEWPORT, t=1.0)
        field = build_bead_field(params, VIEWPORT)
        assert svg.count("<circle") == field.bead_count + 1

    def test_render_svg_respects_viewport(self):
        svg = render_svg(_params(), VIEWPORT)
        assert 'viewBox="0 0 600 400"' in svg
        assert 'width="300"' in svg
        assert 'height="200"' in svg

    def test_render_svg_uses_colors(self):
        svg = render_svg(_params(color1="#ff0000", color2="#00ff00"), VIEWPORT, t=4.0)
        assert "#ff0000" in svg or "#00ff00" in svg

    def test_render_svg_empty_field(self):
        svg = render_svg(_params(num_rings=0, draw_center_bead=False), VIEWPORT)
        assert "<circle" not in svg


class TestRenderPNG:
    def test_render_png_produces_png(self):
        png_bytes = render_png(_params(), Viewport(width=100, height=100, scale=1), t=1.0)
        assert png_bytes[:4] == b"\x89PNG"


class TestRenderGIF:
    def test_render_gif_produces_gif(self):
        gif = render_gif(_params(outer_ring_radius=40), Viewport(width=100, height=100, scale=1), frames=4, fps=10)
        assert gif[:6] in (b"GIF87a", b"GIF89a")

    def test_render_gif_rejects_bad_frame_count(self):
        with pytest.raises(ValueError, match="frames"):
            render_gif(_params(), frames=0)
