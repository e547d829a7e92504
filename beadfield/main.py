"""Beadfield rendering service -- FastAPI application.

Endpoints:
    POST /render/svg  -- Render one frame to SVG
    POST /render/png  -- Render one frame to PNG
    POST /render/gif  -- Render a short animation to GIF
    GET  /health      -- Health check

Layout fields left out of a request take the parameter panel defaults
for the requested viewport.
"""

from __future__ import annotations

from typing import ClassVar, Literal

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field

from .params import LayoutParameters, Viewport
from .renderer import render_gif, render_png, render_svg

structlog.configure(
    processors=[
        structlog.dev.ConsoleRenderer(),
    ],
)

logger = structlog.get_logger(__name__)

VERSION = "0.1.0"

app = FastAPI(
    title="beadfield",
    description="Animated radial bead layouts rendered to SVG, PNG and GIF",
    version=VERSION,
)


# --------------------------------------------------------------------------
# Request / Response models
# --------------------------------------------------------------------------


class RenderRequest(BaseModel):
    """Request body for /render/svg and /render/png."""

    width: float = Field(default=400, gt=0, le=4096, description="Logical width in pixels")
    height: float = Field(default=400, gt=0, le=4096, description="Logical height in pixels")
    scale: float = Field(default=3, gt=0, le=8, description="Device pixel multiplier")
    spacing: float | None = Field(
        default=None,
        ge=0.5,
        le=4096,
        description="Bead spacing; defaults to 20 * scale",
        examples=[60],
    )
    outer_ring_radius: float | None = Field(
        default=None,
        ge=0,
        le=32768,
        description="Radius of the outermost ring; defaults to width",
    )
    num_rings: int = Field(default=5, ge=0, le=200, description="Number of rings")
    bead_radius: float = Field(default=15, ge=0, description="Peak bead radius")
    rotation: float = Field(
        default=0,
        allow_inf_nan=False,
        description="Loop offset per ring, in turns; negative turns the other way",
    )
    draw_center_bead: bool = True
    animation_running: bool = True
    color1: str = Field(default="#000", examples=["#000", "#ff8800"])
    color2: str = Field(default="#080593", examples=["#080593"])
    theme: Literal["light", "dark"] = "light"
    t: float = Field(default=0.0, description="Elapsed animation time in seconds")

    # Request fields that are not layout parameters
    NON_LAYOUT_FIELDS: ClassVar[frozenset[str]] = frozenset({"width", "height", "scale", "t"})

    def viewport(self) -> Viewport:
        return Viewport(width=self.width, height=self.height, scale=self.scale)

    def layout(self) -> LayoutParameters:
        overrides = self.model_dump(
            exclude=set(self.NON_LAYOUT_FIELDS),
            exclude_none=True,
        )
        return LayoutParameters.defaults(self.viewport(), **overrides)


class AnimationRequest(RenderRequest):
    """Request body for /render/gif."""

    NON_LAYOUT_FIELDS: ClassVar[frozenset[str]] = RenderRequest.NON_LAYOUT_FIELDS | {
        "frames",
        "fps",
    }

    frames: int = Field(default=60, ge=1, le=240, description="Number of frames")
    fps: int = Field(default=30, ge=1, le=60, description="Frames per second")
    width: float = Field(default=200, gt=0, le=1024, description="Logical width in pixels")
    height: float = Field(default=200, gt=0, le=1024, description="Logical height in pixels")
    scale: float = Field(default=1, gt=0, le=4, description="Device pixel multiplier")


class HealthResponse(BaseModel):
    """Response body for /health."""

    status: str
    service: str
    version: str


# --------------------------------------------------------------------------
# Endpoints
# --------------------------------------------------------------------------


@app.post(
    "/render/svg",
    response_class=Response,
    responses={
        200: {"content": {"image/svg+xml": {}}, "description": "SVG frame"},
        422: {"description": "Invalid input"},
    },
)
async def render_svg_endpoint(request: RenderRequest) -> Response:
    """Render one frame of the bead field as SVG."""
    try:
        svg_content = render_svg(request.layout(), request.viewport(), request.t)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("render_svg_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Rendering failed")

    return Response(content=svg_content, media_type="image/svg+xml")


@app.post(
    "/render/png",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "PNG frame"},
        422: {"description": "Invalid input"},
    },
)
async def render_png_endpoint(request: RenderRequest) -> Response:
    """Render one frame of the bead field as PNG."""
    try:
        png_bytes = render_png(request.layout(), request.viewport(), request.t)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("render_png_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Rendering failed")

    return Response(content=png_bytes, media_type="image/png")


@app.post(
    "/render/gif",
    response_class=Response,
    responses={
        200: {"content": {"image/gif": {}}, "description": "Animated GIF"},
        422: {"description": "Invalid input"},
    },
)
async def render_gif_endpoint(request: AnimationRequest) -> Response:
    """Render a short animation of the bead field as GIF."""
    try:
        gif_bytes = render_gif(
            request.layout(),
            request.viewport(),
            frames=request.frames,
            fps=request.fps,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("render_gif_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Rendering failed")

    return Response(content=gif_bytes, media_type="image/gif")


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for Docker and load balancer probes."""
    return HealthResponse(
        status="healthy",
        service="beadfield",
        version=VERSION,
    )
