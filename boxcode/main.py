"""boxcode microservice -- FastAPI application.

Endpoints:
    POST /encode  -- Encode hex data to box-drawing text
    POST /decode  -- Decode box-drawing text to hex data
    POST /layout  -- Preview the layout chosen for a payload size
    GET  /health  -- Health check
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from . import __version__
from .decoder import decode_points, parse_points
from .encoder import encode_with_layout
from .errors import LayoutUnsatisfiableError
from .sizer import BoxLayoutConfig, layout_for_bytes

structlog.configure(
    processors=[
        structlog.dev.ConsoleRenderer(),
    ],
)

logger = structlog.get_logger(__name__)

# Maximum payload size accepted by the service, in bytes
MAX_DATA_BYTES = 4096

app = FastAPI(
    title="boxcode",
    description="Encode binary data as grids of Unicode box-drawing characters",
    version=__version__,
)


# --------------------------------------------------------------------------
# Request / Response models
# --------------------------------------------------------------------------


class BlackoutRequest(BaseModel):
    """A text label drawn into the grid."""

    x: int = Field(..., ge=0, description="Column of the first character")
    y: int = Field(..., ge=0, description="Row of the label")
    text: str = Field(..., min_length=1, examples=[" C+c "])


class LayoutConfigRequest(BaseModel):
    """Layout constraints, all optional."""

    min_width: int | None = Field(default=None, ge=1)
    max_width: int | None = Field(default=None, ge=1)
    min_height: int | None = Field(default=None, ge=1)
    max_height: int | None = Field(default=None, ge=1)
    aspect_ratio: float | None = Field(
        default=None,
        gt=0,
        description="Target height / width ratio (default 1.0)",
    )
    blackouts: list[BlackoutRequest] = Field(default_factory=list)

    def to_config(self) -> BoxLayoutConfig:
        return BoxLayoutConfig(
            min_width=self.min_width,
            max_width=self.max_width,
            min_height=self.min_height,
            max_height=self.max_height,
            aspect_ratio=self.aspect_ratio,
            blackouts=tuple((b.x, b.y, b.text) for b in self.blackouts),
        )


class EncodeRequest(BaseModel):
    """Request body for /encode."""

    data_hex: str = Field(
        ...,
        description="Hex-encoded data to encode",
        examples=["0548656c6c6f2a"],
    )
    config: LayoutConfigRequest | None = None


class EncodeResponse(BaseModel):
    """Response body for /encode."""

    boxes: str
    width: int
    height: int
    capacity_bits: int


class DecodeRequest(BaseModel):
    """Request body for /decode."""

    boxes: str = Field(..., description="Rendered box-drawing text")
    length: int | None = Field(
        default=None,
        ge=0,
        description="Expected payload length in bytes; trailing padding is dropped",
    )


class DecodeResponse(BaseModel):
    """Response body for /decode."""

    data_hex: str
    points: int = Field(description="Number of glyphs recognised")


class LayoutRequest(BaseModel):
    """Request body for /layout."""

    byte_length: int = Field(..., ge=0, le=MAX_DATA_BYTES)
    config: LayoutConfigRequest | None = None


class LayoutResponse(BaseModel):
    """Response body for /layout."""

    width: int
    height: int
    capacity_bits: int
    template: str = Field(description="Layout sketch: '#' for filled cells")


class HealthResponse(BaseModel):
    """Response body for /health."""

    status: str
    service: str
    version: str


# --------------------------------------------------------------------------
# Endpoints
# --------------------------------------------------------------------------


def _parse_hex(data_hex: str) -> bytes:
    clean = data_hex.removeprefix("0x").removeprefix("0X")
    data = bytes.fromhex(clean)
    if len(data) > MAX_DATA_BYTES:
        raise ValueError(f"Data too large: {len(data)} bytes (max {MAX_DATA_BYTES})")
    return data


@app.post("/encode", response_model=EncodeResponse)
async def encode_endpoint(request: EncodeRequest) -> EncodeResponse:
    """Encode hex data into box-drawing text."""
    try:
        data = _parse_hex(request.data_hex)
        config = request.config.to_config() if request.config else None
        layout = layout_for_bytes(len(data), config)
        if layout is None:
            raise LayoutUnsatisfiableError(
                f"No layout within the configured bounds can hold {len(data)} bytes"
            )
        boxes = encode_with_layout(data, layout)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("encode_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Encoding failed")

    return EncodeResponse(
        boxes=boxes,
        width=layout.width,
        height=layout.height,
        capacity_bits=layout.capacity_bits(),
    )


@app.post("/decode", response_model=DecodeResponse)
async def decode_endpoint(request: DecodeRequest) -> DecodeResponse:
    """Decode box-drawing text back to hex data."""
    try:
        points = parse_points(request.boxes)
        data = decode_points(points, request.length)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("decode_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Decoding failed")

    return DecodeResponse(data_hex=data.hex(), points=len(points))


@app.post("/layout", response_model=LayoutResponse)
async def layout_endpoint(request: LayoutRequest) -> LayoutResponse:
    """Report the layout the encoder would use for a payload size."""
    try:
        config = request.config.to_config() if request.config else None
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    layout = layout_for_bytes(request.byte_length, config)
    if layout is None:
        raise HTTPException(
            status_code=422,
            detail=f"No layout within the configured bounds can hold {request.byte_length} bytes",
        )

    return LayoutResponse(
        width=layout.width,
        height=layout.height,
        capacity_bits=layout.capacity_bits(),
        template=layout.to_template(),
    )


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for Docker and load balancers."""
    return HealthResponse(
        status="healthy",
        service="boxcode",
        version=__version__,
    )
