"""
Pydantic Models and Schemas
===========================

Data models for render requests, rendered images, and API responses.
"""

from typing import Optional, Literal
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class ImageFormat(str, Enum):
    """Encodings the renderer can produce."""
    PNG = "png"
    JPEG = "jpeg"
    WEBP = "webp"

    @property
    def content_type(self) -> str:
        return f"image/{self.value}"

    @property
    def is_lossy(self) -> bool:
        return self is not ImageFormat.PNG


class BrowserStrategy(str, Enum):
    """Which Chromium build a request launches."""
    SERVERLESS = "serverless"
    LOCAL = "local"


# Rendering Models
class RenderRequest(BaseModel):
    """A validated request to render an Open Graph image."""
    url: str = Field(..., min_length=1, description="Allow-listed page to render")
    fallback: Optional[str] = Field(None, description="Redirect target used when rendering fails")
    pixel_density: int = Field(1, ge=1, le=4, description="Device scale factor")
    format: ImageFormat = Field(ImageFormat.PNG, description="Output image format")
    quality: int = Field(70, ge=0, le=100, description="Encoder quality for lossy formats")

    @property
    def encoder_quality(self) -> Optional[int]:
        """Quality to hand the encoder, withheld for png."""
        return self.quality if self.format.is_lossy else None


class RenderedImage(BaseModel):
    """Encoded screenshot of the target element."""
    content: bytes = Field(..., description="Encoded image bytes", exclude=True)
    format: ImageFormat = Field(..., description="Image format")

    @property
    def content_type(self) -> str:
        return self.format.content_type

    @property
    def size_bytes(self) -> int:
        return len(self.content)


# Health Check Models
class HealthStatus(BaseModel):
    """Health check status."""
    status: Literal["healthy", "unhealthy", "degraded"] = Field(..., description="Overall status")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Check timestamp"
    )
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")
    browser_strategy: BrowserStrategy = Field(..., description="Chromium build requests will launch")
    executable_path: Optional[str] = Field(None, description="Resolved serverless Chromium binary")


# Error Models
class ErrorDetail(BaseModel):
    """Machine-readable error code with an optional message."""
    code: str = Field(..., description="Error code")
    message: Optional[str] = Field(None, description="Stringified underlying error")


class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: ErrorDetail = Field(..., description="Error details")
