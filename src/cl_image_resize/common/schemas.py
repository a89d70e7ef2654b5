"""Pydantic schemas for resize requests, responses and intermediate results."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .errors import ResizeError

THUMBNAIL_SUFFIX = "-thumbnail"

# ─────────────────────────────────────────────────────────────
# Request
# ─────────────────────────────────────────────────────────────


class ResizeRequest(BaseModel):
    """Decoded resize request.

    Missing fields take their zero value; a width or height of 0 means
    "unspecified" and is resolved from the source aspect ratio.
    """

    filename: str = Field(default="", description="Source object key")
    bucket: str = Field(default="", description="Bucket holding the source object")
    width: int = Field(default=0, description="Target width in pixels (0 = unspecified)")
    height: int = Field(default=0, description="Target height in pixels (0 = unspecified)")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, strict=True, extra="ignore")

    @property
    def is_thumbnail(self) -> bool:
        return self.filename.endswith(THUMBNAIL_SUFFIX)


# ─────────────────────────────────────────────────────────────
# Intermediate results
# ─────────────────────────────────────────────────────────────


class MediaTypeDecision(BaseModel):
    """Outcome of sniffing the source prefix against the allow-list."""

    sniffed_type: str
    output_format: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @property
    def allowed(self) -> bool:
        return self.output_format is not None


class OutputDimensions(BaseModel):
    width: int
    height: int

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


# ─────────────────────────────────────────────────────────────
# Response
# ─────────────────────────────────────────────────────────────


class ResizeResponse(BaseModel):
    """The single payload returned for every request, success or failure."""

    message: str
    status_code: int
    width: int = 0
    height: int = 0

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    @classmethod
    def ok(cls, dimensions: OutputDimensions) -> "ResizeResponse":
        return cls(
            message="Ok",
            status_code=200,
            width=dimensions.width,
            height=dimensions.height,
        )

    @classmethod
    def from_error(cls, error: ResizeError) -> "ResizeResponse":
        return cls(message=error.message, status_code=error.status_code)
