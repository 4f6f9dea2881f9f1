"""Pydantic schemas for rendition configuration and per-call image data."""

from collections.abc import Iterable, Sequence
from enum import StrEnum
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..utils.media_types import extension_for_mime

# ─────────────────────────────────────────────────────────────
# Renditions
# ─────────────────────────────────────────────────────────────


class Rendition(StrEnum):
    DEFAULT = "default"
    SMALL = "small"
    BIG = "big"

    @property
    def prefix(self) -> str:
        """File name prefix of the generated asset."""
        if self is Rendition.DEFAULT:
            return "image"
        return self.value


class RenditionBox(BaseModel):
    """Target frame of a rendition. Either side may be unset, which disables it."""

    width: int | None = None
    height: int | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def accept_pair(cls, data: object) -> object:
        """Allow ``(width, height)`` pairs and ``None`` as shorthand."""
        if data is None:
            return {}
        if isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
            if len(data) == 0:
                return {}
            if len(data) != 2:
                raise ValueError("Rendition box must be a (width, height) pair")
            return {"width": data[0], "height": data[1]}
        return data

    @property
    def is_empty(self) -> bool:
        return not self.width or not self.height or self.width <= 0 or self.height <= 0


# ─────────────────────────────────────────────────────────────
# Service configuration
# ─────────────────────────────────────────────────────────────


class RenditionSettings(BaseModel):
    """Configuration of an ImageRenditionService, immutable once loaded."""

    target_directory: Path = Field(..., description="Output storage root")
    allowed_mime_types: frozenset[str] = Field(
        default=frozenset({"image/jpeg"}),
        description="MIME types accepted during validation",
    )
    default: RenditionBox = Field(default_factory=RenditionBox)
    small: RenditionBox = Field(default_factory=RenditionBox)
    big: RenditionBox = Field(default_factory=RenditionBox)
    jpeg_quality: int = Field(default=60, ge=0, le=100)
    png_quality: int = Field(
        default=-1,
        ge=-1,
        le=9,
        description="zlib compression level, -1 keeps the encoder default",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @field_validator("allowed_mime_types", mode="before")
    @classmethod
    def normalize_mime_types(cls, v: object) -> object:
        if isinstance(v, str):
            v = [v]
        if isinstance(v, Iterable):
            return frozenset(str(m).strip().lower() for m in v)
        return v

    def box_for(self, rendition: Rendition) -> RenditionBox:
        return getattr(self, rendition.value)


# ─────────────────────────────────────────────────────────────
# Per-call image data
# ─────────────────────────────────────────────────────────────


class UploadedImage(BaseModel):
    """Caller-supplied upload handle. Read-only input to the service."""

    path: Path = Field(..., description="Path to the uploaded content")
    mime_type: str | None = Field(default=None, description="Declared MIME type")
    client_name: str | None = Field(
        default=None, description="File name suggested by the client"
    )
    size: int | None = Field(default=None, ge=0, description="Byte length")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    def guess_extension(self, mime_type: str | None = None) -> str | None:
        """Extension for the upload, from its MIME type or the client file name."""
        ext = extension_for_mime(mime_type or self.mime_type)
        if ext:
            return ext
        for name in (self.client_name, self.path.name):
            if name and Path(name).suffix:
                return Path(name).suffix.lstrip(".").lower()
        return None


class ImageGeometry(BaseModel):
    """Pixel dimensions probed from the image header."""

    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @property
    def ratio(self) -> float:
        return self.width / self.height


class ImageContext(BaseModel):
    """Everything a single rendition call needs about its source image.

    Built by validation and threaded through the pipeline, so the service
    itself holds no per-call state.
    """

    path: Path
    mime_type: str
    extension: str
    geometry: ImageGeometry
    image_name: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @property
    def is_png(self) -> bool:
        return self.mime_type == "image/png"


class SavedFile(BaseModel):
    """Metadata of a file persisted into storage."""

    name: str = Field(..., description="File name within the storage directory")
    size: int = Field(..., ge=0, description="File size in bytes")
    hash: str | None = Field(None, description="SHA256 of the content")

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")
