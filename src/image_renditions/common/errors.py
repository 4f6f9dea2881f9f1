"""Error taxonomy for image upload and rendition generation.

A single tagged error type carries a ``kind`` discriminant and, for codec
failures, the ``format`` involved, so callers can tell a bad input format
apart from a processing failure without matching on class names.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from typing_extensions import override


class ImageFormat(StrEnum):
    JPEG = "jpeg"
    PNG = "png"


class ErrorKind(StrEnum):
    UNREADABLE_IMAGE = "UNREADABLE_IMAGE"
    IMAGE_SIZE_NOT_CONFIGURED = "IMAGE_SIZE_NOT_CONFIGURED"
    INVALID_IMAGE_NAME = "INVALID_IMAGE_NAME"
    IMAGE_COPY_FAILED = "IMAGE_COPY_FAILED"
    TARGET_IMAGE_CREATION_FAILED = "TARGET_IMAGE_CREATION_FAILED"
    IMAGE_RESIZING_FAILED = "IMAGE_RESIZING_FAILED"
    JPEG_DECODE_FAILED = "JPEG_DECODE_FAILED"
    JPEG_ENCODE_FAILED = "JPEG_ENCODE_FAILED"
    PNG_DECODE_FAILED = "PNG_DECODE_FAILED"
    PNG_ENCODE_FAILED = "PNG_ENCODE_FAILED"
    RENDITION_GENERATION_FAILED = "RENDITION_GENERATION_FAILED"
    SAVE_FAILED = "SAVE_FAILED"


ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.UNREADABLE_IMAGE: "Reading the image file failed.",
    ErrorKind.IMAGE_SIZE_NOT_CONFIGURED: "The image size is not configured.",
    ErrorKind.INVALID_IMAGE_NAME: "The image name is invalid.",
    ErrorKind.IMAGE_COPY_FAILED: "Copying the image failed.",
    ErrorKind.TARGET_IMAGE_CREATION_FAILED: "Creating the target image failed.",
    ErrorKind.IMAGE_RESIZING_FAILED: "Resizing the image failed.",
    ErrorKind.JPEG_DECODE_FAILED: "Decoding the JPEG image failed.",
    ErrorKind.JPEG_ENCODE_FAILED: "Encoding the JPEG image failed.",
    ErrorKind.PNG_DECODE_FAILED: "Decoding the PNG image failed.",
    ErrorKind.PNG_ENCODE_FAILED: "Encoding the PNG image failed.",
    ErrorKind.RENDITION_GENERATION_FAILED: "Generating the image renditions failed.",
    ErrorKind.SAVE_FAILED: "Saving the file failed.",
}

_DECODE_KINDS: dict[ImageFormat, ErrorKind] = {
    ImageFormat.JPEG: ErrorKind.JPEG_DECODE_FAILED,
    ImageFormat.PNG: ErrorKind.PNG_DECODE_FAILED,
}

_ENCODE_KINDS: dict[ImageFormat, ErrorKind] = {
    ImageFormat.JPEG: ErrorKind.JPEG_ENCODE_FAILED,
    ImageFormat.PNG: ErrorKind.PNG_ENCODE_FAILED,
}


class ImageRenditionsError(Exception):
    """
    Base exception for all image_renditions errors.

    The message defaults to the fixed description of ``kind``.
    Optional contextual information can be supplied via ``details``.
    """

    kind: ErrorKind
    format: ImageFormat | None
    message: str
    details: dict[str, Any]

    def __init__(
        self,
        kind: ErrorKind,
        *,
        format: ImageFormat | None = None,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.kind = kind
        self.format = format
        self.message = message or ERROR_MESSAGES[kind]
        self.details = details or {}
        super().__init__(self.message)

    @property
    def is_codec_error(self) -> bool:
        """True when the failure came from decoding or encoding a specific format."""
        return self.format is not None

    @override
    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class RenditionError(ImageRenditionsError):
    """Raised when validating an image or producing a rendition fails."""

    @classmethod
    def decode_failed(cls, fmt: ImageFormat, **details: Any) -> "RenditionError":
        return cls(_DECODE_KINDS[fmt], format=fmt, details=details)

    @classmethod
    def encode_failed(cls, fmt: ImageFormat, **details: Any) -> "RenditionError":
        return cls(_ENCODE_KINDS[fmt], format=fmt, details=details)


class FileUploadError(ImageRenditionsError):
    """Raised when persisting a plain (non-rendition) upload fails."""

    def __init__(
        self,
        kind: ErrorKind = ErrorKind.SAVE_FAILED,
        *,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(kind, message=message, details=details)
