"""Format-specific decode/encode adapters built on Pillow."""

from __future__ import annotations

from abc import ABC, abstractmethod
from os import PathLike
from pathlib import Path
from typing import ClassVar, Protocol, runtime_checkable

from typing_extensions import override

from PIL import Image

from ...common.errors import ImageFormat, RenditionError


@runtime_checkable
class Codec(Protocol):
    """Decode a file into a bitmap and encode a bitmap back to a file."""

    format: ImageFormat
    extensions: tuple[str, ...]

    def decode(self, path: str | PathLike[str]) -> Image.Image: ...

    def encode(self, bitmap: Image.Image, path: str | PathLike[str], quality: int) -> None: ...


class PillowCodec(ABC):
    """Shared Pillow plumbing; subclasses set the format and save options."""

    format: ImageFormat
    extensions: tuple[str, ...]
    pil_format: ClassVar[str]

    def decode(self, path: str | PathLike[str]) -> Image.Image:
        try:
            img = Image.open(Path(path), formats=[self.pil_format])
            img.load()
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            raise RenditionError.decode_failed(self.format, path=str(path)) from exc
        return img

    def encode(self, bitmap: Image.Image, path: str | PathLike[str], quality: int) -> None:
        try:
            self._save(bitmap, Path(path), quality)
        except (OSError, ValueError) as exc:
            raise RenditionError.encode_failed(self.format, path=str(path)) from exc

    @abstractmethod
    def _save(self, bitmap: Image.Image, path: Path, quality: int) -> None: ...


class JpegCodec(PillowCodec):
    format = ImageFormat.JPEG
    extensions = ("jpeg", "jpg", "jpe")
    pil_format = "JPEG"

    @override
    def _save(self, bitmap: Image.Image, path: Path, quality: int) -> None:
        # JPEG does not support alpha channel
        if bitmap.mode not in ("RGB", "L", "CMYK"):
            bitmap = bitmap.convert("RGB")
        bitmap.save(path, format=self.pil_format, quality=quality)


class PngCodec(PillowCodec):
    format = ImageFormat.PNG
    extensions = ("png",)
    pil_format = "PNG"

    @override
    def _save(self, bitmap: Image.Image, path: Path, quality: int) -> None:
        save_kwargs: dict[str, object] = {}
        # -1 keeps the encoder default compression
        if quality >= 0:
            save_kwargs["compress_level"] = quality
        bitmap.save(path, format=self.pil_format, **save_kwargs)


class CodecRegistry:
    """Codecs keyed by lower-case file extension."""

    def __init__(self, codecs: list[Codec] | None = None):
        self._codecs: dict[str, Codec] = {}
        for codec in codecs if codecs is not None else [JpegCodec(), PngCodec()]:
            self.register(codec)

    def register(self, codec: Codec) -> None:
        for ext in codec.extensions:
            self._codecs[ext.lower().lstrip(".")] = codec

    def get(self, extension: str) -> Codec | None:
        return self._codecs.get(extension.lower().lstrip("."))

    def __contains__(self, extension: str) -> bool:
        return self.get(extension) is not None

    @property
    def extensions(self) -> list[str]:
        return sorted(self._codecs)
