"""ImageRenditionService - validates uploads and writes default/small/big renditions."""

from __future__ import annotations

from os import PathLike
from typing import Any
from uuid import uuid4

from loguru import logger
from PIL import Image
from pydantic import ValidationError

from ..common.errors import ErrorKind, ImageFormat, RenditionError
from ..common.file_storage import FileStorage
from ..common.file_storage_impl import LocalFileStorage
from ..common.schemas import (
    ImageContext,
    ImageGeometry,
    Rendition,
    RenditionSettings,
    UploadedImage,
)
from ..utils.media_types import determine_mime
from .algo.codecs import CodecRegistry
from .algo.fit import FitMode
from .algo.resize import resize_or_copy


class ImageRenditionService:
    """
    Produces named renditions of uploaded images in a flat storage directory.

    Generated names follow ``{prefix}_{image_name or unique id}.{ext}`` where
    the prefix is ``image``, ``small`` or ``big``. The service keeps no
    per-call state, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        settings: RenditionSettings,
        storage: FileStorage | None = None,
        codecs: CodecRegistry | None = None,
    ):
        self._settings: RenditionSettings = settings
        self._storage: FileStorage = storage or LocalFileStorage(settings.target_directory)
        self._codecs: CodecRegistry = codecs or CodecRegistry()
        self._qualities: dict[ImageFormat, int] = {
            ImageFormat.JPEG: settings.jpeg_quality,
            ImageFormat.PNG: settings.png_quality,
        }

    @classmethod
    def from_options(
        cls, target_directory: str | PathLike[str], **options: Any
    ) -> "ImageRenditionService":
        """Build a service from keyword options (``default=(800, 800)``, ...)."""
        settings = RenditionSettings.model_validate(
            {"target_directory": target_directory, **options}
        )
        return cls(settings)

    @property
    def settings(self) -> RenditionSettings:
        return self._settings

    @property
    def storage(self) -> FileStorage:
        return self._storage

    @property
    def codecs(self) -> CodecRegistry:
        return self._codecs

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self, image: UploadedImage, image_name: str | None = None) -> ImageContext:
        """
        Check an upload's MIME type and read its dimensions.

        The declared MIME type is used when present, otherwise it is detected
        from content.

        Raises:
            RenditionError: UNREADABLE_IMAGE if the MIME type is unknown or not
                allowed, or the dimensions cannot be read
        """
        mime_type = image.mime_type or determine_mime(image.path)
        if not mime_type or mime_type.lower() not in self._settings.allowed_mime_types:
            logger.warning(f"Rejected {image.path.name}: MIME type {mime_type!r} not allowed")
            raise RenditionError(
                ErrorKind.UNREADABLE_IMAGE,
                details={"path": str(image.path), "mime_type": mime_type},
            )
        mime_type = mime_type.lower()

        try:
            with Image.open(image.path) as img:
                width, height = img.size
            geometry = ImageGeometry(width=width, height=height)
        except (OSError, ValueError, ValidationError, Image.DecompressionBombError) as exc:
            logger.warning(f"Rejected {image.path.name}: cannot read dimensions")
            raise RenditionError(
                ErrorKind.UNREADABLE_IMAGE, details={"path": str(image.path)}
            ) from exc

        extension = image.guess_extension(mime_type)
        if not extension:
            raise RenditionError(
                ErrorKind.UNREADABLE_IMAGE,
                details={"path": str(image.path), "mime_type": mime_type},
            )

        return ImageContext(
            path=image.path,
            mime_type=mime_type,
            extension=extension,
            geometry=geometry,
            image_name=image_name,
        )

    # ------------------------------------------------------------------
    # Renditions
    # ------------------------------------------------------------------

    def create_rendition(
        self,
        image: UploadedImage,
        rendition: Rendition = Rendition.DEFAULT,
        mode: FitMode = FitMode.CONTAIN,
        image_name: str | None = None,
    ) -> str:
        """
        Create one rendition of ``image`` and return its file name.

        Raises:
            RenditionError: IMAGE_SIZE_NOT_CONFIGURED if the rendition has no
                box, INVALID_IMAGE_NAME if ``image_name`` is not a plain
                file name, or any validation/processing error
        """
        rendition = Rendition(rendition)
        box = self._settings.box_for(rendition)
        if box.is_empty:
            raise RenditionError(
                ErrorKind.IMAGE_SIZE_NOT_CONFIGURED, details={"rendition": rendition.value}
            )
        if image_name is not None and not _is_plain_name(image_name):
            raise RenditionError(
                ErrorKind.INVALID_IMAGE_NAME, details={"image_name": image_name}
            )

        context = self.validate(image, image_name)
        file_name = f"{rendition.prefix}_{context.image_name or uuid4().hex}.{context.extension}"

        try:
            target = resize_or_copy(
                context=context,
                box=box,
                name=file_name,
                storage=self._storage,
                codecs=self._codecs,
                qualities=self._qualities,
                mode=FitMode(mode),
            )
        except RenditionError as exc:
            logger.error(f"Failed to create {rendition} rendition {file_name}: {exc}")
            raise

        logger.info(
            f"Created {rendition} rendition {file_name} "
            + ("(resized)" if target.needs_resize else "(copied)")
        )
        return file_name

    def create_default(
        self, image: UploadedImage, mode: FitMode = FitMode.CONTAIN, image_name: str | None = None
    ) -> str:
        return self.create_rendition(image, Rendition.DEFAULT, mode, image_name)

    def create_small(
        self, image: UploadedImage, mode: FitMode = FitMode.CONTAIN, image_name: str | None = None
    ) -> str:
        return self.create_rendition(image, Rendition.SMALL, mode, image_name)

    def create_big(
        self, image: UploadedImage, mode: FitMode = FitMode.CONTAIN, image_name: str | None = None
    ) -> str:
        return self.create_rendition(image, Rendition.BIG, mode, image_name)

    def create_all_renditions(
        self,
        image: UploadedImage,
        mode: FitMode = FitMode.CONTAIN,
        image_name: str | None = None,
    ) -> list[str]:
        """
        Create the default, small and big renditions, in that order.

        Renditions written before a failure are NOT removed; their names are
        in the raised error's ``details["created"]``.

        Raises:
            RenditionError: RENDITION_GENERATION_FAILED wrapping the first failure
        """
        created: list[str] = []
        for rendition in (Rendition.DEFAULT, Rendition.SMALL, Rendition.BIG):
            try:
                created.append(self.create_rendition(image, rendition, mode, image_name))
            except RenditionError as exc:
                raise RenditionError(
                    ErrorKind.RENDITION_GENERATION_FAILED,
                    details={
                        "created": list(created),
                        "rendition": rendition.value,
                        "cause": exc.kind.value,
                    },
                ) from exc
        return created

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def delete(self, file_name: str) -> None:
        """Remove a generated file. Missing files are ignored."""
        if self._storage.delete(file_name):
            logger.info(f"Deleted {file_name}")


def _is_plain_name(image_name: str) -> bool:
    """A name usable inside a flat directory: no separators, no dot-segments."""
    return (
        bool(image_name)
        and image_name not in (".", "..")
        and not any(sep in image_name for sep in ("/", "\\", "\0"))
    )
