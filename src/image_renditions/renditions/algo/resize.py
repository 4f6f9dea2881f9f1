"""Resize-or-copy step producing a single rendition file."""

from collections.abc import Mapping

from loguru import logger
from PIL import Image

from ...common.errors import ErrorKind, ImageFormat, RenditionError
from ...common.file_storage import FileStorage
from ...common.schemas import ImageContext, RenditionBox
from ...utils.profiling import timed
from .codecs import CodecRegistry
from .fit import FitMode, TargetBox, compute_target

# Fully transparent white, the fill PNG targets start from.
TRANSPARENT = (255, 255, 255, 0)


@timed
def resize_or_copy(
    *,
    context: ImageContext,
    box: RenditionBox,
    name: str,
    storage: FileStorage,
    codecs: CodecRegistry,
    qualities: Mapping[ImageFormat, int],
    mode: FitMode = FitMode.CONTAIN,
) -> TargetBox:
    """
    Write the rendition ``name`` of ``context`` into ``storage``.

    Sources that need no downscale are copied byte for byte. Others are
    decoded, resampled with Lanczos into a new bitmap and re-encoded with the
    codec registered for the source extension. Extensions without a codec are
    left untouched and nothing is written.

    Returns:
        The computed target box

    Raises:
        RenditionError: On copy, allocation, resampling or codec failure
    """
    target = compute_target(context.geometry, box, mode)
    logger.debug(
        f"{context.path.name}: {context.geometry.width}x{context.geometry.height} -> "
        + f"{target.width}x{target.height} ({mode}, {target.axis} priority, "
        + f"resize={target.needs_resize})"
    )

    if not target.needs_resize:
        try:
            _ = storage.copy(context.path, name)
        except OSError as exc:
            raise RenditionError(
                ErrorKind.IMAGE_COPY_FAILED, details={"source": str(context.path), "name": name}
            ) from exc
        return target

    codec = codecs.get(context.extension)
    if codec is None:
        logger.warning(f"No codec registered for '.{context.extension}', skipping {name}")
        return target

    source = codec.decode(context.path)
    try:
        bitmap = _allocate(target, png=context.is_png, source_mode=source.mode)
        try:
            _resample_into(bitmap, source, target, png=context.is_png)
        except RenditionError:
            bitmap.close()
            raise
    finally:
        source.close()

    quality = qualities.get(codec.format, -1)
    try:
        _ = storage.write_atomic(name, lambda path: codec.encode(bitmap, path, quality))
    except OSError as exc:
        raise RenditionError.encode_failed(codec.format, name=name) from exc
    finally:
        bitmap.close()

    return target


def _allocate(target: TargetBox, *, png: bool, source_mode: str) -> Image.Image:
    try:
        if png:
            return Image.new("RGBA", target.size, TRANSPARENT)
        return Image.new("L" if source_mode == "L" else "RGB", target.size)
    except (ValueError, MemoryError, OSError) as exc:
        raise RenditionError(
            ErrorKind.TARGET_IMAGE_CREATION_FAILED,
            details={"width": target.width, "height": target.height},
        ) from exc


def _resample_into(
    bitmap: Image.Image, source: Image.Image, target: TargetBox, *, png: bool
) -> None:
    try:
        # Keep alpha so transparent regions survive
        src = source.convert("RGBA") if png and source.mode != "RGBA" else source
        resized = src.resize(target.size, Image.Resampling.LANCZOS)
        # Plain paste replaces pixels, alpha included, without blending
        bitmap.paste(resized, (0, 0))
    except (ValueError, MemoryError, OSError) as exc:
        raise RenditionError(
            ErrorKind.IMAGE_RESIZING_FAILED,
            details={"width": target.width, "height": target.height},
        ) from exc
