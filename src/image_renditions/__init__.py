"""image_renditions - image upload validation and rendition generation."""

from .common.errors import (
    ErrorKind,
    FileUploadError,
    ImageFormat,
    ImageRenditionsError,
    RenditionError,
)
from .common.file_storage import FileStorage
from .common.file_storage_impl import LocalFileStorage
from .common.schemas import (
    ImageContext,
    ImageGeometry,
    Rendition,
    RenditionBox,
    RenditionSettings,
    SavedFile,
    UploadedImage,
)
from .renditions.algo.codecs import Codec, CodecRegistry, JpegCodec, PngCodec
from .renditions.algo.fit import Axis, FitMode, TargetBox, compute_target
from .renditions.service import ImageRenditionService
from .uploads.file_uploader import FileUploader

__version__ = "0.1.0"

__all__ = [
    "Axis",
    "Codec",
    "CodecRegistry",
    "ErrorKind",
    "FileStorage",
    "FileUploadError",
    "FileUploader",
    "FitMode",
    "ImageContext",
    "ImageFormat",
    "ImageGeometry",
    "ImageRenditionService",
    "ImageRenditionsError",
    "JpegCodec",
    "LocalFileStorage",
    "PngCodec",
    "Rendition",
    "RenditionBox",
    "RenditionError",
    "RenditionSettings",
    "SavedFile",
    "TargetBox",
    "UploadedImage",
    "__version__",
    "compute_target",
]
