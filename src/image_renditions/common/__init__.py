"""Common module - protocols, schemas, errors and storage."""

from .errors import ErrorKind, FileUploadError, ImageFormat, RenditionError
from .file_storage import FileStorage
from .file_storage_impl import LocalFileStorage
from .schemas import Rendition, RenditionBox, RenditionSettings, UploadedImage

__all__ = [
    "ErrorKind",
    "FileUploadError",
    "ImageFormat",
    "RenditionError",
    "FileStorage",
    "LocalFileStorage",
    "Rendition",
    "RenditionBox",
    "RenditionSettings",
    "UploadedImage",
]
