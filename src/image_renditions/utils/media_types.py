from os import PathLike
from pathlib import Path

import magic

MIME_EXTENSIONS: dict[str, str] = {
    "image/jpeg": "jpeg",
    "image/pjpeg": "jpeg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/bmp": "bmp",
    "image/tiff": "tiff",
}

_UNKNOWN_TYPES = ("application/octet-stream", "application/x-empty", "inode/x-empty")


def determine_mime(path: str | PathLike[str]) -> str | None:
    """Detect the MIME type of a file from its content.

    Returns None when the content cannot be identified.
    """
    path = Path(path)
    if not path.is_file():
        return None

    # Create a Magic object
    mime = magic.Magic(mime=True)
    with open(path, "rb") as f:
        file_type = mime.from_buffer(f.read(2048))

    if not file_type or file_type in _UNKNOWN_TYPES:
        return None
    return file_type


def extension_for_mime(mime_type: str | None) -> str | None:
    if not mime_type:
        return None
    return MIME_EXTENSIONS.get(mime_type.lower())
