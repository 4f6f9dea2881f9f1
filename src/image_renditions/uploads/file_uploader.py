"""Plain file uploads stored under a slugged, unique name."""

from os import PathLike
from pathlib import Path
from uuid import uuid4

from loguru import logger

from ..common.errors import FileUploadError
from ..common.file_storage import FileStorage
from ..common.file_storage_impl import LocalFileStorage
from ..common.schemas import SavedFile, UploadedImage
from ..utils.media_types import determine_mime
from ..utils.slug import slugify


class FileUploader:
    """Moves uploaded files into a flat storage directory."""

    def __init__(
        self,
        target_directory: str | PathLike[str],
        storage: FileStorage | None = None,
    ):
        self._storage: FileStorage = storage or LocalFileStorage(target_directory)

    @property
    def storage(self) -> FileStorage:
        return self._storage

    def build_name(self, upload: UploadedImage) -> str:
        """``{slug of client file stem}-{unique id}.{extension}``."""
        stem = Path(upload.client_name or upload.path.name).stem
        name = f"{slugify(stem)}-{uuid4().hex}"
        extension = upload.guess_extension(upload.mime_type or determine_mime(upload.path))
        return f"{name}.{extension}" if extension else name

    def upload(self, upload: UploadedImage) -> SavedFile:
        """
        Move ``upload`` into storage.

        Raises:
            FileUploadError: SAVE_FAILED if the file cannot be moved
        """
        name = self.build_name(upload)
        try:
            saved = self._storage.move(upload.path, name)
        except OSError as exc:
            logger.error(f"Failed to save upload {upload.path} as {name}: {exc}")
            raise FileUploadError(details={"source": str(upload.path), "name": name}) from exc

        logger.info(f"Saved upload as {saved.name} ({saved.size} bytes)")
        return saved

    def delete(self, file_name: str) -> None:
        """Remove a stored file. Missing files are ignored."""
        _ = self._storage.delete(file_name)
